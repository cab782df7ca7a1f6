"""Interfaces between legends and the application that displays them."""

from typing import List, Optional, Protocol, Sequence

from .data.color_table import ColorTable
from .data.models import RGB, Tick


class RenderSurface(Protocol):
    """Draws legend pieces. Containers are identified by field name."""

    def append_legend_entry(self, container: str, swatch_color: RGB, label: str) -> None:
        """Add one categorical row with a swatch and label."""

    def render_gradient_bar(self, container: str, color_stops: List[RGB], label: str) -> None:
        """Paint a colorbar from its bottom stop to its top stop."""

    def render_ticks(self, container: str, ticks: List[Tick]) -> None:
        """Draw tick labels beside a colorbar."""

    def set_entry_opacity(self, container: str, label: str, opacity: float) -> None:
        """Fade or restore a categorical row."""

    def show_legend(self, container: Optional[str]) -> None:
        """Show one legend and hide the others; None hides the legend panel."""


class PointCloudHost(Protocol):
    """Owns the point cloud and reacts to legend requests."""

    def recolor_points(self, color_table: ColorTable, field: str) -> None:
        """Repaint points using a field's colors."""

    def reset_point_colors(self) -> None:
        """Restore the default point coloring."""

    def add_selection(self, row_indices: Sequence[int], source: str) -> None:
        """Highlight the given rows; ``source`` names the selection origin."""
