"""Colorbar legend component for continuous and datetime colormaps."""

from typing import List

from textual.widgets import Static

from ...colormap import interpolate_gradient
from ...config import COLORBAR_HEIGHT
from ...data.models import RGB, Tick


def build_colorbar_lines(
    stops: List[RGB],
    ticks: List[Tick],
    label: str = "",
    height: int = COLORBAR_HEIGHT
) -> List[str]:
    """Build the Rich markup lines of a vertical colorbar.

    Args:
        stops: Gradient stops, bottom color first
        ticks: Ticks positioned by their offset from the top
        label: Title shown above the bar
        height: Number of rows in the bar

    Returns:
        One markup string per row, the title first if given
    """
    # Painted bottom-up, listed top-down
    colors = list(reversed(interpolate_gradient(stops, height)))

    tick_rows = {}
    for tick in ticks:
        row = int(round(tick.position_percent / 100 * (height - 1)))
        tick_rows[row] = tick.formatted_label

    lines = [f"[bold]{label}[/bold]"] if label else []
    for row in range(height):
        block = f"[{colors[row].to_markup()}]██[/]" if colors else "  "
        if row in tick_rows:
            lines.append(f"{block} ─ {tick_rows[row]}")
        else:
            lines.append(block)
    return lines


class ColorbarLegend(Static):
    """Vertical gradient with tick labels for one field."""

    def __init__(self, field: str, **kwargs) -> None:
        super().__init__("", classes="legend colorbar-legend", **kwargs)
        self.field = field
        self.label = ""
        self.stops: List[RGB] = []
        self.ticks: List[Tick] = []

    def set_gradient(self, stops: List[RGB], label: str) -> None:
        self.stops = list(stops)
        self.label = label
        self._redraw()

    def set_ticks(self, ticks: List[Tick]) -> None:
        self.ticks = list(ticks)
        self._redraw()

    def on_mount(self) -> None:
        self._redraw()

    def _redraw(self) -> None:
        if not self.is_mounted:
            return
        self.update("\n".join(build_colorbar_lines(self.stops, self.ticks, self.label)))
