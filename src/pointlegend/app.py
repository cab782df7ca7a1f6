"""pointlegend - Terminal viewer for point-cloud colormap legends.

A TUI application for exploring how a point cloud is colored:
- Searchable list of colormap options with swatch previews
- Colorbars with adaptive tick labels for continuous and date fields
- Clickable swatch legends that select the points of a category
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence, Union

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Footer, Input, OptionList, Static

from .config import CSS_PATH as APP_CSS_PATH
from .data.color_table import ColorTable
from .data.models import RGB, PointCloudData, Tick
from .errors import DataIntegrityError
from .legend import LegendController
from .screens.components import ColorbarLegend, LegendEntry, SwatchLegend, build_options
from .search import format_search_status

logger = logging.getLogger(__name__)


LegendWidget = Union[ColorbarLegend, SwatchLegend]


def _widget_id(field: str) -> str:
    """Make a DOM id for a field's legend."""
    return "legend-" + re.sub(r"[^A-Za-z0-9_-]", "_", field)


# =============================================================================
# Main Application
# =============================================================================

class LegendApp(App[None]):
    """Colormap selector and legend panel for a point cloud.

    The app is both the render surface the legends draw on and the host
    that owns the (unrendered) point cloud.

    Attributes:
        data: Point colors and colormap options
        controller: Legend state for the selected colormap
        colored_by: Field the points are colored by, None for default colors
        selected_rows: Rows selected from a legend
    """

    ENABLE_COMMAND_PALETTE = False
    CSS_PATH = APP_CSS_PATH

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "reset", "Reset"),
        Binding("/", "focus_search", "Search"),
        Binding("escape", "clear_search", "Clear", show=False),
    ]

    def __init__(self, data: PointCloudData) -> None:
        """Initialize the application.

        Args:
            data: Point colors and colormap options to show
        """
        super().__init__()
        self.data = data
        self.legend_widgets: Dict[str, LegendWidget] = {}
        self.shown_field: Optional[str] = None
        self.colored_by: Optional[str] = None
        self.point_count = 0
        self.selected_rows: List[int] = []
        self.selection_source: Optional[str] = None
        self._legend_ready = False
        self.controller = LegendController(data.descriptors, data.color_table, self, self)

    # =========================================================================
    # Composition
    # =========================================================================

    def compose(self) -> ComposeResult:
        """Create the application layout."""
        with Horizontal(id="main"):
            with Vertical(id="selector-container"):
                yield Input(placeholder="Search colormaps...", id="colormap-search")
                yield OptionList(
                    *build_options(self.controller, self.data.descriptors),
                    id="colormap-options",
                )
            legend_panel = VerticalScroll(id="legend-panel")
            legend_panel.display = self.shown_field is not None
            with legend_panel:
                yield from self.legend_widgets.values()
        yield Static(self._default_status(), id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        self._legend_ready = True
        self.query_one("#colormap-options", OptionList).focus()

    # =========================================================================
    # Render Surface
    # =========================================================================

    def append_legend_entry(self, container: str, swatch_color: RGB, label: str) -> None:
        legend = self.legend_widgets.get(container)
        if legend is None:
            legend = self.legend_widgets[container] = SwatchLegend(container, id=_widget_id(container))
            legend.display = False
        legend.add_entry(swatch_color, label)

    def render_gradient_bar(self, container: str, color_stops: List[RGB], label: str) -> None:
        self._colorbar(container).set_gradient(color_stops, label)

    def render_ticks(self, container: str, ticks: List[Tick]) -> None:
        self._colorbar(container).set_ticks(ticks)

    def set_entry_opacity(self, container: str, label: str, opacity: float) -> None:
        legend = self.legend_widgets[container]
        if isinstance(legend, SwatchLegend):
            legend.set_opacity(label, opacity)

    def show_legend(self, container: Optional[str]) -> None:
        self.shown_field = container
        for field, widget in self.legend_widgets.items():
            widget.display = field == container
        if self._legend_ready:
            self.query_one("#legend-panel", VerticalScroll).display = container is not None

    def _colorbar(self, container: str) -> ColorbarLegend:
        legend = self.legend_widgets.get(container)
        if legend is None:
            legend = self.legend_widgets[container] = ColorbarLegend(container, id=_widget_id(container))
            legend.display = False
        return legend

    # =========================================================================
    # Point Cloud Host
    # =========================================================================

    def recolor_points(self, color_table: ColorTable, field: str) -> None:
        self.colored_by = field
        try:
            self.point_count = color_table.row_count(field)
        except DataIntegrityError as e:
            logger.warning(f"Cannot count points for '{field}': {e}")
            self.point_count = 0
        self._status(self._default_status())

    def reset_point_colors(self) -> None:
        self.colored_by = None
        self._status(self._default_status())

    def add_selection(self, row_indices: Sequence[int], source: str) -> None:
        self.selected_rows = list(row_indices)
        self.selection_source = source
        logger.info(f"{len(self.selected_rows)} points selected from {source}")
        self._status(self._default_status())

    # =========================================================================
    # Event Handlers
    # =========================================================================

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        """Color points by the chosen colormap."""
        if event.option.id is None:
            return
        self.controller.select(event.option.id)

    def on_input_changed(self, event: Input.Changed) -> None:
        """Filter colormap options by the search text."""
        if event.input.id != "colormap-search":
            return
        matches = self.controller.filter_options(event.value)
        self._refresh_options(matches)
        self._status(
            format_search_status(self.controller.search, len(self.data.descriptors))
            or self._default_status()
        )

    def on_legend_entry_clicked(self, message: LegendEntry.Clicked) -> None:
        """Toggle the clicked category's points."""
        if message.field != self.shown_field:
            return
        self.controller.click_entry(message.label)

    # =========================================================================
    # Actions
    # =========================================================================

    def action_reset(self) -> None:
        """Return to default coloring and clear search and selection."""
        self.controller.reset()
        self._clear_search_input()
        self._refresh_options(self.data.descriptors)
        self._status(self._default_status())

    def action_focus_search(self) -> None:
        self.query_one("#colormap-search", Input).focus()

    def action_clear_search(self) -> None:
        self._clear_search_input()

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _clear_search_input(self) -> None:
        search = self.query_one("#colormap-search", Input)
        if search.value:
            search.value = ""

    def _refresh_options(self, descriptors) -> None:
        options = self.query_one("#colormap-options", OptionList)
        options.clear_options()
        options.add_options(build_options(self.controller, descriptors))

    def _status(self, msg: str) -> None:
        """Update the status bar message."""
        if self._legend_ready:
            self.query_one("#status-bar", Static).update(msg)

    def _default_status(self) -> str:
        """Describe the current coloring and selection."""
        if self.colored_by is None:
            status = f"{self.data.source}: default colors"
        else:
            description = self.controller.descriptor(self.colored_by).description
            status = f"Colored by {description} ({self.point_count:,} points)"
        if self.selected_rows:
            status += f" | {len(self.selected_rows):,} selected from {self.selection_source}"
        return status
