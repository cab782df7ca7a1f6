"""Legends for colormap descriptors and the controller that switches them.

A categorical colormap gets a ColorLegend whose entries can be clicked to
select the points painted with that color. Continuous and datetime
colormaps get a Colorbar whose ticks come from a ScaleFormatter. The
LegendController keeps one legend per field and shows the one matching
the selected colormap.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union

from .colormap import gradient_stops, parse_color, sample_swatch_colors
from .config import (
    COLOR_TOLERANCE,
    DEFAULT_SWATCH_COLORS,
    DEFAULT_TICK_COUNT,
    DIMMED_OPACITY,
    MAX_CATEGORICAL_COLORS,
    SELECTION_SOURCE,
)
from .data.color_table import ColorTable
from .data.models import RGB, ColormapDescriptor, ColormapKind, Tick
from .errors import ConfigurationError, DataIntegrityError
from .scale import ScaleFormatter
from .search import OptionSearch
from .selection import SelectionReconciler
from .surface import PointCloudHost, RenderSurface

logger = logging.getLogger(__name__)


class LegendState(Enum):
    """Which kind of legend is on screen."""

    HIDDEN = "hidden"
    CATEGORICAL_SHOWN = "categorical"
    SCALAR_SHOWN = "scalar"


def has_swatch_legend(
    descriptor: ColormapDescriptor,
    max_colors: int = MAX_CATEGORICAL_COLORS
) -> bool:
    """True if a categorical colormap is small enough and labeled."""
    return (
        descriptor.kind == ColormapKind.CATEGORICAL
        and len(descriptor.colors) <= max_colors
        and descriptor.color_mapping is not None
    )


class ColorLegend:
    """Clickable swatch legend for one categorical field."""

    def __init__(
        self,
        field: str,
        color_mapping: Dict[str, object],
        color_table: ColorTable,
        surface: RenderSurface,
        host: PointCloudHost,
        tolerance: int = COLOR_TOLERANCE,
    ) -> None:
        self.field = field
        self.color_table = color_table
        self.surface = surface
        self.host = host
        self.entries: Dict[str, RGB] = {
            str(label): parse_color(color) for label, color in color_mapping.items()
        }
        self.selection = SelectionReconciler(tolerance=tolerance)

    def render(self) -> None:
        """Append one surface entry per label."""
        for label, color in self.entries.items():
            self.surface.append_legend_entry(self.field, color, label)

    @property
    def has_selection(self) -> bool:
        return len(self.selection) > 0

    @property
    def active_labels(self) -> List[str]:
        """Labels whose color is currently selected."""
        return [label for label, color in self.entries.items() if color in self.selection]

    def click(self, label: str) -> List[int]:
        """Toggle an entry and push the resulting selection to the host.

        Returns:
            Row indices now selected from this legend

        Raises:
            KeyError: If the label is not in the legend
        """
        color = self.entries[label]
        self.selection.toggle(color)

        try:
            indices = self.selection.reconcile(self.color_table, self.field)
        except DataIntegrityError as e:
            logger.warning(f"Legend '{self.field}' selection has no matches: {e}")
            indices = []

        self.host.add_selection(indices, SELECTION_SOURCE)
        self._update_opacity()
        return indices

    def clear(self) -> None:
        """Drop the selection and restore every entry."""
        self.selection.clear()
        self._update_opacity()

    def _update_opacity(self) -> None:
        for label, color in self.entries.items():
            if not self.has_selection or color in self.selection:
                opacity = 1.0
            else:
                opacity = DIMMED_OPACITY
            self.surface.set_entry_opacity(self.field, label, opacity)


class Colorbar:
    """Gradient legend with formatted ticks for one scalar field."""

    def __init__(
        self,
        descriptor: ColormapDescriptor,
        surface: RenderSurface,
        tick_count: int = DEFAULT_TICK_COUNT,
    ) -> None:
        """Build the formatter for a continuous or datetime descriptor.

        Raises:
            ConfigurationError: If the descriptor's range or tick count is invalid
        """
        if descriptor.value_range is None:
            raise ConfigurationError(f"Colorbar for '{descriptor.field}' needs a value range")

        temporal = descriptor.kind == ColormapKind.DATETIME
        self.field = descriptor.field
        self.label = descriptor.description
        self.surface = surface
        self.stops = gradient_stops(descriptor.colors)
        self.formatter = ScaleFormatter(
            descriptor.value_range,
            tick_count=tick_count,
            date_format=descriptor.date_format if temporal else None,
            temporal=True if temporal else None,
        )
        self.ticks: List[Tick] = self.formatter.generate_ticks()

    def render(self) -> None:
        self.surface.render_gradient_bar(self.field, self.stops, self.label)
        self.surface.render_ticks(self.field, self.ticks)


Legend = Union[ColorLegend, Colorbar]


class LegendController:
    """Shows the legend for the selected colormap and forwards selections.

    Usage:
        controller = LegendController(descriptors, table, surface, host)
        controller.select("species")     # recolor + show swatch legend
        controller.click_entry("Cat")    # select the rows painted as "Cat"
        controller.reset()               # back to default coloring
    """

    def __init__(
        self,
        descriptors: Sequence[ColormapDescriptor],
        color_table: ColorTable,
        surface: RenderSurface,
        host: PointCloudHost,
        max_categorical_colors: int = MAX_CATEGORICAL_COLORS,
        tick_count: int = DEFAULT_TICK_COUNT,
        n_colors: int = DEFAULT_SWATCH_COLORS,
        tolerance: int = COLOR_TOLERANCE,
    ) -> None:
        """Build one legend per colormap and start hidden.

        Args:
            descriptors: Colormap options; the first one is the default
            color_table: Per-row colors for every field
            surface: Draws legends
            host: Receives recolor, reset and selection requests
            max_categorical_colors: Largest categorical palette given a legend
            tick_count: Ticks per colorbar
            n_colors: Minimum swatch size for option previews
            tolerance: Per-channel color matching tolerance

        Raises:
            ConfigurationError: If no descriptors are given
        """
        if not descriptors:
            raise ConfigurationError("At least one colormap descriptor is required")

        self.descriptors = list(descriptors)
        self.color_table = color_table
        self.surface = surface
        self.host = host
        self.max_categorical_colors = max_categorical_colors
        self.tick_count = tick_count
        self.tolerance = tolerance
        self.n_colors = max(
            [n_colors] + [d.n_colors for d in self.descriptors if d.n_colors is not None]
        )

        self.selected = self.descriptors[0]
        self.state = LegendState.HIDDEN
        self.search = OptionSearch(matches=list(self.descriptors))
        self.legends: Dict[str, Legend] = {}
        self._populate_legends()

    # =========================================================================
    # Construction
    # =========================================================================

    def _populate_legends(self) -> None:
        for descriptor in self.descriptors:
            if descriptor.is_none:
                continue
            try:
                legend = self._build_legend(descriptor)
            except ValueError as e:
                # ConfigurationError and unparseable palette colors
                logger.error(f"No legend for '{descriptor.field}': {e}")
                continue
            if legend is None:
                continue
            legend.render()
            self.legends[descriptor.field] = legend
        self.surface.show_legend(None)

    def _build_legend(self, descriptor: ColormapDescriptor) -> Optional[Legend]:
        if has_swatch_legend(descriptor, self.max_categorical_colors):
            return ColorLegend(
                descriptor.field,
                descriptor.color_mapping,
                self.color_table,
                self.surface,
                self.host,
                tolerance=self.tolerance,
            )
        if descriptor.is_scalar:
            return Colorbar(descriptor, self.surface, tick_count=self.tick_count)
        return None

    # =========================================================================
    # State
    # =========================================================================

    def descriptor(self, field: str) -> ColormapDescriptor:
        """Look up a colormap by field name.

        Raises:
            KeyError: If no colormap has that field
        """
        for descriptor in self.descriptors:
            if descriptor.field == field:
                return descriptor
        raise KeyError(field)

    @property
    def shown_legend(self) -> Optional[Legend]:
        if self.state == LegendState.HIDDEN:
            return None
        return self.legends.get(self.selected.field)

    def select(self, target: Union[str, ColormapDescriptor]) -> LegendState:
        """Color points by a colormap and show its legend if it has one.

        Args:
            target: Field name or descriptor

        Returns:
            The new legend state
        """
        descriptor = self.descriptor(target) if isinstance(target, str) else target
        self.selected = descriptor

        if descriptor.is_none:
            self.host.reset_point_colors()
            return self._show(None)

        self.host.recolor_points(self.color_table, descriptor.field)
        return self._show(self.legends.get(descriptor.field))

    def _show(self, legend: Optional[Legend]) -> LegendState:
        if isinstance(legend, ColorLegend):
            self.state = LegendState.CATEGORICAL_SHOWN
        elif isinstance(legend, Colorbar):
            self.state = LegendState.SCALAR_SHOWN
        else:
            self.state = LegendState.HIDDEN

        self.surface.show_legend(legend.field if legend is not None else None)
        logger.info(f"Colormap '{self.selected.field}' selected, legend {self.state.value}")
        return self.state

    def click_entry(self, label: str) -> List[int]:
        """Toggle a swatch of the shown categorical legend.

        Returns:
            Selected row indices, or an empty list if no swatch legend is shown
        """
        legend = self.shown_legend
        if not isinstance(legend, ColorLegend):
            logger.debug(f"Ignoring click on '{label}': no swatch legend shown")
            return []
        return legend.click(label)

    def reset(self) -> None:
        """Return to the default colormap with no legend or selection."""
        had_selection = False
        for legend in self.legends.values():
            if isinstance(legend, ColorLegend):
                had_selection = had_selection or legend.has_selection
                legend.clear()
        if had_selection:
            self.host.add_selection([], SELECTION_SOURCE)

        self.selected = self.descriptors[0]
        self.search.cancel(self.descriptors)
        self.host.reset_point_colors()
        self._show(None)

    # =========================================================================
    # Options
    # =========================================================================

    def filter_options(self, query: str) -> List[ColormapDescriptor]:
        """Colormaps whose description contains the query."""
        return self.search.update(self.descriptors, query)

    def option_swatch(self, descriptor: ColormapDescriptor) -> List[RGB]:
        """Preview colors drawn beside a colormap option."""
        return sample_swatch_colors(
            descriptor.colors,
            self.n_colors,
            categorical=descriptor.kind == ColormapKind.CATEGORICAL,
        )
