"""UI components for the legend panel."""

from .colorbar import ColorbarLegend
from .colormap_selector import build_options, format_option
from .swatch_legend import LegendEntry, SwatchLegend

__all__ = ["ColorbarLegend", "LegendEntry", "SwatchLegend", "build_options", "format_option"]
