"""Interactive colormap legends for point-cloud views."""

from .data.color_table import ColorTable
from .data.models import ColormapDescriptor, ColormapKind, RGB, Tick, ValueRange
from .errors import ConfigurationError, DataIntegrityError, LegendError
from .legend import ColorLegend, Colorbar, LegendController, LegendState
from .scale import ScaleFormatter
from .selection import SelectionReconciler

__version__ = "0.1.0"

__all__ = [
    "ColorTable",
    "ColormapDescriptor",
    "ColormapKind",
    "RGB",
    "Tick",
    "ValueRange",
    "ConfigurationError",
    "DataIntegrityError",
    "LegendError",
    "ColorLegend",
    "Colorbar",
    "LegendController",
    "LegendState",
    "ScaleFormatter",
    "SelectionReconciler",
]
