"""Data handling modules for pointlegend."""

from .color_table import ColorTable
from .models import ColormapDescriptor, ColormapKind, PointCloudData, RGB, ValueRange
from .reader import DataReader

__all__ = [
    "ColorTable",
    "ColormapDescriptor",
    "ColormapKind",
    "PointCloudData",
    "RGB",
    "ValueRange",
    "DataReader",
]
