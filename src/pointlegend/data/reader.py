"""Read point-cloud colors and colormap options from netCDF files.

A file holds one ``<field>_r``/``<field>_g``/``<field>_b`` variable per
channel along a single point dimension, plus a global ``colormaps``
attribute with a JSON list of colormap descriptors.
"""

import json
import logging
from pathlib import Path
from typing import List, Union

from .color_table import ColorTable, channel_names
from .models import ColormapDescriptor, ColormapKind, PointCloudData

logger = logging.getLogger(__name__)

# Defer heavy imports until needed
_xarray = None


def _get_xarray():
    """Lazy import xarray."""
    global _xarray
    if _xarray is None:
        import xarray
        _xarray = xarray
    return _xarray


COLORMAPS_ATTR = "colormaps"
POINT_DIM = "point"


class DataReader:
    """Reader for point-cloud color files."""

    SUPPORTED_EXTENSIONS = {".nc", ".nc4", ".netcdf", ".cdf"}

    @classmethod
    def can_read(cls, file_path: Union[str, Path]) -> bool:
        """Check if the file extension is supported."""
        return Path(file_path).suffix.lower() in cls.SUPPORTED_EXTENSIONS

    @classmethod
    def read_file(cls, file_path: Union[str, Path]) -> PointCloudData:
        """Load a color table and its colormap descriptors.

        Args:
            file_path: Path to the file to read

        Returns:
            PointCloudData for the file

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the file type is unsupported or the colormaps
                attribute is malformed
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if not cls.can_read(path):
            raise ValueError(f"Unsupported file type: {path.suffix}")

        xr = _get_xarray()
        with xr.open_dataset(path) as dataset:
            dataset.load()
            table = ColorTable.from_dataset(dataset)
            raw = dataset.attrs.get(COLORMAPS_ATTR)

        if raw is None:
            logger.warning(f"{path.name} has no '{COLORMAPS_ATTR}' attribute; legends disabled")
            descriptors = cls._default_descriptors(table)
        else:
            descriptors = cls.parse_descriptors(raw)
            if not descriptors:
                logger.warning(f"{path.name} has no usable colormaps; legends disabled")
                descriptors = cls._default_descriptors(table)

        logger.info(f"Loaded {len(descriptors)} colormaps from {path.name}")
        return PointCloudData(table, descriptors, source=str(path))

    @staticmethod
    def parse_descriptors(raw: str) -> List[ColormapDescriptor]:
        """Parse the JSON colormap list stored in a file.

        Invalid entries are logged and skipped so the rest stay usable.

        Raises:
            ValueError: If the attribute is not a JSON list
        """
        try:
            entries = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid '{COLORMAPS_ATTR}' attribute: {e}") from e

        if not isinstance(entries, list):
            raise ValueError(f"'{COLORMAPS_ATTR}' must be a JSON list")

        descriptors = []
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict):
                logger.error(f"Skipping colormap entry {i}: not an object: {entry!r}")
                continue
            try:
                descriptors.append(ColormapDescriptor.from_dict(entry))
            except (TypeError, ValueError) as e:
                logger.error(f"Skipping colormap entry {i} ({entry.get('field')!r}): {e}")
        return descriptors

    @staticmethod
    def _default_descriptors(table: ColorTable) -> List[ColormapDescriptor]:
        """Offer every field for coloring, without legends."""
        descriptors = [ColormapDescriptor("none", ColormapKind.NONE, description="No coloring")]
        for field in table.fields:
            descriptors.append(
                ColormapDescriptor(field, ColormapKind.CATEGORICAL, description=field)
            )
        return descriptors


def build_dataset(data: PointCloudData):
    """Build an xarray Dataset in the layout DataReader reads.

    Returns:
        xarray.Dataset with channel variables and a colormaps attribute
    """
    xr = _get_xarray()
    variables = {}
    for field in data.color_table.fields:
        red, green, blue = data.color_table.channels(field)
        for name, values in zip(channel_names(field), (red, green, blue)):
            variables[name] = ([POINT_DIM], values.astype("uint8"))

    return xr.Dataset(
        variables,
        attrs={COLORMAPS_ATTR: json.dumps([d.to_dict() for d in data.descriptors])},
    )
