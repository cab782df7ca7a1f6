"""Columnar per-row color storage."""

from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Mapping, Tuple

import numpy as np

from ..errors import DataIntegrityError

if TYPE_CHECKING:
    import xarray as xr


CHANNELS = ("r", "g", "b")


def channel_names(field: str) -> List[str]:
    """Column names holding a field's red, green and blue channels."""
    return [f"{field}_{channel}" for channel in CHANNELS]


def _as_integers(array: np.ndarray) -> np.ndarray:
    """Widen a channel to int64, rounding float channels to the nearest value."""
    if np.issubdtype(array.dtype, np.floating):
        array = np.rint(array)
    return array.astype(np.int64, copy=False)


class ColorTable:
    """Per-row rendered colors, stored as one integer array per channel.

    A field ``label`` is represented by the columns ``label_r``,
    ``label_g`` and ``label_b``, each holding one 0-255 value per row.
    """

    def __init__(self, columns: Mapping[str, Any]) -> None:
        """Initialize from a mapping of column name to array-like.

        Args:
            columns: Column name -> 1D sequence of channel values
        """
        self._columns: Dict[str, np.ndarray] = {
            name: np.asarray(values).ravel() for name, values in columns.items()
        }

    @classmethod
    def from_dataset(cls, dataset: "xr.Dataset") -> "ColorTable":
        """Collect every ``*_r``/``*_g``/``*_b`` variable of a dataset."""
        columns = {
            str(name): dataset[name].values
            for name in dataset.data_vars
            if str(name)[-2:] in ("_r", "_g", "_b")
        }
        return cls(columns)

    def __contains__(self, name: str) -> bool:
        return name in self._columns

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __getitem__(self, name: str) -> np.ndarray:
        return self._columns[name]

    @property
    def fields(self) -> List[str]:
        """Fields that have all three channel columns."""
        found = []
        for name in self._columns:
            if name.endswith("_r"):
                field = name[:-2]
                if all(column in self._columns for column in channel_names(field)):
                    found.append(field)
        return found

    def channels(self, field: str) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return a field's channel arrays as integers.

        Raises:
            DataIntegrityError: If a channel is missing or lengths differ
        """
        missing = [name for name in channel_names(field) if name not in self._columns]
        if missing:
            raise DataIntegrityError(
                f"Color table has no {', '.join(missing)} for field '{field}'"
            )

        arrays = [self._columns[name] for name in channel_names(field)]
        lengths = {len(array) for array in arrays}
        if len(lengths) != 1:
            raise DataIntegrityError(
                f"Channel lengths differ for field '{field}': "
                f"{[len(array) for array in arrays]}"
            )

        red, green, blue = (_as_integers(array) for array in arrays)
        return red, green, blue

    def row_count(self, field: str) -> int:
        """Number of rows colored by a field."""
        return len(self.channels(field)[0])
