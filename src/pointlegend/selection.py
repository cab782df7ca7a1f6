"""Map toggled legend colors back to the rows that were painted with them."""

import logging
from typing import List, Set

import numpy as np

from .colormap import parse_color
from .config import COLOR_TOLERANCE
from .data.color_table import ColorTable
from .data.models import RGB, Color

logger = logging.getLogger(__name__)


class SelectionReconciler:
    """Holds the active legend colors of one legend.

    Rows match an active color when every channel is within ``tolerance``
    of it, which absorbs rounding between palette colors and the colors
    stored for each row.
    """

    def __init__(self, tolerance: int = COLOR_TOLERANCE) -> None:
        self.tolerance = tolerance
        self.active_colors: Set[RGB] = set()

    def __len__(self) -> int:
        return len(self.active_colors)

    def __contains__(self, color: Color) -> bool:
        return self.is_active(color)

    def is_active(self, color: Color) -> bool:
        return parse_color(color) in self.active_colors

    def toggle(self, color: Color) -> bool:
        """Add the color if absent, remove it if present.

        Returns:
            True if the color is active after the toggle
        """
        rgb = parse_color(color)
        if rgb in self.active_colors:
            self.active_colors.remove(rgb)
            return False
        self.active_colors.add(rgb)
        return True

    def clear(self) -> None:
        """Deactivate every color."""
        self.active_colors.clear()

    def reconcile(self, color_table: ColorTable, field: str) -> List[int]:
        """Find rows whose color matches any active color.

        Args:
            color_table: Per-row channel arrays
            field: Field whose ``_r``/``_g``/``_b`` columns are compared

        Returns:
            Ascending, duplicate-free row indices

        Raises:
            DataIntegrityError: If the field's channels are missing or
                have different lengths
        """
        if not self.active_colors:
            return []

        red, green, blue = color_table.channels(field)
        matched = np.zeros(len(red), dtype=bool)
        for color in self.active_colors:
            matched |= (
                (np.abs(red - color.r) <= self.tolerance)
                & (np.abs(green - color.g) <= self.tolerance)
                & (np.abs(blue - color.b) <= self.tolerance)
            )

        indices = np.flatnonzero(matched).tolist()
        logger.debug(
            f"Reconciled {len(self.active_colors)} colors on '{field}' to {len(indices)} rows"
        )
        return indices
