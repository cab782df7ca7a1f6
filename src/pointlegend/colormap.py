"""Colormap utilities for legends.

Provides color normalization, gradient stops for colorbars, swatch sampling
for colormap previews and viridis-like default colors.
"""

from typing import List, Optional, Sequence

import numpy as np
from rich.color import Color as RichColor
from rich.color import ColorParseError

from .config import SWATCH_RESAMPLE_THRESHOLD
from .data.models import RGB, Color


# Viridis-like colormap (perceptually uniform, colorblind-friendly)
VIRIDIS_COLORS = [
    (68, 1, 84), (72, 26, 108), (71, 47, 125), (65, 68, 135), (57, 86, 140),
    (49, 104, 142), (42, 120, 142), (35, 136, 142), (31, 152, 139), (34, 168, 132),
    (53, 183, 121), (83, 198, 105), (122, 209, 81), (165, 219, 54), (210, 226, 27),
    (253, 231, 37),
]


def parse_color(color: Color) -> RGB:
    """Normalize a color to an RGB triple.

    Args:
        color: RGB triple, (r, g, b[, a]) sequence, or any string Rich can
            parse ("#rrggbb", "rgb(r,g,b)", "red", ...)

    Returns:
        RGB triple with channels clamped to 0-255

    Raises:
        ValueError: If the color cannot be parsed
    """
    if isinstance(color, RGB):
        return color

    if isinstance(color, str):
        try:
            triplet = RichColor.parse(color.strip()).get_truecolor()
        except ColorParseError as e:
            raise ValueError(f"Unparseable color: {color!r}") from e
        return RGB(triplet.red, triplet.green, triplet.blue)

    try:
        channels = [float(c) for c in color]
    except (TypeError, ValueError) as e:
        raise ValueError(f"Unparseable color: {color!r}") from e
    if len(channels) < 3 or not all(np.isfinite(channels[:3])):
        raise ValueError(f"Color needs at least three finite channels: {color!r}")
    r, g, b = (max(0, min(255, int(round(c)))) for c in channels[:3])
    return RGB(r, g, b)


def apply_colormap(
    values: np.ndarray,
    colors: Sequence[Color] = VIRIDIS_COLORS,
    vmin: float = None,
    vmax: float = None
) -> np.ndarray:
    """Map values onto a palette, returning one RGB row per value.

    Args:
        values: 1D numeric array
        colors: Palette, lowest value first
        vmin: Minimum value for scaling (optional, uses data min if not provided)
        vmax: Maximum value for scaling (optional, uses data max if not provided)

    Returns:
        (N, 3) uint8 array of colors
    """
    palette = np.asarray([parse_color(c) for c in colors], dtype=np.uint8)
    data_clean = np.nan_to_num(np.asarray(values, dtype=float), nan=0.0)

    data_min = np.nanmin(data_clean) if vmin is None else vmin
    data_max = np.nanmax(data_clean) if vmax is None else vmax

    if data_max == data_min:
        # Constant data - use middle of colormap
        normalized = np.full_like(data_clean, 0.5)
    else:
        normalized = (data_clean - data_min) / (data_max - data_min)

    normalized = np.clip(normalized, 0.0, 1.0)
    indices = np.clip((normalized * (len(palette) - 1)).astype(int), 0, len(palette) - 1)
    return palette[indices]


def gradient_stops(colors: Sequence[Color]) -> List[RGB]:
    """Return the stops used to paint a colorbar, bottom first.

    An empty palette paints nothing and a single color paints a solid bar.
    """
    return [parse_color(c) for c in colors]


def sample_swatch_colors(
    colors: Sequence[Color],
    n_colors: int,
    categorical: bool = False
) -> List[RGB]:
    """Pick the colors shown in a colormap's preview swatch.

    Long continuous palettes are sampled evenly across their length;
    categorical palettes and short palettes show their first colors.

    Args:
        colors: Full palette
        n_colors: Maximum number of boxes in the swatch
        categorical: Whether the palette is categorical

    Returns:
        Colors to draw, left to right
    """
    n = min(n_colors, len(colors))
    if n <= 0:
        return []

    if len(colors) > SWATCH_RESAMPLE_THRESHOLD and not categorical:
        if n == 1:
            return [parse_color(colors[0])]
        step = (len(colors) - 1) / (n - 1)
        picked = []
        position = 0.0
        while position < len(colors):
            # Half-up rounding keeps the last sample on the final color
            picked.append(parse_color(colors[int(np.floor(position + 0.5))]))
            position += step
        return picked

    return [parse_color(c) for c in colors[:n]]


def interpolate_gradient(stops: Sequence[RGB], steps: int) -> List[RGB]:
    """Linearly interpolate gradient stops into ``steps`` colors.

    Args:
        stops: Gradient stops, evenly spaced
        steps: Number of output colors

    Returns:
        Interpolated colors from the first stop to the last
    """
    if steps <= 0 or not stops:
        return []
    if len(stops) == 1:
        return [stops[0]] * steps

    stop_array = np.asarray(stops, dtype=float)
    stop_positions = np.linspace(0.0, 1.0, len(stops))
    positions = np.linspace(0.0, 1.0, steps)

    channels = [
        np.interp(positions, stop_positions, stop_array[:, channel])
        for channel in range(3)
    ]
    return [
        RGB(int(round(r)), int(round(g)), int(round(b)))
        for r, g, b in zip(*channels)
    ]


def dim_color(color: RGB, opacity: float, background: Optional[RGB] = None) -> RGB:
    """Blend a color towards the background to render partial opacity."""
    background = background or RGB(0, 0, 0)
    opacity = max(0.0, min(1.0, opacity))
    return RGB(*(
        int(round(c * opacity + bg * (1.0 - opacity)))
        for c, bg in zip(color, background)
    ))
