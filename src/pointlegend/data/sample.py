"""Synthetic point-cloud colors for the demo app and test files."""

from datetime import datetime, timedelta

import numpy as np

from ..colormap import VIRIDIS_COLORS, apply_colormap, interpolate_gradient, parse_color
from .color_table import ColorTable
from .models import ColormapDescriptor, ColormapKind, PointCloudData


CLUSTER_COLORS = {
    "Arts": "#e41a1c",
    "Biology": "#377eb8",
    "Chemistry": "#4daf4a",
    "Mathematics": "#984ea3",
    "Physics": "#ff7f00",
    "Medicine": "#a65628",
}

# More topics than a swatch legend shows
TOPIC_COUNT = 30

SAMPLE_START = datetime(2021, 1, 1)
SAMPLE_SPAN = timedelta(days=3 * 365)


def _columns(field: str, rgb: np.ndarray) -> dict:
    rgb = np.clip(rgb, 0, 255).astype(np.uint8)
    return {f"{field}_r": rgb[:, 0], f"{field}_g": rgb[:, 1], f"{field}_b": rgb[:, 2]}


def make_sample_point_cloud(n_points: int = 2000, seed: int = 0) -> PointCloudData:
    """Create random point colors for every kind of colormap.

    Categorical colors carry a +/-1 channel drift so legend selection has
    to match within tolerance.

    Args:
        n_points: Number of points
        seed: Random seed

    Returns:
        PointCloudData with a 'none' option plus one categorical, one
        continuous, one datetime and one oversized categorical colormap
    """
    rng = np.random.default_rng(seed)
    columns = {}

    # Categorical clusters
    cluster_palette = np.array([parse_color(c) for c in CLUSTER_COLORS.values()], dtype=int)
    cluster = rng.integers(0, len(cluster_palette), n_points)
    drift = rng.integers(-1, 2, size=(n_points, 3))
    columns.update(_columns("cluster", cluster_palette[cluster] + drift))

    # Continuous density
    density = rng.beta(2.0, 5.0, n_points)
    columns.update(_columns("density", apply_colormap(density)))

    # Publication date
    offsets = rng.uniform(0.0, SAMPLE_SPAN.total_seconds(), n_points)
    columns.update(_columns("published", apply_colormap(offsets)))
    first = SAMPLE_START + timedelta(seconds=float(offsets.min()))
    last = SAMPLE_START + timedelta(seconds=float(offsets.max()))

    # Topics: too many for a swatch legend
    topic_palette = interpolate_gradient([parse_color(c) for c in VIRIDIS_COLORS], TOPIC_COUNT)
    topic = rng.integers(0, TOPIC_COUNT, n_points)
    columns.update(_columns("topic", np.array(topic_palette, dtype=int)[topic]))

    descriptors = [
        ColormapDescriptor("none", ColormapKind.NONE, description="No coloring"),
        ColormapDescriptor(
            "cluster",
            ColormapKind.CATEGORICAL,
            colors=list(CLUSTER_COLORS.values()),
            description="Research field",
            color_mapping=dict(CLUSTER_COLORS),
        ),
        ColormapDescriptor(
            "density",
            ColormapKind.CONTINUOUS,
            colors=[tuple(c) for c in VIRIDIS_COLORS],
            description="Local density",
            value_range=[float(density.min()), float(density.max())],
        ),
        ColormapDescriptor(
            "published",
            ColormapKind.DATETIME,
            colors=[tuple(c) for c in VIRIDIS_COLORS],
            description="Publication date",
            value_range=[first.isoformat(), last.isoformat()],
        ),
        ColormapDescriptor(
            "topic",
            ColormapKind.CATEGORICAL,
            colors=[tuple(c) for c in topic_palette],
            description="Topic",
            color_mapping={f"Topic {i}": tuple(c) for i, c in enumerate(topic_palette)},
            n_colors=8,
        ),
    ]
    return PointCloudData(ColorTable(columns), descriptors, source="sample")
