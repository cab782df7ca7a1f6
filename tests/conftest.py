"""Shared pytest fixtures for pointlegend tests."""

from typing import List, Optional

import pytest

from pointlegend.data.color_table import ColorTable
from pointlegend.data.models import RGB, ColormapDescriptor, ColormapKind, Tick


class RecordingSurface:
    """Render surface that records every drawing call."""

    def __init__(self) -> None:
        self.entries: List[tuple] = []
        self.gradients: dict = {}
        self.ticks: dict = {}
        self.opacity: dict = {}
        self.shown: List[Optional[str]] = []

    def append_legend_entry(self, container: str, swatch_color: RGB, label: str) -> None:
        self.entries.append((container, swatch_color, label))

    def render_gradient_bar(self, container: str, color_stops: List[RGB], label: str) -> None:
        self.gradients[container] = (list(color_stops), label)

    def render_ticks(self, container: str, ticks: List[Tick]) -> None:
        self.ticks[container] = list(ticks)

    def set_entry_opacity(self, container: str, label: str, opacity: float) -> None:
        self.opacity[(container, label)] = opacity

    def show_legend(self, container: Optional[str]) -> None:
        self.shown.append(container)


class RecordingHost:
    """Point-cloud host that records recolor, reset and selection requests."""

    def __init__(self) -> None:
        self.recolored: List[str] = []
        self.resets = 0
        self.selections: List[tuple] = []

    def recolor_points(self, color_table: ColorTable, field: str) -> None:
        self.recolored.append(field)

    def reset_point_colors(self) -> None:
        self.resets += 1

    def add_selection(self, row_indices, source: str) -> None:
        self.selections.append((list(row_indices), source))


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture
def four_row_table() -> ColorTable:
    """Two rows of one color, two rows of another with +1 drift."""
    return ColorTable({
        "field_r": [10, 10, 200, 201],
        "field_g": [20, 20, 5, 5],
        "field_b": [30, 30, 5, 6],
    })


@pytest.fixture
def legend_table() -> ColorTable:
    """Rows colored by a categorical 'species' field."""
    return ColorTable({
        "species_r": [255, 0, 255, 0, 1],
        "species_g": [0, 128, 0, 0, 127],
        "species_b": [0, 0, 0, 255, 1],
        "size_r": [0, 0, 0, 0, 0],
        "size_g": [0, 0, 0, 0, 0],
        "size_b": [0, 0, 0, 0, 0],
    })


@pytest.fixture
def descriptors() -> List[ColormapDescriptor]:
    """One colormap of every kind."""
    return [
        ColormapDescriptor("none", ColormapKind.NONE, description="No coloring"),
        ColormapDescriptor(
            "species",
            ColormapKind.CATEGORICAL,
            colors=["#ff0000", "#008000", "#0000ff"],
            description="Species",
            color_mapping={"Cat": "#ff0000", "Dog": "#008000", "Fish": "#0000ff"},
        ),
        ColormapDescriptor(
            "size",
            ColormapKind.CONTINUOUS,
            colors=["#000000", "#ffffff"],
            description="Body size",
            value_range=[0, 10],
        ),
        ColormapDescriptor(
            "born",
            ColormapKind.DATETIME,
            colors=["#000000", "#ff0000", "#ffffff"],
            description="Birth date",
            value_range=["2020-01-01", "2023-01-01"],
        ),
    ]
