"""Tests for the synthetic demo point cloud."""

from pointlegend.data.models import ColormapKind
from pointlegend.data.sample import CLUSTER_COLORS, TOPIC_COUNT, make_sample_point_cloud
from pointlegend.legend import LegendController, LegendState


def test_every_colormap_kind_is_present():
    data = make_sample_point_cloud(n_points=100)
    kinds = {d.kind for d in data.descriptors}
    assert kinds == {
        ColormapKind.NONE, ColormapKind.CATEGORICAL, ColormapKind.CONTINUOUS, ColormapKind.DATETIME
    }
    assert data.fields == ["cluster", "density", "published", "topic"]


def test_rows_per_field():
    data = make_sample_point_cloud(n_points=100)
    for field in data.fields:
        assert data.color_table.row_count(field) == 100


def test_same_seed_same_colors():
    first = make_sample_point_cloud(n_points=20, seed=3)
    second = make_sample_point_cloud(n_points=20, seed=3)
    assert first.color_table["cluster_r"].tolist() == second.color_table["cluster_r"].tolist()


def test_legends_for_sample(surface, host):
    """Drifted cluster colors still select every point of the cluster."""
    data = make_sample_point_cloud(n_points=300)
    controller = LegendController(data.descriptors, data.color_table, surface, host)

    assert controller.select("cluster") == LegendState.CATEGORICAL_SHOWN
    selected = set()
    for label in CLUSTER_COLORS:
        selected = set(controller.click_entry(label))
    assert selected == set(range(300))

    assert controller.select("published") == LegendState.SCALAR_SHOWN
    assert controller.select("topic") == LegendState.HIDDEN
    assert len(data.descriptors[-1].colors) == TOPIC_COUNT
    assert controller.n_colors == 8
