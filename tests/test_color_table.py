"""Tests for the columnar color table."""

import numpy as np
import pytest
import xarray as xr

from pointlegend.data.color_table import ColorTable, channel_names
from pointlegend.data.models import RGB
from pointlegend.errors import DataIntegrityError
from pointlegend.selection import SelectionReconciler


def test_channel_names():
    assert channel_names("species") == ["species_r", "species_g", "species_b"]


class TestColorTable:
    """Tests for channel lookup and validation."""

    def test_fields_need_all_channels(self, legend_table):
        table = ColorTable({"a_r": [1], "a_g": [1], "a_b": [1], "b_r": [1], "b_g": [1]})
        assert table.fields == ["a"]
        assert sorted(legend_table.fields) == ["size", "species"]

    def test_channels_are_wide_integers(self):
        table = ColorTable({
            "f_r": np.array([255], dtype=np.uint8),
            "f_g": np.array([0], dtype=np.uint8),
            "f_b": np.array([1], dtype=np.uint8),
        })
        red, green, blue = table.channels("f")
        assert red.dtype == np.int64
        assert (green - 1).tolist() == [-1]

    def test_row_count(self, four_row_table):
        assert four_row_table.row_count("field") == 4

    def test_mapping_access(self, four_row_table):
        assert "field_r" in four_row_table
        assert list(four_row_table) == ["field_r", "field_g", "field_b"]
        assert four_row_table["field_g"].tolist() == [20, 20, 5, 5]

    def test_missing_field(self, four_row_table):
        with pytest.raises(DataIntegrityError, match="other_r"):
            four_row_table.channels("other")

    def test_length_mismatch(self):
        table = ColorTable({"f_r": [1, 2, 3], "f_g": [1, 2, 3], "f_b": [1]})
        with pytest.raises(DataIntegrityError, match="lengths"):
            table.row_count("f")

    def test_data_integrity_error_is_value_error(self, four_row_table):
        with pytest.raises(ValueError):
            four_row_table.channels("other")

    def test_float_channels_round_to_nearest(self):
        table = ColorTable({"f_r": [9.7, 9.2], "f_g": [0.5, 1.5], "f_b": [254.6, 0.0]})
        red, green, blue = table.channels("f")
        assert red.tolist() == [10, 9]
        assert blue.tolist() == [255, 0]
        assert red.dtype == np.int64

    def test_rounded_float_channels_match_exactly(self):
        table = ColorTable({"f_r": [9.7, 9.2], "f_g": [10.0, 10.0], "f_b": [10.0, 10.0]})
        reconciler = SelectionReconciler(tolerance=0)
        reconciler.toggle(RGB(10, 10, 10))
        assert reconciler.reconcile(table, "f") == [0]

    def test_from_dataset(self):
        dataset = xr.Dataset({
            "f_r": (["point"], np.array([1, 2], dtype=np.uint8)),
            "f_g": (["point"], np.array([3, 4], dtype=np.uint8)),
            "f_b": (["point"], np.array([5, 6], dtype=np.uint8)),
            "weight": (["point"], np.array([0.1, 0.2])),
        })
        table = ColorTable.from_dataset(dataset)
        assert table.fields == ["f"]
        assert "weight" not in table
        assert table.channels("f")[2].tolist() == [5, 6]
