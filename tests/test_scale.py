"""Tests for adaptive colorbar tick formatting."""

from datetime import datetime

import numpy as np
import pytest

from pointlegend.data.models import DateGranularity, ValueRange
from pointlegend.errors import ConfigurationError
from pointlegend.scale import ScaleFormatter, classify


class TestNumericClassification:
    """Tests for integer, scientific and decimal decisions."""

    def test_integer_range_has_no_decimal_points(self):
        """Integer endpoints give integer labels on every tick."""
        formatter = ScaleFormatter(ValueRange(0, 10))
        labels = [t.formatted_label for t in formatter.generate_ticks()]
        assert labels == ["10", "8", "5", "3", "0"]
        assert all("." not in label for label in labels)

    def test_float_endpoints_that_are_whole_count_as_integer(self):
        """2.0 and 8.0 are mathematical integers."""
        assert classify(ValueRange(2.0, 8.0)).is_integer

    def test_half_unit_range_uses_three_decimals(self):
        """A span below 1 shows three decimals."""
        formatter = ScaleFormatter(ValueRange(0.0, 0.5))
        labels = [t.formatted_label for t in formatter.generate_ticks()]
        assert labels[:4] == ["0.500", "0.375", "0.250", "0.125"]
        assert formatter.classification.decimals == 3

    def test_whole_value_in_float_range_drops_decimals(self):
        """Whole values render without decimals even on a float scale."""
        formatter = ScaleFormatter(ValueRange(0.0, 0.5))
        assert formatter.format_value(0.0) == "0"

    def test_span_below_ten_uses_two_decimals(self):
        formatter = ScaleFormatter(ValueRange(0.5, 5.5))
        assert formatter.classification.decimals == 2
        assert formatter.format_value(1.25) == "1.25"
        assert formatter.format_value(3.0) == "3"

    def test_wide_span_uses_one_decimal(self):
        formatter = ScaleFormatter(ValueRange(0.5, 20.5))
        assert formatter.classification.decimals == 1
        assert formatter.format_value(7.34) == "7.3"

    def test_scientific_above_threshold(self):
        """A maximum of 150000 switches to exponential notation."""
        formatter = ScaleFormatter(ValueRange(0, 150000))
        assert formatter.classification.use_scientific
        assert formatter.format_value(150000) == "1.50e+05"

    def test_not_scientific_below_threshold(self):
        """A maximum of 99999 stays in plain notation."""
        formatter = ScaleFormatter(ValueRange(0, 99999))
        assert not formatter.classification.use_scientific
        assert formatter.format_value(99999) == "99999"
        assert all("e" not in t.formatted_label for t in formatter.generate_ticks())

    def test_scientific_for_tiny_magnitudes(self):
        """A nonzero endpoint at or below 1e-4 switches to exponential notation."""
        formatter = ScaleFormatter(ValueRange(0.00005, 0.5))
        assert formatter.classification.use_scientific
        assert formatter.format_value(0.5) == "5.00e-01"

    def test_zero_minimum_does_not_trigger_scientific(self):
        assert not classify(ValueRange(0.0, 0.5)).use_scientific

    def test_negative_range_uses_magnitudes(self):
        assert classify(ValueRange(-200000, 0)).use_scientific

    def test_integer_rounding_is_half_up(self):
        formatter = ScaleFormatter(ValueRange(0, 10))
        assert formatter.format_value(2.5) == "3"
        assert formatter.format_value(7.5) == "8"
        assert formatter.format_value(-2.5) == "-2"

    def test_numeric_strings_are_accepted(self):
        formatter = ScaleFormatter(ValueRange("0", "10"))
        assert not formatter.is_temporal
        assert formatter.classification.is_integer


class TestTemporalClassification:
    """Tests for date granularity selection and formatting."""

    def test_three_year_range_uses_year_month(self):
        formatter = ScaleFormatter(ValueRange("2020-01-01", "2023-01-01"))
        assert formatter.is_temporal
        assert formatter.granularity == DateGranularity.YEAR_MONTH

    def test_three_month_range_uses_month_day(self):
        formatter = ScaleFormatter(ValueRange(datetime(2024, 1, 1), datetime(2024, 4, 1)))
        assert formatter.granularity == DateGranularity.MONTH_DAY

    def test_three_day_range_uses_month_day_hour(self):
        formatter = ScaleFormatter(ValueRange(datetime(2024, 1, 1), datetime(2024, 1, 4)))
        assert formatter.granularity == DateGranularity.MONTH_DAY_HOUR

    def test_five_hour_range_uses_hour_minute(self):
        formatter = ScaleFormatter(ValueRange(datetime(2024, 1, 1, 0), datetime(2024, 1, 1, 5)))
        assert formatter.granularity == DateGranularity.HOUR_MINUTE

    def test_exactly_two_hours_uses_hour_minute(self):
        formatter = ScaleFormatter(ValueRange(datetime(2024, 1, 1, 0), datetime(2024, 1, 1, 2)))
        assert formatter.granularity == DateGranularity.HOUR_MINUTE

    def test_short_range_uses_seconds(self):
        formatter = ScaleFormatter(ValueRange(datetime(2024, 1, 1, 0), datetime(2024, 1, 1, 0, 30)))
        assert formatter.granularity == DateGranularity.HOUR_MINUTE_SECOND

    def test_numpy_datetimes(self):
        formatter = ScaleFormatter(ValueRange(
            np.datetime64("2020-01-01T00:00"), np.datetime64("2020-01-01T05:00")
        ))
        assert formatter.granularity == DateGranularity.HOUR_MINUTE

    def test_year_month_format(self):
        formatter = ScaleFormatter(ValueRange("2020-01-01", "2023-01-01"))
        assert formatter.format_value(datetime(2021, 3, 15)) == "Mar 2021"

    def test_explicit_strftime_override(self):
        formatter = ScaleFormatter(
            ValueRange("2020-01-01", "2023-01-01"), date_format="%Y-%m-%d"
        )
        assert formatter.format_value(datetime(2021, 3, 15)) == "2021-03-15"

    def test_granularity_name_override(self):
        formatter = ScaleFormatter(
            ValueRange("2020-01-01", "2023-01-01"), date_format="month-day"
        )
        assert formatter.format_value(datetime(2021, 3, 15)) == "Mar 15"

    def test_unknown_date_format_rejected(self):
        with pytest.raises(ConfigurationError):
            ScaleFormatter(ValueRange("2020-01-01", "2023-01-01"), date_format="bogus")

    def test_declared_temporal_accepts_epoch_milliseconds(self):
        day_ms = 24 * 60 * 60 * 1000
        formatter = ScaleFormatter.from_bounds(0, 3 * day_ms, temporal=True)
        ticks = formatter.generate_ticks(4)
        assert ticks[0].value == datetime(1970, 1, 4)
        assert ticks[-1].value == datetime(1970, 1, 1)

    def test_slash_separated_dates(self):
        formatter = ScaleFormatter(ValueRange("2020/01/01", "2023/01/01"), temporal=True)
        assert formatter.granularity == DateGranularity.YEAR_MONTH
        assert formatter.generate_ticks()[-1].value == datetime(2020, 1, 1)

    def test_written_out_dates(self):
        """Month names are parsed, not just ISO-8601."""
        formatter = ScaleFormatter(ValueRange("Jan 1, 2020", "Jun 1, 2020"), temporal=True)
        assert formatter.granularity == DateGranularity.MONTH_DAY
        assert formatter.format_value("Mar 15, 2020") == "Mar 15"

    def test_numeric_strings_are_not_dates(self):
        assert not ScaleFormatter(ValueRange("2020", "2023")).is_temporal

    def test_date_ticks_interpolate(self):
        formatter = ScaleFormatter(ValueRange("2020-01-01", "2020-01-03"), tick_count=3)
        ticks = formatter.generate_ticks()
        assert [t.value for t in ticks] == [
            datetime(2020, 1, 3), datetime(2020, 1, 2), datetime(2020, 1, 1)
        ]
        assert ticks[-1].formatted_label == "Jan 01, 12 AM"


class TestInvalidRanges:
    """Tests for configuration errors."""

    def test_min_greater_than_max(self):
        with pytest.raises(ConfigurationError):
            ScaleFormatter(ValueRange(10, 0))

    def test_dates_out_of_order(self):
        with pytest.raises(ConfigurationError):
            ScaleFormatter(ValueRange("2023-01-01", "2020-01-01"))

    def test_mixed_kinds(self):
        with pytest.raises(ConfigurationError):
            ScaleFormatter(ValueRange("2020-01-01", 5))

    def test_declared_temporal_with_unparseable_dates(self):
        with pytest.raises(ConfigurationError):
            ScaleFormatter(ValueRange("yesterday", "someday"), temporal=True)

    def test_epoch_milliseconds_out_of_bounds(self):
        with pytest.raises(ConfigurationError):
            ScaleFormatter(ValueRange(0, 1e20), temporal=True)

    def test_formatting_unplaceable_date(self):
        formatter = ScaleFormatter(ValueRange("2020-01-01", "2023-01-01"))
        with pytest.raises(ConfigurationError):
            formatter.format_value(1e20)

    def test_non_numeric_endpoint(self):
        with pytest.raises(ConfigurationError):
            ScaleFormatter(ValueRange("low", "high"))

    def test_nan_endpoint(self):
        with pytest.raises(ConfigurationError):
            ScaleFormatter(ValueRange(float("nan"), 1.0))

    def test_single_tick_rejected_at_construction(self):
        with pytest.raises(ConfigurationError):
            ScaleFormatter(ValueRange(0, 1), tick_count=1)

    def test_single_tick_rejected_when_generating(self):
        formatter = ScaleFormatter(ValueRange(0, 1))
        with pytest.raises(ConfigurationError):
            formatter.generate_ticks(1)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            ScaleFormatter(ValueRange(1, 0))


class TestTicks:
    """Tests for tick ordering and positions."""

    @pytest.mark.parametrize("value_range", [
        ValueRange(0, 10),
        ValueRange(-3.5, 12.25),
        ValueRange(0, 150000),
        ValueRange("2020-01-01", "2023-06-30"),
    ])
    @pytest.mark.parametrize("count", [2, 3, 5, 11])
    def test_tick_count_and_order(self, value_range, count):
        """Ticks run from max to min, top to bottom of the bar."""
        ticks = ScaleFormatter(value_range).generate_ticks(count)

        assert len(ticks) == count
        values = [t.value for t in ticks]
        assert all(a > b for a, b in zip(values, values[1:]))

        positions = [t.position_percent for t in ticks]
        assert positions[0] == 0
        assert positions[-1] == 100
        assert all(a < b for a, b in zip(positions, positions[1:]))

        heights = [t.height_percent for t in ticks]
        assert heights[0] == 100
        assert heights[-1] == 0
        assert all(a > b for a, b in zip(heights, heights[1:]))

    def test_endpoints_are_exact(self):
        ticks = ScaleFormatter(ValueRange(-3.5, 12.25)).generate_ticks()
        assert ticks[0].value == 12.25
        assert ticks[-1].value == -3.5

    def test_formatting_is_deterministic(self):
        """The same value formats identically regardless of call order."""
        formatter = ScaleFormatter(ValueRange(0.0, 0.5))
        before = formatter.format_value(0.3)
        formatter.generate_ticks(7)
        formatter.format_value(0.0)
        assert formatter.format_value(0.3) == before
        assert ScaleFormatter(ValueRange(0.0, 0.5)).format_value(0.3) == before
