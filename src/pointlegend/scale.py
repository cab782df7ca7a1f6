"""Adaptive tick formatting for colorbars.

A ScaleFormatter inspects a value range once and picks a display format
(date granularity, integer, scientific or fixed decimals) so that every
tick on a colorbar shares the same precision and units.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, List, Optional

import numpy as np
import pandas as pd

from .config import DEFAULT_TICK_COUNT
from .data.models import DateGranularity, Tick, ValueRange
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


# Average month length used to measure temporal spans
DAYS_PER_MONTH = 30.44

SCIENTIFIC_UPPER = 1e5
SCIENTIFIC_LOWER = 1e-4

# Named date styles accepted in place of a strftime pattern
DATE_STYLES = {
    "short": "%x",
    "medium": "%b %d, %Y",
    "long": "%B %d, %Y",
}

# Failures pandas raises for values it cannot place on its timeline
_DATE_ERRORS = (ValueError, TypeError, OverflowError, OSError)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, np.number)):
        return True
    if isinstance(value, str):
        try:
            float(value)
        except ValueError:
            return False
        return True
    return False


def _to_datetime(stamp: Any) -> Optional[datetime]:
    if stamp is None or pd.isna(stamp):
        return None
    return stamp.to_pydatetime()


def _parse_date(value: Any) -> Optional[datetime]:
    """Interpret a value as a datetime, or return None if it is not one.

    Numbers and numeric strings are never dates here.
    """
    if value is None or _is_number(value):
        return None
    try:
        return _to_datetime(pd.Timestamp(value))
    except _DATE_ERRORS:
        return None


def _parse_declared_date(value: Any) -> Optional[datetime]:
    """Like _parse_date, but numbers count as epoch milliseconds."""
    if not _is_number(value):
        return _parse_date(value)
    try:
        return _to_datetime(pd.Timestamp(float(value), unit="ms"))
    except _DATE_ERRORS:
        return None


def _parse_number(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Range endpoint is not numeric: {value!r}") from e
    if not math.isfinite(number):
        raise ConfigurationError(f"Range endpoint is not finite: {value!r}")
    return number


def _granularity_for_span(span: timedelta) -> DateGranularity:
    """Pick the coarsest granularity whose threshold the span reaches."""
    hours = span.total_seconds() / 3600
    days = hours / 24
    months = days / DAYS_PER_MONTH
    years = months / 12

    if years >= 2:
        return DateGranularity.YEAR_MONTH
    if months >= 2:
        return DateGranularity.MONTH_DAY
    if days >= 2:
        return DateGranularity.MONTH_DAY_HOUR
    if hours >= 2:
        return DateGranularity.HOUR_MINUTE
    return DateGranularity.HOUR_MINUTE_SECOND


def _decimals_for_span(span: float) -> int:
    if span < 1:
        return 3
    if span < 10:
        return 2
    return 1


@dataclass(frozen=True)
class ScaleClassification:
    """Formatting decisions made once for a range."""

    minimum: Any
    maximum: Any
    temporal: bool
    granularity: Optional[DateGranularity] = None
    is_integer: bool = False
    use_scientific: bool = False
    decimals: int = 0


def classify(value_range: ValueRange, temporal: Optional[bool] = None) -> ScaleClassification:
    """Decide how values in a range should be displayed.

    Args:
        value_range: Endpoints to classify
        temporal: True if the range is declared as dates, False if declared
            numeric, None to detect from the endpoints

    Returns:
        ScaleClassification with parsed endpoints

    Raises:
        ConfigurationError: If min > max, the endpoints mix dates and
            numbers, or a declared date range cannot be parsed
    """
    if temporal:
        low = _parse_declared_date(value_range.min)
        high = _parse_declared_date(value_range.max)
        if low is None or high is None:
            raise ConfigurationError(
                f"Unparseable dates in temporal range: {value_range.min!r}, {value_range.max!r}"
            )
    elif temporal is None:
        low = _parse_date(value_range.min)
        high = _parse_date(value_range.max)
    else:
        low = high = None

    if (low is None) != (high is None):
        raise ConfigurationError(
            f"Range mixes dates and numbers: {value_range.min!r}, {value_range.max!r}"
        )

    if low is not None and high is not None:
        if (low.tzinfo is None) != (high.tzinfo is None):
            raise ConfigurationError("Range mixes timezone-aware and naive dates")
        if low > high:
            raise ConfigurationError(f"Range minimum {low} is after maximum {high}")
        return ScaleClassification(
            minimum=low,
            maximum=high,
            temporal=True,
            granularity=_granularity_for_span(high - low),
        )

    low_num = _parse_number(value_range.min)
    high_num = _parse_number(value_range.max)
    if low_num > high_num:
        raise ConfigurationError(f"Range minimum {low_num} exceeds maximum {high_num}")

    is_integer = low_num.is_integer() and high_num.is_integer()
    max_abs = max(abs(low_num), abs(high_num))
    min_abs = min(abs(low_num), abs(high_num))
    use_scientific = max_abs >= SCIENTIFIC_UPPER or 0 < min_abs <= SCIENTIFIC_LOWER

    decimals = 0
    if not is_integer and not use_scientific:
        decimals = _decimals_for_span(high_num - low_num)

    return ScaleClassification(
        minimum=low_num,
        maximum=high_num,
        temporal=False,
        is_integer=is_integer,
        use_scientific=use_scientific,
        decimals=decimals,
    )


def _resolve_date_format(date_format: Optional[str]) -> Optional[str]:
    if date_format is None:
        return None
    for granularity in DateGranularity:
        if date_format == granularity.value:
            return granularity.pattern
    if date_format in DATE_STYLES:
        return DATE_STYLES[date_format]
    if "%" in date_format:
        return date_format
    raise ConfigurationError(f"Unknown date format: {date_format!r}")


class ScaleFormatter:
    """Formats colorbar ticks consistently across a numeric or date range.

    Usage:
        formatter = ScaleFormatter(ValueRange(0, 150000))
        formatter.format_value(75000)   # '7.50e+04'
        formatter.generate_ticks()      # five ticks, max first
    """

    def __init__(
        self,
        value_range: ValueRange,
        tick_count: int = DEFAULT_TICK_COUNT,
        date_format: Optional[str] = None,
        temporal: Optional[bool] = None,
    ) -> None:
        """Classify the range and validate the tick count.

        Args:
            value_range: Range of values shown on the colorbar
            tick_count: Number of ticks (at least two)
            date_format: strftime pattern, date style name or granularity
                name overriding the automatic date format
            temporal: Declare the range as dates (True) or numbers (False)

        Raises:
            ConfigurationError: If the range or tick count is invalid
        """
        self._check_tick_count(tick_count)
        self.value_range = value_range
        self.tick_count = tick_count
        self.classification = classify(value_range, temporal=temporal)
        self._date_pattern = _resolve_date_format(date_format)
        logger.debug(f"Classified range {value_range}: {self.classification}")

    @classmethod
    def from_bounds(cls, minimum: Any, maximum: Any, **kwargs) -> "ScaleFormatter":
        """Build a formatter directly from two endpoints."""
        return cls(ValueRange(minimum, maximum), **kwargs)

    @staticmethod
    def _check_tick_count(tick_count: int) -> None:
        if tick_count < 2:
            raise ConfigurationError(f"A colorbar needs at least 2 ticks, got {tick_count}")

    @property
    def is_temporal(self) -> bool:
        return self.classification.temporal

    @property
    def granularity(self) -> Optional[DateGranularity]:
        return self.classification.granularity

    @property
    def date_pattern(self) -> Optional[str]:
        """strftime pattern used for dates, or None for numeric scales."""
        if not self.is_temporal:
            return None
        return self._date_pattern or self.granularity.pattern

    def format_value(self, value: Any) -> str:
        """Format a single value using the range's display decisions."""
        if self.is_temporal:
            return self._format_date(value)
        return self._format_number(float(value))

    def _format_date(self, value: Any) -> str:
        # Plain numbers are epoch milliseconds
        moment = _parse_declared_date(value)
        if moment is None:
            raise ConfigurationError(f"Cannot format {value!r} as a date")
        return moment.strftime(self.date_pattern)

    def _format_number(self, value: float) -> str:
        scale = self.classification
        # Large integer ranges still switch to exponential notation
        if scale.use_scientific:
            return f"{value:.2e}"
        if scale.is_integer:
            return str(math.floor(value + 0.5))
        if value.is_integer():
            return str(int(value))
        return f"{value:.{scale.decimals}f}"

    def generate_ticks(self, tick_count: Optional[int] = None) -> List[Tick]:
        """Generate evenly spaced ticks from the maximum down to the minimum.

        Args:
            tick_count: Number of ticks (defaults to the formatter's count)

        Returns:
            Ticks in descending value order. position_percent is measured
            from the top of the bar, so it runs 0 -> 100 down the list

        Raises:
            ConfigurationError: If tick_count is below 2
        """
        count = self.tick_count if tick_count is None else tick_count
        self._check_tick_count(count)

        low = self.classification.minimum
        high = self.classification.maximum
        last = count - 1

        ticks = []
        for i in range(last, -1, -1):
            fraction = i / last
            if self.is_temporal:
                span_ms = (high - low) / timedelta(milliseconds=1)
                value = low + timedelta(milliseconds=fraction * span_ms)
            else:
                value = low + fraction * (high - low)
            ticks.append(Tick(
                value=value,
                formatted_label=self.format_value(value),
                position_percent=100 - fraction * 100,
            ))
        return ticks
