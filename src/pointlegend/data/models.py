"""Data models for colormap descriptors, ranges and ticks."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Union

from ..errors import ConfigurationError


class RGB(NamedTuple):
    """A normalized 8-bit color triple."""

    r: int
    g: int
    b: int

    def to_hex(self) -> str:
        """Format as #rrggbb."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_markup(self) -> str:
        """Format for Rich markup (rgb(r,g,b))."""
        return f"rgb({self.r},{self.g},{self.b})"


class ColormapKind(Enum):
    """How a field is color-encoded."""

    CATEGORICAL = "categorical"
    CONTINUOUS = "continuous"
    DATETIME = "datetime"
    NONE = "none"


class DateGranularity(Enum):
    """Display granularity for temporal scales, coarsest first."""

    YEAR_MONTH = "year-month"
    MONTH_DAY = "month-day"
    MONTH_DAY_HOUR = "month-day-hour"
    HOUR_MINUTE = "hour-minute"
    HOUR_MINUTE_SECOND = "hour-minute-second"

    @property
    def pattern(self) -> str:
        """strftime pattern rendering this granularity."""
        return _GRANULARITY_PATTERNS[self]


_GRANULARITY_PATTERNS = {
    DateGranularity.YEAR_MONTH: "%b %Y",
    DateGranularity.MONTH_DAY: "%b %d",
    DateGranularity.MONTH_DAY_HOUR: "%b %d, %I %p",
    DateGranularity.HOUR_MINUTE: "%I:%M %p",
    DateGranularity.HOUR_MINUTE_SECOND: "%I:%M:%S %p",
}


Color = Union[str, Sequence[int], RGB]


def _json_endpoint(value: Any) -> Any:
    if hasattr(value, "item"):
        # numpy scalars
        value = value.item()
    if isinstance(value, date):
        return value.isoformat()
    return value


@dataclass(frozen=True)
class ValueRange:
    """Endpoints of a scalar colormap, either both numeric or both dates.

    Endpoints are stored as given; ScaleFormatter validates and parses them.
    """

    min: Any
    max: Any

    @classmethod
    def from_sequence(cls, values: Sequence[Any]) -> "ValueRange":
        """Build from a two-element [min, max] sequence."""
        if len(values) != 2:
            raise ConfigurationError(
                f"Value range needs exactly two endpoints, got {len(values)}"
            )
        return cls(values[0], values[1])


@dataclass
class Tick:
    """A labeled reference point on a colorbar.

    ``position_percent`` is the offset from the top of the bar, so the
    maximum value sits at 0 and the minimum at 100.
    """

    value: Union[float, datetime]
    formatted_label: str
    position_percent: float

    @property
    def height_percent(self) -> float:
        """Height above the bottom of the bar."""
        return 100.0 - self.position_percent


@dataclass
class ColormapDescriptor:
    """Metadata describing one field's color encoding."""

    field: str
    kind: ColormapKind
    colors: List[Color] = field(default_factory=list)
    description: str = ""
    value_range: Optional[ValueRange] = None
    color_mapping: Optional[Dict[str, Color]] = None
    date_format: Optional[str] = None
    n_colors: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.kind, str):
            self.kind = ColormapKind(self.kind)
        if self.value_range is not None and not isinstance(self.value_range, ValueRange):
            self.value_range = ValueRange.from_sequence(self.value_range)
        if self.is_scalar and self.value_range is None:
            raise ConfigurationError(
                f"Colormap '{self.field}' is {self.kind.value} but has no value range"
            )

    @property
    def is_none(self) -> bool:
        """True for the 'no coloring' option."""
        return self.field == "none" or self.kind == ColormapKind.NONE

    @property
    def is_scalar(self) -> bool:
        """True for continuous and datetime colormaps."""
        return self.kind in (ColormapKind.CONTINUOUS, ColormapKind.DATETIME)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used in data files."""
        data: Dict[str, Any] = {
            "field": self.field,
            "kind": self.kind.value,
            "colors": [list(c) if not isinstance(c, str) else c for c in self.colors],
            "description": self.description,
        }
        if self.value_range is not None:
            data["valueRange"] = [
                _json_endpoint(self.value_range.min),
                _json_endpoint(self.value_range.max),
            ]
        if self.color_mapping is not None:
            data["colorMapping"] = {
                label: list(c) if not isinstance(c, str) else c
                for label, c in self.color_mapping.items()
            }
        if self.date_format is not None:
            data["dateFormat"] = self.date_format
        if self.n_colors is not None:
            data["nColors"] = self.n_colors
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColormapDescriptor":
        """Build from a mapping using either camelCase or snake_case keys.

        Raises:
            ValueError: If the field or kind is missing or unknown
        """
        def get(snake: str, camel: str) -> Any:
            return data.get(snake, data.get(camel))

        if "field" not in data or "kind" not in data:
            raise ValueError(f"Colormap entry needs 'field' and 'kind': {data!r}")

        mapping = get("color_mapping", "colorMapping")
        return cls(
            field=str(data["field"]),
            kind=ColormapKind(data["kind"]),
            colors=list(data.get("colors", [])),
            description=data.get("description", str(data["field"])),
            value_range=get("value_range", "valueRange"),
            color_mapping=dict(mapping) if mapping is not None else None,
            date_format=get("date_format", "dateFormat"),
            n_colors=get("n_colors", "nColors"),
        )


@dataclass
class PointCloudData:
    """Colors of a point cloud together with its colormap options."""

    color_table: Any
    descriptors: List[ColormapDescriptor]
    source: str = "<memory>"

    @property
    def fields(self) -> List[str]:
        return [d.field for d in self.descriptors if not d.is_none]
