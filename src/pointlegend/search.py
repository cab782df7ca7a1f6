"""Search over the list of colormap options."""

from dataclasses import dataclass, field
from typing import List, Sequence

from .data.models import ColormapDescriptor


def filter_descriptors(
    descriptors: Sequence[ColormapDescriptor],
    query: str
) -> List[ColormapDescriptor]:
    """Keep descriptors whose description contains the query (case-insensitive).

    An empty query keeps every descriptor.
    """
    query_lower = query.lower()
    return [d for d in descriptors if query_lower in d.description.lower()]


@dataclass
class OptionSearch:
    """Holds the colormap option search state."""
    query: str = ""
    matches: List[ColormapDescriptor] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        """True if a query is narrowing the options."""
        return bool(self.query)

    def update(self, descriptors: Sequence[ColormapDescriptor], query: str) -> List[ColormapDescriptor]:
        """Set a new query and recompute matches."""
        self.query = query
        self.matches = filter_descriptors(descriptors, query)
        return self.matches

    def cancel(self, descriptors: Sequence[ColormapDescriptor]) -> None:
        """Clear the query so every option shows again."""
        self.update(descriptors, "")


def format_search_status(search: OptionSearch, total: int) -> str:
    """Format status message for the current search state."""
    if not search.is_active:
        return ""
    if search.matches:
        return f"🔍 {len(search.matches)}/{total} colormaps match '{search.query}'"
    return f"🔍 No colormaps match '{search.query}' | Esc to clear"
