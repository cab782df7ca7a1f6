"""Clickable swatch legend for categorical colormaps."""

from typing import Dict

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.events import Click
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Static

from ...colormap import dim_color
from ...config import DIM_BACKGROUND
from ...data.models import RGB


def format_entry(color: RGB, label: str, opacity: float = 1.0) -> str:
    """Format one legend row as Rich markup.

    Rows below full opacity are blended towards the background.
    """
    swatch = dim_color(color, opacity, RGB(*DIM_BACKGROUND))
    text = escape(label)
    if opacity < 1.0:
        text = f"[dim]{text}[/dim]"
    return f"[{swatch.to_markup()}]■■[/] {text}"


class LegendEntry(Static):
    """One swatch and label. Clicking it toggles the color's selection."""

    can_focus = True

    BINDINGS = [
        Binding("enter", "toggle", "Toggle", show=False),
        Binding("space", "toggle", "Toggle", show=False),
    ]

    entry_opacity: reactive[float] = reactive(1.0)

    class Clicked(Message):
        """Posted when an entry is clicked or toggled from the keyboard."""

        def __init__(self, field: str, label: str) -> None:
            self.field = field
            self.label = label
            super().__init__()

    def __init__(self, field: str, color: RGB, label: str, **kwargs) -> None:
        super().__init__(format_entry(color, label), classes="legend-entry", **kwargs)
        self.field = field
        self.swatch_color = color
        self.label = label

    def watch_entry_opacity(self, opacity: float) -> None:
        if not self.is_mounted:
            return
        self.update(format_entry(self.swatch_color, self.label, opacity))

    def on_mount(self) -> None:
        self.update(format_entry(self.swatch_color, self.label, self.entry_opacity))

    def on_click(self, event: Click) -> None:
        event.stop()
        self.action_toggle()

    def action_toggle(self) -> None:
        self.post_message(self.Clicked(self.field, self.label))


class SwatchLegend(Vertical):
    """Column of legend entries for one categorical field."""

    def __init__(self, field: str, **kwargs) -> None:
        super().__init__(classes="legend swatch-legend", **kwargs)
        self.field = field
        self.entries: Dict[str, LegendEntry] = {}

    def add_entry(self, color: RGB, label: str) -> LegendEntry:
        """Add an entry, mounting it if the legend is already on screen."""
        entry = LegendEntry(self.field, color, label)
        self.entries[label] = entry
        if self.is_mounted:
            self.mount(entry)
        return entry

    def compose(self) -> ComposeResult:
        yield from self.entries.values()

    def set_opacity(self, label: str, opacity: float) -> None:
        self.entries[label].entry_opacity = opacity
