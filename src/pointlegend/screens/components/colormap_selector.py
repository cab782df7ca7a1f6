"""Colormap option list with swatch previews."""

from typing import List, Sequence

from rich.markup import escape
from rich.text import Text
from textual.widgets.option_list import Option

from ...data.models import RGB, ColormapDescriptor


def format_option(swatch: Sequence[RGB], description: str) -> Text:
    """Render a colormap option as swatch boxes followed by its description."""
    boxes = "".join(f"[{color.to_markup()}]█[/]" for color in swatch)
    return Text.from_markup(f"{boxes} {escape(description)}" if boxes else escape(description))


def build_options(controller, descriptors: Sequence[ColormapDescriptor]) -> List[Option]:
    """Build OptionList entries, keyed by field, for the given colormaps."""
    return [
        Option(format_option(controller.option_swatch(d), d.description), id=d.field)
        for d in descriptors
    ]
