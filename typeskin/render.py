"""
Diagnostic renderer: structured Lines in, one boxed string out.
"""

from __future__ import annotations

import io
from typing import Iterable, Optional

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .config import get_settings
from .diagnostics import Line, Styled

STYLES = {
    "type": "bold blue",
    "error": "bold red",
    "value": "",
    "muted": "dim",
}


def _to_text(ln: Line) -> Text:
    text = Text(" " * ln.indent)
    for part in ln.parts:
        if isinstance(part, Styled):
            text.append(part.text, style=STYLES.get(part.tag, ""))
        else:
            text.append(part)
    return text


def render(
    title: str,
    lines: Iterable[Line],
    *,
    color: Optional[bool] = None,
    width: Optional[int] = None,
) -> str:
    """Render diagnostic lines as a titled box.

    Color and width default to the active Settings.
    """
    settings = get_settings()
    color = settings.color if color is None else color
    width = settings.width if width is None else width

    console = Console(
        file=io.StringIO(),
        record=True,
        width=width,
        force_terminal=color,
        color_system="standard" if color else None,
        no_color=not color,
        highlight=False,
    )
    body = Group(*[_to_text(ln) for ln in lines])
    console.print(Panel(
        body,
        title=Text(title, style=STYLES["error"]),
        title_align="left",
        box=box.ROUNDED,
    ))
    return console.export_text(styles=color).rstrip("\n")
