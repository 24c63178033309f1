"""
Diagnostic Lines
================
Structured text that the checkers assemble and the renderer formats.

The core never produces formatted output itself. It builds a list of
`Line`s, each a sequence of plain strings and `Styled` spans carrying a
semantic tag, plus an indentation level. `render.render()` turns them
into the boxed report.

Tags:
    "type"   — a type name
    "error"  — the headline of a failure
    "value"  — a dumped runtime value
    "muted"  — secondary text
"""

from __future__ import annotations

import inspect
import pprint
import textwrap
from dataclasses import dataclass
from typing import Any, Iterable, Union

from .descriptor import TypeDescriptor, metadata_of

DUMP_WIDTH = 56


@dataclass(frozen=True)
class Styled:
    """A span of text with a semantic tag."""
    text: str
    tag: str


Part = Union[str, Styled]


@dataclass(frozen=True)
class Line:
    """One diagnostic line."""
    parts: tuple[Part, ...]
    indent: int = 0

    def plain(self) -> str:
        text = "".join(p.text if isinstance(p, Styled) else p for p in self.parts)
        return " " * self.indent + text


class Diagnostic(list):
    """Lines returned by a failing test, plus structured context.

    Function contracts use `context` to report the sampled arguments and
    the original function term alongside the rendered lines.
    """

    def __init__(self, lines: Iterable[Line] = (), context: dict[str, Any] | None = None):
        super().__init__(lines)
        self.context = context or {}


def line(*parts: Part) -> Line:
    return Line(tuple(parts))


def blank() -> Line:
    return Line(())


def styled(tag: str, text: str) -> Styled:
    return Styled(text, tag)


def indent(lines: Iterable[Line], by: int = 2) -> list[Line]:
    return [Line(ln.parts, ln.indent + by) for ln in lines]


def flatten(groups: Iterable[Iterable[Line]]) -> list[Line]:
    return [ln for group in groups for ln in group]


def plain_text(lines: Iterable[Line]) -> str:
    """Uncolored rendering, one line per Line. Used in exception args and tests."""
    return "\n".join(ln.plain() for ln in lines)


# ─────────────────────────────────────────────────────────────
#  Value Dumps
# ─────────────────────────────────────────────────────────────

def _source_of(fn: Any) -> list[str] | None:
    try:
        source = inspect.getsource(fn)
    except (OSError, TypeError):
        return None
    return textwrap.dedent(source).rstrip().splitlines()


def show(value: Any) -> str:
    """Single-line dump."""
    if isinstance(value, TypeDescriptor):
        return metadata_of(value).name if metadata_of(value) else value.form
    return repr(value)


def show_block(value: Any) -> list[Line]:
    """Multi-line dump of a value, function or descriptor."""
    if isinstance(value, TypeDescriptor):
        meta = metadata_of(value)
        name = meta.name if meta else "anon"
        desc = meta.description if meta else "no description"
        return [
            line("Type ", styled("type", name), f": {desc}, i.e.,"),
            *indent([line(styled("muted", chunk)) for chunk in textwrap.wrap(value.form, DUMP_WIDTH)]),
        ]
    if callable(value):
        meta = metadata_of(value)
        target = meta.term if meta is not None and meta.term is not None else value
        source = _source_of(target)
        if source is not None:
            return [line(styled("value", text)) for text in source]
        return [line(styled("value", repr(target)))]
    dump = pprint.pformat(value, width=DUMP_WIDTH, sort_dicts=False)
    return [line(styled("value", text)) for text in dump.splitlines()]
