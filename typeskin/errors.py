"""
TypeSkin Errors
===============
The two ways a check can fail:

  TypeMismatch       — a value, an argument, or a sampled return value does
                       not inhabit its descriptor
  InvariantViolation — forall() found a counterexample

Both carry the structured diagnostic lines; str(error) renders them.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from .diagnostics import Line, plain_text
from .render import render


class TypeSkinError(Exception):
    """Base class for TypeSkin failures."""

    title = "TypeSkin error."

    def __init__(self, lines: Iterable[Line]):
        self.lines: list[Line] = list(lines)
        super().__init__(plain_text(self.lines))

    def __str__(self) -> str:
        return "\n" + render(self.title, self.lines)


class TypeMismatch(TypeSkinError):
    """Raised when a term does not inhabit its descriptor.

    `context` holds extra data for function contracts: the sampled `args`
    and the original `term` when they are known.
    """

    title = "TypeSkin type mismatch."

    def __init__(
        self,
        expected_name: str,
        actual_dump: str,
        lines: Iterable[Line],
        context: Optional[dict[str, Any]] = None,
    ):
        self.expected_name = expected_name
        self.actual_dump = actual_dump
        self.context = context or {}
        super().__init__(lines)


class InvariantViolation(TypeSkinError):
    """Raised by forall() on the first counterexample."""

    title = "TypeSkin invariant violation."

    def __init__(
        self,
        type_names: Sequence[str],
        predicate_desc: str,
        counterexample: tuple,
        lines: Iterable[Line],
    ):
        self.type_names = list(type_names)
        self.predicate_desc = predicate_desc
        self.counterexample = counterexample
        super().__init__(lines)
