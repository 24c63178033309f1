"""
Property Tester
===============
forall() samples inputs from descriptors and asserts a predicate on each
tuple. It stops at the first counterexample. Finding none is evidence,
not proof.

    forall([Number, Number], lambda a, b: add(a, b) == add(b, a))
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from .config import get_settings
from .descriptor import TypeDescriptor, type_name
from .diagnostics import blank, flatten, indent, line, show_block
from .errors import InvariantViolation
from .sampling import Mode

logger = logging.getLogger(__name__)


def _describe_predicate(predicate: Callable[..., Any]) -> str:
    return "\n".join(ln.plain() for ln in show_block(predicate))


def forall(
    types: Sequence[TypeDescriptor],
    predicate: Callable[..., Any],
    attempts: Optional[int] = None,
) -> bool:
    """Raise InvariantViolation if `predicate` fails on sampled arguments."""
    attempts = get_settings().forall_attempts if attempts is None else attempts
    logger.debug("forall over %d type(s), %d attempt(s)", len(types), attempts)

    for _ in range(attempts):
        args = tuple(t.sample(Mode.COMPACT) for t in types)
        if predicate(*args):
            continue

        names = [type_name(t) for t in types]
        lines = flatten([
            [blank(), line(f"For every [{', '.join(names)}], the following invariant should hold:"), blank()],
            show_block(predicate),
            [blank(), line("But it didn't hold for the following values:"), blank()],
            indent(flatten([*show_block(arg), blank()] for arg in args)),
        ])
        raise InvariantViolation(names, _describe_predicate(predicate), args, lines)

    return True
