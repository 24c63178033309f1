"""
Checker
=======
`check` verifies a value against a descriptor right now.
`attach` is the main entry point: it instruments functions, records
metadata on the term, checks it, and hands it back.

    add = attach(Fn(Number, Number, Number), lambda a, b: a + b)
    origin = attach(Pair(Number, Number), [0, 0])
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from .descriptor import (
    FunctionDescriptor,
    TermMetadata,
    TypeDescriptor,
    metadata_of,
    set_metadata,
    type_name,
)
from .diagnostics import blank, flatten, indent, line, show, show_block, styled
from .errors import TypeMismatch

logger = logging.getLogger(__name__)

T = TypeVar("T")


def mismatch_lines(descriptor: TypeDescriptor, value: Any) -> list:
    """Default diagnostic for a plain `False` test result."""
    return flatten([
        [line("TypeSkin was expecting a value of type ", styled("type", type_name(descriptor)), ".")],
        [line("Instead, it got:"), blank()],
        indent(show_block(value)),
        [blank()],
        show_block(descriptor),
    ])


def check(descriptor: TypeDescriptor, value: Any) -> None:
    """Raise TypeMismatch unless `value` inhabits `descriptor`."""
    result = descriptor.test(value)
    if isinstance(result, list):
        lines = result
    elif not result:
        lines = mismatch_lines(descriptor, value)
    else:
        return
    raise TypeMismatch(
        type_name(descriptor),
        show(value),
        lines,
        context=getattr(result, "context", None),
    )


def attach(descriptor: TypeDescriptor, term: T) -> T:
    """Check `term` against `descriptor` and return it.

    Function contracts return the instrumented (curried, argument-checking)
    callable instead of the raw function. Terms able to carry attributes
    get a TermMetadata the first time they are attached.
    """
    original = term
    if term is not None and metadata_of(term) is None:
        if isinstance(descriptor, FunctionDescriptor) and callable(term):
            term = descriptor.wrap(term)
        set_metadata(term, TermMetadata(term=original))
    check(descriptor, term)
    logger.debug("attached %s", type_name(descriptor))
    return term
