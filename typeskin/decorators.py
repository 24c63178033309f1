"""
TypeSkin Decorators
===================
Decorator spellings of attach() and forall(), checked at decoration time.

    @contract(Fn(Number, Number, Number))
    def add(a, b):
        return a + b

    @invariant(Number, Number)
    def add_commutes(a, b):
        return add(a, b) == add(b, a)

`contract` replaces the function with its instrumented, curried form and
raises TypeMismatch if sampled calls break the return type. `invariant`
runs forall() on the predicate immediately and leaves it unchanged.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from .checker import attach
from .contracts import PartialApplication
from .descriptor import TypeDescriptor
from .properties import forall

F = TypeVar("F", bound=Callable[..., Any])


def contract(descriptor: TypeDescriptor, *, name: Optional[str] = None) -> Callable[[F], F]:
    """Attach `descriptor` to the decorated function.

    The display name defaults to the function's __name__.
    """
    def decorator(fn: F) -> F:
        term = attach(descriptor, fn)
        if isinstance(term, PartialApplication):
            term.name(name or getattr(fn, "__name__", "anon"))
        return term  # type: ignore

    return decorator


def invariant(*types: TypeDescriptor, attempts: Optional[int] = None) -> Callable[[F], F]:
    """Check the decorated predicate with forall() over `types`."""
    def decorator(predicate: F) -> F:
        forall(types, predicate, attempts)
        predicate.__typeskin_invariant__ = tuple(types)
        return predicate

    return decorator
