"""
Type Descriptor Protocol
========================
A type descriptor is anything with:

    form            — str, what a valid inhabitant looks like
    test(value)     — True, False, or a list of diagnostic Lines
    sample(mode)    — a random inhabitant

Function contracts additionally provide `wrap(fn)`, which installs the
currying / argument-checking behavior.

`Descriptor` is the base class the combinators build on; `Custom` turns
three plain callables into a descriptor for ad-hoc refinements:

    Slug = Custom(
        "a lowercase String ending in `-v1`",
        test=lambda s: isinstance(s, str) and s.islower() and s.endswith("-v1"),
        sample=lambda mode: "api-v1",
    ).name("Slug")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, runtime_checkable

META_ATTR = "__typeskin__"


@dataclass
class TermMetadata:
    """Display metadata attached to checked terms and to descriptors.

    `term` is the original, unwrapped value (used only in diagnostics).
    """
    name: str = "anon"
    description: str = "no description"
    term: Any = None


def metadata_of(term: Any) -> Optional[TermMetadata]:
    meta = getattr(term, META_ATTR, None)
    return meta if isinstance(meta, TermMetadata) else None


def can_carry_metadata(term: Any) -> bool:
    """Only objects with an instance __dict__ (functions, class instances) can."""
    return hasattr(term, "__dict__") and not isinstance(term, type)


def set_metadata(term: Any, meta: TermMetadata) -> bool:
    if not can_carry_metadata(term):
        return False
    setattr(term, META_ATTR, meta)
    return True


@runtime_checkable
class TypeDescriptor(Protocol):
    """Protocol every descriptor satisfies."""

    form: str

    def test(self, value: Any) -> Any:
        """True iff `value` inhabits the type; may return diagnostic Lines instead of False."""
        ...

    def sample(self, mode: Any = None) -> Any:
        """Return a random inhabitant."""
        ...


@runtime_checkable
class FunctionDescriptor(TypeDescriptor, Protocol):
    """A descriptor for callables, able to instrument a raw function."""

    def wrap(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        ...


class Descriptor(ABC):
    """Base class for the built-in combinators."""

    def __init__(self, form: str, name: str = "anon", description: str = "no description"):
        self.form = form
        setattr(self, META_ATTR, TermMetadata(name, description, self))

    @property
    def meta(self) -> TermMetadata:
        return getattr(self, META_ATTR)

    @abstractmethod
    def test(self, value: Any) -> Any:
        ...

    @abstractmethod
    def sample(self, mode: Any = None) -> Any:
        ...

    def name(self, name: str) -> "Descriptor":
        """Set the display name. Returns self for chaining."""
        self.meta.name = name
        return self

    def describe(self, description: str) -> "Descriptor":
        """Set the display description. Returns self for chaining."""
        self.meta.description = description
        return self

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.meta.name}>"


class Custom(Descriptor):
    """A descriptor assembled from plain callables."""

    def __init__(
        self,
        form: str,
        test: Callable[[Any], Any],
        sample: Callable[[Any], Any],
        name: str = "anon",
        description: str = "no description",
    ):
        super().__init__(form, name, description)
        self._test = test
        self._sample = sample

    def test(self, value):
        return self._test(value)

    def sample(self, mode=None):
        return self._sample(mode)


def type_name(descriptor: Any) -> str:
    meta = metadata_of(descriptor)
    return meta.name if meta is not None else "anon"


def passes(result: Any) -> bool:
    """A diagnostic list is a failure even though it is truthy."""
    return not isinstance(result, list) and bool(result)
