"""
Function Contract Engine
========================
`Fn(arg1, ..., argN, ret)` describes a callable.

Attaching it to a function does two things:

  1. wrap   — returns a PartialApplication: arguments may be supplied
              across several calls, each checked against its slot when
              first supplied; the body runs once the arity is reached
  2. test   — calls the function with sampled arguments and checks each
              result against `ret`; up to 256 calls during static time,
              one call afterwards

    add = attach(Fn(Number, Number, Number), lambda a, b: a + b)
    add(1)(2)   # -> 3
    add(1, "x") # TypeMismatch on argument `b`

Slots may be named: Fn((Number, "x", "abscissa"), Number, Number).
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable

from . import static_time
from .checker import check
from .combinators import Type
from .config import get_settings
from .descriptor import (
    Descriptor,
    TermMetadata,
    TypeDescriptor,
    metadata_of,
    passes,
    set_metadata,
    type_name,
)
from .diagnostics import (
    Diagnostic,
    blank,
    flatten,
    indent,
    line,
    show,
    show_block,
    styled,
)
from .errors import TypeMismatch
from .sampling import Mode

logger = logging.getLogger(__name__)

SLOT_LABELS = "abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True)
class Slot:
    """One argument (or the return value) of a function contract."""
    descriptor: TypeDescriptor
    label: str
    description: str = ""

    def title(self) -> str:
        return (f"{self.label}: " if self.label else "") + type_name(self.descriptor)


class FunctionContract(Descriptor):
    """Descriptor for callables. Use Fn() to build one."""

    def __init__(self, args: list[Slot], ret: Slot):
        self.args = tuple(args)
        self.ret = ret
        arg_types = [slot.descriptor for slot in self.args]
        super().__init__(
            "a Python callable that receives "
            + ", ".join(t.form for t in arg_types)
            + " and returns "
            + ret.descriptor.form,
            "(" + ", ".join(slot.title() for slot in self.args) + ") => (" + ret.title() + ")",
            "a `Function` from `"
            + ", ".join(type_name(t) for t in arg_types)
            + "` to `"
            + type_name(ret.descriptor)
            + "`",
        )

    @property
    def arity(self) -> int:
        return len(self.args)

    def test(self, candidate):
        if not callable(candidate):
            return Diagnostic(flatten([
                [line("Expected Function, got ", styled("type", type(candidate).__name__), ":"), blank()],
                show_block(candidate),
            ]))

        settings = get_settings()
        attempts = settings.static_attempts if static_time.is_static_time() else 1
        logger.debug("verifying %s with %d attempt(s)", self.meta.name, attempts)

        for attempt in range(attempts):
            mode = Mode.COMPACT if attempt < settings.compact_attempts else Mode.FULL
            args = [slot.descriptor.sample(mode) for slot in self.args]
            result = candidate(*args)
            if not passes(self.ret.descriptor.test(result)):
                logger.debug("%s failed on attempt %d", self.meta.name, attempt + 1)
                return self._return_failure(candidate, args, result)
        return True

    def _return_failure(self, candidate: Callable, args: list, result: Any) -> Diagnostic:
        meta = metadata_of(candidate)
        term = meta.term if meta is not None and meta.term is not None else candidate
        lines = flatten([
            [line("Expected return type ", styled("type", type_name(self.ret.descriptor)), ". Got:"), blank()],
            indent(show_block(result)),
            [blank(), line("When calling the function:"), blank()],
            indent(show_block(term)),
            [blank(), line("With the arguments:"), blank()],
            indent(flatten(show_block(arg) for arg in args)),
            [blank()],
            show_block(self.ret.descriptor),
        ])
        return Diagnostic(lines, context={"args": args, "term": term, "returned": result})

    def sample(self, mode=None):
        value = self.ret.descriptor.sample(mode)

        def sampled(*args, **kwargs):
            return value

        sampled.__qualname__ = sampled.__name__ = "sampled_" + (self.ret.label or "fn")
        return sampled

    def wrap(self, fn: Callable[..., Any]) -> "PartialApplication":
        return PartialApplication(self, fn)


class PartialApplication:
    """A function under contract, possibly with some arguments supplied.

    State is the tuple of accumulated arguments. Each call appends the new
    arguments (checking each against its slot) and either runs the body,
    once the arity is reached, or returns a new PartialApplication.
    """

    def __init__(self, contract: FunctionContract, fn: Callable[..., Any], accumulated: tuple = ()):
        self.contract = contract
        self.fn = fn
        self.accumulated = tuple(accumulated)
        functools.update_wrapper(self, fn)

    @property
    def remaining(self) -> int:
        return self.contract.arity - len(self.accumulated)

    def __call__(self, *args):
        if len(args) > self.remaining:
            raise self._too_many(args)

        start = len(self.accumulated)
        for offset, value in enumerate(args):
            check(self.contract.args[start + offset].descriptor, value)

        accumulated = self.accumulated + args
        if len(accumulated) >= self.contract.arity:
            return self.fn(*accumulated)

        partial = PartialApplication(self.contract, self.fn, accumulated)
        meta = metadata_of(self)
        if meta is not None:
            set_metadata(partial, replace(meta))
        return partial

    def _too_many(self, args: tuple) -> TypeMismatch:
        supplied = list(self.accumulated + args)
        lines = flatten([
            [line(
                "Function of type ", styled("type", self.contract.meta.name),
                f" takes {self.contract.arity} argument(s), got {len(supplied)}:",
            ), blank()],
            indent(flatten(show_block(arg) for arg in supplied)),
        ])
        return TypeMismatch(self.contract.meta.name, show(supplied), lines, context={"args": supplied})

    def _metadata(self) -> TermMetadata:
        meta = metadata_of(self)
        if meta is None:
            meta = TermMetadata(term=self.fn)
            set_metadata(self, meta)
        return meta

    def name(self, name: str) -> "PartialApplication":
        self._metadata().name = name
        return self

    def describe(self, description: str) -> "PartialApplication":
        self._metadata().description = description
        return self

    def __repr__(self) -> str:
        fn_name = getattr(self.fn, "__name__", repr(self.fn))
        return f"<PartialApplication {fn_name} {len(self.accumulated)}/{self.contract.arity}>"


def _as_slot(entry: Any, labels) -> Slot:
    if isinstance(entry, tuple):
        descriptor, *rest = entry
        name = rest[0] if rest else ""
        description = rest[1] if len(rest) > 1 else ""
    else:
        descriptor, name, description = entry, "", ""
    if not name:
        name = next(labels, "_")
    check(Type, descriptor)
    return Slot(descriptor, name, description)


def Fn(*args_and_ret: Any) -> FunctionContract:
    """Build a function contract: argument descriptors, then the return descriptor.

    Each entry is a descriptor or a `(descriptor, name[, description])` tuple.
    Unnamed slots are labelled a, b, c, ... counting only the unnamed ones.
    """
    if not args_and_ret:
        raise ValueError("Fn needs at least a return type")
    labels = iter(SLOT_LABELS)
    slots = [_as_slot(entry, labels) for entry in args_and_ret]
    return FunctionContract(slots[:-1], slots[-1])
