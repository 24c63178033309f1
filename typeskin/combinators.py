"""
Combinator Library
==================
Primitive descriptors and the combinators that compose them.

    Weapon = Enum("Sword", "Lance", "Axe").name("Weapon")
    Player = Struct({
        "atk": Number,
        "def": Number,
        "wpn": Weapon,
        "bag": Array(String),
    }).name("Player")

Every combinator builds its form, name and description from the
children's own form and name. Composite tests short-circuit on the first
failing child; composite samples draw each child independently.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Sequence

from .descriptor import Descriptor, TypeDescriptor, passes, type_name
from .sampling import (
    HEX_DIGITS,
    Mode,
    chance,
    generate,
    random_of,
    rng,
    syllable,
)


def _compact(mode: Any) -> bool:
    return mode is Mode.COMPACT


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


# ─────────────────────────────────────────────────────────────
#  Primitives
# ─────────────────────────────────────────────────────────────

class BooleanType(Descriptor):
    def __init__(self):
        super().__init__("a Python bool", "Boolean", "a boolean")

    def test(self, value):
        return value is True or value is False

    def sample(self, mode=None):
        return rng.random() > 0.5


class NumberType(Descriptor):
    """int or float, excluding bool and NaN."""

    def __init__(self):
        super().__init__(
            "a Python int or float that is not NaN",
            "Number",
            "a double-precision floating-point real number",
        )

    def test(self, value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return not (isinstance(value, float) and math.isnan(value))

    def sample(self, mode=None):
        r = (rng.random() - 0.5) * 2 ** rng.randrange(32)
        if _compact(mode):
            return int(math.fmod(r, 1024) * 100) / 100
        return r


class IntType(Descriptor):
    """Fixed-width integer: Int(n) is signed, Uint(n) unsigned."""

    def __init__(self, bits: int, signed: bool = True):
        if bits < 1:
            raise ValueError(f"integer width must be at least 1 bit, got {bits}")
        self.bits = bits
        self.signed = signed
        if signed:
            self.low, self.high = -(2 ** (bits - 1)), 2 ** (bits - 1)
            super().__init__(
                f"a Python int with {bits} bits",
                f"Int({bits})",
                f"a {bits}-bit integer number",
            )
        else:
            self.low, self.high = 0, 2 ** bits
            super().__init__(
                f"a non-negative Python int with {bits} bits",
                f"Uint({bits})",
                f"a {bits}-bit non-negative integer number",
            )

    def test(self, value):
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and self.low <= value < self.high
        )

    def sample(self, mode=None):
        if _compact(mode):
            # Keep compact samples within +-100 of zero.
            return rng.randrange(max(self.low, -100), min(self.high, 101))
        return rng.randrange(self.low, self.high)


class IntBetweenType(Descriptor):
    def __init__(self, low: int, high: int):
        if low > high:
            raise ValueError(f"IntBetween({low},{high}): empty range")
        self.low, self.high = low, high
        self._int32 = IntType(32)
        self._sample_low = max(low, self._int32.low)
        self._sample_high = min(high, self._int32.high - 1)
        if self._sample_low > self._sample_high:
            raise ValueError(f"IntBetween({low},{high}): range lies outside 32-bit integers")
        super().__init__(
            f"a Python int from {low} to {high}",
            f"IntBetween({low},{high})",
            f"an integer number from {low} to {high}",
        )

    def test(self, value):
        return self._int32.test(value) and self.low <= value <= self.high

    def sample(self, mode=None):
        return rng.randint(self._sample_low, self._sample_high)


class BetweenType(Descriptor):
    def __init__(self, low: float, high: float):
        if low > high:
            raise ValueError(f"Between({low},{high}): empty range")
        self.low, self.high = low, high
        super().__init__(
            f"a Python number from {low} to {high}",
            f"Between({low},{high})",
            f"a real number from {low} to {high}",
        )

    def test(self, value):
        return Number.test(value) and self.low <= value <= self.high

    def sample(self, mode=None):
        value = self.low + (self.high - self.low) * rng.random()
        if _compact(mode):
            value = round(value, 2)
        return min(max(value, self.low), self.high)


class StringType(Descriptor):
    def __init__(self):
        super().__init__("a plain Python str", "String", "an UTF-8 string")

    def test(self, value):
        return isinstance(value, str)

    def sample(self, mode=None):
        if _compact(mode):
            return "".join(generate(rng.randrange(6), syllable))
        return "".join(generate(rng.randrange(64), lambda: chr(32 + rng.randrange(94))))


class BytesType(Descriptor):
    """Hex-encoded byte string: even length, lowercase digits only."""

    _HEX = re.compile(r"^[0-9a-f]*$")

    def __init__(self):
        super().__init__(
            "a plain Python str containing an even number of hex (`0123456789abcdef`) characters",
            "Bytes",
            "a byte-string",
        )

    def test(self, value):
        return isinstance(value, str) and len(value) % 2 == 0 and bool(self._HEX.match(value))

    def sample(self, mode=None):
        length = rng.randrange(4 if _compact(mode) else 512) * 2
        return "".join(generate(length, lambda: random_of(HEX_DIGITS)))


class DateType(Descriptor):
    """ISO-8601 timestamp string.

    The pattern is searched, not anchored, and the date is not required to
    exist on the calendar. The sampler yields `datetime` objects, which the
    pattern rejects, so this descriptor breaks `test(sample())`.
    """

    PATTERN = re.compile(
        r"\d{4}-[01]\d-[0-3]\dT[0-2]\d:[0-5]\d:[0-5]\d\.\d+([+-][0-2]\d:[0-5]\d|Z)"
    )

    def __init__(self):
        super().__init__("a plain Python str containing an ISO-8601 date", "Date", "an UTF-8 date")

    def test(self, value):
        return isinstance(value, str) and self.PATTERN.search(value) is not None

    def sample(self, mode=None):
        now = datetime.now(timezone.utc).timestamp()
        return datetime.fromtimestamp(now * (0.5 + rng.random()), tz=timezone.utc)


Boolean = BooleanType()
Number = NumberType()
String = StringType()
Bytes = BytesType()
Date = DateType()


def Int(bits: int) -> IntType:
    return IntType(bits, signed=True)


def Uint(bits: int) -> IntType:
    return IntType(bits, signed=False)


Int8 = Int(8).name("Int8")
Int16 = Int(16).name("Int16")
Int32 = Int(32).name("Int32")
Uint8 = Uint(8).name("Uint8")
Uint16 = Uint(16).name("Uint16")
Uint32 = Uint(32).name("Uint32")


def IntBetween(low: int, high: int) -> IntBetweenType:
    return IntBetweenType(low, high)


def Between(low: float, high: float) -> BetweenType:
    return BetweenType(low, high)


# ─────────────────────────────────────────────────────────────
#  Choice
# ─────────────────────────────────────────────────────────────

class EnumType(Descriptor):
    def __init__(self, values: Sequence[str]):
        if not values:
            raise ValueError("Enum needs at least one value")
        if not all(isinstance(v, str) for v in values):
            raise TypeError("Enum values must be strings")
        self.values = tuple(values)
        super().__init__(
            "a Python str in the set [" + ", ".join(json.dumps(v) for v in self.values) + "]",
            "Enum(" + ",".join(self.values) + ")",
            f"an enum of {len(self.values)} values ({', '.join(self.values)})",
        )

    def test(self, value):
        return isinstance(value, str) and value in self.values

    def sample(self, mode=None):
        return random_of(self.values)


class MaybeType(Descriptor):
    def __init__(self, inner: TypeDescriptor):
        self.inner = inner
        super().__init__(
            f"either {inner.form} or None",
            f"Maybe({type_name(inner)})",
            f"maybe a {type_name(inner)}",
        )

    def test(self, value):
        return value is None or passes(self.inner.test(value))

    def sample(self, mode=None):
        return None if chance(0.2) else self.inner.sample(mode)


class EitherType(Descriptor):
    def __init__(self, left: TypeDescriptor, right: TypeDescriptor):
        self.left, self.right = left, right
        super().__init__(
            f"either {left.form} or {right.form}",
            f"Either({type_name(left)},{type_name(right)})",
            f"either a {type_name(left)} or a {type_name(right)}",
        )

    def test(self, value):
        return passes(self.left.test(value)) or passes(self.right.test(value))

    def sample(self, mode=None):
        return self.left.sample(mode) if chance(0.5) else self.right.sample(mode)


def Enum(*values: str) -> EnumType:
    return EnumType(values)


def Maybe(inner: TypeDescriptor) -> MaybeType:
    return MaybeType(inner)


def Either(left: TypeDescriptor, right: TypeDescriptor) -> EitherType:
    return EitherType(left, right)


# ─────────────────────────────────────────────────────────────
#  Aggregates
# ─────────────────────────────────────────────────────────────

class StructType(Descriptor):
    """Mapping with a fixed set of typed fields. Extra keys are ignored."""

    def __init__(self, fields: Mapping[str, TypeDescriptor]):
        self.fields = dict(fields)
        items = self.fields.items()
        super().__init__(
            "a Python dict with the fields "
            + ", ".join(f"`{f}` ({t.form})" for f, t in items),
            "Struct({" + ",".join(f"{f}:{type_name(t)}" for f, t in items) + "})",
            "a struct with the fields "
            + ", ".join(f"`{f}` (`{type_name(t)}`)" for f, t in items),
        )

    def test(self, value):
        if not isinstance(value, Mapping):
            return False
        return all(
            field in value and passes(t.test(value[field]))
            for field, t in self.fields.items()
        )

    def sample(self, mode=None):
        return {field: t.sample(mode) for field, t in self.fields.items()}


class VectorType(Descriptor):
    """Homogeneous list of exactly `size` elements."""

    def __init__(self, size: int, element: TypeDescriptor):
        if size < 0:
            raise ValueError(f"Vector size must be non-negative, got {size}")
        self.size, self.element = size, element
        name = type_name(element)
        super().__init__(
            f"a Python list with `{size}` `{name}`s, where `{name}` is {element.form}",
            f"Vector({size},{name})",
            f"a `Vector` of `{size} {name}`s",
        )

    def test(self, value):
        return (
            _is_sequence(value)
            and len(value) == self.size
            and all(passes(self.element.test(x)) for x in value)
        )

    def sample(self, mode=None):
        return generate(self.size, lambda: self.element.sample(mode))


class PairType(Descriptor):
    def __init__(self, first: TypeDescriptor, second: TypeDescriptor):
        self.first, self.second = first, second
        super().__init__(
            f"a Python list with {first.form} and {second.form}",
            f"Pair({type_name(first)},{type_name(second)})",
            f"a `Pair` of `{type_name(first)}` and `{type_name(second)}`",
        )

    def test(self, value):
        return (
            _is_sequence(value)
            and len(value) == 2
            and passes(self.first.test(value[0]))
            and passes(self.second.test(value[1]))
        )

    def sample(self, mode=None):
        return [self.first.sample(mode), self.second.sample(mode)]


class ArrayType(Descriptor):
    def __init__(self, element: TypeDescriptor):
        self.element = element
        name = type_name(element)
        super().__init__(
            f"a Python list of `{name}`s, where `{name}` is {element.form}",
            f"Array({name})",
            f"an `Array` of `{name}`s",
        )

    def test(self, value):
        return _is_sequence(value) and all(passes(self.element.test(x)) for x in value)

    def sample(self, mode=None):
        length = rng.randrange(8 if _compact(mode) else 64)
        return generate(length, lambda: self.element.sample(mode))


class MapType(Descriptor):
    """dict keyed by JSON encodings of `key` inhabitants.

    Sampled keys are `json.dumps` of key samples, so the key descriptor's
    samples must be JSON-serializable.
    """

    def __init__(self, key: TypeDescriptor, value: TypeDescriptor):
        self.key, self.value = key, value
        k, v = type_name(key), type_name(value)
        super().__init__(
            f"a Python dict where keys are the JSON serialization of `{k}`s, "
            f"and the values are `{v}`s, where `{v}` is `{value.form}` "
            f"and `{k}` is `{key.form}`",
            f"Map({k},{v})",
            f"a map from `{k}`s to `{v}`s",
        )

    def test(self, value):
        if not isinstance(value, dict):
            return False
        for raw_key, item in value.items():
            if not isinstance(raw_key, str):
                return False
            try:
                key = json.loads(raw_key)
            except ValueError:
                return False
            if not (passes(self.key.test(key)) and passes(self.value.test(item))):
                return False
        return True

    def sample(self, mode=None):
        count = rng.randrange(4 if _compact(mode) else 16)
        return {json.dumps(self.key.sample(mode)): self.value.sample(mode) for _ in range(count)}


def Struct(fields: Mapping[str, TypeDescriptor]) -> StructType:
    return StructType(fields)


def Vector(size: int, element: TypeDescriptor) -> VectorType:
    return VectorType(size, element)


def Pair(first: TypeDescriptor, second: TypeDescriptor) -> PairType:
    return PairType(first, second)


def Array(element: TypeDescriptor) -> ArrayType:
    return ArrayType(element)


def Map(key: TypeDescriptor, value: TypeDescriptor) -> MapType:
    return MapType(key, value)


# ─────────────────────────────────────────────────────────────
#  The type of types
# ─────────────────────────────────────────────────────────────

PRIMITIVES = (Boolean, Number, String, Bytes, Int8, Int16, Int32, Uint8, Uint16, Uint32)


class TypeType(Descriptor):
    def __init__(self):
        super().__init__(
            "an object with the field `form` (a str describing the inhabitants), "
            "and the methods `test` (receives a value and returns True iff that "
            "value is an inhabitant of the type) and `sample` (returns a random "
            "inhabitant of the type)",
            "Type",
            "a type",
        )

    def test(self, value):
        return (
            isinstance(value, TypeDescriptor)
            and isinstance(value.form, str)
            and callable(value.test)
            and callable(value.sample)
        )

    def sample(self, mode=None):
        return random_of(PRIMITIVES)


Type = TypeType()
