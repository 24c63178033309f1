# TypeSkin — runtime type contracts
"""
TypeSkin: composable type descriptors checked at runtime.
Values are checked on attach; functions are instrumented for currying and
verified by random sampling while the program is still defining things.

    import typeskin as T

    Weapon = T.Enum("Sword", "Lance", "Axe").name("Weapon")
    w = T.attach(Weapon, "Sword")

    add = T.attach(T.Fn(T.Number, T.Number, T.Number), lambda a, b: a + b)
    T.forall([T.Number, T.Number], lambda a, b: add(a, b) == add(b, a))
"""
from .config import Settings, configure, get_settings, load_settings
from .sampling import Mode
from .descriptor import (
    Custom, Descriptor, FunctionDescriptor, TermMetadata, TypeDescriptor,
    metadata_of,
)
from .errors import InvariantViolation, TypeMismatch, TypeSkinError
from .combinators import (
    Type, Boolean, Number, String, Bytes, Date,
    Int, Uint, Int8, Int16, Int32, Uint8, Uint16, Uint32,
    IntBetween, Between, Enum, Maybe, Either,
    Struct, Vector, Pair, Array, Map,
)
from .checker import attach, check
from .contracts import Fn, FunctionContract, PartialApplication
from .properties import forall
from .decorators import contract, invariant
from .static_time import close_static_time, is_static_time
from .render import render

__version__ = "0.1.0"
__all__ = [
    "Settings", "configure", "get_settings", "load_settings",
    "Mode",
    "Custom", "Descriptor", "FunctionDescriptor", "TermMetadata", "TypeDescriptor",
    "metadata_of",
    "InvariantViolation", "TypeMismatch", "TypeSkinError",
    "Type", "Boolean", "Number", "String", "Bytes", "Date",
    "Int", "Uint", "Int8", "Int16", "Int32", "Uint8", "Uint16", "Uint32",
    "IntBetween", "Between", "Enum", "Maybe", "Either",
    "Struct", "Vector", "Pair", "Array", "Map",
    "attach", "check",
    "Fn", "FunctionContract", "PartialApplication",
    "forall",
    "contract", "invariant",
    "close_static_time", "is_static_time",
    "render",
]
