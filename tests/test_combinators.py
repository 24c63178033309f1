"""
Tests for the Combinator Library
=================================
Membership tests for primitive and composite descriptors, and the names
they compose.
"""
import sys
import os
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from typeskin.combinators import (
    Type, Boolean, Number, String, Bytes, Date,
    Int, Uint, Int8, Uint8, Uint32,
    IntBetween, Between, Enum, Maybe, Either,
    Struct, Vector, Pair, Array, Map,
)
from typeskin.descriptor import Custom, TypeDescriptor


# ─────────────────────────────────────────────
#  Numbers
# ─────────────────────────────────────────────

class TestIntegerRanges(unittest.TestCase):

    def test_uint8_bounds(self):
        self.assertTrue(Uint(8).test(255))
        self.assertFalse(Uint(8).test(256))
        self.assertFalse(Uint(8).test(-1))

    def test_int8_bounds(self):
        self.assertTrue(Int(8).test(-128))
        self.assertTrue(Int(8).test(127))
        self.assertFalse(Int(8).test(128))
        self.assertFalse(Int(8).test(-129))

    def test_rejects_non_integers(self):
        self.assertFalse(Int(32).test(1.5))
        self.assertFalse(Int(32).test("1"))
        self.assertFalse(Int(32).test(True))

    def test_aliases_share_ranges(self):
        self.assertTrue(Uint8.test(0))
        self.assertFalse(Uint8.test(256))
        self.assertTrue(Uint32.test(2 ** 32 - 1))
        self.assertFalse(Int8.test(200))

    def test_alias_names(self):
        self.assertEqual(Uint8.meta.name, "Uint8")
        self.assertEqual(Int(16).meta.name, "Int(16)")

    def test_zero_width_rejected(self):
        with self.assertRaises(ValueError):
            Int(0)

    def test_int_between(self):
        desc = IntBetween(16, 19)
        self.assertTrue(desc.test(16))
        self.assertTrue(desc.test(19))
        self.assertFalse(desc.test(20))
        self.assertFalse(desc.test(17.5))

    def test_between(self):
        desc = Between(1.3, 1.7)
        self.assertTrue(desc.test(1.5))
        self.assertFalse(desc.test(1.8))
        self.assertFalse(desc.test(float("nan")))
        self.assertEqual(desc.meta.name, "Between(1.3,1.7)")


class TestNumber(unittest.TestCase):

    def test_accepts_ints_and_floats(self):
        self.assertTrue(Number.test(3))
        self.assertTrue(Number.test(-2.5))
        self.assertTrue(Number.test(float("inf")))

    def test_rejects_nan_and_bool(self):
        self.assertFalse(Number.test(float("nan")))
        self.assertFalse(Number.test(True))
        self.assertFalse(Number.test("3"))
        self.assertFalse(Number.test(None))

    def test_boolean(self):
        self.assertTrue(Boolean.test(False))
        self.assertFalse(Boolean.test(0))


# ─────────────────────────────────────────────
#  Strings
# ─────────────────────────────────────────────

class TestStrings(unittest.TestCase):

    def test_string(self):
        self.assertTrue(String.test(""))
        self.assertFalse(String.test(b"abc"))

    def test_bytes_even_lowercase_hex(self):
        self.assertTrue(Bytes.test(""))
        self.assertTrue(Bytes.test("0aff"))
        self.assertFalse(Bytes.test("0af"))
        self.assertFalse(Bytes.test("0AFF"))
        self.assertFalse(Bytes.test("zz"))

    def test_date_pattern(self):
        self.assertTrue(Date.test("2018-03-11T17:05:44.123Z"))
        self.assertTrue(Date.test("2018-03-11T17:05:44.5+02:00"))
        self.assertFalse(Date.test("2018-03-11"))
        self.assertFalse(Date.test(None))

    def test_date_is_not_calendar_checked(self):
        self.assertTrue(Date.test("2018-19-39T29:59:59.0Z"))


# ─────────────────────────────────────────────
#  Choice
# ─────────────────────────────────────────────

class TestChoice(unittest.TestCase):

    def test_enum_membership(self):
        self.assertTrue(Enum("A", "B").test("A"))
        self.assertFalse(Enum("A", "B").test("C"))

    def test_enum_naming(self):
        weapon = Enum("Sword", "Axe")
        self.assertEqual(weapon.meta.name, "Enum(Sword,Axe)")
        self.assertIn('"Sword"', weapon.form)

    def test_enum_requires_strings(self):
        with self.assertRaises(TypeError):
            Enum("A", 1)

    def test_maybe(self):
        desc = Maybe(Number)
        self.assertTrue(desc.test(None))
        self.assertTrue(desc.test(1))
        self.assertFalse(desc.test("1"))
        self.assertEqual(desc.meta.name, "Maybe(Number)")

    def test_maybe_samples_none_sometimes(self):
        samples = [Maybe(Number).sample() for _ in range(500)]
        self.assertIn(None, samples)
        self.assertTrue(any(s is not None for s in samples))

    def test_either(self):
        desc = Either(Number, String)
        self.assertTrue(desc.test(1))
        self.assertTrue(desc.test("a"))
        self.assertFalse(desc.test(None))
        self.assertEqual(desc.meta.name, "Either(Number,String)")


# ─────────────────────────────────────────────
#  Aggregates
# ─────────────────────────────────────────────

class TestAggregates(unittest.TestCase):

    def test_vector_exact_length(self):
        vec = Vector(4, Number)
        self.assertFalse(vec.test([1, 2, 3]))
        self.assertTrue(vec.test([1, 2, 3, 4]))
        self.assertFalse(vec.test([1, 2, 3, 4, 5]))

    def test_vector_element_types(self):
        self.assertFalse(Vector(2, Number).test([1, "2"]))

    def test_array(self):
        self.assertTrue(Array(String).test([]))
        self.assertTrue(Array(String).test(["Alice", "Bob"]))
        self.assertFalse(Array(String).test(["Alice", 3]))
        self.assertFalse(Array(String).test("Alice"))

    def test_pair(self):
        pair = Pair(Number, String)
        self.assertTrue(pair.test([1, "a"]))
        self.assertTrue(pair.test((1, "a")))
        self.assertFalse(pair.test(["a", 1]))
        self.assertFalse(pair.test([1, "a", 2]))

    def test_struct_fields(self):
        player = Struct({"atk": Number, "wpn": Enum("Sword", "Axe")})
        self.assertTrue(player.test({"atk": 3, "wpn": "Axe"}))
        self.assertTrue(player.test({"atk": 3, "wpn": "Axe", "extra": object()}))
        self.assertFalse(player.test({"atk": 3, "wpn": "Bow"}))
        self.assertFalse(player.test({"atk": 3}))
        self.assertFalse(player.test([3, "Axe"]))

    def test_struct_naming(self):
        player = Struct({"atk": Number, "bag": Array(String)})
        self.assertEqual(player.meta.name, "Struct({atk:Number,bag:Array(String)})")

    def test_map_json_keys(self):
        scores = Map(Number, String)
        self.assertTrue(scores.test({}))
        self.assertTrue(scores.test({"1": "one", "2.5": "two and a half"}))
        self.assertFalse(scores.test({"one": "1"}))
        self.assertFalse(scores.test({'"1"': "one"}))
        self.assertFalse(scores.test({"1": 1}))
        self.assertFalse(scores.test([]))

    def test_map_sample_is_populated_sometimes(self):
        samples = [Map(Uint8, Boolean).sample() for _ in range(50)]
        self.assertTrue(any(samples))

    def test_failing_child_diagnostic_fails_parent(self):
        noisy = Custom("never", test=lambda v: ["diagnostic line"], sample=lambda mode: 0)
        self.assertFalse(Array(noisy).test([1]))


# ─────────────────────────────────────────────
#  Naming & the type of types
# ─────────────────────────────────────────────

class TestNaming(unittest.TestCase):

    def test_defaults(self):
        desc = Custom("anything", test=lambda v: True, sample=lambda mode: None)
        self.assertEqual(desc.meta.name, "anon")
        self.assertEqual(desc.meta.description, "no description")

    def test_chaining_returns_self(self):
        desc = Enum("Sword", "Lance")
        self.assertIs(desc.name("Weapon").describe("a weapon"), desc)
        self.assertEqual(desc.meta.name, "Weapon")
        self.assertEqual(desc.meta.description, "a weapon")

    def test_composite_uses_child_names(self):
        weapon = Enum("Sword", "Lance").name("Weapon")
        self.assertEqual(Array(weapon).meta.name, "Array(Weapon)")

    def test_type_of_types(self):
        self.assertTrue(Type.test(Number))
        self.assertTrue(Type.test(Struct({"a": Number})))
        self.assertFalse(Type.test(5))
        self.assertFalse(Type.test({"form": "x"}))

    def test_custom_refinement(self):
        txt = Custom(
            "a str ending in `.txt`",
            test=lambda v: isinstance(v, str) and v.endswith(".txt"),
            sample=lambda mode: String.sample(mode) + ".txt",
        ).name("TextFile")
        self.assertIsInstance(txt, TypeDescriptor)
        self.assertTrue(Type.test(txt))
        self.assertTrue(txt.test("notes.txt"))
        self.assertFalse(txt.test("notes.md"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
