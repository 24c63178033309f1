"""
Tests for TypeSkin Decorators
==============================
Decoration-time contract and invariant checks.
"""
import sys
import os
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from typeskin.combinators import Enum, Number, String, Struct
from typeskin.contracts import Fn, PartialApplication
from typeskin.decorators import contract, invariant
from typeskin.descriptor import metadata_of
from typeskin.errors import InvariantViolation, TypeMismatch

Weapon = Enum("Sword", "Lance", "Axe").name("Weapon")
Player = Struct({"atk": Number, "wpn": Weapon}).name("Player")


class TestContractDecorator(unittest.TestCase):

    def test_wraps_and_names(self):
        @contract(Fn(Number, Number, Number))
        def add(a, b):
            return a + b

        self.assertIsInstance(add, PartialApplication)
        self.assertEqual(metadata_of(add).name, "add")
        self.assertEqual(add(1)(2), 3)

    def test_explicit_name(self):
        @contract(Fn(Number, Number), name="negate")
        def neg(a):
            return -a

        self.assertEqual(metadata_of(neg).name, "negate")

    def test_bad_return_raises_at_decoration(self):
        with self.assertRaises(TypeMismatch) as ctx:
            @contract(Fn(Player, Weapon))
            def weapon_name(player):
                return player["wpn"].upper()

        self.assertIn("Expected return type Weapon", ctx.exception.args[0])

    def test_arguments_checked_at_call(self):
        @contract(Fn(Player, String))
        def describe(player):
            return f"{player['wpn']} ({player['atk']})"

        self.assertEqual(describe({"atk": 3, "wpn": "Axe"}), "Axe (3)")
        with self.assertRaises(TypeMismatch):
            describe({"atk": 3, "wpn": "Bow"})


class TestInvariantDecorator(unittest.TestCase):

    def test_holding_invariant_returns_predicate(self):
        @invariant(Number, attempts=100)
        def double_negation(n):
            return -(-n) == n

        self.assertTrue(double_negation(2))
        self.assertEqual(double_negation.__typeskin_invariant__, (Number,))

    def test_broken_invariant_raises(self):
        with self.assertRaises(InvariantViolation):
            @invariant(Number, Number)
            def subtraction_commutes(a, b):
                return a - b == b - a


if __name__ == "__main__":
    unittest.main(verbosity=2)
