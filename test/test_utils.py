"""
Utility behavioral tests (Unset sentinel, coalesce, mirror, isatty).

Scope
- Validate that Unset is a sealed, falsey singleton with no operator overloads.
- Validate that coalesce only replaces Unset.
- Validate mirror snapshots and isatty on sinks without isatty().

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from argcursor.utils import Unset, UnsetType, coalesce, isatty, mirror


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testSealed(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})

    def testNoUnionOperator(self):
        with self.assertRaises(TypeError):
            Unset | 1
        with self.assertRaises(TypeError):
            1 | Unset


class TestCoalesce(TestCase):
    """Behavioral tests for coalesce()."""

    def testReplacesOnlyUnset(self):
        self.assertEqual(coalesce(Unset, "x"), "x")
        self.assertIsNone(coalesce(None, "x"))
        self.assertEqual(coalesce(0, 5), 0)
        self.assertEqual(coalesce("", "x"), "")


class TestMirror(TestCase):
    """Behavioral tests for mirror() and isatty()."""

    def testSnapshots(self):
        class Holder:
            items = mirror("items")
            names = mirror("names")

            def __init__(self):
                self._items = [1, 2]
                self._names = {"a"}

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertEqual(holder.names, frozenset({"a"}))
        with self.assertRaises(AttributeError):
            holder.items = ()

    def testRequiresName(self):
        with self.assertRaises(TypeError):
            mirror(1)

    def testIsattyOnPlainSinks(self):
        self.assertFalse(isatty(io.StringIO()))
        self.assertFalse(isatty(object()))


if __name__ == "__main__":
    unittest.main()
