"""
Utilities behavioral tests (sentinel, coalesce, help layout primitives).

Scope
- Validate the Unset sentinel guarantees (singleton, falsy, final, repr).
- Validate coalesce() only replaces Unset.
- Validate pad/trim/wordwrap used by the help renderer.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from progopts.utils import Unset, UnsetType, coalesce, mirror, pad, trim, wordwrap


class UnsetTest(TestCase):

    def testSingleton(self):
        self.assertIs(Unset, UnsetType())

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):  # NOQA: F-841
                pass

    def testUnionWithTypes(self):
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(1, str | Unset)


class CoalesceTest(TestCase):

    def testReplacesUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")

    def testPreservesFalseyValues(self):
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertEqual(coalesce(0, "fallback"), 0)


class MirrorTest(TestCase):

    def testContainersAreReadOnly(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")

            def __init__(self):
                self._items = [1, 2]
                self._table = {"a": 1}

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        with self.assertRaises(TypeError):
            holder.table["b"] = 2  # NOQA
        with self.assertRaises(AttributeError):
            holder.items = ()  # NOQA


class LayoutTest(TestCase):

    def testPadExtendsShortText(self):
        self.assertEqual(pad("--quiet", 10), "--quiet   ")

    def testPadTruncatesLongText(self):
        self.assertEqual(pad("--configuration", 5), "--con")

    def testPadExactLength(self):
        self.assertEqual(pad("abc", 3), "abc")

    def testTrimOnlyStripsLeadingBlanks(self):
        self.assertEqual(trim(" \t\r\nvalue  "), "value  ")
        self.assertEqual(trim("   "), "")

    def testWordwrapShortTextIsSingleChunk(self):
        self.assertEqual(wordwrap("short", 10), ["short"])

    def testWordwrapDisabledForNonPositiveSize(self):
        self.assertEqual(wordwrap("a fairly long description", 0), ["a fairly long description"])
        self.assertEqual(wordwrap("a fairly long description", -4), ["a fairly long description"])

    def testWordwrapBreaksAfterSpaces(self):
        self.assertEqual(wordwrap("tell the server to be quiet", 12), ["tell the ", "server to ", "be quiet"])

    def testWordwrapBreaksAfterPeriods(self):
        self.assertEqual(wordwrap("one.two.three", 8), ["one.two.", "three"])

    def testWordwrapHardCutWithoutBreakPoint(self):
        self.assertEqual(wordwrap("abcdefghij", 4), ["abcd", "efgh", "ij"])

    def testWordwrapHardCutWhenBreakPointIsTooEarly(self):
        self.assertEqual(wordwrap("a bcdefghij", 6), ["a bcde", "fghij"])


if __name__ == "__main__":
    unittest.main()
