"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import unittest

from tests.utility import TypedTestCase
from xmleq.compare import deep_equals
from xmleq.environment import ArgumentError
from xmleq.nodes import Element, Text
from xmleq.strings import (
    CURRENT_CULTURE,
    CURRENT_CULTURE_IGNORE_CASE,
    ORDINAL,
    ORDINAL_IGNORE_CASE,
    STRING_COMPARER_NAMES,
    get_string_comparer,
)


class TestStringComparer(TypedTestCase):
    def test_ordinal(self) -> None:
        self.assertTrue(ORDINAL.equals("value", "value"))
        self.assertFalse(ORDINAL.equals("Value", "value"))
        self.assertFalse(ORDINAL.equals("", None))
        self.assertTrue(ORDINAL.equals(None, None))
        self.assertEqual(ORDINAL.key("value"), ORDINAL.key("value"))

    def test_ordinal_ignore_case(self) -> None:
        self.assertTrue(ORDINAL_IGNORE_CASE.equals("Value", "vALUE"))
        self.assertTrue(ORDINAL_IGNORE_CASE.equals("STRASSE", "straße"))
        self.assertFalse(ORDINAL_IGNORE_CASE.equals("value", "values"))
        self.assertFalse(ORDINAL_IGNORE_CASE.equals(None, ""))
        self.assertEqual(ORDINAL_IGNORE_CASE.key("Value"), ORDINAL_IGNORE_CASE.key("VALUE"))

    def test_current_culture(self) -> None:
        self.assertTrue(CURRENT_CULTURE.equals("value", "value"))
        self.assertFalse(CURRENT_CULTURE.equals("value", "other"))
        self.assertTrue(CURRENT_CULTURE_IGNORE_CASE.equals("Value", "VALUE"))
        self.assertFalse(CURRENT_CULTURE.equals("", None))

    def test_current_culture_nul(self) -> None:
        self.assertTrue(CURRENT_CULTURE.equals("a\0b", "a\0b"))
        self.assertFalse(CURRENT_CULTURE.equals("a\0b", "a\0c"))
        self.assertFalse(CURRENT_CULTURE.equals("a\0", "a"))
        self.assertTrue(CURRENT_CULTURE_IGNORE_CASE.equals("A\0", "a\0"))
        self.assertEqual(CURRENT_CULTURE.key("a\0"), CURRENT_CULTURE.key("a\0"))

        first = Element("p", children=[Text("a\0")])
        second = Element("p", children=[Text("a\0")])
        self.assertIsNone(deep_equals(first, second))
        self.assertIsNotNone(deep_equals(first, Element("p", children=[Text("a")])))

    def test_key_consistent_with_equals(self) -> None:
        pairs = [("a", "A"), ("a", "a"), ("a", "b"), ("", "")]
        for comparer in (ORDINAL, ORDINAL_IGNORE_CASE, CURRENT_CULTURE, CURRENT_CULTURE_IGNORE_CASE):
            for left, right in pairs:
                with self.subTest(comparer=comparer, left=left, right=right):
                    self.assertEqual(comparer.equals(left, right), comparer.key(left) == comparer.key(right))

    def test_lookup(self) -> None:
        self.assertIs(get_string_comparer("ordinal"), ORDINAL)
        self.assertIs(get_string_comparer("Ordinal_Ignore_Case"), ORDINAL_IGNORE_CASE)
        for name in STRING_COMPARER_NAMES:
            get_string_comparer(name)

        with self.assertRaises(ArgumentError):
            get_string_comparer("invariant")


if __name__ == "__main__":
    unittest.main()
