"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import unittest

from tests.utility import TypedTestCase
from xmleq.collection import MultisetPool, multiset_equal


class TestMultisetPool(TypedTestCase):
    def test_take(self) -> None:
        pool = MultisetPool(["apple", "avocado", "banana"], key=lambda item: item[0])
        self.assertEqual(len(pool), 3)
        self.assertEqual(pool.take("a"), "apple")
        self.assertEqual(pool.take("a"), "avocado")
        self.assertIsNone(pool.take("a"))
        self.assertEqual(len(pool), 1)
        self.assertTrue(pool)
        self.assertEqual(pool.take("b"), "banana")
        self.assertFalse(pool)

    def test_first(self) -> None:
        pool = MultisetPool(["b1", "a1", "b2", "c1", "a2"], key=lambda item: item[0])
        pool.take("b")
        self.assertEqual(pool.first(), "a1")
        pool.take("a")
        self.assertEqual(pool.first(), "b2")
        pool.take("b")
        self.assertEqual(pool.first(), "c1")
        pool.take("c")
        self.assertEqual(pool.first(), "a2")

    def test_none_items(self) -> None:
        pool: MultisetPool[str | None] = MultisetPool([None, None], key=lambda item: item)
        self.assertTrue(pool.discard(None))
        self.assertTrue(pool.discard(None))
        self.assertFalse(pool.discard(None))

    def test_empty(self) -> None:
        pool: MultisetPool[str] = MultisetPool([], key=lambda item: item)
        self.assertFalse(pool)
        self.assertIsNone(pool.first())
        self.assertEqual(len(pool), 0)


class TestMultisetEqual(TypedTestCase):
    def test_equal(self) -> None:
        self.assertTrue(multiset_equal([1, 2, 2, 3], [2, 3, 2, 1]))
        self.assertTrue(multiset_equal([], []))
        self.assertTrue(multiset_equal(None, None))

    def test_multiplicity(self) -> None:
        self.assertFalse(multiset_equal([1, 2, 2], [1, 1, 2]))
        self.assertFalse(multiset_equal([1, 2], [1, 2, 2]))
        self.assertFalse(multiset_equal([1, 2, 2], [1, 2]))

    def test_none(self) -> None:
        self.assertFalse(multiset_equal(None, []))
        self.assertFalse(multiset_equal([], None))

    def test_key(self) -> None:
        self.assertTrue(multiset_equal(["A", "b"], ["B", "a"], key=str.lower))
        self.assertFalse(multiset_equal(["A", "b"], ["B", "a"]))


if __name__ == "__main__":
    unittest.main()
