"""
Tests for the internal utilities.

This module verifies:
- Singleton identity, falsy semantics, copying and pickling of `Unset`.
- Finality of `UnsetType`.
- `coalesce`, `rename` and `view` helpers.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from clop.utils import *


class UnsetTest(TestCase):

    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))
        self.assertEqual(repr(Unset), "Unset")

    def testNotEqualToNoneOrFalse(self) -> None:
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testCopyDeepcopyPickle(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class HelpersTest(TestCase):

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(Unset))

    def testRenameFunctionForm(self) -> None:
        def f():
            pass

        self.assertIs(rename(f, "do_work"), f)
        self.assertEqual((f.__name__, f.__qualname__), ("do_work", "do_work"))

    def testRenameDecoratorForm(self) -> None:
        @rename("do_work")
        def f():
            pass

        self.assertEqual(f.__name__, "do_work")

    def testRenameArity(self) -> None:
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename("a", "b", "c")

    def testView(self) -> None:
        class Holder:
            items = view("items")
            name = view("name")

            def __init__(self):
                self._items = [1, 2]
                self._name = "x"

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertEqual(holder.name, "x")
        with self.assertRaises(AttributeError):
            holder.name = "y"

    def testViewFreezesContainers(self) -> None:
        class Holder:
            items = view("items")
            mapping = view("mapping")

            def __init__(self):
                self._items = range(3)
                self._mapping = {"a": 1}

        holder = Holder()
        # any Sequence comes back as a plain tuple, its own type is lost
        self.assertIs(type(holder.items), tuple)
        with self.assertRaises(TypeError):
            holder.mapping["b"] = 2


if __name__ == '__main__':
    unittest.main()
