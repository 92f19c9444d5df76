"""
Tests for the shared helpers.

This module verifies:
- The Unset sentinel (singleton identity, falsy semantics, copy/pickle identity, finality).
- coalesce() replacing only Unset.
- ordinal() and pluralize() wording used by fault messages.
- mirror() exposing immutable views.
"""
import copy
import pickle
import unittest
from threading import Thread, Lock
from unittest import TestCase

from argot.utils import *


class UnsetTest(TestCase):
    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(bool(Unset))
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyDeepcopyPickle(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testThreadSafetySingleton(self) -> None:
        results: list[UnsetType] = []
        lock: Lock = Lock()

        def worker():
            instance = UnsetType()
            with lock:
                results.append(instance)

        threads = [Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 16)
        for instance in results:
            self.assertIs(instance, Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class HelpersTest(TestCase):
    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)

    def testOrdinal(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(113), "113th")

    def testPluralize(self) -> None:
        self.assertEqual(pluralize("error"), "errors")
        self.assertEqual(pluralize("unknown option"), "unknown options")
        self.assertEqual(pluralize("entry"), "entries")
        self.assertEqual(pluralize("match"), "matches")

    def testMirror(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")

            def __init__(self):
                self._items = ["a"]
                self._table = {"k": ["v"]}

        holder = Holder()
        self.assertEqual(holder.items, ("a",))
        with self.assertRaises(TypeError):
            holder.table["k"] = "x"
        self.assertEqual(holder.table["k"], ("v",))
        with self.assertRaises(AttributeError):
            holder.items = ()


if __name__ == "__main__":
    unittest.main()
