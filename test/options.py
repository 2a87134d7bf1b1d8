"""
Options record tests.

Scope
- Options: mapping behaviour, set(), default() merge semantics and order, equality.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from commander import Options


class TestOptions(TestCase):
    def testReadWriteByName(self):
        options = Options()
        self.assertEqual(options.set("out", "x.txt"), "x.txt")
        self.assertEqual(options["out"], "x.txt")
        self.assertIn("out", options)
        self.assertEqual(len(options), 1)

    def testNoAttributeAccess(self):
        options = Options({"verbose": True})
        with self.assertRaises(AttributeError):
            options.verbose

    def testDefaultKeepsPresentValues(self):
        options = Options({"x": 1}).default({"x": 2, "y": 3})
        self.assertEqual(options, {"x": 1, "y": 3})

    def testDefaultReturnsSelf(self):
        options = Options()
        self.assertIs(options.default(y=3), options)

    def testDefaultOrder(self):
        options = Options({"out": "x.txt"}).default([("verbose", True)])
        self.assertEqual(list(options), ["verbose", "out"])

    def testDefaultFromKeywords(self):
        options = Options({"jobs": 4}).default(jobs=1, out="a.out")
        self.assertEqual(options["jobs"], 4)
        self.assertEqual(options["out"], "a.out")

    def testNoneIsAValue(self):
        options = Options({"date": None}).default(date="today")
        self.assertIsNone(options["date"])

    def testDelete(self):
        options = Options(out="x.txt")
        del options["out"]
        self.assertNotIn("out", options)

    def testNamesMustBeStrings(self):
        with self.assertRaises(TypeError):
            Options({1: "x"})

    def testEquality(self):
        self.assertEqual(Options(a=1), Options({"a": 1}))
        self.assertNotEqual(Options(a=1), {"a": 2})

    def testUnhashable(self):
        with self.assertRaises(TypeError):
            hash(Options())

    def testRepr(self):
        self.assertEqual(repr(Options(out="x.txt", jobs=2)), "<Options out='x.txt', jobs=2>")


if __name__ == "__main__":
    unittest.main()
