"""
Resolution engine tests (command-name resolution and token-stream surgery).

Scope
- valid_command_names / resolve: longest-prefix selection, default fallback.
- matches: switch classification of raw tokens.
- remove_global_options: the two-state separator scan, including its known value-swallowing
  behaviour for presence-only flags.
- remove_command_name: first-occurrence removal of each name word.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from commander import flag
from commander.resolution import (
    valid_command_names,
    resolve,
    matches,
    remove_global_options,
    remove_command_name,
)


class TestResolve(TestCase):
    names = ["help", "foo", "foo bar", "remote", "remote add"]

    def testMostSpecificNameWins(self):
        self.assertEqual(resolve(self.names, ["foo", "bar", "--flag"]), "foo bar")

    def testSingleWord(self):
        self.assertEqual(resolve(self.names, ["foo", "baz"]), "foo")

    def testFlagsAreSkipped(self):
        self.assertEqual(resolve(self.names, ["--verbose", "remote", "-x", "add"]), "remote add")

    def testDefault(self):
        self.assertEqual(resolve(self.names, ["nope"], default="help"), "help")

    def testNoMatchNoDefault(self):
        self.assertIsNone(resolve(self.names, ["nope"]))

    def testEmptyTokens(self):
        self.assertIsNone(resolve(self.names, []))

    def testNoWordBoundary(self):
        self.assertEqual(valid_command_names(["foo"], ["foobar"]), ["foo"])

    def testCandidates(self):
        self.assertEqual(valid_command_names(self.names, ["foo", "bar"]), ["foo", "foo bar"])


class TestMatches(TestCase):
    config = flag("-c", "--config FILE")

    def testSpaced(self):
        self.assertEqual(matches(self.config, "--config"), "spaced")
        self.assertEqual(matches(self.config, "-c"), "spaced")

    def testInline(self):
        self.assertEqual(matches(self.config, "--config=x.yml"), "inline")

    def testAbbreviation(self):
        self.assertEqual(matches(self.config, "--conf"), "spaced")

    def testNoMatch(self):
        self.assertIsNone(matches(self.config, "--out"))
        self.assertIsNone(matches(self.config, "config"))

    def testLoneDashes(self):
        self.assertIsNone(matches(self.config, "-"))
        self.assertIsNone(matches(self.config, "--"))


class TestRemoveGlobalOptions(TestCase):
    def testFlagAndValueRemoved(self):
        tokens = ["build", "--config", "x.yml", "src"]
        remove_global_options([flag("--config FILE")], tokens)
        self.assertEqual(tokens, ["build", "src"])

    def testInPlace(self):
        tokens = ["--verbose"]
        self.assertIs(remove_global_options([flag("--verbose")], tokens), tokens)
        self.assertEqual(tokens, [])

    def testInlineValueOpensNoSlot(self):
        tokens = ["--config=x.yml", "src"]
        remove_global_options([flag("--config FILE")], tokens)
        self.assertEqual(tokens, ["src"])

    def testPresenceFlagSwallowsFollowingWord(self):
        tokens = ["--verbose", "build", "--out", "x.txt", "src"]
        remove_global_options([flag("--verbose")], tokens)
        self.assertEqual(tokens, ["--out", "x.txt", "src"])

    def testDashedTokenIsNeverSwallowed(self):
        tokens = ["--verbose", "--out", "x"]
        remove_global_options([flag("--verbose")], tokens)
        self.assertEqual(tokens, ["--out", "x"])

    def testAbbreviationRemoved(self):
        tokens = ["build", "--verb"]
        remove_global_options([flag("--verbose")], tokens)
        self.assertEqual(tokens, ["build"])

    def testNegatedFormRemoved(self):
        tokens = ["build", "--no-color", "-x"]
        remove_global_options([flag("--[no-]color")], tokens)
        self.assertEqual(tokens, ["build", "-x"])

    def testOrderPreserved(self):
        tokens = ["a", "b", "--trace", "-o", "c", "d"]
        remove_global_options([flag("-t", "--trace")], tokens)
        self.assertEqual(tokens, ["a", "b", "-o", "c", "d"])

    def testEveryFlagProcessed(self):
        tokens = ["--trace", "-v", "build", "src"]
        remove_global_options([flag("--trace"), flag("-v", "--verbose")], tokens)
        self.assertEqual(tokens, ["src"])


class TestRemoveCommandName(TestCase):
    def testFirstOccurrenceOnly(self):
        self.assertEqual(remove_command_name("foo bar", ["foo", "x", "bar", "foo"]), ["x", "foo"])

    def testNoName(self):
        self.assertEqual(remove_command_name(None, ["a", "b"]), ["a", "b"])

    def testNewList(self):
        tokens = ["build", "src"]
        self.assertEqual(remove_command_name("build", tokens), ["src"])
        self.assertEqual(tokens, ["build", "src"])


if __name__ == "__main__":
    unittest.main()
