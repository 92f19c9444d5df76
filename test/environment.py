"""
Environment lookup tests.
"""
import os
import unittest
from unittest import TestCase
from unittest.mock import patch

from argot import *
from argot.environment import environment


class EnvironmentTest(TestCase):
    def testMappingEnvironmentSnapshot(self):
        variables = {"HOME": "/home/ana"}
        lookup = MappingEnvironment(variables, EXTRA="1")
        variables["HOME"] = "/root"
        self.assertEqual(lookup.lookup("HOME"), "/home/ana")
        self.assertEqual(lookup.lookup("EXTRA"), "1")
        self.assertIsNone(lookup.lookup("MISSING"))

    def testProcessEnvironmentReadsAtLookupTime(self):
        lookup = ProcessEnvironment()
        with patch.dict(os.environ, {"ARGOT_TEST_VALUE": "42"}):
            self.assertEqual(lookup.lookup("ARGOT_TEST_VALUE"), "42")
        self.assertIsNone(lookup.lookup("ARGOT_TEST_VALUE"))

    def testNormalization(self):
        self.assertIsNone(environment(None).lookup("PATH"))
        self.assertEqual(environment({"A": "b"}).lookup("A"), "b")
        lookup = ProcessEnvironment()
        self.assertIs(environment(lookup), lookup)
        self.assertIsInstance(lookup, EnvironmentLookup)

    def testUnsupportedSourceRaises(self):
        with self.assertRaises(TypeError):
            environment(["A=b"])

    def testParseIgnoresProcessEnvironment(self):
        app = App("tool")
        app.add_option("token").env("ARGOT_TEST_TOKEN")
        with patch.dict(os.environ, {"ARGOT_TEST_TOKEN": "secret"}):
            self.assertFalse(app.parse([]).has("token"))
            self.assertEqual(app.parse([], ProcessEnvironment()).get("token"), "secret")


if __name__ == "__main__":
    unittest.main()
