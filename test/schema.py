"""
Schema and builder configuration tests.

Scope
- Name parsing and validation.
- Type inference, arity and duplicate policy consistency.
- Configuration errors are raised immediately by the offending call.
- Frozen schemas and frozen apps refuse changes.
"""
import unittest
from unittest import TestCase

from argot import *


class NamesTest(TestCase):
    def testShortAndLong(self):
        self.assertEqual(names("f,foo"), ("f", "foo"))
        self.assertEqual(names("-f, --foo"), ("f", "foo"))

    def testLongOnlyAndShortOnly(self):
        self.assertEqual(names("foo"), (None, "foo"))
        self.assertEqual(names("-f"), ("f", None))

    def testHyphenatedLongName(self):
        self.assertEqual(names("dry-run"), (None, "dry-run"))

    def testInvalidNames(self):
        for declared in ("", "f,", "-", "--", "a b", "f,g", "foo,bar", "@", "---x"):
            with self.assertRaises(InvalidNameError, msg=declared):
                names(declared)


class ArityTest(TestCase):
    def testExactCount(self):
        self.assertEqual(arity(0), FLAG)
        self.assertEqual(arity(1), SINGLE)
        self.assertTrue(arity(3).multiple)

    def testUnboundedRange(self):
        self.assertEqual(arity(1, 0), Arity(1, None))
        self.assertEqual(arity(2, None), Arity(2, None))

    def testInvalidRanges(self):
        with self.assertRaises(ArityError):
            arity(-1)
        with self.assertRaises(ArityError):
            arity(3, 2)
        with self.assertRaises(ArityError):
            arity(0, 0)


class OptionSchemaTest(TestCase):
    def testTypeInference(self):
        self.assertIs(OptionSchema("v", arity=FLAG).type, ValueType.BOOLEAN)
        self.assertIs(OptionSchema(None, "name").type, ValueType.TEXT)
        self.assertIs(OptionSchema(None, "count", default=3).type, ValueType.INTEGER)
        self.assertIs(OptionSchema(None, "files", arity=Arity(1, None)).type, ValueType.TEXT_LIST)

    def testKeyAndNames(self):
        schema = OptionSchema("f", "foo")
        self.assertEqual(schema.key, "foo")
        self.assertEqual(schema.names, ("-f", "--foo"))
        self.assertEqual(OptionSchema("f").key, "f")

    def testDefaultTypeMismatch(self):
        with self.assertRaises(DefaultTypeError):
            OptionSchema(None, "count", type=ValueType.INTEGER, default="many")

    def testFlagMustBeBoolean(self):
        with self.assertRaises(ArityError):
            OptionSchema("v", arity=FLAG, type=ValueType.INTEGER)

    def testMultipleValuesMustBeTextList(self):
        with self.assertRaises(ArityError):
            OptionSchema(None, "sizes", arity=Arity(2, 2), type=ValueType.INTEGER)

    def testAccumulateRequiresTextList(self):
        with self.assertRaises(PolicyError):
            OptionSchema(None, "level", type=ValueType.INTEGER, policy=DuplicatePolicy.ACCUMULATE)
        with self.assertRaises(PolicyError):
            OptionSchema("v", arity=FLAG, policy=DuplicatePolicy.ACCUMULATE)

    def testAccumulateInfersTextList(self):
        schema = OptionSchema("I", policy=DuplicatePolicy.ACCUMULATE)
        self.assertIs(schema.type, ValueType.TEXT_LIST)

    def testSchemasAreImmutable(self):
        schema = OptionSchema("f", "foo")
        with self.assertRaises(AttributeError):
            schema.required = True
        with self.assertRaises(AttributeError):
            schema._required = True

    def testValidatorsExposedAsTuple(self):
        schema = OptionSchema(None, "mode", validators=[choice(["a"])])
        self.assertIsInstance(schema.validators, tuple)

    def testValidatorsMustSupportValidate(self):
        with self.assertRaises(TypeError):
            OptionSchema(None, "mode", validators=[object()])


class PositionalSchemaTest(TestCase):
    def testFlagArityRejected(self):
        with self.assertRaises(ArityError):
            PositionalSchema("file", arity=FLAG)

    def testInvalidName(self):
        with self.assertRaises(InvalidNameError):
            PositionalSchema("-file")


class BuilderConfigurationTest(TestCase):
    def testDuplicateShortNameRaisesImmediately(self):
        app = App("tool")
        app.add_option("f,file")
        with self.assertRaises(DuplicateNameError):
            app.add_flag("f,force")

    def testDuplicateLongNameRaisesImmediately(self):
        app = App("tool")
        app.add_option("file")
        with self.assertRaises(DuplicateNameError):
            app.add_option("file")

    def testPositionalCollidingWithOption(self):
        app = App("tool")
        app.add_option("output")
        with self.assertRaises(DuplicateNameError):
            app.add_positional("output")

    def testDuplicateSubcommand(self):
        app = App("tool")
        app.add_subcommand("run")
        with self.assertRaises(DuplicateNameError):
            app.add_subcommand("run")

    def testSameNameAllowedInSiblingSubcommands(self):
        app = App("tool")
        app.add_subcommand("create").add_option("n,name")
        app.add_subcommand("rename").add_option("n,name")
        node = app.freeze()
        self.assertIsNotNone(node.child("create").long("name"))
        self.assertIsNotNone(node.child("rename").long("name"))

    def testNameRepeatedBelowAncestorRaisesOnFreeze(self):
        app = App("tool")
        app.add_option("name").default_value("root")
        app.add_subcommand("s").add_option("name").required()
        with self.assertRaises(DuplicateNameError):
            app.freeze()

    def testNameRepeatedDeeperInThePathRaises(self):
        app = App("tool")
        app.add_option("t,target")
        app.add_subcommand("remote").add_subcommand("add").add_positional("target")
        with self.assertRaises(DuplicateNameError):
            app.parse([])

    def testShortOnlyKeyRepeatedBelowAncestorRaises(self):
        app = App("tool")
        app.add_flag("v")
        app.add_subcommand("run").add_flag("v")
        with self.assertRaises(DuplicateNameError):
            app.freeze()

    def testDefaultValueMismatchRaises(self):
        app = App("tool")
        with self.assertRaises(DefaultTypeError):
            app.add_option("count").type(int).default_value("ten")

    def testFailedSetterLeavesBuilderUnchanged(self):
        app = App("tool")
        option = app.add_option("count").type(int).default_value(3)
        with self.assertRaises(DefaultTypeError):
            option.default_value("ten")
        self.assertEqual(option.schema.default, 3)

    def testAccumulateOnFlagRaises(self):
        app = App("tool")
        with self.assertRaises(PolicyError):
            app.add_flag("v").duplicate_policy(DuplicatePolicy.ACCUMULATE)

    def testDuplicatePolicyByName(self):
        app = App("tool")
        option = app.add_option("tag").duplicate_policy("last_wins")
        self.assertIs(option.schema.policy, DuplicatePolicy.LAST_WINS)
        with self.assertRaises(PolicyError):
            option.duplicate_policy("sometimes")

    def testExpectedSetsArityAndType(self):
        app = App("tool")
        option = app.add_option("point").expected(2)
        self.assertEqual(option.schema.arity, Arity(2, 2))
        self.assertIs(option.schema.type, ValueType.TEXT_LIST)

    def testPositionalRejectsOptionOnlySetters(self):
        app = App("tool")
        with self.assertRaises(ConfigurationError):
            app.add_positional("file").env("FILE")

    def testUnknownTypeRaisesConfigurationError(self):
        app = App("tool")
        with self.assertRaises(ConfigurationError):
            app.add_option("data").type(dict)

    def testCheckRequiresValidatorOrCallable(self):
        app = App("tool")
        with self.assertRaises(TypeError):
            app.add_option("mode").check("fast")

    def testInvalidEnvironmentName(self):
        app = App("tool")
        with self.assertRaises(ConfigurationError):
            app.add_option("token").env("A=B")

    def testInvalidProgramName(self):
        with self.assertRaises(InvalidNameError):
            App("my tool")

    def testConfigurationErrorsAreValueErrors(self):
        self.assertTrue(issubclass(ConfigurationError, ValueError))


class FreezeTest(TestCase):
    def testFreezeIsCached(self):
        app = App("tool")
        self.assertIs(app.freeze(), app.freeze())

    def testMutationAfterFreezeRaises(self):
        app = App("tool")
        option = app.add_option("name")
        child = app.add_subcommand("run")
        app.parse([])
        with self.assertRaises(FrozenSchemaError):
            app.add_flag("v")
        with self.assertRaises(FrozenSchemaError):
            option.required()
        with self.assertRaises(FrozenSchemaError):
            child.add_option("x")
        with self.assertRaises(FrozenSchemaError):
            app.version("2.0")

    def testFrozenNodeIsReadOnly(self):
        app = App("tool")
        app.add_option("f,foo")
        app.add_subcommand("run")
        node = app.freeze()
        self.assertIs(node.short("f"), node.long("foo"))
        self.assertIsNotNone(node.child("run"))
        with self.assertRaises(AttributeError):
            node.allow_unknown = True
        with self.assertRaises(TypeError):
            node.children["other"] = node
        self.assertEqual(list(node.longs), ["foo"])
        with self.assertRaises(TypeError):
            node.longs["bar"] = node.long("foo")
        with self.assertRaises(AttributeError):
            node.longs = {}

    def testNodeRejectsDuplicateNames(self):
        with self.assertRaises(DuplicateNameError):
            ParserNode("tool", options=[OptionSchema("f"), OptionSchema("f", "foo")])


if __name__ == "__main__":
    unittest.main()
