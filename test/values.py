"""
Value model and validator tests.

Scope
- convert(): total for booleans/text, partial for numbers.
- check_default(): configuration-time default checks and normalization.
- Shipped validators and their messages.
"""
import math
import unittest
from unittest import TestCase

from argot.validators import *
from argot.values import *


class ConvertTest(TestCase):
    def testBooleanIsTotal(self):
        for text in ("false", "FALSE", "0", "no", "Off", "n", ""):
            self.assertIs(convert(text, ValueType.BOOLEAN), False, text)
        for text in ("true", "1", "yes", "on", "anything"):
            self.assertIs(convert(text, ValueType.BOOLEAN), True, text)

    def testInteger(self):
        self.assertEqual(convert("42", ValueType.INTEGER), 42)
        self.assertEqual(convert("-7", ValueType.INTEGER), -7)

    def testIntegerRejectsGarbageAndWhitespace(self):
        for text in ("abc", "4.2", " 42", "42 ", ""):
            with self.assertRaises(ConversionError, msg=text):
                convert(text, ValueType.INTEGER)

    def testFloat(self):
        self.assertEqual(convert("1.5", ValueType.FLOAT), 1.5)
        self.assertTrue(math.isinf(convert("inf", ValueType.FLOAT)))

    def testFloatRejectsGarbage(self):
        with self.assertRaises(ConversionError):
            convert("one", ValueType.FLOAT)

    def testNumbersRejectLiteralUnderscores(self):
        for text in ("1_0", "+_1", "1__0"):
            with self.assertRaises(ConversionError, msg=text):
                convert(text, ValueType.INTEGER)
        for text in ("1_0.5", "1e1_0", " 1.5", "0x10"):
            with self.assertRaises(ConversionError, msg=text):
                convert(text, ValueType.FLOAT)

    def testIntegerRejectsNonAsciiDigits(self):
        with self.assertRaises(ConversionError):
            convert("٤٢", ValueType.INTEGER)

    def testFloatNotations(self):
        self.assertEqual(convert("+2", ValueType.FLOAT), 2.0)
        self.assertEqual(convert(".5", ValueType.FLOAT), 0.5)
        self.assertEqual(convert("1e3", ValueType.FLOAT), 1000.0)
        self.assertTrue(math.isnan(convert("NaN", ValueType.FLOAT)))
        self.assertTrue(math.isinf(convert("-Infinity", ValueType.FLOAT)))

    def testTextIsIdentity(self):
        self.assertEqual(convert(" spaced ", ValueType.TEXT), " spaced ")

    def testTextListWrapsText(self):
        self.assertEqual(convert("a", ValueType.TEXT_LIST), ["a"])

    def testConversionErrorIsValueError(self):
        with self.assertRaises(ValueError):
            convert("x", ValueType.INTEGER)


class TypeofTest(TestCase):
    def testPythonTypes(self):
        self.assertIs(typeof(bool), ValueType.BOOLEAN)
        self.assertIs(typeof(int), ValueType.INTEGER)
        self.assertIs(typeof(float), ValueType.FLOAT)
        self.assertIs(typeof(str), ValueType.TEXT)
        self.assertIs(typeof(list), ValueType.TEXT_LIST)
        self.assertIs(typeof(tuple), ValueType.TEXT_LIST)

    def testUnknownTypeRaises(self):
        with self.assertRaises(TypeError):
            typeof(dict)


class CheckDefaultTest(TestCase):
    def testMatchingDefaults(self):
        self.assertEqual(check_default(3, ValueType.INTEGER), 3)
        self.assertEqual(check_default("x", ValueType.TEXT), "x")
        self.assertIs(check_default(True, ValueType.BOOLEAN), True)

    def testFloatWidensIntegers(self):
        value = check_default(2, ValueType.FLOAT)
        self.assertIsInstance(value, float)

    def testTextListBecomesTuple(self):
        self.assertEqual(check_default(["a", "b"], ValueType.TEXT_LIST), ("a", "b"))

    def testBooleanIsNotAnInteger(self):
        with self.assertRaises(TypeError):
            check_default(True, ValueType.INTEGER)

    def testMismatchRaises(self):
        with self.assertRaises(TypeError):
            check_default("3", ValueType.INTEGER)
        with self.assertRaises(TypeError):
            check_default("abc", ValueType.TEXT_LIST)


class ValidatorTest(TestCase):
    def testRange(self):
        validator = range_of(1, 100)
        self.assertEqual(validator.validate("1"), (True, ""))
        self.assertEqual(validator.validate("100"), (True, ""))
        valid, message = validator.validate("200")
        self.assertFalse(valid)
        self.assertEqual(message, "value 200 is not in range [1, 100]")

    def testRangeRejectsNonNumbers(self):
        valid, message = range_of(0, 1).validate("abc")
        self.assertFalse(valid)
        self.assertIn("not a number", message)

    def testRangeBoundsChecked(self):
        with self.assertRaises(ValueError):
            range_of(5, 1)
        with self.assertRaises(TypeError):
            range_of("a", 1)

    def testPatternFullMatch(self):
        validator = pattern(r"[a-z]+", "lowercase letters")
        self.assertTrue(validator.validate("abc")[0])
        valid, message = validator.validate("abc1")
        self.assertFalse(valid)
        self.assertIn("lowercase letters", message)

    def testChoice(self):
        validator = choice(["fast", "safe"])
        self.assertTrue(validator.validate("fast")[0])
        self.assertFalse(validator.validate("slow")[0])
        self.assertEqual(validator.describe(), "one of {fast,safe}")

    def testChoiceRejectsEmptyOrDuplicated(self):
        with self.assertRaises(ValueError):
            choice([])
        with self.assertRaises(ValueError):
            choice(["a", "a"])

    def testCustom(self):
        validator = custom(str.isdigit, "digits only")
        self.assertTrue(validator.validate("123")[0])
        self.assertEqual(validator.validate("12a"), (False, "value '12a' failed digits only"))

    def testCustomMessageReplacesGeneratedOne(self):
        validator = CustomValidator(str.isdigit, "digits", message="digits please")
        self.assertEqual(validator.validate("x"), (False, "digits please"))

    def testShippedValidatorsSupportProtocol(self):
        for validator in (range_of(0, 1), pattern("a"), choice(["a"]), custom(bool)):
            self.assertIsInstance(validator, SupportsValidate)
            self.assertIsInstance(validator, Validator)


if __name__ == "__main__":
    unittest.main()
