# python
"""
Values module behavioral tests.

Scope
- Validate eager conversion for every element type, including overflow and
  case-insensitive booleans.
- Validate that a Value is never left holding an invalid raw string.
- Validate reads with the declared type and with wider, explicit types.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import math
import unittest
from unittest import TestCase

from arguable import Value, ValueType, convert, TypeMismatchError, ConversionError
from arguable.values import INTEGER_MAX, INTEGER_MIN


class TestValueType(TestCase):
    """Behavioral tests for ValueType normalization and labels."""

    def testBuiltinsMapToValueTypes(self):
        self.assertIs(ValueType.of(bool), ValueType.BOOL)
        self.assertIs(ValueType.of(int), ValueType.INTEGER)
        self.assertIs(ValueType.of(float), ValueType.FLOAT)
        self.assertIs(ValueType.of(str), ValueType.STRING)
        self.assertIs(ValueType.of(ValueType.NULL), ValueType.NULL)

    def testUnknownTypeRejected(self):
        with self.assertRaises(TypeError):
            ValueType.of(list)
        with self.assertRaises(TypeError):
            ValueType.of("int")

    def testDescribeOnlyForIntegerFloatString(self):
        self.assertEqual(ValueType.INTEGER.describe(), "integer")
        self.assertEqual(ValueType.FLOAT.describe(), "float")
        self.assertEqual(ValueType.STRING.describe(), "string")
        with self.assertRaises(TypeMismatchError):
            ValueType.BOOL.describe()
        with self.assertRaises(TypeMismatchError):
            ValueType.NULL.describe()


class TestConversion(TestCase):
    """Behavioral tests for the per-type conversion rules."""

    def testIntegerParses(self):
        self.assertEqual(convert("42", int), 42)
        self.assertEqual(convert("-7", ValueType.INTEGER), -7)

    def testIntegerGarbageRejected(self):
        for raw in ("abc", "4.2", "", "12abc"):
            with self.subTest(raw=raw), self.assertRaises(TypeMismatchError):
                convert(raw, int)

    def testIntegerRangeIsSigned64Bit(self):
        self.assertEqual(convert(str(INTEGER_MAX), int), INTEGER_MAX)
        self.assertEqual(convert(str(INTEGER_MIN), int), INTEGER_MIN)
        with self.assertRaises(TypeMismatchError):
            convert(str(INTEGER_MAX + 1), int)
        with self.assertRaises(TypeMismatchError):
            convert(str(INTEGER_MIN - 1), int)

    def testFloatParses(self):
        self.assertEqual(convert("1.5", float), 1.5)
        self.assertEqual(convert("3", float), 3.0)

    def testFloatOverflowRejectedButExplicitInfinityAccepted(self):
        with self.assertRaises(TypeMismatchError):
            convert("1e999", float)
        self.assertTrue(math.isinf(convert("inf", float)))
        self.assertTrue(math.isinf(convert("-Infinity", float)))
        self.assertTrue(math.isnan(convert("nan", float)))

    def testFloatGarbageRejected(self):
        with self.assertRaises(TypeMismatchError):
            convert("one", float)

    def testBoolWordsAreCaseInsensitive(self):
        self.assertIs(convert("true", bool), True)
        self.assertIs(convert("TRUE", bool), True)
        self.assertIs(convert("False", bool), False)

    def testBoolFallsBackToIntegers(self):
        self.assertIs(convert("0", bool), False)
        self.assertIs(convert("1", bool), True)
        self.assertIs(convert("-3", bool), True)

    def testBoolGarbageRejected(self):
        with self.assertRaises(TypeMismatchError):
            convert("yes", bool)

    def testStringIsIdentity(self):
        self.assertEqual(convert("anything at all", str), "anything at all")
        self.assertEqual(convert("", str), "")

    def testNullAlwaysFails(self):
        with self.assertRaises(TypeMismatchError):
            convert("x", ValueType.NULL)

    def testNonStringRawRejected(self):
        with self.assertRaises(TypeError):
            convert(1, int)

    def testConversionErrorIsTypeMismatch(self):
        self.assertIs(ConversionError, TypeMismatchError)
        with self.assertRaises(ConversionError):
            convert("abc", int)


class TestValue(TestCase):
    """Behavioral tests for Value construction, assignment and reads."""

    def testInvalidConstructionFails(self):
        with self.assertRaises(TypeMismatchError):
            Value(int, "abc")

    def testReadAsDeclaredAndAsString(self):
        value = Value(int, "42")
        self.assertEqual(value.get(), 42)
        self.assertEqual(value.get(int), 42)
        self.assertEqual(value.get(str), "42")
        self.assertEqual(value.get(float), 42.0)

    def testWiderReadStillValidates(self):
        with self.assertRaises(TypeMismatchError):
            Value(str, "abc").get(int)

    def testAssignValidatesAndKeepsOldRawOnFailure(self):
        value = Value(int, "1")
        self.assertIs(value.assign("2"), value)
        self.assertEqual(value.get(), 2)
        with self.assertRaises(TypeMismatchError):
            value.assign("two")
        self.assertEqual(value.raw, "2")

    def testTypeIsNormalized(self):
        self.assertIs(Value(float, "1").type, ValueType.FLOAT)
        self.assertIs(Value(ValueType.STRING, "1").type, ValueType.STRING)

    def testNullValueCannotBeBuilt(self):
        with self.assertRaises(TypeMismatchError):
            Value(ValueType.NULL, "x")

    def testDisplayForms(self):
        self.assertEqual(Value(bool, "1").display(), "true")
        self.assertEqual(Value(bool, "false").display(), "false")
        self.assertEqual(Value(float, "1.5").display(), "1.500000")
        self.assertEqual(Value(int, "+12").display(), "12")
        self.assertEqual(Value(str, "x y").display(), "x y")

    def testDescribeType(self):
        self.assertEqual(Value(int, "1").describe_type(), "integer")
        with self.assertRaises(TypeMismatchError):
            Value(bool, "true").describe_type()

    def testNumericDunders(self):
        self.assertEqual(int(Value(str, "12")), 12)
        self.assertEqual(float(Value(int, "2")), 2.0)
        self.assertEqual(str(Value(int, "007")), "007")

    def testEqualityAndHash(self):
        self.assertEqual(Value(int, "1"), Value(int, "1"))
        self.assertNotEqual(Value(int, "1"), Value(str, "1"))
        self.assertEqual(len({Value(int, "1"), Value(int, "1")}), 1)

    def testRepr(self):
        self.assertEqual(repr(Value(int, "42")), "value(integer, '42')")


if __name__ == "__main__":
    unittest.main()
