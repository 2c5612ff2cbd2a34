# python
"""
Arguments module behavioral tests.

Scope
- Validate Positional and Option construction, defaults and normalization.
- Validate metadata constraints (names, types, arities, directives, descr).
- Validate usage fragments (format) and help blocks (explain).

Conventions
- Test method names follow CamelCase per project convention.
- Renderables are compared through their plain text.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from arguable import Positional, Option, VARIABLE, ValueType, InvalidSpecError, TypeMismatchError


class TestPositional(TestCase):
    """Behavioral tests for Positional specifications."""

    def testDefaults(self):
        p = Positional("src")
        self.assertEqual(p.name, "src")
        self.assertIs(p.type, ValueType.STRING)
        self.assertEqual(p.nargs, 1)
        self.assertIsNone(p.descr)
        self.assertFalse(p.variable)

    def testVariableViaEllipsisOrLiteral(self):
        self.assertTrue(Positional("files", nargs=VARIABLE).variable)
        self.assertIs(Positional("files", nargs="...").nargs, VARIABLE)

    def testMatchesIsNameEquality(self):
        p = Positional("src")
        self.assertTrue(p.matches("src"))
        self.assertFalse(p.matches("dst"))

    def testNameMustBeNonEmptyWord(self):
        for name in ("", "  ", "two words"):
            with self.subTest(name=name), self.assertRaises(InvalidSpecError):
                Positional(name)
        with self.assertRaises(InvalidSpecError):
            Positional(3)

    def testArityMustBePositive(self):
        with self.assertRaises(InvalidSpecError):
            Positional("x", nargs=0)
        with self.assertRaises(InvalidSpecError):
            Positional("x", nargs=-1)

    def testArityMustBeIntOrVariable(self):
        for nargs in (True, "2", 1.0, "*"):
            with self.subTest(nargs=nargs), self.assertRaises(InvalidSpecError):
                Positional("x", nargs=nargs)

    def testUnknownOrNullTypeRejected(self):
        with self.assertRaises(InvalidSpecError):
            Positional("x", list)
        with self.assertRaises(InvalidSpecError):
            Positional("x", ValueType.NULL)

    def testDescrIsTrimmedAndEmptyRejected(self):
        self.assertEqual(Positional("x", descr="  some text ").descr, "some text")
        with self.assertRaises(InvalidSpecError):
            Positional("x", descr="   ")

    def testFieldsAreReadOnly(self):
        p = Positional("src")
        with self.assertRaises(AttributeError):
            p.name = "dst"

    def testFormat(self):
        self.assertEqual(Positional("src").format().plain, "src")
        self.assertEqual(Positional("pair", int, 2).format().plain, "pair(0) pair(1)")
        self.assertEqual(Positional("files", str, VARIABLE).format().plain, "files...")

    def testExplain(self):
        self.assertEqual(Positional("src", descr="source file").explain().plain, "  src [string]:\n        source file")
        self.assertEqual(Positional("pair", int, 2).explain().plain, "  pair [integer,integer]:")
        self.assertEqual(Positional("files", str, VARIABLE).explain().plain, "  files [string,...]:")

    def testExplainWrapsAtEightyColumns(self):
        descr = " ".join(["word"] * 60)
        lines = Positional("src", descr=descr).explain().plain.split("\n")
        self.assertGreater(len(lines), 2)
        for line in lines[1:]:
            self.assertTrue(line.startswith(" " * 8))
            self.assertLessEqual(len(line), 80)
        self.assertEqual(" ".join(line.strip() for line in lines[1:]), descr)

    def testBoolPositionalCannotBeExplained(self):
        with self.assertRaises(TypeMismatchError):
            Positional("flag", bool).explain()

    def testRepr(self):
        self.assertTrue(repr(Positional("src")).startswith("positional(name='src', "))


class TestOption(TestCase):
    """Behavioral tests for Option specifications."""

    def testSwitchDefaults(self):
        o = Option("-v", "--verbose", name="verbose")
        self.assertIs(o.type, ValueType.BOOL)
        self.assertEqual(o.nargs, 0)
        self.assertTrue(o.switch)
        self.assertEqual(o.directives, ("-v", "--verbose"))

    def testValuedDefaultsToOne(self):
        o = Option("-n", name="num", type=int)
        self.assertEqual(o.nargs, 1)
        self.assertFalse(o.switch)

    def testBoolOptionMayTakeValues(self):
        self.assertEqual(Option("--flag", name="flag", nargs=1).nargs, 1)

    def testMatchesIsDirectiveMembership(self):
        o = Option("-v", "--verbose", name="verbose")
        self.assertTrue(o.matches("-v"))
        self.assertTrue(o.matches("--verbose"))
        self.assertFalse(o.matches("verbose"))

    def testZeroArityOnlyForBool(self):
        with self.assertRaises(InvalidSpecError):
            Option("-n", name="num", type=int, nargs=0)

    def testDirectivesRequired(self):
        with self.assertRaises(InvalidSpecError):
            Option(name="verbose")

    def testDirectivesMustBeUnique(self):
        with self.assertRaises(InvalidSpecError):
            Option("-v", "-v", name="verbose")

    def testDirectivesMustBeSingleTokens(self):
        for directive in ("", "- v", "--a b"):
            with self.subTest(directive=directive), self.assertRaises(InvalidSpecError):
                Option(directive, name="x")
        with self.assertRaises(InvalidSpecError):
            Option(1, name="x")

    def testNegativeArityRejected(self):
        with self.assertRaises(InvalidSpecError):
            Option("-n", name="num", type=int, nargs=-1)

    def testFormat(self):
        self.assertEqual(Option("-v", name="verbose").format().plain, "[-v]")
        self.assertEqual(Option("-v", "--verbose", name="verbose").format().plain, "[{-v|--verbose}]")
        self.assertEqual(Option("-o", "--output", name="output", type=str).format().plain, "[{-o|--output} output]")
        self.assertEqual(Option("-p", name="point", type=int, nargs=2).format().plain, "[-p point(0) point(1)]")
        self.assertEqual(Option("--tag", name="tag", type=str, nargs=VARIABLE).format().plain, "[--tag tag...]")

    def testExplain(self):
        self.assertEqual(Option("-v", "--verbose", name="verbose").explain().plain, "  -v|--verbose:")
        self.assertEqual(
            Option("-o", "--output", name="output", type=str, descr="where to write").explain().plain,
            "  -o|--output [output:string]:\n        where to write",
        )
        self.assertEqual(
            Option("-p", name="point", type=float, nargs=2).explain().plain,
            "  -p [point(0):float,point(1):float]:",
        )
        self.assertEqual(Option("--tag", name="tag", type=str, nargs=VARIABLE).explain().plain, "  --tag [tag:string,...]:")

    def testRepr(self):
        self.assertTrue(repr(Option("-v", name="verbose")).startswith("option(directives=('-v',), name='verbose', "))


if __name__ == "__main__":
    unittest.main()
