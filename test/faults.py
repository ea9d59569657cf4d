"""
Faults module tests (codes, messages, hierarchy, rendering, reporting).

Conventions
- Test method names follow CamelCase per project convention.
- Host hooks in __main__ are patched per test and restored afterwards.
"""
import copy
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console, Group
from rich.panel import Panel

from better_optional import faults
from better_optional.faults import (
    FaultCode,
    OptionalException,
    NotPresentError,
    NullishError,
    NullError,
    UndefinedError,
    creation_message,
    report,
    getdoc,
)


def render(renderable):
    console = Console(color_system=None, force_terminal=False, width=120)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestCreationMessage(TestCase):

    def testNullish(self):
        self.assertEqual(
            creation_message("nullish"),
            "Cannot create an optional value from a nullish value. "
            "If you want to do this on purpose use Optional.of_nullish(). "
            "If you want to create an empty optional, use Optional.empty() instead."
        )

    def testNullAndUndefinedSkipNullishSuggestion(self):
        for category in ("null", "undefined"):
            with self.subTest(category=category):
                self.assertEqual(
                    creation_message(category),
                    f"Cannot create an optional value from a {category} value. "
                    "If you want to create an empty optional, use Optional.empty() instead."
                )

    def testUnknownCategoryRejected(self):
        with self.assertRaises(ValueError):
            creation_message("empty")


class TestHierarchy(TestCase):

    def testDefaultMessages(self):
        self.assertEqual(str(NotPresentError()), "Value is not present")
        self.assertEqual(str(NullishError()), creation_message("nullish"))
        self.assertEqual(str(NullError()), creation_message("null"))
        self.assertEqual(str(UndefinedError()), creation_message("undefined"))

    def testCustomMessage(self):
        error = NotPresentError("no user")
        self.assertEqual(error.message, "no user")
        self.assertEqual(error.args, ("no user",))

    def testBuiltinBases(self):
        self.assertTrue(issubclass(NotPresentError, LookupError))
        self.assertTrue(issubclass(NullishError, ValueError))
        self.assertTrue(issubclass(NullError, NullishError))
        self.assertTrue(issubclass(UndefinedError, NullishError))
        for kind in (NotPresentError, NullishError, NullError, UndefinedError):
            with self.subTest(kind=kind):
                self.assertTrue(issubclass(kind, OptionalException))

    def testDistinctCodes(self):
        codes = {kind.code for kind in (NotPresentError, NullishError, NullError, UndefinedError)}
        self.assertEqual(codes, set(FaultCode))

    def testOptionsAreReadOnly(self):
        error = NotPresentError()
        self.assertEqual(dict(error.options), {"colorful": True, "fancy": False})
        with self.assertRaises(TypeError):
            error.options["fancy"] = True

    def testReplace(self):
        error = NullError()
        replaced = copy.replace(error, fancy=True)
        self.assertIsInstance(replaced, NullError)
        self.assertEqual(replaced.message, error.message)
        self.assertTrue(replaced.options["fancy"])
        self.assertFalse(error.options["fancy"])


class TestFaultCode(TestCase):

    def testNormalizeDefaultsToNumber(self):
        with mock.patch.object(sys.modules["__main__"], "__codes__", {}, create=True):
            self.assertEqual(FaultCode.NOT_PRESENT.normalize(), "21101")

    def testNormalizeUsesHostLabels(self):
        with mock.patch.object(sys.modules["__main__"], "__codes__", {FaultCode.NULL_VALUE: "E-NULL"}, create=True):
            self.assertEqual(FaultCode.NULL_VALUE.normalize(), "E-NULL")
            self.assertEqual(FaultCode.NULLISH_VALUE.normalize(), "21111")

    def testGetdoc(self):
        with mock.patch.object(sys.modules["__main__"], "__docs__", {FaultCode.NOT_PRESENT: "doc"}, create=True):
            self.assertEqual(getdoc(FaultCode.NOT_PRESENT), "doc")
            self.assertIsNone(getdoc(FaultCode.NULL_VALUE))

    def testGetdocRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(21101)


class TestRendering(TestCase):

    def testPlainRendering(self):
        error = NotPresentError(colorful=False)
        self.assertIsInstance(error.__rich__(), Group)
        output = render(error)
        self.assertIn("21101", output)
        self.assertIn("Value Not Present", output)
        self.assertIn("Value is not present", output)
        self.assertIn("→", output)

    def testFancyRendering(self):
        error = UndefinedError(fancy=True)
        self.assertIsInstance(error.__rich__(), Panel)
        self.assertIn("Undefined Value", render(error))

    def testHostProgName(self):
        with mock.patch.object(sys.modules["__main__"], "__prog__", "myapp", create=True):
            self.assertIn("myapp", render(NullError(colorful=False)))

    def testHostDocsFooter(self):
        docs = {FaultCode.NULL_VALUE: "see the null policy page"}
        with mock.patch.object(sys.modules["__main__"], "__docs__", docs, create=True):
            self.assertIn("see the null policy page", render(NullError(colorful=False)))
            self.assertIn("see the null policy page", render(NullError(fancy=True)))
            self.assertNotIn("see the null policy page", render(UndefinedError(colorful=False)))

    def testNoDocsFooterWithoutHostMapping(self):
        with mock.patch.object(sys.modules["__main__"], "__docs__", {}, create=True):
            rendered = NotPresentError(colorful=False).__rich__()
        self.assertEqual(len(rendered.renderables), 3)


class TestReport(TestCase):

    def setUp(self):
        self.console = Console(color_system=None, force_terminal=False, width=120)
        patcher = mock.patch.object(faults, "console", self.console)
        patcher.start()
        self.addCleanup(patcher.stop)

    def testReportPrintsAndReturns(self):
        error = NullishError()
        with self.console.capture() as capture:
            self.assertIs(report(error), error)
        self.assertIn("Nullish Value", capture.get())

    def testReportAppliesOptions(self):
        with self.console.capture():
            reported = report(NotPresentError(), fancy=True)
        self.assertTrue(reported.options["fancy"])

    def testReportRejectsOtherObjects(self):
        with self.assertRaises(TypeError):
            report(ValueError("x"))


if __name__ == '__main__':
    unittest.main()
