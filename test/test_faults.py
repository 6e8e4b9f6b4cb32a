"""
Faults module behavioral tests (codes, severity, rendering, reporting).

Scope
- Validate FaultCode normalization and severity flags of fault classes.
- Validate option merging through __replace__ and report().
- Validate plain and fancy rendering through rich.

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import unittest
from unittest import TestCase

from rich.console import Console
from rich.panel import Panel

from clop import (
    FaultCode,
    MalformedTokenError,
    MissingArgumentError,
    ParseFault,
    UnrecognizedOptionError,
    report,
)


class TestFaults(TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.console = Console(file=self.stream, width=200)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNRECOGNIZED_LONG_OPTION.normalize(), "21121")

    def testSeverity(self):
        self.assertTrue(MalformedTokenError.fatal)
        self.assertTrue(MissingArgumentError.fatal)
        self.assertFalse(UnrecognizedOptionError.fatal)
        self.assertTrue(issubclass(UnrecognizedOptionError, ParseFault))

    def testStrNamesProgram(self):
        fault = MissingArgumentError("missing argument for option 'i'", prog="demo")
        self.assertEqual(str(fault), "demo: missing argument for option 'i'")

    def testReplaceMergesOptions(self):
        fault = UnrecognizedOptionError("unrecognized option -x", prog="demo", token="-x")
        merged = fault.__replace__(prog="other")
        self.assertIsInstance(merged, UnrecognizedOptionError)
        self.assertEqual(merged.options["prog"], "other")
        self.assertEqual(merged.options["token"], "-x")
        self.assertEqual(fault.options["prog"], "demo")

    def testOptionsAreReadOnly(self):
        fault = ParseFault("message")
        with self.assertRaises(TypeError):
            fault.options["prog"] = "x"  # type: ignore[index]

    def testReportPrintsPlain(self):
        fault = report(
            UnrecognizedOptionError(
                "unrecognized long option --bogus",
                title="unrecognized option",
                code=FaultCode.UNRECOGNIZED_LONG_OPTION,
                hint="check the spelling of --bogus",
            ),
            prog="demo",
            console=self.console,
        )
        output = self.stream.getvalue()
        self.assertIn("[ demo — 21121 | Unrecognized Option ]", output)
        self.assertIn("demo: unrecognized long option --bogus", output)
        self.assertIn("check the spelling of --bogus", output)
        self.assertNotIn("\x1b[", output)
        self.assertNotIn("console", fault.options)
        self.assertEqual(fault.options["prog"], "demo")

    def testReportWithoutHint(self):
        report(MalformedTokenError("missing option -?", code=FaultCode.MISSING_OPTION), prog="demo", console=self.console)
        self.assertNotIn("→", self.stream.getvalue())

    def testReportRendersArgumentPosition(self):
        report(MissingArgumentError("missing argument for option 'i'"), prog="demo", index=3, console=self.console)
        self.assertIn("demo: missing argument for option 'i' (argv[3])", self.stream.getvalue())

    def testNoPositionWithoutIndex(self):
        report(MissingArgumentError("missing"), prog="demo", console=self.console)
        self.assertNotIn("argv[", self.stream.getvalue())

    def testFancyRendersPanel(self):
        fault = MissingArgumentError("missing", prog="demo", code=FaultCode.MISSING_SHORT_ARGUMENT, fancy=True)
        self.assertIsInstance(fault.__rich__(), Panel)
        self.console.print(fault)
        self.assertIn("demo: missing", self.stream.getvalue())

    def testReportRejectsForeignObjects(self):
        with self.assertRaises(TypeError):
            report(ValueError("nope"), console=self.console)


if __name__ == '__main__':
    unittest.main()
