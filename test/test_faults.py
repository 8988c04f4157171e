"""
Faults behavioral tests (codes, structural errors, diagnostic rendering).

Scope
- Validate stable fault codes and their attachment to diagnostic types.
- Validate that diagnostics render as plain text on captured sinks.
- Validate rich styling hooks (__styles__) without depending on terminal colors.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import os
import unittest
from unittest import TestCase, mock

from rich.console import Console
from rich.text import Text

from argcursor import (
    FaultCode,
    OutOfRangeError,
    Diagnostic,
    UnparsableValue,
    PartialValue,
    ValueTooSmall,
    ValueTooLarge,
    report,
)


class TestFaultCode(TestCase):
    """Behavioral tests for fault codes."""

    def testCodesAreStable(self):
        self.assertEqual(FaultCode.OUT_OF_RANGE, 21101)
        self.assertEqual(FaultCode.PARTIAL_VALUE, 22111)

    def testDiagnosticCodes(self):
        self.assertIs(UnparsableValue("x").code, FaultCode.UNPARSABLE_VALUE)
        self.assertIs(PartialValue("x").code, FaultCode.PARTIAL_VALUE)
        self.assertIs(ValueTooSmall("x").code, FaultCode.VALUE_TOO_SMALL)
        self.assertIs(ValueTooLarge("x").code, FaultCode.VALUE_TOO_LARGE)


class TestOutOfRangeError(TestCase):
    """Behavioral tests for the structural failure."""

    def testCarriesMessageAndOptions(self):
        error = OutOfRangeError("No arguments left to shift.", position=2, total=2)
        self.assertEqual(str(error), "No arguments left to shift.")
        self.assertEqual(dict(error.options), {"position": 2, "total": 2})
        self.assertIsInstance(error, IndexError)

    def testOptionsAreReadOnly(self):
        error = OutOfRangeError("boom", position=0)
        with self.assertRaises(TypeError):
            error.options["position"] = 1  # type: ignore[index]


class TestDiagnostic(TestCase):
    """Behavioral tests for diagnostic values and rendering."""

    def testSeverity(self):
        self.assertEqual(UnparsableValue("x").severity, "error")
        self.assertEqual(PartialValue("x").severity, "warning")

    def testEquality(self):
        self.assertEqual(UnparsableValue("a"), UnparsableValue("a"))
        self.assertNotEqual(UnparsableValue("a"), ValueTooSmall("a"))
        self.assertEqual(len({UnparsableValue("a"), UnparsableValue("a")}), 1)

    def testStrAndRepr(self):
        diagnostic = ValueTooLarge("Error: number must be smaller than 3.")
        self.assertEqual(str(diagnostic), "Error: number must be smaller than 3.")
        self.assertEqual(repr(diagnostic), "ValueTooLarge('Error: number must be smaller than 3.')")

    def testRichKeepsPlainText(self):
        rendered = PartialValue("Warning: partially parsed string\nUnparsed bit: 'x'").__rich__()
        self.assertIsInstance(rendered, Text)
        self.assertEqual(rendered.plain, "Warning: partially parsed string\nUnparsed bit: 'x'")

    def testRichSplitsOnNewlineOnly(self):
        rendered = UnparsableValue("Error: could not parse a\tb\x1cc\u2028d.").__rich__()
        self.assertEqual(rendered.plain, "Error: could not parse a\tb\x1cc\u2028d.")
        self.assertEqual(rendered.plain[rendered.spans[0].start:rendered.spans[0].end], "Error:")

    def testRichUsesHostStyles(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__styles__", {"error-label": "bold red"}, create=True):
            rendered = UnparsableValue("Error: could not parse x.").__rich__()
        self.assertEqual(rendered.spans[0].style, "bold red")
        self.assertEqual(rendered.plain[rendered.spans[0].start:rendered.spans[0].end], "Error:")

    def testConsoleRendering(self):
        console = Console(color_system=None, force_terminal=False, width=20)
        with console.capture() as capture:
            console.print(UnparsableValue("Error: could not parse a-rather-long-token."), soft_wrap=True)
        self.assertEqual(capture.get(), "Error: could not parse a-rather-long-token.\n")


class TestReport(TestCase):
    """Behavioral tests for writing diagnostics to sinks."""

    def testPlainSink(self):
        sink = io.StringIO()
        report(UnparsableValue("Error: could not parse [bold]x[/bold]."), sink)
        self.assertEqual(sink.getvalue(), "Error: could not parse [bold]x[/bold].\n")

    def testLongLinesAreNotWrapped(self):
        sink = io.StringIO()
        token = "x" * 200
        report(UnparsableValue("Error: could not parse %s." % token), sink)
        self.assertEqual(sink.getvalue(), "Error: could not parse %s.\n" % token)

    def testMultiLine(self):
        sink = io.StringIO()
        report(PartialValue("Warning: partially parsed string\nUnparsed bit: 'abc'"), sink)
        self.assertEqual(sink.getvalue(), "Warning: partially parsed string\nUnparsed bit: 'abc'\n")

    def testRejectsNonDiagnostic(self):
        with self.assertRaises(TypeError):
            report("Error: nope.", io.StringIO())

    def testBaseDiagnosticRenders(self):
        class Custom(Diagnostic):
            code = FaultCode.UNPARSABLE_VALUE

        sink = io.StringIO()
        report(Custom("Error: custom."), sink)
        self.assertEqual(sink.getvalue(), "Error: custom.\n")

    def testControlCharactersPassThrough(self):
        sink = io.StringIO()
        report(UnparsableValue("Error: could not parse x\ty."), sink)
        report(UnparsableValue("Error: could not parse x\ry."), sink)
        report(PartialValue("Warning: partially parsed string\nUnparsed bit: '\tz'"), sink)
        self.assertEqual(
            sink.getvalue(),
            "Error: could not parse x\ty.\n"
            "Error: could not parse x\ry.\n"
            "Warning: partially parsed string\nUnparsed bit: '\tz'\n"
        )

    def testTerminalSinkUsesRich(self):
        class Terminal(io.StringIO):
            def isatty(self):
                return True

        sink = Terminal()
        with mock.patch.dict(os.environ, {"TERM": "xterm-256color"}, clear=True):
            report(PartialValue("Warning: partially parsed string\nUnparsed bit: 'x'"), sink)
        self.assertIn("\x1b[", sink.getvalue())
        self.assertEqual(
            Text.from_ansi(sink.getvalue()).plain.rstrip("\n"),
            "Warning: partially parsed string\nUnparsed bit: 'x'"
        )


if __name__ == "__main__":
    unittest.main()
