"""
Fault tests (CommandException, CommandWarning, trigger, getdoc, report).

Scope
- Options are read-only and copy.replace derives new faults.
- trigger raises exceptions and warns warnings.
- Rendering: header, message and hint; __codes__/__prog__/__docs__ from __main__.
"""
import copy
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from bbl.faults import *


def capture():
    return Console(file=io.StringIO(), color_system=None, force_terminal=False, width=200)


class FaultTest(TestCase):
    """Construction, copying and triggering."""

    def setUp(self):
        self.fault = UnknownSwitchError(
            "unknown option or flag '--x' at first position",
            title="unknown option or flag",
            code=FaultCode.UNKNOWN_SWITCH,
            hint="try 'bbl --help'",
        )

    def testMessageAndOptions(self):
        self.assertEqual(str(self.fault), "unknown option or flag '--x' at first position")
        self.assertEqual(self.fault.options["code"], FaultCode.UNKNOWN_SWITCH)
        self.assertEqual(str(CommandException()), "")

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            self.fault.options["hint"] = "other"

    def testHierarchy(self):
        for cls in (MalformedTokenError, UnknownSwitchError, FlagAssignmentError,
                    DuplicatedSwitchError, OptionValueRequiredError):
            with self.subTest(cls=cls):
                self.assertTrue(issubclass(cls, FlagSyntaxError))
                self.assertTrue(issubclass(cls, CommandException))
        self.assertFalse(issubclass(UnknownCommandError, FlagSyntaxError))
        self.assertTrue(issubclass(EmptyOptionValueWarning, Warning))

    def testReplaceDerivesNewFault(self):
        other = copy.replace(self.fault, hint="another hint")
        self.assertIsInstance(other, UnknownSwitchError)
        self.assertIsNot(other, self.fault)
        self.assertEqual(other.options["hint"], "another hint")
        self.assertEqual(other.options["title"], "unknown option or flag")
        self.assertEqual(self.fault.options["hint"], "try 'bbl --help'")

    def testTriggerRaisesExceptions(self):
        with self.assertRaises(UnknownSwitchError) as context:
            trigger(self.fault, index=4)
        self.assertEqual(context.exception.options["index"], 4)
        self.assertTrue(context.exception.__suppress_context__)

    def testTriggerWarnsWarnings(self):
        with self.assertWarns(EmptyOptionValueWarning) as context:
            trigger(EmptyOptionValueWarning("empty", code=FaultCode.EMPTY_INLINE_VALUE))
        self.assertEqual(str(context.warning), "empty")

    def testTriggerRejectsPlainExceptions(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))

    def testGetdoc(self):
        self.assertIsNone(getdoc(FaultCode.UNKNOWN_COMMAND))
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__docs__", {FaultCode.UNKNOWN_COMMAND: "see docs"}, create=True):
            self.assertEqual(getdoc(FaultCode.UNKNOWN_COMMAND), "see docs")
        with self.assertRaises(TypeError):
            getdoc(11101)


class FaultRenderingTest(TestCase):
    """Rendering through rich consoles."""

    def setUp(self):
        self.console = capture()

    def output(self):
        return self.console.file.getvalue()

    def testErrorLayout(self):
        report(DuplicatedSwitchError(
            "option '--state-dir' at third position was already provided",
            title="duplicated option",
            code=FaultCode.DUPLICATED_SWITCH,
            hint="keep a single --state-dir",
        ), target=self.console)
        output = self.output()
        self.assertIn("[ bbl — 11115 | Duplicated Option ]", output)
        self.assertIn("option '--state-dir' at third position was already provided", output)
        self.assertIn(" → keep a single --state-dir", output)

    def testWarningLayout(self):
        self.console.print(EmptyOptionValueWarning(
            "empty inline value", title="empty inline value", code=FaultCode.EMPTY_INLINE_VALUE,
        ))
        self.assertIn("[ bbl — 12111 | Empty Inline Value ]", self.output())

    def testPlainRendering(self):
        self.console.print(UnknownCommandError("unrecognized command 'x'", colorful=False))
        self.assertIn("unrecognized command 'x'", self.output())

    def testFancyRendering(self):
        self.console.print(UnknownCommandError(
            "unrecognized command 'x'", title="unknown command", code=FaultCode.UNKNOWN_COMMAND, fancy=True,
        ))
        output = self.output()
        self.assertIn("Unknown Command", output)
        self.assertIn("unrecognized command 'x'", output)
        self.assertIn("╭", output)

    def testHostOverrides(self):
        main = sys.modules["__main__"]
        with (
            mock.patch.object(main, "__prog__", "bosh-bootloader", create=True),
            mock.patch.object(main, "__codes__", {FaultCode.UNKNOWN_COMMAND: "E-CMD"}, create=True),
        ):
            self.assertEqual(FaultCode.UNKNOWN_COMMAND.normalize(), "E-CMD")
            self.console.print(UnknownCommandError("x", title="unknown command", code=FaultCode.UNKNOWN_COMMAND))
        self.assertIn("[ bosh-bootloader — E-CMD | Unknown Command ]", self.output())

    def testDefaultCodeNormalization(self):
        self.assertEqual(FaultCode.MALFORMED_TOKEN.normalize(), "11111")


if __name__ == "__main__":
    unittest.main()
