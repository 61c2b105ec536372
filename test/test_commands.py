"""
Command layer tests (Command contract, Help, Version, App).
"""
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from bbl.app import App
from bbl.application import CommandLineConfiguration
from bbl.commands import *
from bbl.faults import UnknownCommandError


class Recorder(Command):
    descr = "records calls"
    usage = "--name  a name"

    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def check_fast_fails(self, subcommand_flags, configuration, /):
        self.calls.append(("check_fast_fails", subcommand_flags, configuration))
        if self.fail:
            raise ValueError("fast fail")

    def execute(self, subcommand_flags, configuration, /):
        self.calls.append(("execute", subcommand_flags, configuration))


class CommandTest(TestCase):
    """The abstract command contract."""

    def testExecuteIsAbstract(self):
        with self.assertRaises(TypeError):
            Command()

    def testFastFailsDefaultsToNoop(self):
        class Noop(Command):
            def execute(self, subcommand_flags, configuration, /):
                return "done"

        self.assertIsNone(Noop().check_fast_fails((), None))
        self.assertIsNone(Noop.descr)
        self.assertEqual(Noop.usage, "")


class HelpTest(TestCase):
    """Help prints global usage or the usage of the named command."""

    def setUp(self):
        self.printer = mock.Mock()
        self.commands = {"up": Recorder()}
        self.help = Help(self.printer, self.commands)

    def testGlobalUsage(self):
        self.help.execute((), None)
        self.printer.print.assert_called_once_with()
        self.printer.print_command_usage.assert_not_called()

    def testCommandUsage(self):
        self.help.execute(("up", "--name", "x"), None)
        self.printer.print_command_usage.assert_called_once_with("up", "--name  a name")
        self.printer.print.assert_not_called()

    def testUnknownCommandFallsBackToGlobalUsage(self):
        self.help.execute(("nope",), None)
        self.printer.print.assert_called_once_with()


class VersionTest(TestCase):
    """Version prints the program, version and platform."""

    def testOutput(self):
        console = Console(file=io.StringIO(), color_system=None, force_terminal=False)
        with (
            mock.patch("platform.system", return_value="Linux"),
            mock.patch("platform.machine", return_value="x86_64"),
        ):
            Version("9.1.0", console).execute((), None)
        self.assertEqual(console.file.getvalue(), "bbl 9.1.0 (linux/x86_64)\n")


class AppTest(TestCase):
    """App runs the command a configuration resolved to."""

    def setUp(self):
        self.usage = mock.Mock()
        self.up = Recorder()
        self.help = Recorder()
        self.commands = {"up": self.up, "help": self.help}

    def configuration(self, command, *flags):
        return CommandLineConfiguration(command, flags, "/work", False)

    def testRunsFastFailsThenExecute(self):
        configuration = self.configuration("up", "--name", "x")
        App(self.commands, configuration, self.usage).run()
        self.assertEqual(self.up.calls, [
            ("check_fast_fails", ("--name", "x"), configuration),
            ("execute", ("--name", "x"), configuration),
        ])
        self.usage.print.assert_not_called()

    def testFastFailureStopsExecution(self):
        up = Recorder(fail=True)
        with self.assertRaises(ValueError):
            App({"up": up}, self.configuration("up"), self.usage).run()
        self.assertEqual([call[0] for call in up.calls], ["check_fast_fails"])

    def testHelpSkipsFastFails(self):
        App(self.commands, self.configuration("help", "up"), self.usage).run()
        self.assertEqual([call[0] for call in self.help.calls], ["execute"])

    def testUnknownCommand(self):
        with self.assertRaises(UnknownCommandError) as context:
            App(self.commands, self.configuration("nope"), self.usage).run()
        self.usage.print.assert_called_once_with()
        self.assertEqual(context.exception.options["input"], "nope")


if __name__ == "__main__":
    unittest.main()
