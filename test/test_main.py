"""
Entry point tests: exit codes and where output goes.
"""
import contextlib
import io
import unittest
from unittest import TestCase, mock

from bbl import __version__
from bbl.__main__ import main
from bbl.application import CommandLineParser


class MainTest(TestCase):
    """Behavioral tests for bbl.__main__.main."""

    def run_main(self, *arguments, environ=None):
        stdout, stderr = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            code = main(list(arguments), {} if environ is None else environ)
        return code, stdout.getvalue(), stderr.getvalue()

    def testVersion(self):
        for arguments in (("version",), ("-v",), ("--version", "help")):
            with self.subTest(arguments=arguments):
                code, stdout, _ = self.run_main(*arguments)
                self.assertEqual(code, 0)
                self.assertIn("bbl %s (" % __version__, stdout)

    def testBlankIsHelp(self):
        code, stdout, stderr = self.run_main()
        self.assertEqual(code, 0)
        self.assertEqual(stdout, "")
        self.assertIn("usage: bbl", stderr)

    def testHelpForCommand(self):
        code, _, stderr = self.run_main("-h", "version")
        self.assertEqual(code, 0)
        self.assertIn("[global options] version [version options]", stderr)

    def testUnknownCommand(self):
        code, _, stderr = self.run_main("nope")
        self.assertEqual(code, 1)
        self.assertIn("usage: bbl", stderr)
        self.assertIn("Unknown Command", stderr)
        self.assertIn("unrecognized command 'nope'", stderr)

    def testBadGlobalSwitch(self):
        code, _, stderr = self.run_main("--bogus", "version")
        self.assertEqual(code, 1)
        self.assertIn("unknown option or flag '--bogus'", stderr)

    def testOperationalError(self):
        with mock.patch.object(CommandLineParser, "parse", side_effect=FileNotFoundError("cwd is gone")):
            code, _, stderr = self.run_main("version")
        self.assertEqual(code, 1)
        self.assertIn("cwd is gone", stderr)


if __name__ == "__main__":
    unittest.main()
