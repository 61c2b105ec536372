"""
bbl command layer: the command contract and the built-in help/version commands.

A command registry (CommandSet) is a plain mapping from command name to a
Command. The parser only tests membership; the App looks commands up and runs
them with the subcommand flags and the resolved configuration.

Contract
- descr: one-line description shown in the commands table.
- usage: multi-line text describing the command's own options.
- check_fast_fails(subcommand_flags, configuration): cheap validation run before
  execute(); raise to abort.
- execute(subcommand_flags, configuration): do the work.
"""
import platform
from abc import ABC, abstractmethod

from rich.console import Console

from .utils import *


class Command(ABC):
    descr = None
    usage = ""

    def check_fast_fails(self, subcommand_flags, configuration, /):
        pass

    @abstractmethod
    def execute(self, subcommand_flags, configuration, /):
        raise NotImplementedError


class Help(Command):
    """
    print global usage, or the usage of the command named by the first subcommand flag.
    """
    descr = "prints usage"
    usage = "[<command>]  the command to describe; global usage when omitted or unknown"

    def __init__(self, usage, commands, /):
        self.printer = usage
        self.commands = commands

    def execute(self, subcommand_flags, configuration, /):
        if subcommand_flags:
            name = subcommand_flags[0]
            try:
                command = self.commands[name]
            except KeyError:
                pass
            else:
                return self.printer.print_command_usage(name, command.usage)
        self.printer.print()


class Version(Command):
    """
    print '<prog> <version> (<os>/<arch>)' to the standard output.
    """
    descr = "prints version"

    def __init__(self, version, /, console=Unset):
        self.version = version
        self.console = coalesce(console, Console())

    def execute(self, subcommand_flags, configuration, /):
        self.console.print(
            "%s %s (%s/%s)" % (progname(), self.version, platform.system().lower(), platform.machine().lower()),
            highlight=False,
        )


__all__ = (
    "Command",
    "Help",
    "Version",
)
