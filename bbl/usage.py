"""
Usage rendering for the bbl command line (rich-based, color-aware).

Usage.print() is the usage callback handed to CommandLineParser: it takes no
arguments and writes the global usage to the diagnostic stream. Usage.print_command_usage()
renders the usage of a single command for the help command.

Palette keys
- usage-label, program-name, usage-section
- group-label, option-name, flag-name, metavar, argument-description, environment
- children-title, children-table, children, children-description
- panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- Pass colorful=False to strip styling, fancy=True to wrap the output in a panel.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .utils import *

#: (names, metavar, description, environment) for every global switch
GLOBAL_OPTIONS = (
    (("-h", "--help"), None, "prints usage; use '{prog} [command] --help' for more information about a command", None),
    (("--state-dir",), "<path>", "directory containing the bbl state (defaults to the working directory)", None),
    (("-d", "--debug"), None, "prints debugging output", "BBL_DEBUG"),
    (("-v", "--version"), None, "prints version", None),
)


class Usage:
    """
    Render global and per-command usage.

    - commands: registry mapping names to commands; each command's `descr`
      attribute fills the commands table.
    - console: target console; a stderr console by default.
    """

    def __init__(self, commands, /, console=Unset, *, colorful=True, fancy=False):
        self.commands = commands
        self.console = coalesce(console, Console(stderr=True))
        self.colorful = colorful
        self.fancy = fancy

    def _styles(self):
        return defaultdict(str, {
            # === Head sections ===
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan

            # === Groups / arguments ===
            "group-label": "bold #FFFFFF",
            "option-name": "bold #00E6FF",
            "flag-name": "bold #22C55E",
            "metavar": "bold #FFD600",
            "argument-description": "#9CA3AF",
            "environment": "italic #737373",

            # === Children table ===
            "children-title": "bold #FFFFFF",
            "children-table": "#4B5563",
            "children": "bold #36C5F0",
            "children-description": "#9CA3AF",

            # === Fancy panel ===
            "panel-title": "bold #FF4D94",
        } | getattr(__import__("__main__"), "__styles__", {}))

    def _text(self, fragment, style=""):
        if not fragment:
            return Text("")
        if not self.colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), self._styles()[style])

    def _headline(self, tail):
        usage = Text()
        usage.append(self._text("usage", "usage-label")).append(":")
        usage.append(" ")
        usage.append(self._text(progname(), "program-name"))
        usage.append(" ")
        usage.append(self._text(tail, "usage-section"))
        return usage.append("\n")

    def _global_options(self):
        prog = progname()
        options = Text()
        options.append(self._text("global options", "group-label")).append(":")
        options.append("\n")
        indent = 22
        for names, metavar, descr, environment in GLOBAL_OPTIONS:
            section = Text("  ")
            section.append(Text(" | ").join(
                self._text(name, "option-name" if metavar else "flag-name") for name in names
            ))
            if metavar:
                section.append(" ").append(self._text(metavar, "metavar"))
            section.append(" " * max(indent - len(section), 1))
            section.append(self._text(descr.format(prog=prog), "argument-description"))
            if environment:
                section.append(" ").append(self._text("[env: %s]" % environment, "environment"))
            options.append(section).append("\n")
        return options

    def _commands(self):
        table = Table(
            "name", "help",
            title=self._text("commands", "children-title"),
            box=ROUNDED,
            style=self._styles()["children-table"] if self.colorful else "",
            header_style=self._styles()["children-title"] if self.colorful else "",
        )
        for name, command in sorted(self.commands.items()):
            table.add_row(
                self._text(name, "children"),
                self._text(getattr(command, "descr", None) or "no description", "children-description"),
            )
        return table

    def _print(self, renders, title):
        renderable = Group(*renders)
        if self.fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", title.upper(), " ", "]", style=self._styles()["panel-title"] if self.colorful else ""),
                title_align="left",
            )
        self.console.print(renderable)

    def print(self):
        """
        print the global usage: headline, global options and the commands table.
        """
        renders = [self._headline("[global options] <command> [options]"), self._global_options()]
        if self.commands:
            renders.append(self._commands())
        self._print(renders, "%s help" % progname())

    def print_command_usage(self, name, usage, /):
        """
        print the usage of a single command followed by the global options.
        """
        body = Text()
        body.append(self._text("[%s command options]" % name, "group-label"))
        body.append("\n")
        for line in (usage or "").strip("\n").splitlines():
            body.append("  ").append(self._text(line, "argument-description")).append("\n")
        body.rstrip()
        self._print(
            [self._headline("[global options] %s [%s options]" % (name, name)), self._global_options(), body],
            "%s %s help" % (progname(), name),
        )


__all__ = (
    "GLOBAL_OPTIONS",
    "Usage",
)
