"""
bbl resolution engine: turn raw process arguments into a command line configuration.

Pipeline
    raw arguments → find_command() → parse_global_flags() → resolve() → CommandLineConfiguration

Precedence (highest first)
- '-v' / '--version'           → command 'version', whatever was typed as the command
- '-h' / '--help' or no command → command 'help'; with a typed command, that command is
                                  prepended to the subcommand flags so help can show it
- unrecognized command          → UnknownCommandError (only when neither of the above applied)
- otherwise                     → the typed command

Failure semantics
- user-input errors (FlagSyntaxError, UnknownCommandError) call the usage callback
  exactly once and are then raised; nothing partial is ever returned.
- a failing working-directory lookup (OSError) is raised verbatim, without usage.

Example
    >>> parser = CommandLineParser(usage.print, {"up": up}, os.environ)
    >>> parser.parse(["--state-dir", "/tmp/x", "up", "--name", "foo"])
    CommandLineConfiguration(command='up', subcommand_flags=('--name', 'foo'), state_dir='/tmp/x', debug=False)
"""
import difflib
import logging
import os
import sys
from enum import Enum
from typing import NamedTuple

from .faults import *
from .finder import CommandFinder
from .flags import FlagSet, spellings
from .utils import *

logger = logging.getLogger(__name__)

#: environment variable that turns debug output on by default when exactly "true"
DEBUG_ENV = "BBL_DEBUG"


class CommandLineConfiguration(NamedTuple):
    command: str
    subcommand_flags: tuple[str, ...]
    state_dir: str
    debug: bool


class GlobalFlags(NamedTuple):
    """
    global switches as decoded from the tokens before the command.

    help and version only live during a parse; they are folded into
    CommandLineConfiguration.command before anything is returned.
    """
    state_dir: str = ""
    debug: bool = False
    help: bool = False
    version: bool = False


class Resolution(Enum):
    UNRESOLVED = "unresolved"
    VERSION = "version"
    HELP = "help"
    NAMED = "named"
    ERROR = "error"


def resolve(state, /, *, version, help, blank, unknown):
    """
    single transition of the command-name state machine.

    only UNRESOLVED moves; every other state is terminal. guards are checked in
    precedence order: version, help-or-blank, unknown command, named.
    """
    if state is not Resolution.UNRESOLVED:
        return state
    if version:
        return Resolution.VERSION
    if help or blank:
        return Resolution.HELP
    if unknown:
        return Resolution.ERROR
    return Resolution.NAMED


class CommandLineParser:
    """
    Resolve process arguments against a command registry.

    Collaborators (all read-only during a parse)
    - usage: zero-argument callable printing usage to the diagnostic stream.
    - commands: registry supporting `name in commands` (iterated for suggestions).
    - environ: mapping with .get(name, default); os.environ by default.
    - getcwd: zero-argument callable returning the working directory.
    """

    def __init__(self, usage, commands, environ=os.environ, getcwd=os.getcwd, *, finder=Unset):
        if not callable(usage):
            raise TypeError("CommandLineParser() usage must be callable")
        self.usage = usage
        self.commands = commands
        self.environ = environ
        self.getcwd = getcwd
        self.finder = coalesce(finder, CommandFinder())

    def parse(self, arguments=Unset, /):
        """
        resolve arguments (sys.argv[1:] when omitted) into a CommandLineConfiguration.

        raises
        - FlagSyntaxError: malformed/unknown global switch or duplicated state dir.
        - UnknownCommandError: command not in the registry and no help/version/blank override.
        - OSError: the working directory could not be determined.
        """
        tokens = tuple(sys.argv[1:] if arguments is Unset else arguments)
        found = self.finder.find_command(tokens)
        logger.debug("found command %r with global flags %r", found.command, found.global_flags)

        blank = False
        unknown = None
        if found.command not in self.commands:
            if not found.command:
                blank = True
            else:
                unknown = self._unknown(found.command, len(found.global_flags) + 1)

        flags = GlobalFlags()
        cause = None
        try:
            flags, _ = self.parse_global_flags(flags, found.global_flags)
        except FlagSyntaxError as error:
            # a pending unknown command is reported instead of the switch error
            if unknown is None:
                self.usage()
                raise
            cause = error

        state = resolve(
            Resolution.UNRESOLVED,
            version=flags.version,
            help=flags.help,
            blank=blank,
            unknown=unknown is not None,
        )
        logger.debug("command line resolved to %s", state.name.lower())

        match state:
            case Resolution.VERSION:
                command, subcommand_flags = "version", found.other_args
            case Resolution.HELP if blank:
                command, subcommand_flags = "help", found.other_args
            case Resolution.HELP:
                command, subcommand_flags = "help", (found.command, *found.other_args)
            case Resolution.ERROR:
                self.usage()
                raise unknown from cause
            case _:
                command, subcommand_flags = found.command, found.other_args

        configuration = CommandLineConfiguration(
            command=command,
            subcommand_flags=subcommand_flags,
            state_dir=flags.state_dir or self.getcwd(),
            debug=flags.debug,
        )
        logger.debug("%r", configuration)
        return configuration

    def parse_global_flags(self, flags, tokens, /):
        """
        decode the global switches found before the command.

        flags carries the starting values; the debug default is switched on when
        BBL_DEBUG is exactly "true". returns the decoded GlobalFlags and the tokens
        left after switch parsing.
        """
        self.validate_global_flags(tokens)

        debug = self.environ.get(DEBUG_ENV, "") == "true"

        parser = FlagSet("global")
        parser.string("state-dir", default=flags.state_dir)
        parser.bool("d", "debug", default=flags.debug or debug)
        parser.bool("h", "help", default=flags.help)
        parser.bool("v", "version", default=flags.version)

        namespace = parser.parse(tokens)
        return flags._replace(**vars(namespace)), parser.args

    @staticmethod
    def validate_global_flags(tokens, /):
        """
        reject a state directory given more than once, in any spelling.
        """
        names = spellings("state-dir")
        seen = None
        for index, token in enumerate(tokens, 1):
            if (input := token.split("=", 1)[0]) not in names:
                continue
            if seen is not None:
                trigger(DuplicatedSwitchError(
                    "option %r at %s position was already provided" % (input, ordinal(index)),
                    title="duplicated option",
                    code=FaultCode.DUPLICATED_SWITCH,
                    input=input,
                    index=index,
                    hint="keep a single --state-dir; the global state directory can be specified only once",
                    docs=getdoc(FaultCode.DUPLICATED_SWITCH),
                ))
            seen = index

    def _unknown(self, command, index):
        suggestions = difflib.get_close_matches(command, list(self.commands), 5)
        try:
            hint = "did you mean %r? you can also run '%s --help' to see available commands" % (
                suggestions[0], progname()
            )
        except IndexError:
            hint = "run '%s --help' to see available commands" % progname()
        return UnknownCommandError(
            "unrecognized command %r at %s position" % (command, ordinal(index)),
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            input=command,
            index=index,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_COMMAND),
        )


__all__ = (
    "DEBUG_ENV",
    "CommandLineConfiguration",
    "CommandLineParser",
    "GlobalFlags",
    "Resolution",
    "resolve",
)
