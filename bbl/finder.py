"""
Command finder: locate the subcommand token inside raw arguments.

The finder splits a token sequence into three parts without knowing what any
switch means:

    [global flags ...] <command> [other args ...]

- the command is the first positional (non switch-like) token;
- a token right after a value-taking global switch written without '=value'
  (e.g. '--state-dir /tmp/x') belongs to that switch and is never a command;
- with no positional token the command is '' and every token is a global flag.

The split never fails and never validates; the global flag parser and the
resolution engine decide what the pieces mean.
"""
from typing import NamedTuple

from .flags import is_flag, spellings

#: switch spellings whose value may follow as a separate token
VALUE_FLAGS = frozenset(spellings("state-dir"))


class CommandFinderResult(NamedTuple):
    command: str
    global_flags: tuple[str, ...]
    other_args: tuple[str, ...]


def takes_value(token, names=VALUE_FLAGS, /):
    """
    True when token is a value-taking switch whose value is the next token.
    """
    return token in names


def find_command(tokens, /, names=VALUE_FLAGS):
    tokens = tuple(tokens)
    pending = False
    for index, token in enumerate(tokens):
        if pending:
            pending = False
        elif is_flag(token):
            pending = takes_value(token, names)
        else:
            return CommandFinderResult(token, tokens[:index], tokens[index + 1:])
    return CommandFinderResult("", tokens, ())


class CommandFinder:
    """
    Thin object facade over find_command() for callers that inject collaborators.
    """

    def __init__(self, names=VALUE_FLAGS):
        self.names = frozenset(names)

    def find_command(self, tokens, /):
        return find_command(tokens, self.names)


__all__ = (
    "VALUE_FLAGS",
    "CommandFinderResult",
    "CommandFinder",
    "find_command",
    "takes_value",
)
