r"""
bbl flag primitive: a small, Go-flag-style switch parser.

Overview
- Specs
  • Option: named, value-bearing switch (e.g., --state-dir <path>).
  • Flag: named, presence-only switch (e.g., -d/--debug).

- FlagSet
  • string(...) / bool(...) register specs under bare names ("state-dir", "d").
    every bare name is accepted with a single or a double dash, so "state-dir"
    answers to both -state-dir and --state-dir.
  • parse(tokens) decodes switches up to the first non-switch token (or "--",
    which is consumed) and returns a namespace keyed by each spec's dest.
  • args exposes the tokens left unparsed by the last parse().

- is_flag(token)
  • pure predicate: does this token look like a switch? used by the command
    finder and by FlagSet to decide where switch parsing stops.

Grammar
- '--name=value' and '--name value' for options; the last occurrence wins.
- '-name' / '--name' for flags; flags cannot take an inline value.
- '-' alone is a positional value; '--' terminates switch parsing.

Faults
- MalformedTokenError, UnknownSwitchError, FlagAssignmentError and
  OptionValueRequiredError (all FlagSyntaxError) are raised with
  position-first messages; an empty inline value only warns
  (EmptyOptionValueWarning) and stores "".

Quick example:
    >>> flags = FlagSet("global")
    >>> flags.string("state-dir")
    >>> flags.bool("d", "debug")
    >>> namespace = flags.parse(["--state-dir", "/tmp/x", "-d", "up"])
    >>> namespace.state_dir, namespace.debug, flags.args
    ('/tmp/x', True, ('up',))
"""
import builtins
import difflib
import re
from collections import deque
from types import SimpleNamespace

from .faults import *
from .utils import *

_NAME = re.compile(r"[^\W\d_](-?[^\W_]+)*")
_TOKEN = re.compile(r"(?P<input>--?[^\W\d_](-?[^\W_]+)*)(=(?P<value>[^\r\n]*))?")


def is_flag(token, /):
    """
    return True when a token looks like a switch (starts with '-' and is not '-' alone).

    the predicate knows nothing about which switches exist; '--' counts as a
    switch-like token so it never becomes a command candidate.
    """
    return len(token) > 1 and token.startswith("-")


def spellings(name, /):
    """
    return every accepted spelling of a bare switch name ('-name' and '--name').
    """
    return "-" + name, "--" + name


def _sanitize_names(cls, names, /):
    """
    Internal: validate bare switch names and return them as a tuple.

    - names: required; each must be a non-empty string matching r"[^\W\d_](-?[^\W_]+)*"
      (no leading dashes, segments separated by single hyphens).
    - duplicates are rejected.
    """
    typename = cls.__name__.lower()
    if not names:
        raise TypeError(f"{typename} must specify at least one name")

    sanitized = []
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"{typename} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{typename} names cannot be empty-strings")
        elif not _NAME.fullmatch(name):
            raise ValueError(f"{typename} names must be bare shell-style names without dashes")
        elif name in sanitized:
            raise ValueError(f"{typename} names cannot contain duplicates")
        sanitized.append(name)
    return tuple(sanitized)


class Switch:
    """
    Common base of Option and Flag: a named spec with a destination and a default.

    Properties
    - names: bare names in declaration order.
    - dest: namespace attribute; defaults to the longest name with '-' → '_'.
    - default: value stored when the switch is absent.
    """
    names = mirror("names")
    dest = mirror("dest")
    default = mirror("default")

    def __init__(self, *names, default, dest=Unset):
        self._names = _sanitize_names(type(self), names)
        if not isinstance(dest, str | Unset):
            raise TypeError(f"{type(self).__name__.lower()} 'dest' must be a string")
        self._dest = coalesce(dest, max(self._names, key=len).replace("-", "_"))
        self._default = default

    @property
    def spellings(self):
        """
        every accepted spelling of every name, short names first.
        """
        return tuple(spelling for name in sorted(self._names, key=len) for spelling in spellings(name))

    def __repr__(self):
        return "%s(names=%r, dest=%r, default=%r)" % (
            type(self).__name__.lower(), self.names, self.dest, self.default
        )


class Option(Switch):
    """
    Named, value-bearing switch; the value is a plain string.
    """

    def __init__(self, *names, default="", dest=Unset):
        if not isinstance(default, str):
            raise TypeError("option 'default' must be a string")
        super().__init__(*names, default=default, dest=dest)


class Flag(Switch):
    """
    Named, presence-only switch; present means True.
    """

    def __init__(self, *names, default=False, dest=Unset):
        super().__init__(*names, default=builtins.bool(default), dest=dest)


class FlagSet:
    """
    An ordered set of switches parsed together.

    A FlagSet is configured once and may parse many token sequences; each
    parse() returns a fresh namespace and never mutates the registered specs.
    """

    def __init__(self, name, /):
        if not isinstance(name, str) or not name:
            raise TypeError("FlagSet() name must be a non-empty string")
        self.name = name
        self.switches = {}
        self._specs = []
        self._args = ()

    @property
    def args(self):
        """
        tokens left unparsed by the last parse(), in order.
        """
        return self._args

    def _register(self, spec):
        if spec.dest in (other.dest for other in self._specs):
            raise ValueError("%s flag set already has a switch for %r" % (self.name, spec.dest))
        for spelling in spec.spellings:
            if spelling in self.switches:
                raise ValueError("%s flag set already has a switch named %r" % (self.name, spelling))
        self._specs.append(spec)
        self.switches |= dict.fromkeys(spec.spellings, spec)
        return spec

    def string(self, *names, default="", dest=Unset):
        """
        register a value-bearing switch and return its Option spec.
        """
        return self._register(Option(*names, default=default, dest=dest))

    def bool(self, *names, default=False, dest=Unset):
        """
        register a presence-only switch and return its Flag spec.
        """
        return self._register(Flag(*names, default=default, dest=dest))

    def _resolve_token(self, token, index):
        """
        normalize a raw switch token into (spec, input, value) and validate shape.

        - '--name=value' → (spec, '--name', 'value')
        - '--name'       → (spec, '--name', None)   (value is taken later, if any)
        - '--name='      → (spec, '--name', '')
        """
        if not (match := _TOKEN.fullmatch(token)):
            trigger(MalformedTokenError(
                "bad form of option or flag %r at %s position" % (token, ordinal(index)),
                title="malformed option or flag",
                code=FaultCode.MALFORMED_TOKEN,
                hint="try '%s --help' to see valid spellings and forms (e.g., --name=value)" % progname(),
                token=token,
                index=index,
                docs=getdoc(FaultCode.MALFORMED_TOKEN),
            ))

        input = match["input"]
        value = match["value"]

        try:
            argument = self.switches[input]
        except KeyError:
            suggestions = difflib.get_close_matches(input, self.switches.keys(), 5)
            try:
                hint = "did you mean %r? you can also run '%s --help' to see all options" % (suggestions[0], progname())
            except IndexError:
                hint = "try '%s --help' to see all available options" % progname()
            trigger(UnknownSwitchError(
                "unknown option or flag %r at %s position" % (input, ordinal(index)),
                title="unknown option or flag",
                code=FaultCode.UNKNOWN_SWITCH,
                input=input,
                index=index,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.UNKNOWN_SWITCH),
            ))

        if isinstance(value, str) and isinstance(argument, Flag):
            trigger(FlagAssignmentError(
                "flag %r at %s position cannot have an inline value" % (input, ordinal(index)),
                title="flag cannot take a value",
                code=FaultCode.FLAG_ASSIGNMENT,
                input=input,
                index=index,
                argument=argument,
                hint="remove everything from '=' (for example: %s)" % input,
                docs=getdoc(FaultCode.FLAG_ASSIGNMENT),
            ))

        return argument, input, value

    def parse(self, tokens, /):
        """
        decode switches from the head of tokens.

        parsing stops at the first token that is not switch-like (kept in args)
        or at '--' (consumed, everything after it kept in args).

        returns
        - SimpleNamespace mapping every registered dest to its value (or default).

        raises
        - FlagSyntaxError subclasses on the first malformed, unknown or
          ill-formed switch.
        """
        self._args = ()
        tokens = deque(tokens)
        namespace = {spec.dest: spec.default for spec in self._specs}
        index = 1

        while tokens:
            if tokens[0] == "--":
                tokens.popleft()
                break
            if not is_flag(tokens[0]):
                break

            argument, input, value = self._resolve_token(tokens.popleft(), index)

            if isinstance(argument, Flag):
                namespace[argument.dest] = True
            elif value is None:
                try:
                    value = tokens.popleft()
                except IndexError:
                    trigger(OptionValueRequiredError(
                        "option %r at %s position requires a value" % (input, ordinal(index)),
                        title="missing option value",
                        code=FaultCode.OPTION_VALUE_REQUIRED,
                        input=input,
                        index=index,
                        argument=argument,
                        hint="pass a value after a space or with '=' (for example: %s=<value>)" % input,
                        docs=getdoc(FaultCode.OPTION_VALUE_REQUIRED),
                    ))
                index += 1
                namespace[argument.dest] = value
            else:
                if not value:
                    trigger(EmptyOptionValueWarning(
                        "empty inline value for option %r at %s position" % (input, ordinal(index)),
                        title="empty inline value",
                        code=FaultCode.EMPTY_INLINE_VALUE,
                        input=input,
                        index=index,
                        argument=argument,
                        hint="add a value after '=' (for example: %s=<value>) or drop the option" % input,
                        docs=getdoc(FaultCode.EMPTY_INLINE_VALUE),
                    ))
                namespace[argument.dest] = value
            index += 1

        self._args = tuple(tokens)
        return SimpleNamespace(**namespace)


__all__ = (
    "Switch",
    "Option",
    "Flag",
    "FlagSet",
    "is_flag",
    "spellings",
)
