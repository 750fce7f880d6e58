r"""
Runway argument parser: apply a FlagSchema to a token sequence.

What it produces
- ParsedArguments(positionals, flags)
  • positionals: tuple of non-flag tokens, in order. The first one is
    conventionally the command name.
  • flags: read-only mapping canonical spelling ('--port') -> value. Only flags
    actually supplied appear; aliases are recorded under their target.

Token grammar
- '--name' / '-n'        → a flag from the schema.
- '--name=value'         → inline value (STRING and NUMBER flags only).
- '-abc'                 → cluster of short flags, same as '-a -b -c'; only the
                           last one of a cluster may take a value.
- '-'                    → positional (conventionally stdin).
- '--'                   → end of flags; every later token is positional.

Value rules
- BOOLEAN flags never consume a following token and reject inline values.
- STRING flags consume exactly one token. A following token that looks like a
  flag does not count as a value.
- NUMBER flags consume one numeric literal (negative numbers are allowed even
  though they start with '-').
- Repeating a flag keeps the last value.

Every fault names the ordinal position of the offending token and carries a
single actionable hint, following the faults module conventions.
"""
import difflib
import re
from collections import deque
from types import MappingProxyType
from typing import NamedTuple

from .faults import (
    FaultCode,
    FlagAssignmentError,
    MalformedValueError,
    OptionValueRequiredError,
    UnknownSwitchError,
    getdoc,
    trigger,
)
from .schema import FlagType
from .utils import ordinal

_NUMBER = re.compile(r"[+-]?(?:\d+(?P<fraction>\.\d*)?|(?P<bare>\.\d+))(?P<exponent>[eE][+-]?\d+)?")


class ParsedArguments(NamedTuple):
    positionals: tuple[str, ...]
    flags: MappingProxyType

    @property
    def command(self):
        """First positional, or None when there is none."""
        return self.positionals[0] if self.positionals else None


def _is_flaglike(token):
    return len(token) > 1 and token.startswith("-")


def _to_number(token):
    """Convert a numeric literal to int or float; None when it is not one."""
    match = _NUMBER.fullmatch(token)
    if not match:
        return None
    if match["fraction"] is None and match["bare"] is None and match["exponent"] is None:
        return int(token)
    return float(token)


class ArgumentParser:
    """
    One-shot parser bound to a schema.

    The instance keeps the parse state (remaining tokens, current position)
    while parse() runs, so a parser should not be shared between concurrent
    parses; create one per invocation.
    """

    def __init__(self, schema, /, *, prog="runway"):
        self.schema = schema
        self.prog = prog
        self._tokens = deque()
        self._index = 0
        self._members = 0

    def trigger(self, fault, /, **options):
        trigger(fault, **options, prog=self.prog, index=self._index)

    def _resolve_token(self, token):
        """
        normalize a raw flag token into (canonical, value) and validate shape.

        returns
        - (canonical spelling, inline value or None)
        """
        spelling, equals, value = token.partition("=") if token.startswith("--") else (token, "", "")
        inline = value if equals else None

        try:
            canonical = self.schema.canonical(spelling)
        except KeyError:
            suggestions = difflib.get_close_matches(spelling, self.schema.keys(), 5)
            try:
                hint = "did you mean %r? you can also run '%s --help' to see all options" % (
                    suggestions[0],
                    self.prog,
                )
            except IndexError:
                hint = "try '%s --help' to see all available options" % self.prog
            return self.trigger(UnknownSwitchError(
                "unknown flag %r at %s position" % (spelling, ordinal(self._index)),
                title="unknown flag",
                code=FaultCode.UNKNOWN_SWITCH,
                input=spelling,
                schema=self.schema.name,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.UNKNOWN_SWITCH),
            ))

        if inline is not None and self.schema[canonical] is FlagType.BOOLEAN:
            self.trigger(FlagAssignmentError(
                "flag %r at %s position cannot have a value" % (spelling, ordinal(self._index)),
                title="flag cannot take a value",
                code=FaultCode.FLAG_ASSIGNMENT,
                input=spelling,
                hint="remove everything from '=' (for example: %s)" % spelling,
                docs=getdoc(FaultCode.FLAG_ASSIGNMENT),
            ))

        return canonical, inline

    def _getvalue(self, spelling, canonical, inline):
        """
        consume and convert the value of a STRING or NUMBER flag.
        """
        kind = self.schema[canonical]

        if inline is not None:
            raw = inline
        else:
            following = self._tokens[0] if self._tokens else None
            if following is None or (_is_flaglike(following) and not (
                    kind is FlagType.NUMBER and _to_number(following) is not None
            )):
                return self.trigger(OptionValueRequiredError(
                    "flag %r at %s position requires a %s value" % (
                        spelling, ordinal(self._index), kind.value
                    ),
                    title="missing value",
                    code=FaultCode.OPTION_VALUE_REQUIRED,
                    input=spelling,
                    hint="pass a value after a space or with '=' (for example: %s=<value>)" % canonical,
                    docs=getdoc(FaultCode.OPTION_VALUE_REQUIRED),
                ))
            raw = self._tokens.popleft()
            self._index += 1

        if kind is FlagType.STRING:
            return raw

        number = _to_number(raw)
        if number is None:
            return self.trigger(MalformedValueError(
                "flag %r at %s position expects a number, got %r" % (spelling, ordinal(self._index), raw),
                title="malformed value",
                code=FaultCode.MALFORMED_VALUE,
                input=spelling,
                value=raw,
                hint="use a numeric literal (for example: %s 3000)" % canonical,
                docs=getdoc(FaultCode.MALFORMED_VALUE),
            ))
        return number

    def _expand_cluster(self, token):
        """
        split '-abc' into '-a', '-b', '-c' and queue them back in front.

        every member but the last must be a BOOLEAN flag, since only the last
        one can be followed by its value.
        """
        members = ["-" + char for char in token[1:]]
        for member in members[:-1]:
            try:
                kind = self.schema.kind(member)
            except KeyError:
                # reported with suggestions when the member itself is parsed
                continue
            if kind is not FlagType.BOOLEAN:
                self.trigger(OptionValueRequiredError(
                    "flag %r in %r at %s position requires a value but is followed by another flag" % (
                        member, token, ordinal(self._index)
                    ),
                    title="missing value",
                    code=FaultCode.OPTION_VALUE_REQUIRED,
                    input=member,
                    hint="move %r to the end of %r or pass it on its own" % (member, token),
                    docs=getdoc(FaultCode.OPTION_VALUE_REQUIRED),
                ))
        self._tokens.extendleft(reversed(members))
        # members share the cluster's own position
        self._members = len(members)

    def parse(self, tokens, /):
        """
        Consume `tokens` and return ParsedArguments.

        Raises the faults described in the module docstring; nothing is
        recovered locally.
        """
        self._tokens = deque(tokens)
        self._index = 0
        self._members = 0

        positionals = []
        flags = {}

        while self._tokens:
            token = self._tokens.popleft()
            if self._members:
                self._members -= 1
            else:
                self._index += 1

            if token == "--":
                positionals.extend(self._tokens)
                self._tokens.clear()
                break

            if not _is_flaglike(token):
                positionals.append(token)
                continue

            if not token.startswith("--") and len(token) > 2:
                self._expand_cluster(token)
                continue

            canonical, inline = self._resolve_token(token)
            spelling = token.partition("=")[0]

            if self.schema[canonical] is FlagType.BOOLEAN:
                flags[canonical] = True
            else:
                flags[canonical] = self._getvalue(spelling, canonical, inline)

        return ParsedArguments(tuple(positionals), MappingProxyType(flags))


def parse(tokens, schema, /, *, prog="runway"):
    """Parse `tokens` against `schema` with a fresh ArgumentParser."""
    return ArgumentParser(schema, prog=prog).parse(tokens)


__all__ = (
    "ParsedArguments",
    "ArgumentParser",
    "parse",
)
