"""
Runway flag schemas: which flags an invocation understands, and how.

Overview
- FlagType: value kind of a flag (BOOLEAN, STRING, NUMBER).
- Alias(target): a spelling that stands for another, canonical spelling.
- FlagSchema: read-only mapping spelling -> FlagType | Alias, with a name.

Two vocabularies exist and are never mixed within one invocation:
- native: the project's own subcommands (build, dev, watch, ...). Here '-c'
  is short for '--command' and '--sourcemap' is available.
- delegated: subcommands prefixed with 'vite:', which pass flags through to
  the alternate bundler/dev-server toolchain. Here '-c' is short for
  '--config' and the toolchain's own flags are available.

Both share the SHARED table below. The delegated table is static except for
'--host' and '--open', whose value kind is decided per invocation by
infer_arity() before the schema is built: those two flags are valid both as
bare switches and as switches carrying a value, and the parser must know
which before it starts consuming tokens.
"""
import enum
from collections.abc import Mapping
from types import MappingProxyType
from typing import NamedTuple

from .faults import FaultCode, MissingCommandError, getdoc, trigger

DELEGATED_PREFIX = "vite:"


class FlagType(enum.Enum):
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"

    def __repr__(self):
        return "%s.%s" % (type(self).__name__, self.name)


class Alias(NamedTuple):
    """A short or alternate spelling resolving to `target`."""
    target: str


class FlagSchema(Mapping):
    """
    Immutable flag vocabulary.

    Keys are spellings exactly as typed on the command line ('--port', '-p').
    Values are a FlagType for canonical spellings and an Alias for the rest.
    Aliases must point at a canonical spelling present in the same schema.
    """

    __slots__ = ("_name", "_entries")

    def __init__(self, name, entries, /):
        if not isinstance(name, str) or not name:
            raise TypeError("FlagSchema() name must be a non-empty string")
        entries = dict(entries)
        for spelling, kind in entries.items():
            if not isinstance(spelling, str) or not spelling.startswith("-"):
                raise ValueError("flag spelling %r must start with '-'" % (spelling,))
            if isinstance(kind, Alias):
                if not isinstance(entries.get(kind.target), FlagType):
                    raise ValueError("alias %r points at unknown flag %r" % (spelling, kind.target))
            elif not isinstance(kind, FlagType):
                raise TypeError("flag %r must map to a FlagType or an Alias" % spelling)
        self._name = name
        self._entries = MappingProxyType(entries)

    @property
    def name(self):
        return self._name

    def __getitem__(self, spelling):
        return self._entries[spelling]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return "%s(%r, %d flags)" % (type(self).__name__, self._name, len(self))

    def canonical(self, spelling, /):
        """Resolve `spelling` to its canonical long spelling (KeyError if unknown)."""
        kind = self._entries[spelling]
        return kind.target if isinstance(kind, Alias) else spelling

    def kind(self, spelling, /):
        """Value kind of `spelling`, following aliases."""
        return self._entries[self.canonical(spelling)]

    def aliases(self, spelling, /):
        """Every spelling resolving to the same canonical flag as `spelling`."""
        target = self.canonical(spelling)
        return tuple(name for name in self._entries if self.canonical(name) == target)


BOOLEAN = FlagType.BOOLEAN
STRING = FlagType.STRING
NUMBER = FlagType.NUMBER

SHARED = MappingProxyType({
    "--no-delete": BOOLEAN,
    "--dry": BOOLEAN,
    "--force": BOOLEAN,
    "--help": BOOLEAN,
    "-h": Alias("--help"),
    "--json": BOOLEAN,
    "--token": STRING,
    "--typescript": BOOLEAN,
    "--no-typescript": BOOLEAN,
    "--version": BOOLEAN,
    "-v": Alias("--version"),

    # dev server
    "--command": STRING,
    "--manual": BOOLEAN,
    "--port": NUMBER,
    "-p": Alias("--port"),
    "--tls-key": STRING,
    "--tls-cert": STRING,
})

NATIVE = FlagSchema("native", SHARED | {
    "-c": Alias("--command"),
    "--sourcemap": BOOLEAN,
})

# '--force' and '--port' come from SHARED; '--host' and '--open' are filled in
# by delegated_schema().
_DELEGATED = SHARED | {
    "--assetsInlineLimit": NUMBER,
    "--clearScreen": BOOLEAN,
    "--config": STRING,
    "-c": Alias("--config"),
    "--cors": BOOLEAN,
    "--emptyOutDir": BOOLEAN,
    "--logLevel": STRING,
    "-l": Alias("--logLevel"),
    "--minify": STRING,
    "--mode": STRING,
    "-m": Alias("--mode"),
    "--strictPort": BOOLEAN,
    "--profile": BOOLEAN,
}

# flags whose value kind depends on the tokens around them
DYNAMIC_FLAGS = ("--host", "--open")


def delegated_schema(host=BOOLEAN, open=BOOLEAN):
    """
    Build the delegated schema with the given kinds for '--host' and '--open'.

    Only BOOLEAN and STRING make sense for these two flags.
    """
    for name, kind in (("host", host), ("open", open)):
        if kind not in (BOOLEAN, STRING):
            raise ValueError("delegated_schema() %r must be BOOLEAN or STRING" % name)
    return FlagSchema("delegated", _DELEGATED | {"--host": host, "--open": open})


def infer_arity(tokens, flag, /):
    """
    Decide whether `flag` is used as a bare switch or carries a value.

    Rules (first occurrence wins, scanning stops at a '--' terminator)
    - absent                                   -> BOOLEAN
    - present, last token                      -> BOOLEAN
    - present, next token starts with '-'      -> BOOLEAN
    - present, next token is anything else     -> STRING
    - present in inline form ('--host=0.0.0.0') -> STRING

    This is a pure function of the token sequence; it never raises for
    malformed input, the parser reports those.
    """
    tokens = tuple(tokens)
    for index, token in enumerate(tokens):
        if token == "--":
            break
        if token.startswith(flag + "="):
            return STRING
        if token == flag:
            try:
                following = tokens[index + 1]
            except IndexError:
                return BOOLEAN
            return BOOLEAN if not following or following.startswith("-") else STRING
    return BOOLEAN


def is_delegated(command, /):
    """True when `command` names a delegated ('vite:'-prefixed) subcommand."""
    return isinstance(command, str) and command.startswith(DELEGATED_PREFIX)


def resolve_schema(tokens, /):
    """
    Pick the schema for an invocation from its first token.

    The first token selects the vocabulary even when it is not a command name
    (for example '--help'), in which case the native schema applies.

    Raises
    - MissingCommandError: when `tokens` is empty.
    """
    tokens = tuple(tokens)
    if not tokens:
        return trigger(MissingCommandError(
            "no command given",
            title="missing command",
            code=FaultCode.MISSING_COMMAND,
            hint="try 'runway --help' to see the available commands",
            docs=getdoc(FaultCode.MISSING_COMMAND),
        ))

    if not is_delegated(tokens[0]):
        return NATIVE
    return delegated_schema(*(infer_arity(tokens, flag) for flag in DYNAMIC_FLAGS))


__all__ = (
    "DELEGATED_PREFIX",
    "DYNAMIC_FLAGS",
    "FlagType",
    "Alias",
    "FlagSchema",
    "SHARED",
    "NATIVE",
    "delegated_schema",
    "infer_arity",
    "is_delegated",
    "resolve_schema",
)
