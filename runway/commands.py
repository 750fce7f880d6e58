"""
Runway command layer: route one invocation to one toolkit operation.

What this module provides
- CommandName: the closed set of known command names.
- Implicit(directory): any other first positional; `runway ./my-project` is
  shorthand for `runway dev ./my-project`.
- resolve_command(positionals): CommandName | Implicit.
- dispatch(positionals, record, toolkit): the single toolkit call.
- run(argv, ...): the programmatic entry point (coroutine).
- main(argv): the process boundary used by the console script.

Flow of run()
    runtime gate → schema → parse → normalize → help/version → dispatch

Quick start
    import asyncio
    from runway import run

    asyncio.run(run(["build", "my-app", "--sourcemap"], toolkit=my_toolkit))

Environment
- RUNWAY_ROOT: project directory used by `init` when none is given.
- RUNWAY_MODE: build mode; `build` defaults it to "production" and `watch` to
  "development" before calling the toolkit. The default is written back into
  the environment so the toolkit (and anything it spawns) sees it.
"""
import asyncio
import enum
import os
import shlex
import sys
from collections.abc import Iterable
from typing import NamedTuple

from .arguments import parse
from .faults import CommandException, console
from .flags import normalize
from .help import print_help, print_version, program_name
from .runtime import MINIMUM_RUNTIME, check_runtime
from .schema import resolve_schema
from .toolkit import load_toolkit
from .utils import Unset

ROOT_VARIABLE = "RUNWAY_ROOT"
MODE_VARIABLE = "RUNWAY_MODE"


class CommandName(enum.StrEnum):
    INIT = "init"
    ROUTES = "routes"
    BUILD = "build"
    VITE_BUILD = "vite:build"
    WATCH = "watch"
    SETUP = "setup"
    REVEAL = "reveal"
    DEV = "dev"
    VITE_DEV = "vite:dev"


class Implicit(NamedTuple):
    """Unrecognized first positional, taken as the project directory for `dev`."""
    directory: str | None


def resolve_command(positionals, /):
    """
    Classify the first positional.

    An invocation made of flags only (`runway --manual`) has no first
    positional and resolves to Implicit(None), i.e. `dev` in the default
    directory.
    """
    if not positionals:
        return Implicit(None)
    try:
        return CommandName(positionals[0])
    except ValueError:
        return Implicit(positionals[0])


def _positional(positionals, index):
    return positionals[index] if len(positionals) > index else None


def _default_mode(environ, mode):
    # an empty value counts as unset
    if not environ.get(MODE_VARIABLE):
        environ[MODE_VARIABLE] = mode
    return environ[MODE_VARIABLE]


async def dispatch(positionals, record, toolkit, /, *, environ=Unset):
    """
    Call exactly one toolkit operation for the invocation and return its result.

    Parameters
    - positionals: Sequence[str], the command name first.
    - record: Mapping, the normalized flag record (see runway.flags).
    - toolkit: Toolkit.
    - environ: MutableMapping | Unset, os.environ by default.

    Toolkit errors are not caught, retried or wrapped.
    """
    environ = os.environ if environ is Unset else environ
    directory = _positional(positionals, 1)

    # keep each arm small; the toolkit owns the behaviour
    match resolve_command(positionals):
        case CommandName.INIT:
            return await toolkit.init(
                directory or environ.get(ROOT_VARIABLE) or os.getcwd(),
                delete_script=record.get("delete"),
            )
        case CommandName.ROUTES:
            return await toolkit.routes(directory, "json" if record.get("json") else "jsx")
        case CommandName.BUILD:
            mode = _default_mode(environ, "production")
            return await toolkit.build(directory, mode, record.get("sourcemap"))
        case CommandName.VITE_BUILD:
            return await toolkit.vite_build(directory, record)
        case CommandName.WATCH:
            mode = _default_mode(environ, "development")
            return await toolkit.watch(directory, mode)
        case CommandName.SETUP:
            return toolkit.setup()
        case CommandName.REVEAL:
            return await toolkit.generate_entry(directory, _positional(positionals, 2), record.get("typescript"))
        case CommandName.DEV:
            return await toolkit.dev(directory, record)
        case CommandName.VITE_DEV:
            return await toolkit.vite_dev(directory, record)
        case Implicit(directory=implicit):
            return await toolkit.dev(implicit, record)


def _tokenize(argv):
    """
    Normalize the argv parameter of run() into a tuple of strings.

    - Unset: sys.argv[1:].
    - str: shell-like string, split with shlex.split.
    - Iterable[str]: used as-is (every item must be a string).
    """
    if argv is Unset:
        return tuple(sys.argv[1:])
    if isinstance(argv, str):
        return tuple(shlex.split(argv))
    if isinstance(argv, Iterable):
        tokens = tuple(argv)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("run() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("run() argument must be a string or an iterable of strings")


async def run(argv=Unset, /, *, toolkit=Unset, interactive=False, runtime=Unset,
              minimum=MINIMUM_RUNTIME, environ=Unset):
    """
    Programmatic interface for running runway with the given arguments.

    Parameters
    - argv: Unset | str | Iterable[str]
      tokens to run; Unset reads sys.argv[1:].
    - toolkit: Toolkit | Unset
      operations to dispatch to; Unset loads one with load_toolkit().
    - interactive: bool
      default of the 'interactive' flag; main() passes True because it runs
      as the top-level program.
    - runtime: str | Unset
      version checked by the runtime gate; Unset checks the running interpreter.
    - minimum: tuple[int, ...]
      oldest accepted version; hosts wrapping another runtime pass their own,
      e.g. (18,) to accept any release from major 18 on.
    - environ: MutableMapping | Unset
      environment used for RUNWAY_ROOT/RUNWAY_MODE/RUNWAY_TOOLKIT.

    Returns the toolkit operation's result, or None for help and version.

    Raises
    - RuntimeTooOldError before anything is parsed.
    - MissingCommandError, UnknownSwitchError, FlagAssignmentError,
      OptionValueRequiredError, MalformedValueError while parsing.
    - whatever the toolkit raises, unchanged.
    """
    check_runtime(runtime, minimum=minimum)

    tokens = _tokenize(argv)
    arguments = parse(tokens, resolve_schema(tokens), prog=program_name())
    record = normalize(arguments.flags, interactive=interactive)

    if record.get("help"):
        print_help()
        return None
    if record.get("version"):
        print_version()
        return None

    if toolkit is Unset:
        toolkit = load_toolkit(environ=environ)
    return await dispatch(arguments.positionals, record, toolkit, environ=environ)


def main(argv=None):
    """
    Console-script entry point; returns the process exit status.

    runway faults are rendered on stderr and give status 1, an interrupt gives
    130. Anything else (toolkit failures included) propagates with its
    traceback.
    """
    try:
        asyncio.run(run(Unset if argv is None else argv, interactive=True))
    except CommandException as exception:
        console.print(exception)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


__all__ = (
    "ROOT_VARIABLE",
    "MODE_VARIABLE",
    "CommandName",
    "Implicit",
    "resolve_command",
    "dispatch",
    "run",
    "main",
)
