"""
Runway faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: parse faults name the ordinal position of the token
  that failed (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The schema resolver, parser and toolkit loader call trigger(fault, **ctx).
- In non-shell mode (the default) exceptions are raised and warnings are emitted
  with warnings.warn; in shell mode they are rendered via rich on stderr.
- Faults raised by toolkit operations are not runway faults and are never wrapped.
"""
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the cli (stable identifiers).

    grouping (by high-level domain)
    - runtime (100xx)
      • RUNTIME_TOO_OLD, MALFORMED_VERSION
    - routing (101xx)
      • MISSING_COMMAND
    - switches (flags) (111xx)
      • UNKNOWN_SWITCH, FLAG_ASSIGNMENT, OPTION_VALUE_REQUIRED, MALFORMED_VALUE
    - toolkit (131xx)
      • MISSING_TOOLKIT, TOOLKIT_IMPORT, INCOMPLETE_TOOLKIT
    - warnings (12xxx)
      • AMBIGUOUS_TOOLKIT

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- runtime errors (100xx) ---
    RUNTIME_TOO_OLD             = 10001
    MALFORMED_VERSION           = 10002

    # --- routing errors (101xx) ---
    MISSING_COMMAND             = 10101

    # --- switch/flag errors (111xx) ---
    UNKNOWN_SWITCH              = 11112
    FLAG_ASSIGNMENT             = 11113
    OPTION_VALUE_REQUIRED       = 11117
    MALFORMED_VALUE             = 11126

    # --- toolkit errors (131xx) ---
    MISSING_TOOLKIT             = 13101
    TOOLKIT_IMPORT              = 13102
    INCOMPLETE_TOOLKIT          = 13103

    # --- warnings (12xxx) ---
    AMBIGUOUS_TOOLKIT           = 12131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _renderer(fault, palette):
    """
    Build the rich renderable shared by exceptions and warnings.

    Layout: a "[ prog — code | Title ]" header, the message and a "→ hint" line,
    optionally wrapped in a Panel when the fault was triggered with fancy=True.
    """
    main = __import__("__main__")
    options = defaultdict(lambda: None, fault.options)
    colorful = fault.options.get("colorful", True)
    fancy = fault.options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", options["prog"] or "runway"), styler("prog-name"))
    code = options["code"].normalize() if isinstance(options["code"], FaultCode) else "-"
    title = options["title"] or type(fault).__name__

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code, styler("code")),
        " | ",
        text(title.title(), styler("title")),
        " ]"
    )
    message = text(coalesce(fault.message, ""), styler("message"))

    body = [message]
    if options["hint"]:
        body.append(Text.assemble(text(" → ", styler("hint-arrow")), text(options["hint"], styler("hint"))))

    if fancy:
        return Panel(Group(*body), title=header, title_align="left")
    return Group(header, *body)


class CommandException(Exception):
    """
    Base class of every error runway raises on its own behalf.

    The message is positional; everything else (title, code, hint, docs and any
    context such as the offending token or its index) travels as keyword options
    exposed read-only through .options.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        return _renderer(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title

            # body
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RuntimeTooOldError(CommandException): ...
class MalformedVersionError(CommandException): ...
class MissingCommandError(CommandException): ...
class UnknownSwitchError(CommandException): ...
class FlagAssignmentError(CommandException): ...
class OptionValueRequiredError(CommandException): ...
class MalformedValueError(CommandException): ...
class MissingToolkitError(CommandException): ...
class ToolkitImportError(CommandException): ...
class IncompleteToolkitError(CommandException): ...


class CommandWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _renderer(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class AmbiguousToolkitWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are
      raised and warnings are emitted.

    typical options
    - shell, fancy, colorful, prog, title, code, hint, docs, and any other
      context the reporter may want to show (e.g., token/index/suggestions).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "RuntimeTooOldError",
    "MalformedVersionError",
    "MissingCommandError",
    "UnknownSwitchError",
    "FlagAssignmentError",
    "OptionValueRequiredError",
    "MalformedValueError",
    "MissingToolkitError",
    "ToolkitImportError",
    "IncompleteToolkitError",
    "CommandWarning",
    "AmbiguousToolkitWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
