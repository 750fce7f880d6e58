"""
Runtime gate: refuse to run on an interpreter older than runway supports.

check_runtime() is the very first thing run() does; it takes no flags into
account and cannot be bypassed. The version string defaults to the running
interpreter, but any dotted version can be checked against any minimum, which
is how hosts that wrap a different runtime reuse the gate.
"""
import platform
import re

from .faults import FaultCode, MalformedVersionError, RuntimeTooOldError, getdoc, trigger
from .utils import Unset, coalesce

# Oldest interpreter runway runs on (major, minor).
MINIMUM_RUNTIME = (3, 11)


def parse_version(version, /):
    """
    Extract the leading numeric components of a dotted version string.

    "3.12.1" -> (3, 12, 1), "v18.19.0" -> (18, 19, 0), "3.13.0rc1" -> (3, 13, 0).
    A leading "v" is tolerated; anything after the numeric run is ignored.
    """
    if not isinstance(version, str):
        raise TypeError("parse_version() argument must be a string")

    match = re.match(r"\s*v?(?P<numbers>\d+(?:\.\d+)*)", version)
    if not match:
        return trigger(MalformedVersionError(
            "cannot read a version number from %r" % version,
            title="malformed runtime version",
            code=FaultCode.MALFORMED_VERSION,
            hint="report the interpreter you are running on; expected something like '3.12.1'",
            version=version,
            docs=getdoc(FaultCode.MALFORMED_VERSION),
        ))
    return tuple(map(int, match["numbers"].split(".")))


def check_runtime(version=Unset, /, minimum=MINIMUM_RUNTIME):
    """
    Fail with RuntimeTooOldError when `version` is older than `minimum`.

    Parameters
    - version: str | Unset
      dotted version to check; Unset means the running interpreter.
    - minimum: tuple[int, ...]
      components to compare; (18,) compares the major only, (3, 11) major and
      minor. Components missing from `version` count as zero.

    Returns the parsed version tuple when the gate passes.
    """
    version = coalesce(version, platform.python_version())
    parsed = parse_version(version)

    if not minimum or not all(isinstance(part, int) for part in minimum):
        raise TypeError("check_runtime() minimum must be a non-empty tuple of integers")

    # pad so "18" compares cleanly against (18, 0)
    padded = (parsed + (0,) * len(minimum))[:len(minimum)]
    if padded < tuple(minimum):
        required = ".".join(map(str, minimum))
        trigger(RuntimeTooOldError(
            "runtime %s detected, runway requires %s or newer" % (version, required),
            title="runtime too old",
            code=FaultCode.RUNTIME_TOO_OLD,
            hint="upgrade to version %s or newer and run the command again" % required,
            version=version,
            minimum=tuple(minimum),
            docs=getdoc(FaultCode.RUNTIME_TOO_OLD),
        ))
    return parsed


__all__ = (
    "MINIMUM_RUNTIME",
    "parse_version",
    "check_runtime",
)
