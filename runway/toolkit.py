"""
The toolkit: the operations runway dispatches to, and how it finds them.

runway only routes; the work (scaffolding, bundling, serving, listing routes,
revealing entry points) lives in a toolkit, any object implementing the
Toolkit protocol below. Every operation but setup() is a coroutine function and
is awaited by the dispatcher; setup() is called synchronously.

Discovery (load_toolkit)
1. an explicit module path, or the RUNWAY_TOOLKIT environment variable;
2. otherwise the 'runway.toolkit' entry-point group, e.g. in a toolkit's
   pyproject.toml:

       [project.entry-points."runway.toolkit"]
       default = "mytools.runway:toolkit"

A module given by path contributes its module-level 'toolkit' attribute when
it has one, and is used as the toolkit itself otherwise (plain async
functions at module level satisfy the protocol).
"""
import importlib
import os
from importlib.metadata import entry_points
from typing import Protocol, runtime_checkable

from .faults import (
    AmbiguousToolkitWarning,
    FaultCode,
    IncompleteToolkitError,
    MissingToolkitError,
    ToolkitImportError,
    getdoc,
    trigger,
)
from .utils import Unset

ENTRY_POINT_GROUP = "runway.toolkit"
TOOLKIT_VARIABLE = "RUNWAY_TOOLKIT"


@runtime_checkable
class Toolkit(Protocol):
    """Operations the dispatcher calls. Errors they raise are propagated verbatim."""

    async def init(self, directory, /, *, delete_script=None): ...

    async def routes(self, directory, format, /): ...

    async def build(self, directory, mode, sourcemap, /): ...

    async def vite_build(self, directory, flags, /): ...

    async def watch(self, directory, mode, /): ...

    def setup(self): ...

    async def generate_entry(self, entry, variant, typescript, /): ...

    async def dev(self, directory, flags, /): ...

    async def vite_dev(self, directory, flags, /): ...


OPERATIONS = (
    "init",
    "routes",
    "build",
    "vite_build",
    "watch",
    "setup",
    "generate_entry",
    "dev",
    "vite_dev",
)


def validate(toolkit, /, *, source="toolkit"):
    """
    Check that `toolkit` provides every operation; return it unchanged.

    Raises
    - IncompleteToolkitError naming the missing operations.
    """
    missing = [name for name in OPERATIONS if not callable(getattr(toolkit, name, None))]
    if missing:
        trigger(IncompleteToolkitError(
            "%s does not provide %s" % (source, ", ".join(map(repr, missing))),
            title="incomplete toolkit",
            code=FaultCode.INCOMPLETE_TOOLKIT,
            missing=tuple(missing),
            hint="implement the missing operations or point %s at another toolkit" % TOOLKIT_VARIABLE,
            docs=getdoc(FaultCode.INCOMPLETE_TOOLKIT),
        ))
    return toolkit


def _import(source):
    try:
        module = importlib.import_module(source)
    except ImportError as exception:
        return trigger(ToolkitImportError(
            "unable to import toolkit module %r: %s" % (source, exception),
            title="toolkit import failed",
            code=FaultCode.TOOLKIT_IMPORT,
            source=source,
            hint="check that the module is installed and %s is spelled correctly" % TOOLKIT_VARIABLE,
            docs=getdoc(FaultCode.TOOLKIT_IMPORT),
        ))
    return getattr(module, "toolkit", module)


def _discover():
    candidates = sorted(entry_points(group=ENTRY_POINT_GROUP), key=lambda entry: entry.name)
    if not candidates:
        return None

    chosen = candidates[0]
    if len(candidates) > 1:
        trigger(AmbiguousToolkitWarning(
            "%d toolkits are installed, using %r" % (len(candidates), chosen.name),
            title="several toolkits installed",
            code=FaultCode.AMBIGUOUS_TOOLKIT,
            candidates=tuple(entry.name for entry in candidates),
            hint="set %s to pick one explicitly" % TOOLKIT_VARIABLE,
            docs=getdoc(FaultCode.AMBIGUOUS_TOOLKIT),
        ))

    try:
        return chosen.load(), "entry point %r" % chosen.name
    except (ImportError, AttributeError) as exception:
        return trigger(ToolkitImportError(
            "unable to load toolkit entry point %r: %s" % (chosen.name, exception),
            title="toolkit import failed",
            code=FaultCode.TOOLKIT_IMPORT,
            source=chosen.value,
            hint="reinstall the package providing %r" % chosen.name,
            docs=getdoc(FaultCode.TOOLKIT_IMPORT),
        ))


def load_toolkit(source=Unset, /, *, environ=Unset):
    """
    Locate, import and validate the toolkit.

    Parameters
    - source: str | Unset
      dotted module path; Unset falls back to RUNWAY_TOOLKIT, then to the
      'runway.toolkit' entry points.
    - environ: Mapping | Unset
      environment to read RUNWAY_TOOLKIT from (os.environ by default).

    Raises
    - MissingToolkitError, ToolkitImportError, IncompleteToolkitError.
    """
    if source is Unset:
        source = (os.environ if environ is Unset else environ).get(TOOLKIT_VARIABLE) or Unset

    if source is not Unset:
        if not isinstance(source, str):
            raise TypeError("load_toolkit() argument must be a string")
        return validate(_import(source), source="module %r" % source)

    discovered = _discover()
    if discovered is None:
        return trigger(MissingToolkitError(
            "no toolkit is installed",
            title="missing toolkit",
            code=FaultCode.MISSING_TOOLKIT,
            hint="install a toolkit package or set %s to a module path" % TOOLKIT_VARIABLE,
            docs=getdoc(FaultCode.MISSING_TOOLKIT),
        ))

    toolkit, origin = discovered
    return validate(toolkit, source=origin)


__all__ = (
    "ENTRY_POINT_GROUP",
    "TOOLKIT_VARIABLE",
    "OPERATIONS",
    "Toolkit",
    "validate",
    "load_toolkit",
)
