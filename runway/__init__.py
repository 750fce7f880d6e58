__title__ = 'runway'
__author__ = 'Runway Developers'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.1.0"

from .arguments import *
from .commands import *
from .faults import *
from .flags import *
from .runtime import *
from .schema import *
from .toolkit import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of each layer, leaf first
__all__ += arguments.__all__  # type: ignore[name-defined]
__all__ += commands.__all__  # type: ignore[name-defined]
__all__ += faults.__all__  # type: ignore[name-defined]
__all__ += flags.__all__  # type: ignore[name-defined]
__all__ += runtime.__all__  # type: ignore[name-defined]
__all__ += schema.__all__  # type: ignore[name-defined]
__all__ += toolkit.__all__  # type: ignore[name-defined]
