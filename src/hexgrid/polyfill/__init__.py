__version__ = "v0.1.0"


__all__ = [
    "__version__",
    "cli",
    "config",
    "constants",
    "errors",
    "features",
    "geometry",
    "grid",
    "polyfill",
    "rasterizer",
    "sampler",
    "vector",
]

from . import cli
from . import config
from . import constants
from . import errors
from . import features
from . import geometry
from . import grid
from . import polyfill
from . import rasterizer
from . import sampler
from . import vector
