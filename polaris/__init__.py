"""
Root initialization file for importing Polaris package and modules.
"""

from ._version import __version__
from .config import ConfigOptions
from .data.store import GridCondition, HDF5Output, MemoryOutput
from .errors import ConfigurationError
from .mesh.grid import EnvGrid, FreeGrid, RealGrid
from .mesh.hankel import QDHT
from .simulation import Simulation
from .transforms import (
    TransFree,
    TransModal,
    TransModeAvg,
    TransRadial,
)

__all__ = [
    "__version__",
    "ConfigOptions",
    "ConfigurationError",
    "Simulation",
    "RealGrid",
    "EnvGrid",
    "FreeGrid",
    "QDHT",
    "TransModeAvg",
    "TransModal",
    "TransRadial",
    "TransFree",
    "GridCondition",
    "MemoryOutput",
    "HDF5Output",
]
