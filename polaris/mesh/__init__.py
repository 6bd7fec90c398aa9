"""Mesh subpackage initialization file for importing grids."""

from .grid import EnvGrid, FreeGrid, RealGrid
from .hankel import QDHT

__all__ = [
    "RealGrid",
    "EnvGrid",
    "FreeGrid",
    "QDHT",
]
