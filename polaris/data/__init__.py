"""Data subpackage initialization file for importing utilities."""

from .paths import get_base_dir, get_fig_dir, get_user_paths, set_base_dir
from .store import GridCondition, HDF5Output, MemoryOutput

__all__ = [
    "GridCondition",
    "MemoryOutput",
    "HDF5Output",
    "get_base_dir",
    "get_fig_dir",
    "get_user_paths",
    "set_base_dir",
]
