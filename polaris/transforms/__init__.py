"""Transforms subpackage initialization file for importing operators."""

from .base import TransformBase
from .free import TransFree
from .modal import TransModal
from .mode_average import TransModeAvg
from .norms import (
    ConstantNorm,
    FreeNorm,
    ModalNorm,
    ModeAverageNorm,
    RadialNorm,
    const_norm_free,
    const_norm_radial,
)
from .radial import TransRadial

__all__ = [
    "TransformBase",
    "TransModeAvg",
    "TransModal",
    "TransRadial",
    "TransFree",
    "ModalNorm",
    "ModeAverageNorm",
    "RadialNorm",
    "FreeNorm",
    "ConstantNorm",
    "const_norm_radial",
    "const_norm_free",
]
