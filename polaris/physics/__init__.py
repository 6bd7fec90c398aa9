"""Physics subpackage initialization file for importing utilities."""

from .capillary import MarcatilliMode, capillary_modes, normalised_fields
from .ionization import ADKRate
from .medium import Medium
from .pulse import Pulse
from .responses import (
    KerrEnv,
    KerrEnvTHG,
    KerrField,
    KerrFieldNoTHG,
    PlasmaCumtrapz,
)

__all__ = [
    "Medium",
    "Pulse",
    "MarcatilliMode",
    "capillary_modes",
    "normalised_fields",
    "ADKRate",
    "KerrField",
    "KerrFieldNoTHG",
    "KerrEnv",
    "KerrEnvTHG",
    "PlasmaCumtrapz",
]
