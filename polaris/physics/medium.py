"""
Full medium properties module for a given option.

How this works
--------------

1. The module goal is storing the medium properties for a given
option, together with its dispersive behavior. This is done by
taking the configuration options for the chosen medium and one
of the Sellmeier formulas in "sellmeier.py".

2. For the chosen medium, the module checks first if this option
belongs to any of the available media. At the moment, only air,
water, and silica are available options.

3. The gas (air) index is scaled with the number density relative
to the density at which the Sellmeier formula was measured, so
n - 1 is proportional to the density. Condensed media ignore the
density for dispersion.

"""

import numpy as np
from scipy.constants import atm, c, k, zero_Celsius

from ..errors import ConfigurationError
from .sellmeier import sellmeier_air, sellmeier_silica, sellmeier_water

AIR_REFERENCE_DENSITY = atm / (k * (zero_Celsius + 15))


class Medium:
    """Chosen medium properties class."""

    _MEDIA = {
        "air": sellmeier_air,
        "water": sellmeier_water,
        "silica": sellmeier_silica,
    }

    def __init__(self, medium_name: str, medium_par):
        medium_name = medium_name.lower()
        if medium_name not in self._MEDIA:
            raise ConfigurationError(
                f"Invalid medium: '{medium_name}'. "
                f"Available media are: {', '.join(self._MEDIA.keys())}"
            )
        self.name = medium_name
        self.sellmeier = self._MEDIA[medium_name]
        self.is_gas = medium_name == "air"

        # Save all medium properties as direct attributes
        for key, value in medium_par.__dict__.items():
            setattr(self, key, value)

    def density_at(self, z):
        """Number density at propagation position `z` (uniform fill)."""
        return self.density

    def ref_index_wavelength(self, wavelength):
        """Refractive index as a function of vacuum wavelength."""
        n = self.sellmeier(wavelength)
        if self.is_gas:
            n = 1 + (n - 1) * self.density / AIR_REFERENCE_DENSITY
        return n

    def ref_index(self, omega, z=0.0):
        """
        Refractive index as a function of angular frequency.

        Parameters
        ----------
        omega : float or np.ndarray
            Angular frequency variable. Must be strictly positive.
        z : float, default: 0.0
            Propagation position.

        """
        return self.ref_index_wavelength(2 * np.pi * c / np.asarray(omega))
