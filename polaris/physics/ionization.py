"""
Tunnel ionization rate of Ammosov, Delone and Krainov (ADK).

The rate is written for a hydrogen-like effective principal quantum
number n* = 1 / sqrt(2 Ip / Eh) and depends only on the instantaneous
field strength, so it can be evaluated directly on a real field.
"""

import numpy as np
from scipy.constants import e, electron_mass, hbar, physical_constants
from scipy.special import gamma

HARTREE = physical_constants["Hartree energy"][0]

# exp() underflows below this exponent
_MIN_EXPONENT = -700.0


class ADKRate:
    """
    ADK ionization rate as a function of the electric field.

    Parameters
    ----------
    ionpot : float
        Ionization potential [J].

    """

    def __init__(self, ionpot):
        self.ionpot = ionpot
        self.nstar = 1 / np.sqrt(2 * ionpot / HARTREE)
        self.cnsq = 2 ** (2 * self.nstar) / (
            self.nstar * gamma(self.nstar + 1) * gamma(self.nstar)
        )
        self.omega_p = ionpot / hbar
        self.omega_t_prefac = e / np.sqrt(2 * electron_mass * ionpot)
        self.field_min = -4 / 3 * self.omega_p / (self.omega_t_prefac * _MIN_EXPONENT)

    def __call__(self, out, E):
        """
        Fill `out` with the rate [1/s] for the field `E` [V/m].

        Parameters
        ----------
        out : ndarray
            Rate buffer (output), same shape as `E`.
        E : ndarray
            Field strength, or field magnitude for vector fields.

        """
        out.fill(0.0)
        mag = np.abs(E)
        mask = mag > self.field_min
        ratio = self.omega_p / (self.omega_t_prefac * mag[mask])
        out[mask] = (
            self.omega_p
            * self.cnsq
            * (4 * ratio) ** (2 * self.nstar - 1)
            * np.exp(-4 / 3 * ratio)
        )
        return out
