"""
Helper module injected into "medium.py" for computing the refractive index
of a given material. This is done using Sellmeier semi-empirical equations.

Air dispersion uses a two-term dispersion formula, with five parameters,
from E. R. Peck and K. Reeder (1972). The wavelength validity range goes from
0.23 microns (far-UV) to 1.69 microns (near-IR) at 15 degrees Celsius.

Water dispersion uses a four-term dispersion formula, with five parameters,
from K. D. Mielenz (1978). The wavelength validity range goes from
0.235 microns (far-UV) to 1.028 microns (near-IR) at 20 degrees Celsius.

Silica dispersion uses a three-term dispersion formula, with six parameters,
from I. H. Malitson (1965). The wavelength validity range goes from
0.21 microns (far-UV) to 3.71 microns (mid-IR) at 20 degrees Celsius.

How this works
--------------
Every function takes the vacuum wavelength in meters and returns the
refractive index. Peck's 'sigma' variable is the vacuum wavenumber in
reciprocal microns, while Mielenz's and Malitson's 'lambda' is the
wavelength in microns, so a unit conversion is computed first.

Outside their validity ranges the formulas are only extrapolations. Water
and silica clip n**2 at one so the index stays real past their poles.

"""

import numpy as np


def sellmeier_air(wavelength):
    """Return the refractive index of air from Peck's model at 15 °C."""
    coeff_a0 = 1e-8
    coeff_b1, coeff_b2 = 5791817, 167909
    coeff_c1, coeff_c2 = 238.0185, 57.362

    sigma2 = (1e-6 / np.asarray(wavelength, dtype=np.float64)) ** 2

    return 1 + coeff_a0 * (coeff_b1 / (coeff_c1 - sigma2) + coeff_b2 / (coeff_c2 - sigma2))


def sellmeier_water(wavelength):
    """Return the refractive index of water from Mielenz's model at 20 °C."""
    coeff_b1, coeff_b2, coeff_b3, coeff_b4 = (
        1.7604457,
        4.03368e-3,
        1.54182e-2,
        6.44277e-3,
    )
    coeff_c1 = 1.49119e-2

    lam = 1e6 * np.asarray(wavelength, dtype=np.float64)
    l2 = lam**2

    n2 = coeff_b1 + coeff_b2 * lam - coeff_b3 * l2 + coeff_b4 / (l2 - coeff_c1)
    return np.sqrt(np.maximum(n2, 1.0))


def sellmeier_silica(wavelength):
    """Return the refractive index of fused silica from Malitson's model at 20 °C."""
    coeff_b1, coeff_b2, coeff_b3 = 0.6961663, 0.4079426, 0.8974794
    coeff_c1, coeff_c2, coeff_c3 = 0.0684043**2, 0.1162414**2, 9.896161**2

    lam = 1e6 * np.asarray(wavelength, dtype=np.float64)
    l2 = lam**2

    chi = l2 * (
        coeff_b1 / (l2 - coeff_c1)
        + coeff_b2 / (l2 - coeff_c2)
        + coeff_b3 / (l2 - coeff_c3)
    )
    return np.sqrt(np.maximum(1 + chi, 1.0))
