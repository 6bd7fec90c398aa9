"""
Helper module for computing the pulse energy of a field.

Each factory takes the geometry (grid, Hankel transform or transverse
axes) and returns the estimators. Real fields are integrated through
their analytic signal, so the result is the cycle-averaged energy.
"""

import numpy as np
from scipy.constants import c as c_light
from scipy.constants import epsilon_0
from scipy.integrate import simpson
from scipy.signal import hilbert


def _is_envelope(grid):
    return np.issubdtype(grid.field_dtype, np.complexfloating)


def energy_modal(grid):
    """
    Energy estimators for a modal (power-normalised) field.

    Parameters
    ----------
    grid : RealGrid or EnvGrid
        Simulation grid.

    Returns
    -------
    energy_t : callable
        `energy_t(t, Et)` from the time-domain field.
    energy_w : callable
        `energy_w(w, Ew)` from the native frequency-domain field.

    """
    if _is_envelope(grid):
        dw = grid.w[1] - grid.w[0]
        span = len(grid.w) * dw
        prefac = 2 * np.pi * dw / span**2

        def energy_t(t, Et):
            return np.abs(simpson(np.abs(Et) ** 2, x=t, axis=0))

        def energy_w(w, Ew):
            return prefac * np.sum(np.abs(Ew) ** 2, axis=0)

        return energy_t, energy_w

    prefac = 2 * np.pi / grid.w[-1] ** 2

    def energy_t(t, Et):
        Eta = hilbert(Et, axis=0)
        return np.abs(simpson(np.abs(Eta) ** 2, x=t, axis=0))

    def energy_w(w, Ew):
        return prefac * simpson(np.abs(Ew) ** 2, x=w, axis=0)

    return energy_t, energy_w


def energy_radial(grid, q):
    """
    Energy estimators for a radially symmetric field.

    Parameters
    ----------
    grid : RealGrid or EnvGrid
        Simulation grid.
    q : QDHT
        Hankel transform defining the radial and wavenumber samples.
        Fields are (nt, N) or (nw, N) arrays.

    Returns
    -------
    energy_t, energy_w : callables
        Time- and frequency-domain estimators.

    """
    area = 2 * np.pi * c_light * epsilon_0 / 2
    intg_t, intg_w = energy_modal(grid)

    def energy_t(t, Et):
        return area * q.integrate_r(intg_t(t, Et))

    def energy_w(w, Ew):
        return area * q.integrate_k(intg_w(w, Ew))

    return energy_t, energy_w


def energy_free(x, y):
    """Time-domain energy estimator of a real (t, y, x) field."""
    dx = abs(x[1] - x[0])
    dy = abs(y[1] - y[0])

    def energyfun(t, Et):
        Eta = hilbert(Et, axis=0)
        intg = np.sum(np.abs(Eta) ** 2) * dx * dy * abs(t[1] - t[0])
        return c_light * epsilon_0 / 2 * intg

    return energyfun


def energy_free_env(x, y):
    """Time-domain energy estimator of a complex-envelope (t, y, x) field."""
    dx = abs(x[1] - x[0])
    dy = abs(y[1] - y[0])

    def energyfun(t, Et):
        intg = np.sum(np.abs(Et) ** 2) * dx * dy * abs(t[1] - t[0])
        return c_light * epsilon_0 / 2 * intg

    return energyfun
