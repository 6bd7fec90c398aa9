"""
Hollow capillary modes in the Marcatili-Schmeltzer approximation.

The core is a dielectric (usually a gas) of index n_core inside a
cladding of index n_clad. Modes are labelled HE_nm, TE_01 or TM_01 and
are written in polar coordinates (r, theta) over the cross-section
r <= a.
"""

import numpy as np
from scipy.constants import c as c_light
from scipy.constants import epsilon_0, mu_0
from scipy.integrate import quad
from scipy.special import jn_zeros, jv

from ..errors import ConfigurationError

MODE_KINDS = ("HE", "TE", "TM")


class MarcatilliMode:
    """
    Capillary mode with propagation constant, loss and field profile.

    Parameters
    ----------
    a : float
        Core radius [m].
    coren : callable
        Core refractive index as a function of angular frequency.
    cladn : callable
        Cladding refractive index as a function of angular frequency.
    n, m : int, default: 1
        Azimuthal and radial mode indices.
    kind : str, default: "HE"
        "HE", "TE" or "TM". TE and TM only exist for n = 0, m = 1.
    phi : float, default: 0.0
        Azimuthal rotation of the field pattern. The HE11 mode with
        phi = 0 is polarised along y.
    loss : bool, default: True
        Include the leaky-mode loss in `alpha`.

    """

    def __init__(self, a, coren, cladn, n=1, m=1, kind="HE", phi=0.0, loss=True):
        kind = kind.upper()
        if kind not in MODE_KINDS:
            raise ConfigurationError(
                f"Invalid mode kind: '{kind}'. "
                f"Available kinds are: {', '.join(MODE_KINDS)}"
            )
        if kind in ("TE", "TM"):
            if n != 0 or m != 1:
                raise ConfigurationError("TE and TM modes require n=0 and m=1")
            self.unm = jn_zeros(1, 1)[0]
            self.order = 1
        else:
            self.unm = jn_zeros(n - 1, m)[-1]
            self.order = n - 1

        self.a = a
        self.n = n
        self.m = m
        self.kind = kind
        self.phi = phi
        self.coren = coren
        self.cladn = cladn
        self.loss = loss

    def __repr__(self):
        return f"MarcatilliMode({self.kind}{self.n}{self.m}, a={self.a:.3e})"

    def dimlimits(self, z=0.0):
        """Integration domain over the cross-section."""
        return ("polar", (0.0, 0.0), (self.a, 2 * np.pi))

    def beta(self, omega, z=0.0):
        """Propagation constant [1/m]."""
        omega = np.asarray(omega, dtype=np.float64)
        chi = self.coren(omega) ** 2 - 1
        return omega / c_light * (
            1 + chi / 2 - c_light**2 * self.unm**2 / (2 * omega**2 * self.a**2)
        )

    def alpha(self, omega, z=0.0):
        """Attenuation constant [1/m]; zero when the loss is switched off."""
        omega = np.asarray(omega, dtype=np.float64)
        if not self.loss:
            return np.zeros_like(omega)

        nu = self.cladn(omega)
        root = np.real(np.sqrt(nu.astype(np.complex128) ** 2 - 1))
        if self.kind == "HE":
            vp = (nu**2 + 1) / (2 * root)
        elif self.kind == "TE":
            vp = 1 / root
        else:
            vp = nu**2 / root
        return 2 * c_light**2 * self.unm**2 / (self.a**3 * omega**2) * vp

    def dB_per_m(self, omega, z=0.0):
        """Loss in decibel per meter."""
        return 10 / np.log(10) * self.alpha(omega, z)

    def losslength(self, omega, z=0.0):
        """Distance over which the loss reaches 1/e [m]."""
        return 1 / self.alpha(omega, z)

    def _radial(self, r):
        return jv(self.order, r * self.unm / self.a)

    def field(self):
        """
        Unnormalised field profile.

        Returns
        -------
        fun : callable
            `fun(r, theta)` returning an (..., 2) array with Ex and Ey.

        """
        if self.kind == "HE":
            def fun(r, theta):
                arg = self.n * (theta + self.phi)
                ex = np.cos(theta) * np.sin(arg) - np.sin(theta) * np.cos(arg)
                ey = np.sin(theta) * np.sin(arg) + np.cos(theta) * np.cos(arg)
                return self._radial(r)[..., None] * np.stack([ex, ey], axis=-1)
        elif self.kind == "TE":
            def fun(r, theta):
                vec = np.stack([-np.sin(theta), np.cos(theta)], axis=-1)
                return self._radial(r)[..., None] * vec
        else:
            def fun(r, theta):
                vec = np.stack([np.cos(theta), np.sin(theta)], axis=-1)
                return self._radial(r)[..., None] * vec
        return fun

    def _radial_integral(self, power):
        # the polarisation vector has unit length everywhere
        val, _ = quad(
            lambda x: np.abs(jv(self.order, x * self.unm)) ** power * x,
            0.0, 1.0, epsabs=0.0, epsrel=1e-12, limit=200,
        )
        return 2 * np.pi * self.a**2 * val

    def N(self, z=0.0):
        """Power normalisation 1/2 sqrt(eps0/mu0) int |E|^2 dA."""
        return 0.5 * np.sqrt(epsilon_0 / mu_0) * self._radial_integral(2)

    def aeff(self, z=0.0):
        """Effective area (int |E|^2 dA)^2 / int |E|^4 dA [m2]."""
        return self._radial_integral(2) ** 2 / self._radial_integral(4)

    def normalised_field(self, z=0.0):
        """Field profile carrying unit power."""
        fun = self.field()
        scale = 1 / np.sqrt(self.N(z))

        def normed(r, theta):
            return scale * fun(r, theta)

        return normed


def normalised_fields(modes):
    """Make `exyfun(z)` returning the unit-power fields of every mode."""
    def exyfun(z=0.0):
        return [mode.normalised_field(z) for mode in modes]

    return exyfun


def capillary_modes(radius, coren, cladn, nmodes=1, loss=True):
    """First `nmodes` azimuthally symmetric HE_1m modes of a capillary."""
    return [
        MarcatilliMode(radius, coren, cladn, n=1, m=m, loss=loss)
        for m in range(1, nmodes + 1)
    ]
