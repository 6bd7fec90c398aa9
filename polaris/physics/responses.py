"""
Nonlinear responses of the medium.

Every response is a callable `response(out, E)` which adds the
polarisation (per unit number density) induced by the time-domain field
`E` into `out`. `E` is either a scalar field of shape (nt,) or a vector
field of shape (nt, npol).
"""

import numpy as np
from scipy.constants import e, electron_mass, epsilon_0
from scipy.signal import hilbert

from ..functions.maths import cumtrapz, cumtrapz_columns


def _square_norm(E):
    """|E|^2 summed over the polarisation axis of vector fields."""
    sq = np.abs(E) ** 2
    if E.ndim == 1:
        return sq
    return np.sum(sq, axis=1, keepdims=True)


class KerrField:
    """Instantaneous Kerr response of a real field, keeping the third harmonic."""

    def __init__(self, gamma3):
        self.gamma3 = gamma3

    def __call__(self, out, E):
        if E.ndim == 1:
            out += epsilon_0 * self.gamma3 * E**3
        else:
            out += epsilon_0 * self.gamma3 * np.sum(E**2, axis=1, keepdims=True) * E


class KerrFieldNoTHG:
    """
    Kerr response of a real field without third-harmonic generation.

    The cycle-averaged intensity comes from the analytic signal, which
    removes the 3w term from E^3.
    """

    def __init__(self, gamma3):
        self.gamma3 = gamma3

    def __call__(self, out, E):
        Ea = hilbert(E, axis=0)
        out += 3 / 4 * epsilon_0 * self.gamma3 * _square_norm(Ea) * E


class KerrEnv:
    """Kerr response of a complex envelope (self-phase modulation only)."""

    def __init__(self, gamma3):
        self.gamma3 = gamma3

    def __call__(self, out, E):
        out += 3 / 4 * epsilon_0 * self.gamma3 * _square_norm(E) * E


class KerrEnvTHG:
    """
    Kerr response of a complex envelope including the third harmonic.

    Parameters
    ----------
    gamma3 : float
        Third-order susceptibility per molecule [m2 / V2].
    w0 : float
        Envelope reference frequency [rad/s].
    t : (nt,) array_like
        Time axis the envelope is sampled on.

    """

    def __init__(self, gamma3, w0, t):
        self.gamma3 = gamma3
        self.phase = np.exp(2j * w0 * np.asarray(t))

    def __call__(self, out, E):
        phase = self.phase if E.ndim == 1 else self.phase[:, None]
        out += epsilon_0 * self.gamma3 / 4 * (
            3 * _square_norm(E) * E + E**3 * phase
        )


class PlasmaCumtrapz:
    """
    Plasma response of a real field driven by an ionization rate.

    How this works
    --------------
    1. The ionization fraction is 1 - exp(-int rate dt).
    2. Free electrons are accelerated by the field; the current is
       J = e^2/m_e int fraction E dt.
    3. The energy spent on ionization adds a loss current
       Ip rate (1 - fraction) E / |E|^2.
    4. The polarisation is the time integral of the total current.

    Parameters
    ----------
    t : (nt,) array_like
        Uniform time axis.
    ratefunc : callable
        `ratefunc(out, E)` filling the ionization rate [1/s].
    ionpot : float
        Ionization potential [J].

    """

    def __init__(self, t, ratefunc, ionpot):
        self.dt = float(t[1] - t[0])
        self.ratefunc = ratefunc
        self.ionpot = ionpot
        self.e_ratio = e**2 / electron_mass

        self.rate = np.zeros(len(t))
        self.fraction = np.zeros(len(t))

    def __call__(self, out, E):
        vector = E.ndim == 2
        mag2 = _square_norm(E)
        mag = np.sqrt(mag2[:, 0] if vector else mag2)

        self.ratefunc(self.rate, mag)
        cumtrapz(self.fraction, self.rate, self.dt)
        np.subtract(1.0, np.exp(-self.fraction), out=self.fraction)

        frac = self.fraction[:, None] if vector else self.fraction
        rate = self.rate[:, None] if vector else self.rate

        phase = np.ascontiguousarray(frac * self.e_ratio * E)
        J = np.empty_like(phase)
        P = np.empty_like(phase)
        self._integrate(J, phase)

        loss = np.zeros_like(phase)
        np.divide(
            self.ionpot * rate * (1 - frac) * E, mag2, out=loss, where=mag2 > 0
        )
        J += loss
        self._integrate(P, J)
        out += P

    def _integrate(self, out, y):
        if y.ndim == 1:
            cumtrapz(out, y, self.dt)
        else:
            cumtrapz_columns(out, y, self.dt)
