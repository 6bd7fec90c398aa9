"""Input pulses on the native time grid, scaled to a given energy."""

import numpy as np
from scipy.constants import c as c_light

from ..errors import ConfigurationError
from ..functions.fourier import EnvFourier, RealFourier
from ..functions.maths import gauss

PULSE_SHAPES = ("gaussian", "sech")


class Pulse:
    """
    Laser pulse.

    Parameters
    ----------
    grid : RealGrid or EnvGrid
        Simulation grid.
    pulse_name : str
        "gaussian" or "sech" temporal intensity profile.
    pulse_par : PulseConfig
        Wavelength, intensity FWHM duration, energy and optional waist.

    """

    def __init__(self, grid, pulse_name, pulse_par):
        pulse_name = pulse_name.lower()
        if pulse_name not in PULSE_SHAPES:
            raise ConfigurationError(
                f"Invalid pulse shape: '{pulse_name}'. "
                f"Available shapes are: {', '.join(PULSE_SHAPES)}"
            )
        self.grid = grid
        self.shape = pulse_name

        # Initialize parameters
        self.wavelength = pulse_par.wavelength
        self.duration = pulse_par.duration
        self.energy = pulse_par.energy
        self.waist = pulse_par.waist
        self.frequency_0 = 2 * np.pi * c_light / self.wavelength
        self.envelope = np.issubdtype(grid.field_dtype, np.complexfloating)

    def intensity_profile(self, t):
        """Temporal intensity profile with unit peak."""
        if self.shape == "gaussian":
            return gauss(t, fwhm=self.duration)
        tau = self.duration / (2 * np.arccosh(np.sqrt(2)))
        return 1 / np.cosh(t / tau) ** 2

    def time_field(self):
        """Unscaled field (or envelope) on the native time grid."""
        t = self.grid.t
        amp = np.sqrt(self.intensity_profile(t))
        if self.envelope:
            return amp * np.exp(1j * (self.frequency_0 - self.grid.w0) * t)
        return amp * np.cos(self.frequency_0 * t)

    def _to_freq(self, Et, spatial_axes=()):
        n = len(self.grid.t)
        if self.envelope:
            return EnvFourier(n, spatial_axes).forward(Et)
        return RealFourier(n, spatial_axes).forward(Et)

    def _scaled(self, Et, energyfun):
        return Et * np.sqrt(self.energy / energyfun(self.grid.t, Et))

    def field_modal(self, energyfun, nmodes=1):
        """
        Frequency-domain field of a single mode carrying the pulse energy.

        Returns
        -------
        Ew : (nw,) or (nw, nmodes) ndarray
            Spectrum; with several modes, all energy is in the first one.

        """
        Et = self._scaled(self.time_field(), energyfun)
        Ew = self._to_freq(Et)
        if nmodes == 1:
            return Ew
        out = np.zeros((len(Ew), nmodes), dtype=np.complex128)
        out[:, 0] = Ew
        return out

    def _require_waist(self):
        if self.waist is None:
            raise ConfigurationError("A beam waist is needed for a free-space pulse.")

    def field_radial(self, q, energyfun):
        """(w, k) field of a Gaussian beam on the Hankel grid `q` (axis 1)."""
        self._require_waist()
        Et = self.time_field()[:, None] * np.exp(-(q.r / self.waist) ** 2)[None, :]
        Et = self._scaled(Et, energyfun)
        return q.forward(self._to_freq(Et))

    def field_free(self, xygrid, energyfun):
        """(w, ky, kx) field of a Gaussian beam on the transverse grid."""
        self._require_waist()
        r2 = xygrid.x[None, :] ** 2 + xygrid.y[:, None] ** 2
        Et = self.time_field()[:, None, None] * np.exp(-r2 / self.waist**2)[None]
        Et = self._scaled(Et, energyfun)
        return self._to_freq(Et, spatial_axes=(1, 2))
