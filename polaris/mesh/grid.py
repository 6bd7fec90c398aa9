"""Time, frequency and transverse grids."""

import numpy as np
from scipy.constants import c as c_light

from ..functions.maths import planck_taper
from ..logger import get_logger

logger = get_logger(__name__)


def _freeze(*arrays):
    for arr in arrays:
        arr.setflags(write=False)


class _TimeGrid:
    """
    Shared frequency limits of the time grids.

    The following variables must be given in SI units,
    i.e., meters and seconds.
    """

    def __init__(self, zmax, reference_wavelength, wavelength_limits, time_range, dt=None):
        self.zmax = zmax
        self.reference_wavelength = reference_wavelength
        self.time_range = time_range
        self.dt_max = np.inf if dt is None else dt

        lam_min, lam_max = sorted(wavelength_limits)
        self.w0 = 2 * np.pi * c_light / reference_wavelength
        self.wmin = 2 * np.pi * c_light / lam_max
        self.wmax = 2 * np.pi * c_light / lam_min
        self.wmax_win = 1.1 * self.wmax

    def _init_windows(self):
        """Set apodisation windows and the valid-frequency mask."""
        half = self.time_range / 2
        self.twin = planck_taper(self.t, self.t.min(), -half, half, self.t.max())
        self.towin = planck_taper(self.to, self.to.min(), -half, half, self.to.max())
        self.wwin = planck_taper(
            self.w, self.wmin / 2, self.wmin, self.wmax, self.wmax_win
        )
        self.sidx = (self.w > self.wmin / 2) & (self.w < self.wmax_win)
        _freeze(
            self.t, self.to, self.w, self.wo,
            self.twin, self.towin, self.wwin, self.sidx,
        )

    def _log_summary(self):
        logger.info(
            "%s: %d native / %d oversampled samples, dt = %.3e s",
            type(self).__name__, len(self.t), len(self.to), self.t[1] - self.t[0],
        )
        logger.info(
            "%s: frequency window %.4e - %.4e rad/s",
            type(self).__name__, self.wmin, self.wmax,
        )


class RealGrid(_TimeGrid):
    """
    Grid for real fields.

    Frequencies are non-negative (`len(w) == len(t)//2 + 1`) and the
    oversampled time axis resolves six times the highest frequency.
    """

    field_dtype = np.float64

    def __init__(self, zmax, reference_wavelength, wavelength_limits, time_range, dt=None):
        super().__init__(zmax, reference_wavelength, wavelength_limits, time_range, dt)
        self._init_axes()
        self._init_windows()
        self._log_summary()

    def _init_axes(self):
        """Set native and oversampled axes."""
        f_max = self.wmax / (2 * np.pi)
        dto = min(1 / (6 * f_max), self.dt_max)
        samples = 2 ** int(np.ceil(np.log2(self.time_range / dto)))
        trange_even = dto * samples

        self.to = (np.arange(samples) - samples // 2) * dto
        self.wo = 2 * np.pi * np.fft.rfftfreq(samples, dto)

        # crop to a power of two plus one above the window edge
        crop = int(np.argmax(self.wo > self.wmax_win))
        crop = 2 ** int(np.ceil(np.log2(crop))) + 1
        self.w = self.wo[:crop].copy()

        nt = 2 * (crop - 1)
        dt = np.pi / self.w[-1]
        self.t = (np.arange(nt) - nt // 2) * dt
        self.trange_even = trange_even


class EnvGrid(_TimeGrid):
    """
    Grid for complex envelopes around the reference frequency `w0`.

    Frequencies are absolute (`w0 + dw`) and stored in FFT order, so
    `len(w) == len(t)`. The oversampled axis covers the third-order
    mixing products of the band, including the third harmonic when
    `thg` is set.
    """

    field_dtype = np.complex128

    def __init__(self, zmax, reference_wavelength, wavelength_limits, time_range,
                 dt=None, thg=False):
        super().__init__(zmax, reference_wavelength, wavelength_limits, time_range, dt)
        self.thg = thg
        self._init_axes()
        self._init_windows()
        self._log_summary()

    def _init_axes(self):
        """Set native and oversampled axes."""
        half_band = 1.25 * max(self.wmax_win - self.w0, self.w0 - self.wmin / 2)
        dt = min(np.pi / half_band, self.dt_max)
        nt = 2 ** int(np.ceil(np.log2(self.time_range / dt)))

        if self.thg:
            mixing = 3 * self.wmax_win - self.w0
        else:
            mixing = 3 * half_band
        factor = max(1, int(np.ceil(np.log2(mixing * dt / np.pi))))
        no = nt * 2**factor
        dto = dt * nt / no

        self.t = (np.arange(nt) - nt // 2) * dt
        self.to = (np.arange(no) - no // 2) * dto
        self.w = self.w0 + 2 * np.pi * np.fft.fftfreq(nt, dt)
        self.wo = self.w0 + 2 * np.pi * np.fft.fftfreq(no, dto)
        self.trange_even = nt * dt


class FreeGrid:
    """
    Transverse grid for full free-space propagation.

    Parameters
    ----------
    Rx, Ry : float
        Half-widths of the transverse window [m].
    Nx, Ny : int
        Number of points along each transverse axis.

    """

    def __init__(self, Rx, Nx, Ry=None, Ny=None):
        Ry = Rx if Ry is None else Ry
        Ny = Nx if Ny is None else Ny
        self.Nx = Nx
        self.Ny = Ny
        self.dx = 2 * Rx / Nx
        self.dy = 2 * Ry / Ny
        self.x = (np.arange(Nx) - Nx // 2) * self.dx
        self.y = (np.arange(Ny) - Ny // 2) * self.dy
        self.kx = 2 * np.pi * np.fft.fftfreq(Nx, self.dx)
        self.ky = 2 * np.pi * np.fft.fftfreq(Ny, self.dy)
        _freeze(self.x, self.y, self.kx, self.ky)
