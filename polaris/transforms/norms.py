"""
Normalisation factors converting a nonlinear polarisation into the
source term of the propagation equation.

How this works
--------------

1. Every provider is called as `norm(z)` and returns an array whose shape
is fixed at construction. Position-dependent providers recompute it on
every call; `ConstantNorm` evaluates once and returns the same values
for every `z`.

2. The radial and free-space factors are sqrt(beta^2) / (mu0 w) with
beta^2 = k^2 - kperp^2 and k = n(w, z) w / c. Where beta^2 <= 0
(evanescent or cut-off) and at w = 0 the factor is exactly 1.0.
k^2 is only evaluated on the valid band `sidx` and is zero outside it,
so bins outside the band always end up at 1.0.

"""

import numpy as np
from numba import njit, prange
from scipy.constants import c as c_light
from scipy.constants import epsilon_0, mu_0

MU_0 = mu_0


@njit(parallel=True)
def _fill_norm(out, omega, k2, kperp2):
    """
    Fill the (nw, M) normalisation array.

    Parameters
    ----------
    out : (nw, M) array_like
        Normalisation factors (output).
    omega : (nw,) array_like
        Angular frequencies.
    k2 : (nw,) array_like
        Squared wavenumber in the medium.
    kperp2 : (M,) array_like
        Squared transverse wavenumbers.

    """
    nw = omega.shape[0]
    m = kperp2.shape[0]
    for ii in prange(nw):  # pylint: disable=not-an-iterable
        w = omega[ii]
        for jj in range(m):
            if w == 0:
                out[ii, jj] = 1.0
                continue
            beta2 = k2[ii] - kperp2[jj]
            if beta2 <= 0:
                out[ii, jj] = 1.0
                continue
            out[ii, jj] = np.sqrt(beta2) / (MU_0 * w)


class ModalNorm:
    """Constant modal factor -i w / 4."""

    def __init__(self, w):
        self.out = -1j * np.asarray(w) / 4

    def __call__(self, z):
        return self.out


class ModeAverageNorm:
    """
    Mode-averaged factor beta(w, z) c^(3/2) sqrt(2 eps0) / (w sqrt(Aeff(z))).

    Bins outside `sidx` (and w = 0) hold 1.0 so the division stays finite;
    `wwin` zeroes them downstream.

    Parameters
    ----------
    grid : RealGrid or EnvGrid
        Simulation grid.
    beta : callable
        `beta(w, z)` propagation constant, evaluated on `grid.w[grid.sidx]`.
    aeff : callable
        `aeff(z)` effective area.

    """

    def __init__(self, grid, beta, aeff):
        self.grid = grid
        self.beta = beta
        self.aeff = aeff
        self.sidx = grid.sidx & (grid.w != 0)
        self.out = np.zeros(len(grid.w))
        self.pre = c_light**1.5 * np.sqrt(2 * epsilon_0) / grid.w[self.sidx]

    def __call__(self, z):
        self.out.fill(1.0)
        w = self.grid.w[self.sidx]
        self.out[self.sidx] = self.beta(w, z) * self.pre / np.sqrt(self.aeff(z))
        return self.out


class _TransverseNorm:
    """Shared radial and free-space factor on a flattened transverse axis."""

    def __init__(self, grid, kperp2, shape, nfun):
        self.grid = grid
        self.nfun = nfun
        self.kperp2 = np.ascontiguousarray(np.ravel(kperp2), dtype=np.float64)
        self.omega = np.ascontiguousarray(grid.w, dtype=np.float64)
        self.k2 = np.zeros(len(grid.w))
        self.out = np.zeros((len(grid.w),) + tuple(shape))

    def __call__(self, z):
        sidx = self.grid.sidx
        w = self.omega[sidx]
        self.k2[sidx] = (self.nfun(w, z) * w / c_light) ** 2
        _fill_norm(self.out.reshape(len(self.omega), -1), self.omega, self.k2, self.kperp2)
        return self.out


class RadialNorm(_TransverseNorm):
    """(nw, N) factor on the wavenumbers of a Hankel transform `q`."""

    def __init__(self, grid, q, nfun):
        super().__init__(grid, q.k**2, (q.N,), nfun)


class FreeNorm(_TransverseNorm):
    """(nw, ny, nx) factor on the wavenumbers of a `FreeGrid`."""

    def __init__(self, grid, xygrid, nfun):
        kperp2 = xygrid.kx[None, :] ** 2 + xygrid.ky[:, None] ** 2
        super().__init__(grid, kperp2, kperp2.shape, nfun)


class ConstantNorm:
    """Evaluate a provider once at `z` and return a private copy forever."""

    def __init__(self, provider, z=0.0):
        self.out = np.array(provider(z), copy=True)

    def __call__(self, z):
        return self.out


def _wavelength_index(nfun):
    def nfun_w(w, z):
        return nfun(2 * np.pi * c_light / w)

    return nfun_w


def const_norm_radial(grid, q, nfun):
    """Constant radial factor from an index function of wavelength only."""
    return ConstantNorm(RadialNorm(grid, q, _wavelength_index(nfun)))


def const_norm_free(grid, xygrid, nfun):
    """Constant free-space factor from an index function of wavelength only."""
    return ConstantNorm(FreeNorm(grid, xygrid, _wavelength_index(nfun)))
