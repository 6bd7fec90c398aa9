"""
Quasi-discrete Hankel transform of order zero.

How this works
--------------

1. A function on [0, R] whose transform vanishes beyond K is sampled at
the scaled Bessel zeros r_n = j_n R / S, and its transform at
k_m = j_m / R, where S = j_(N+1) is the zero after the last sample and
K = S / R.

2. The transform pair

    F(k) = int_0^R f(r) J0(k r) r dr,  f(r) = int_0^K F(k) J0(k r) k dk

then reduces to the symmetric matrix
T_mn = 2 J0(j_m j_n / S) / (|J1(j_m)| |J1(j_n)| S), applied to the
samples weighted by 1/|J1|. T is orthogonal to a very good
approximation, so the discrete pair is energy conserving.

3. `integrate_r` and `integrate_k` are the matching quadratures of
int f r dr and int F k dk.

"""

import numpy as np
from scipy.special import j0, j1, jn_zeros


class QDHT:
    """
    Hankel transform acting along one axis of an array.

    Parameters
    ----------
    R : float
        Aperture radius [m].
    N : int
        Number of radial samples.
    axis : int, default: 0
        Array axis holding the radial (or wavenumber) samples.

    """

    def __init__(self, R, N, axis=0):
        self.R = R
        self.N = N
        self.axis = axis

        self._init_samples()
        self._init_matrix()

    def _init_samples(self):
        """Set radial and wavenumber samples."""
        roots = jn_zeros(0, self.N + 1)
        self.S = roots[-1]
        self.roots = roots[:-1]
        self.K = self.S / self.R
        self.r = self.roots * self.R / self.S
        self.k = self.roots / self.R
        self.J1 = np.abs(j1(self.roots))

    def _init_matrix(self):
        """Set transform matrix and quadrature weights."""
        self.T = (
            2 * j0(np.outer(self.roots, self.roots) / self.S)
            / (np.outer(self.J1, self.J1) * self.S)
        )
        self.scale_rk = self.R / self.K
        self.weights_r = 2 / (self.K**2 * self.J1**2)
        self.weights_k = 2 / (self.R**2 * self.J1**2)

    def _broadcast(self, vec, ndim, axis):
        shape = [1] * ndim
        shape[axis] = self.N
        return vec.reshape(shape)

    def _reduce_axis(self, A, axis):
        if axis is not None:
            return axis
        # reduced arrays (e.g. already integrated over time) are 1D
        return self.axis if np.ndim(A) > 1 else 0

    def _apply(self, A, scale, out):
        J1 = self._broadcast(self.J1, A.ndim, self.axis)
        moved = np.tensordot(self.T, A / J1, axes=([1], [self.axis]))
        result = scale * J1 * np.moveaxis(moved, 0, self.axis)
        if out is None:
            return result
        np.copyto(out, result)
        return out

    def forward(self, A, out=None):
        """Transform r -> k."""
        return self._apply(A, self.scale_rk, out)

    def inverse(self, A, out=None):
        """Transform k -> r."""
        return self._apply(A, 1 / self.scale_rk, out)

    def integrate_r(self, A, axis=None):
        """Integral of A(r) r dr over the aperture."""
        axis = self._reduce_axis(A, axis)
        w = self._broadcast(self.weights_r, np.ndim(A), axis)
        return np.sum(A * w, axis=axis)

    def integrate_k(self, A, axis=None):
        """Integral of A(k) k dk up to the cut-off."""
        axis = self._reduce_axis(A, axis)
        w = self._broadcast(self.weights_k, np.ndim(A), axis)
        return np.sum(A * w, axis=axis)
