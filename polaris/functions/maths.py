"""Helper module with numerical kernels shared across the package."""

import numpy as np
from numba import njit, prange


def planck_taper(x, xmin, xleft, xright, xmax):
    """
    Planck-taper window which is zero outside [xmin, xmax],
    one inside [xleft, xright] and smoothly tapered in between.

    Parameters
    ----------
    x : (N,) array_like
        Coordinates where the window is evaluated.
    xmin, xleft, xright, xmax : float
        Window edges, with xmin <= xleft <= xright <= xmax.
        A degenerate edge (xmin == xleft or xright == xmax)
        leaves that side untapered.

    Returns
    -------
    out : (N,) ndarray
        Window values in [0, 1].

    """
    x = np.asarray(x, dtype=np.float64)
    out = np.zeros_like(x)

    mid = (x >= xleft) & (x <= xright)
    left = (x > xmin) & (x < xleft)
    right = (x > xright) & (x < xmax)
    out[mid] = 1.0

    with np.errstate(over="ignore", divide="ignore"):
        xl = x[left]
        z_left = (xleft - xmin) * (1 / (xl - xmin) + 1 / (xl - xleft))
        out[left] = 1 / (np.exp(z_left) + 1)

        xr = x[right]
        z_right = (xright - xmax) * (1 / (xr - xright) + 1 / (xr - xmax))
        out[right] = 1 / (np.exp(z_right) + 1)

    return out


def gauss(x, fwhm, x0=0.0, power=2):
    """Super-Gaussian of unit peak with the given full width at half maximum."""
    sigma = fwhm / (2 * (2 * np.log(2)) ** (1 / power))
    return np.exp(-0.5 * (np.abs(x - x0) / sigma) ** power)


@njit
def cumtrapz(out, y, dx):
    """
    Cumulative trapezoidal integral of a uniformly sampled signal.

    Parameters
    ----------
    out : (N,) array_like
        Integral at every sample (output), zero at the first one.
    y : (N,) array_like
        Samples to integrate.
    dx : float
        Sample spacing.

    """
    n = y.shape[0]
    acc = 0.0
    prev = y[0]
    out[0] = 0.0
    for ii in range(1, n):
        cur = y[ii]
        acc += 0.5 * dx * (cur + prev)
        prev = cur
        out[ii] = acc


@njit(parallel=True)
def cumtrapz_columns(out, y, dx):
    """
    Column-wise cumulative trapezoidal integral along the first axis.

    Parameters
    ----------
    out : (N, M) array_like
        Integral at every sample (output).
    y : (N, M) array_like
        Samples to integrate, one signal per column.
    dx : float
        Sample spacing.

    """
    n, m = y.shape
    for jj in prange(m):  # pylint: disable=not-an-iterable
        acc = 0.0
        prev = y[0, jj]
        out[0, jj] = 0.0
        for ii in range(1, n):
            cur = y[ii, jj]
            acc += 0.5 * dx * (cur + prev)
            prev = cur
            out[ii, jj] = acc
