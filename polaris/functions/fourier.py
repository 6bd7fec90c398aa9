"""
Fourier plans between the oversampled time axis and its frequency axis.

The time (frequency) axis is always the leading axis of the arrays.
Optional spatial axes are transformed jointly with it, which is what the
full free-space geometry needs: (t, y, x) <-> (w, ky, kx).
"""

import numpy as np

from .fft_backend import fft_manager


class RealFourier:
    """Real-field plan: real samples in time, one-sided spectrum."""

    def __init__(self, n, spatial_axes=()):
        self.n = n
        self.spatial_axes = tuple(spatial_axes)
        # rfftn halves the last axis listed
        self.axes = self.spatial_axes + (0,)

    def forward(self, data, out=None):
        """Transform time to frequency."""
        result = fft_manager.rfftn(data, axes=self.axes)
        if out is None:
            return result
        np.copyto(out, result)
        return out

    def inverse(self, data, out=None):
        """Transform frequency to time."""
        shape = [data.shape[ax] for ax in self.spatial_axes] + [self.n]
        result = fft_manager.irfftn(data, shape=shape, axes=self.axes)
        if out is None:
            return result
        np.copyto(out, result)
        return out


class EnvFourier:
    """Complex-envelope plan: two-sided spectrum in FFT order."""

    def __init__(self, n, spatial_axes=()):
        self.n = n
        self.spatial_axes = tuple(spatial_axes)
        self.axes = self.spatial_axes + (0,)

    def forward(self, data, out=None):
        """Transform time to frequency."""
        result = fft_manager.fftn(data, axes=self.axes)
        if out is None:
            return result
        np.copyto(out, result)
        return out

    def inverse(self, data, out=None):
        """Transform frequency to time."""
        result = fft_manager.ifftn(data, axes=self.axes)
        if out is None:
            return result
        np.copyto(out, result)
        return out


def plan_fourier(grid, spatial_axes=()):
    """
    Build the Fourier plan matching the field kind of a grid.

    Parameters
    ----------
    grid : RealGrid or EnvGrid
        Grid providing the oversampled time axis `to`.
    spatial_axes : tuple of int, default: ()
        Extra axes transformed together with the time axis.

    Returns
    -------
    plan : RealFourier or EnvFourier
        Fourier plan acting on the oversampled arrays.

    """
    if np.issubdtype(grid.field_dtype, np.complexfloating):
        return EnvFourier(len(grid.to), spatial_axes)
    return RealFourier(len(grid.to), spatial_axes)
