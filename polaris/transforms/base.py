"""Module for shared variables and methods used by the transforms."""

import numpy as np

from ..errors import ConfigurationError


def expand(arr, ndim):
    """View a 1D frequency/time array so it broadcasts along axis 0."""
    return arr.reshape((-1,) + (1,) * (ndim - 1))


class TransformBase:
    """Class for shared variables and methods used by the different transforms."""

    def __init__(self, grid, ft, responses, densityfun, normfun):
        """Initialize transform with common parameters.

        Parameters
        ----------
        grid : RealGrid or EnvGrid
            Contains the time and frequency axes and windows.
        ft : RealFourier or EnvFourier
            Fourier plan of the oversampled time axis.
        responses : sequence of callables
            Nonlinear responses, applied in order.
        densityfun : callable
            Number density as a function of `z`.
        normfun : callable
            Normalisation factor as a function of `z`.

        """
        self.grid = grid
        self.ft = ft
        self.responses = tuple(responses)
        self.densityfun = densityfun
        self.normfun = normfun

        # Initialize frequent arguments
        self.field_dtype = grid.field_dtype
        self.n_w = len(grid.w)
        self.n_wo = len(grid.wo)
        self.n_to = len(grid.to)

    def init_buffers(self, trailing=()):
        """Pre-allocate oversampled buffers with the given trailing shape."""
        trailing = tuple(trailing)
        self.Eto = np.zeros((self.n_to,) + trailing, dtype=self.field_dtype)
        self.Pto = np.zeros((self.n_to,) + trailing, dtype=self.field_dtype)
        self.Ewo = np.zeros((self.n_wo,) + trailing, dtype=np.complex128)
        self.Pwo = np.zeros((self.n_wo,) + trailing, dtype=np.complex128)
        self.towin = expand(self.grid.towin, 1 + len(trailing))

    def check_shapes(self, trailing=()):
        """Check the plan and the normalisation against the native output shape.

        Raises
        ------
        ConfigurationError
            If the plan does not act on the oversampled time axis, or if
            `normfun` does not broadcast to `(nw,) + trailing`.

        """
        shape = (self.n_w,) + tuple(trailing)
        if self.ft.n != self.n_to:
            raise ConfigurationError(
                f"Shape mismatch: Fourier plan of size {self.ft.n}, "
                f"oversampled time grid of size {self.n_to}"
            )
        norm_shape = np.shape(self.normfun(0.0))
        try:
            fits = np.broadcast_shapes(norm_shape, shape) == shape
        except ValueError:
            fits = False
        if not fits:
            raise ConfigurationError(
                f"Shape mismatch: normalisation of shape {norm_shape}, "
                f"output of shape {shape}"
            )

    def apply_prefactor(self, nl, z):
        """Multiply by wwin rho(z) (-i w) / (2 norm(z)) in place."""
        ndim = nl.ndim
        pre = expand(self.grid.wwin * -1j * self.grid.w / 2, ndim)
        nl *= pre * self.densityfun(z) / self.normfun(z)

    def __call__(self, nl, Ew, z):
        """Write the nonlinear term of `Ew` at position `z` into `nl`."""
        raise NotImplementedError("Transform must include __call__()")
