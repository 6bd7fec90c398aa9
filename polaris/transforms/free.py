"""Nonlinear term of a beam in full 3D free space."""

import numpy as np

from ..errors import ConfigurationError
from ..functions.accumulate import accumulate_responses
from ..functions.resample import copy_scale, copy_scale_both
from .base import TransformBase


class TransFree(TransformBase):
    """
    Transform E(w, ky, kx) -> P_nl(w, ky, kx) for full free-space propagation.

    The Fourier plan transforms (t, y, x) jointly. Only the time axis is
    oversampled, so the spectrum is embedded along axis 0 and scaled by
    the ratio of the time-axis lengths.

    Parameters
    ----------
    grid : RealGrid or EnvGrid
        Simulation grid.
    ft : RealFourier or EnvFourier
        Joint (t, y, x) Fourier plan of the oversampled time axis,
        built with `spatial_axes=(1, 2)`.
    ny, nx : int
        Number of transverse points.
    responses : sequence of callables
        Nonlinear responses, applied to each (y, x) point on its own.
    densityfun : callable
        Number density as a function of `z`.
    normfun : callable
        Normalisation as a function of `z`, e.g. `FreeNorm`.

    """

    def __init__(self, grid, ft, ny, nx, responses, densityfun, normfun):
        super().__init__(grid, ft, responses, densityfun, normfun)
        self.ny = ny
        self.nx = nx
        if tuple(ft.spatial_axes) != (1, 2):
            raise ConfigurationError(
                f"Shape mismatch: Fourier plan over spatial axes {ft.spatial_axes}, "
                "a (t, y, x) field needs (1, 2)"
            )
        self.init_buffers((ny, nx))
        self.check_shapes((ny, nx))
        self.idcs = list(np.ndindex(ny, nx))

        if np.issubdtype(self.field_dtype, np.complexfloating):
            self.scale = self.n_wo / self.n_w
            self._copy = copy_scale_both
        else:
            self.scale = (self.n_wo - 1) / (self.n_w - 1) if self.n_w > 1 else 1.0
            self._copy = copy_scale

    def __call__(self, nl, Ewk, z):
        self.Pto.fill(0)
        self.Ewo.fill(0)
        self._copy(self.Ewo, Ewk, self.n_w, self.scale)
        self.ft.inverse(self.Ewo, out=self.Eto)  # (w, ky, kx) -> (t, y, x)
        accumulate_responses(self.Pto, self.Eto, self.responses, self.idcs)
        self.Pto *= self.towin
        self.ft.forward(self.Pto, out=self.Pwo)  # (t, y, x) -> (w, ky, kx)
        self._copy(nl, self.Pwo, self.n_w, 1 / self.scale)
        self.apply_prefactor(nl, z)
