"""Nonlinear term of a radially symmetric free-space beam."""

import numpy as np

from ..functions.accumulate import accumulate_responses
from ..functions.resample import to_freq, to_time
from .base import TransformBase


class TransRadial(TransformBase):
    """
    Transform E(w, k) -> P_nl(w, k) for radially symmetric propagation.

    Parameters
    ----------
    grid : RealGrid or EnvGrid
        Simulation grid.
    q : QDHT
        Hankel transform acting on axis 1 of (n_t, N) arrays.
    ft : RealFourier or EnvFourier
        Fourier plan of the oversampled time axis.
    responses : sequence of callables
        Nonlinear responses, applied to each radial point on its own.
    densityfun : callable
        Number density as a function of `z`.
    normfun : callable
        Normalisation as a function of `z`, e.g. `RadialNorm`.

    """

    def __init__(self, grid, q, ft, responses, densityfun, normfun):
        super().__init__(grid, ft, responses, densityfun, normfun)
        self.q = q
        self.init_buffers((q.N,))
        self.check_shapes((q.N,))
        self.idcs = list(np.ndindex(q.N))

    def __call__(self, nl, Ew, z):
        self.Pto.fill(0)
        to_time(self.Eto, Ew, self.Ewo, self.ft)  # w -> t
        self.q.inverse(self.Eto, out=self.Eto)  # k -> r
        accumulate_responses(self.Pto, self.Eto, self.responses, self.idcs)
        self.Pto *= self.towin
        self.q.forward(self.Pto, out=self.Pto)  # r -> k
        to_freq(nl, self.Pwo, self.Pto, self.ft)  # t -> w
        self.apply_prefactor(nl, z)
