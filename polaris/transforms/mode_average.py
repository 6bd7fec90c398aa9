"""Nonlinear term of a single effective (mode-averaged) waveguide mode."""

import numpy as np
from scipy.constants import c as c_light
from scipy.constants import epsilon_0

from ..functions.accumulate import accumulate_responses
from ..functions.resample import to_freq, to_time
from .base import TransformBase


class TransModeAvg(TransformBase):
    """
    Transform E(w) -> P_nl(w) for a mode-averaged field.

    The field is normalised so that |E(t)|^2 is the power; dividing by
    sqrt(eps0 c Aeff / 2) turns it into the on-axis electric field.

    Parameters
    ----------
    grid : RealGrid or EnvGrid
        Simulation grid.
    ft : RealFourier or EnvFourier
        Fourier plan of the oversampled time axis.
    responses : sequence of callables
        Nonlinear responses.
    densityfun : callable
        Number density as a function of `z`.
    normfun : callable
        Normalisation as a function of `z`, e.g. `ModeAverageNorm`.
    aeff : callable
        Effective area as a function of `z`.

    """

    def __init__(self, grid, ft, responses, densityfun, normfun, aeff):
        super().__init__(grid, ft, responses, densityfun, normfun)
        self.aeff = aeff
        self.init_buffers()
        self.check_shapes()

    def __call__(self, nl, Ew, z):
        self.Pto.fill(0)
        to_time(self.Eto, Ew, self.Ewo, self.ft)
        self.Eto /= np.sqrt(epsilon_0 * c_light * self.aeff(z) / 2)
        accumulate_responses(self.Pto, self.Eto, self.responses)
        self.Pto *= self.towin
        to_freq(nl, self.Pwo, self.Pto, self.ft)
        self.apply_prefactor(nl, z)
