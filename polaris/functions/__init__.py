"""Methods subpackage initialization file for importing functions."""

from .accumulate import accumulate_responses
from .energy import energy_free, energy_free_env, energy_modal, energy_radial
from .fft_backend import fft_manager, set_fft_backend
from .fft_manager import FFTManager
from .fourier import EnvFourier, RealFourier, plan_fourier
from .maths import cumtrapz, cumtrapz_columns, gauss, planck_taper
from .resample import copy_scale, copy_scale_both, to_freq, to_time

__all__ = [
    "FFTManager",
    "fft_manager",
    "set_fft_backend",
    "RealFourier",
    "EnvFourier",
    "plan_fourier",
    "copy_scale",
    "copy_scale_both",
    "to_time",
    "to_freq",
    "accumulate_responses",
    "energy_modal",
    "energy_radial",
    "energy_free",
    "energy_free_env",
    "planck_taper",
    "gauss",
    "cumtrapz",
    "cumtrapz_columns",
]
