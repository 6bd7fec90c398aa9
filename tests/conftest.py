"""Shared fixtures for the polaris test suite."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from polaris.config import ConfigOptions
from polaris.functions.fft_backend import fft_manager
from polaris.mesh.grid import EnvGrid, RealGrid

LAMBDA0 = 800e-9
GAMMA3 = 4.2e-51


@pytest.fixture(scope="session", autouse=True)
def scipy_backend():
    fft_manager.set_fft_backend("scipy")


@pytest.fixture(scope="session")
def real_grid():
    return RealGrid(1.0, LAMBDA0, (400e-9, 2000e-9), 200e-15)


@pytest.fixture(scope="session")
def env_grid():
    return EnvGrid(1.0, LAMBDA0, (400e-9, 2000e-9), 200e-15)


@pytest.fixture(scope="session")
def wide_real_grid():
    return RealGrid(1.0, LAMBDA0, (160e-9, 3000e-9), 1e-12)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


def small_config(geometry, grid="real", responses=None, **pulse):
    """Configuration on a small grid, fast enough for end-to-end tests."""
    pulse_par = {"wavelength": LAMBDA0, "duration": 30e-15, "energy": 1e-6}
    pulse_par.update(pulse)
    grid_par = {
        "zmax": 0.5,
        "reference_wavelength": LAMBDA0,
        "wavelength_min": 400e-9,
        "wavelength_max": 2000e-9,
        "time_range": 200e-15,
    }
    return ConfigOptions.build(
        medium_parameters={
            "air": {"density": 2.5e25, "gamma3": GAMMA3, "ionization_potential": 12.063},
        },
        grid_parameters={grid: grid_par},
        pulse_parameters={"gaussian": pulse_par},
        geometry=geometry,
        responses=responses or {"kerr": True, "thg": True, "plasma": False},
    )


@pytest.fixture
def make_config():
    return small_config
