"""Entry point for running the package with 'python -m polaris'."""

import argparse
from pathlib import Path

import numpy as np

from ._version import __version__
from .config import ConfigOptions
from .data.paths import get_base_dir
from .logger import get_logger, setup
from .simulation import Simulation

logger = get_logger(__name__)


def default_config():
    """Hollow capillary filled with air, driven by a 30 fs pulse at 800 nm."""
    return ConfigOptions.build(
        medium_parameters={
            "AIR": {
                "density": 2.5e25,
                "gamma3": 4.2e-51,
                "ionization_potential": 12.063,
            },
        },
        grid_parameters={
            "REAL": {
                "zmax": 1.0,
                "reference_wavelength": 800e-9,
                "wavelength_min": 160e-9,
                "wavelength_max": 3000e-9,
                "time_range": 1e-12,
            },
        },
        pulse_parameters={
            "GAUSSIAN": {
                "wavelength": 800e-9,
                "duration": 30e-15,
                "energy": 100e-6,
            },
        },
        geometry={
            "MODE_AVERAGE": {
                "radius": 75e-6,
                "cladding": "silica",
            },
        },
        responses={"kerr": True, "thg": True, "plasma": True},
        computing_backend="scipy"
    )


def main(argv=None):
    """Main function."""
    parser = argparse.ArgumentParser(prog="polaris", description=__doc__)
    parser.add_argument("--output", default=None, help="HDF5 file to write")
    parser.add_argument("--overwrite", action="store_true",
                        help="replace an existing output file")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    setup(args.log_level)
    logger.info("Running Polaris v%s for Python", __version__)

    config = default_config()
    sim = Simulation(config)
    logger.info("Input pulse energy: %.4e J", sim.energy())

    nl = sim.evaluate(0.0)
    logger.info("Nonlinear term norm: %.4e", np.linalg.norm(nl))

    fpath = Path(args.output) if args.output else get_base_dir() / "polaris_nonlinear.h5"
    if args.overwrite and fpath.exists():
        logger.info("Replacing %s", fpath)
        fpath.unlink()
    sim.save(fpath)
    return nl


if __name__ == "__main__":
    main()
