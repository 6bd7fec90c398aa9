"""
Python tool for plotting the input spectrum and the nonlinear
term saved by a Polaris run.
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from h5py import File

from .data.paths import get_base_dir, get_fig_dir
from .logger import get_logger

logger = get_logger(__name__)


def load_output_data(file_path):
    """Load data from HDF5 file."""
    data = {}

    with File(file_path, "r") as f:
        if "w" in f:
            data["w"] = f["w"][()]
        if "Ew" in f:
            data["Ew"] = f["Ew"][..., -1]
        if "nl" in f:
            data["nl"] = f["nl"][()]

    return data


def _spectral_density(arr):
    """|A(w)|^2 summed over all trailing axes."""
    arr = np.abs(arr) ** 2
    return arr.reshape(arr.shape[0], -1).sum(axis=1)


def plot_spectra(data, save_dir):
    """Plot input and nonlinear spectra on a log scale."""
    if "w" not in data or "Ew" not in data:
        logger.warning("No spectral data available")
        return None

    order = np.argsort(data["w"])
    w = data["w"][order]

    fig, ax = plt.subplots()

    for key, label in (("Ew", "Input field"), ("nl", "Nonlinear term")):
        if key not in data:
            continue
        spec = _spectral_density(data[key])[order]
        peak = spec.max()
        if peak > 0:
            ax.semilogy(w, spec / peak, label=label)

    ax.set(xlabel="w [rad/s]", ylabel="Normalised spectral density")
    ax.set_ylim(1e-12, 2)
    ax.legend()
    ax.set_title("Input and nonlinear spectra")

    save_path = save_dir / "spectra.png"
    fig.savefig(save_path)
    plt.close(fig)

    return save_path


def main(file_path=None):
    """Main function."""
    base_dir = get_base_dir()
    out_file = Path(file_path) if file_path else base_dir / "polaris_nonlinear.h5"
    logger.info("Loading data from file: %s", out_file)

    if not out_file.exists():
        logger.error("File not found: %s", out_file)
        return None

    save_dir = get_fig_dir()
    save_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Saving figures to: %s", save_dir)

    data = load_output_data(out_file)
    return plot_spectra(data, save_dir)


if __name__ == "__main__":
    main()
