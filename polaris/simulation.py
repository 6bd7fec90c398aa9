"""Module building a ready-to-call nonlinear transform from the configuration."""

import numpy as np
from scipy.constants import c as c_light
from scipy.constants import e

from .data.paths import get_base_dir
from .data.store import HDF5Output
from .errors import ConfigurationError
from .functions.energy import energy_free, energy_free_env, energy_modal, energy_radial
from .functions.fft_backend import fft_manager
from .functions.fourier import EnvFourier, RealFourier, plan_fourier
from .logger import get_logger
from .mesh.grid import EnvGrid, FreeGrid, RealGrid
from .mesh.hankel import QDHT
from .physics.capillary import MarcatilliMode, capillary_modes, normalised_fields
from .physics.ionization import ADKRate
from .physics.medium import Medium
from .physics.pulse import Pulse
from .physics.responses import (
    KerrEnv,
    KerrEnvTHG,
    KerrField,
    KerrFieldNoTHG,
    PlasmaCumtrapz,
)
from .physics.sellmeier import sellmeier_air, sellmeier_silica, sellmeier_water
from .transforms.free import TransFree
from .transforms.modal import TransModal
from .transforms.mode_average import TransModeAvg
from .transforms.norms import (
    ModalNorm,
    ModeAverageNorm,
    RadialNorm,
    const_norm_free,
)
from .transforms.radial import TransRadial

logger = get_logger(__name__)

CLADDINGS = {
    "air": sellmeier_air,
    "water": sellmeier_water,
    "silica": sellmeier_silica,
}


def build_grid(grid_name, grid_par, response_par):
    """Build the time grid for the chosen field kind."""
    limits = (grid_par.wavelength_min, grid_par.wavelength_max)
    if grid_name == "real":
        return RealGrid(
            grid_par.zmax, grid_par.reference_wavelength, limits,
            grid_par.time_range, dt=grid_par.time_step,
        )
    return EnvGrid(
        grid_par.zmax, grid_par.reference_wavelength, limits,
        grid_par.time_range, dt=grid_par.time_step,
        thg=bool(grid_par.thg or response_par.thg),
    )


def build_responses(grid, medium, response_par):
    """Build the ordered list of nonlinear responses."""
    envelope = isinstance(grid, EnvGrid)
    responses = []
    if response_par.kerr:
        if envelope:
            if response_par.thg:
                responses.append(KerrEnvTHG(medium.gamma3, grid.w0, grid.to))
            else:
                responses.append(KerrEnv(medium.gamma3))
        elif response_par.thg:
            responses.append(KerrField(medium.gamma3))
        else:
            responses.append(KerrFieldNoTHG(medium.gamma3))
    if response_par.plasma:
        if envelope:
            raise ConfigurationError(
                "The plasma response is only available for real fields."
            )
        ionpot = medium.ionization_potential * e
        responses.append(PlasmaCumtrapz(grid.to, ADKRate(ionpot), ionpot))
    return responses


class Simulation:
    """
    Nonlinear transform set up from a `ConfigOptions` object.

    After construction `Ew` holds the input field, `transform` the
    operator and `nl` the output buffer of `evaluate`.
    """

    def __init__(self, config):
        self.config = config
        fft_manager.set_fft_backend(config.computing_backend)

        self.medium = Medium(config.medium_name, config.medium_par)
        self.grid = build_grid(config.grid_name, config.grid_par, config.response_par)
        self.responses = build_responses(self.grid, self.medium, config.response_par)
        self.pulse = Pulse(self.grid, config.pulse_name, config.pulse_par)
        self.geometry = config.geometry_name

        builders = {
            "mode_average": self._init_mode_average,
            "modal": self._init_modal,
            "radial": self._init_radial,
            "free": self._init_free,
        }
        builders[self.geometry](config.geometry_par)
        self.nl = np.zeros_like(self.Ew)
        logger.info(
            "Set up %s transform with %d response(s)",
            type(self.transform).__name__, len(self.responses),
        )

    def _capillary_indices(self, geometry_par):
        cladding = geometry_par.cladding.lower()
        if cladding not in CLADDINGS:
            raise ConfigurationError(
                f"Invalid cladding: '{cladding}'. "
                f"Available options are: {', '.join(CLADDINGS)}"
            )
        clad = CLADDINGS[cladding]

        def cladn(omega):
            return clad(2 * np.pi * c_light / omega)

        return self.medium.ref_index, cladn

    def _init_mode_average(self, geometry_par):
        coren, cladn = self._capillary_indices(geometry_par)
        self.mode = MarcatilliMode(geometry_par.radius, coren, cladn, loss=geometry_par.loss)
        aeff0 = self.mode.aeff()

        def aeff(z):
            return aeff0

        normfun = ModeAverageNorm(self.grid, self.mode.beta, aeff)
        self.energy_t, self.energy_w = energy_modal(self.grid)
        self.Ew = self.pulse.field_modal(self.energy_t)
        self.transform = TransModeAvg(
            self.grid, plan_fourier(self.grid), self.responses,
            self.medium.density_at, normfun, aeff,
        )

    def _init_modal(self, geometry_par):
        coren, cladn = self._capillary_indices(geometry_par)
        nmodes = geometry_par.modes
        self.modes = capillary_modes(
            geometry_par.radius, coren, cladn, nmodes, loss=geometry_par.loss
        )
        self.energy_t, self.energy_w = energy_modal(self.grid)
        Ew = self.pulse.field_modal(self.energy_t, nmodes)
        self.Ew = np.reshape(Ew, (len(self.grid.w), nmodes))
        self.transform = TransModal(
            self.grid, nmodes, self.modes[0].dimlimits, normalised_fields(self.modes),
            plan_fourier(self.grid), self.responses, self.medium.density_at,
            geometry_par.components, ModalNorm(self.grid.w),
            rtol=geometry_par.rtol, atol=geometry_par.atol,
            max_evals=geometry_par.max_evals, full=geometry_par.full,
        )

    def _init_radial(self, geometry_par):
        self.q = QDHT(geometry_par.aperture, geometry_par.points, axis=1)
        normfun = RadialNorm(self.grid, self.q, self.medium.ref_index)
        self.energy_t, self.energy_w = energy_radial(self.grid, self.q)
        self.Ew = self.pulse.field_radial(self.q, self.energy_t)
        self.transform = TransRadial(
            self.grid, self.q, plan_fourier(self.grid), self.responses,
            self.medium.density_at, normfun,
        )

    def _init_free(self, geometry_par):
        self.xygrid = FreeGrid(geometry_par.half_width, geometry_par.points)
        normfun = const_norm_free(self.grid, self.xygrid, self.medium.ref_index_wavelength)
        if isinstance(self.grid, EnvGrid):
            self.energy_t = energy_free_env(self.xygrid.x, self.xygrid.y)
        else:
            self.energy_t = energy_free(self.xygrid.x, self.xygrid.y)
        self.energy_w = None
        self.Ew = self.pulse.field_free(self.xygrid, self.energy_t)
        self.transform = TransFree(
            self.grid, plan_fourier(self.grid, spatial_axes=(1, 2)),
            self.xygrid.Ny, self.xygrid.Nx, self.responses,
            self.medium.density_at, normfun,
        )

    def evaluate(self, z=0.0):
        """Evaluate the nonlinear term of the input field at `z`."""
        self.transform(self.nl, self.Ew, z)
        return self.nl

    def energy(self):
        """
        Pulse energy of the input field [J].

        Free-space fields are transformed back to time first, the other
        geometries integrate the spectrum directly.
        """
        if self.energy_w is not None:
            return float(np.sum(self.energy_w(self.grid.w, self.Ew)))
        spatial = (1, 2) if self.geometry == "free" else ()
        plan = EnvFourier if isinstance(self.grid, EnvGrid) else RealFourier
        Et = plan(len(self.grid.t), spatial).inverse(self.Ew)
        return float(self.energy_t(self.grid.t, Et))

    def save(self, fpath=None, force=False):
        """Save input field and nonlinear term to an HDF5 file."""
        fpath = fpath if fpath is not None else get_base_dir() / "polaris_nonlinear.h5"
        output = HDF5Output(fpath, 0.0, self.grid.zmax, 1, self.Ew.shape)
        output.save_step(self.Ew, 0.0)
        output.save_metadata(
            {
                "w": np.asarray(self.grid.w),
                "t": np.asarray(self.grid.t),
                "nl": self.nl,
                "geometry": self.geometry,
            },
            force=force,
        )
        return output
