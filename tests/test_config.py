"""Tests for the configuration options and the medium."""

import numpy as np
import pytest

from polaris.config import ConfigOptions, EnvGridConfig, ModalConfig, RadialConfig
from polaris.errors import ConfigurationError
from polaris.physics.medium import AIR_REFERENCE_DENSITY, Medium
from polaris.physics.sellmeier import sellmeier_air, sellmeier_silica, sellmeier_water

GRID = {
    "zmax": 1.0,
    "reference_wavelength": 800e-9,
    "wavelength_min": 400e-9,
    "wavelength_max": 2000e-9,
    "time_range": 200e-15,
}
PULSE = {"wavelength": 800e-9, "duration": 30e-15, "energy": 1e-6}
AIR = {"density": 2.5e25, "gamma3": 4.2e-51, "ionization_potential": 12.063}


def _build(**overrides):
    kwargs = {
        "medium_parameters": {"air": AIR},
        "grid_parameters": {"real": GRID},
        "pulse_parameters": {"gaussian": PULSE},
        "geometry": {"mode_average": {"radius": 75e-6}},
    }
    kwargs.update(overrides)
    return ConfigOptions.build(**kwargs)


class TestConfigOptions:
    """Building and validating the options."""

    def test_defaults(self):
        """A minimal configuration fills in the defaults."""
        config = _build()
        assert config.medium_name == "air"
        assert config.grid_name == "real"
        assert config.geometry_name == "mode_average"
        assert config.geometry_par.cladding == "silica"
        assert config.response_par.kerr
        assert not config.response_par.plasma
        assert config.computing_backend == "scipy"

    def test_case_insensitive(self):
        """Section names and switches ignore case."""
        config = _build(
            medium_parameters={"AIR": AIR},
            grid_parameters={"ENVELOPE": GRID},
            geometry={"MODAL": {"radius": 75e-6, "modes": 2}},
            responses={"THG": False},
            computing_backend="SciPy",
        )
        assert isinstance(config.grid_par, EnvGridConfig)
        assert isinstance(config.geometry_par, ModalConfig)
        assert config.geometry_par.modes == 2
        assert config.geometry_par.components == "Ey"
        assert not config.response_par.thg
        assert config.computing_backend == "scipy"

    def test_radial(self):
        """The radial geometry needs the beam waist."""
        config = _build(
            pulse_parameters={"gaussian": dict(PULSE, waist=100e-6)},
            geometry={"radial": {"aperture": 400e-6, "points": 16}},
        )
        assert isinstance(config.geometry_par, RadialConfig)
        assert config.pulse_par.waist == 100e-6

    @pytest.mark.parametrize(
        "overrides",
        [
            {"medium_parameters": {"helium": AIR}},
            {"medium_parameters": {"air": AIR, "water": AIR}},
            {"medium_parameters": {"air": {"density": 1.0}}},
            {"grid_parameters": {"chebyshev": GRID}},
            {"pulse_parameters": {"square": PULSE}},
            {"geometry": {"slab": {"radius": 75e-6}}},
            {"geometry": {"radial": {"aperture": 400e-6, "points": 16}}},
            {"geometry": {"free": {"half_width": 400e-6, "points": 8}}},
            {"responses": {"raman": True}},
            {"computing_backend": "cuda"},
        ],
    )
    def test_invalid(self, overrides):
        """Unknown names, missing parameters and missing waists are rejected."""
        with pytest.raises(ConfigurationError):
            _build(**overrides)

    def test_plasma_needs_real_field(self):
        """The plasma response is not available for envelopes."""
        with pytest.raises(ConfigurationError):
            _build(grid_parameters={"envelope": GRID}, responses={"plasma": True})

    def test_plasma_needs_ionization_potential(self):
        """The plasma response needs an ionization potential."""
        medium = {"air": {"density": 2.5e25, "gamma3": 4.2e-51}}
        with pytest.raises(ConfigurationError):
            _build(medium_parameters=medium, responses={"plasma": True})

    def test_configuration_error_is_value_error(self):
        """Callers catching ValueError also catch configuration errors."""
        with pytest.raises(ValueError):
            _build(computing_backend="cuda")


class TestMedium:
    """Medium properties and dispersion."""

    def test_attributes(self):
        """Configuration values become attributes."""
        config = _build()
        medium = Medium(config.medium_name, config.medium_par)
        assert medium.gamma3 == AIR["gamma3"]
        assert medium.density_at(0.3) == AIR["density"]

    def test_gas_scaling(self):
        """The gas index is scaled with the number density."""
        config = _build()
        medium = Medium(config.medium_name, config.medium_par)
        wavelength = np.array([800e-9])
        expected = 1 + (sellmeier_air(wavelength) - 1) * AIR["density"] / AIR_REFERENCE_DENSITY
        np.testing.assert_allclose(medium.ref_index_wavelength(wavelength), expected)

    def test_frequency_index(self):
        """ref_index(w) is the wavelength index at 2 pi c / w."""
        config = _build(medium_parameters={"silica": AIR})
        medium = Medium(config.medium_name, config.medium_par)
        omega = 2 * np.pi * 299792458.0 / 800e-9
        assert medium.ref_index(omega) == pytest.approx(sellmeier_silica(800e-9))

    def test_unknown_medium(self):
        """Unknown media are rejected."""
        with pytest.raises(ConfigurationError):
            Medium("helium", None)


class TestSellmeier:
    """Refractive index formulas."""

    @pytest.mark.parametrize(
        "fun, expected",
        [
            (sellmeier_silica, 1.4533),
            (sellmeier_water, 1.329),
        ],
    )
    def test_values_at_800nm(self, fun, expected):
        """Known indices at 800 nm."""
        assert fun(800e-9) == pytest.approx(expected, abs=2e-3)

    def test_air(self):
        """Air at 800 nm has n - 1 close to 2.75e-4."""
        assert sellmeier_air(800e-9) - 1 == pytest.approx(2.75e-4, rel=1e-2)
