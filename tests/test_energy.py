"""Tests for the energy estimators and the input pulses."""

import numpy as np
import pytest
from scipy.constants import c as c_light
from scipy.constants import epsilon_0

from polaris.config import PulseConfig
from polaris.errors import ConfigurationError
from polaris.functions.energy import energy_free, energy_free_env, energy_modal, energy_radial
from polaris.mesh.grid import FreeGrid
from polaris.mesh.hankel import QDHT
from polaris.physics.pulse import Pulse

W0 = 2 * np.pi * c_light / 800e-9
TAU = 10e-15
WAIST = 1e-4
AMP = 3.0


def _field(grid):
    t = np.asarray(grid.t)
    env = AMP * np.exp(-((t / TAU) ** 2))
    if np.issubdtype(grid.field_dtype, np.complexfloating):
        return env.astype(np.complex128)
    return env * np.cos(W0 * t)


def _spectrum(grid, Et):
    if np.issubdtype(grid.field_dtype, np.complexfloating):
        return np.fft.fft(Et, axis=0)
    return np.fft.rfft(Et, axis=0)


# int |A exp(-t^2/tau^2)|^2 dt
TIME_INTEGRAL = AMP**2 * TAU * np.sqrt(np.pi / 2)


class TestModalEnergy:
    """Power-normalised fields."""

    @pytest.mark.parametrize("fixture", ["real_grid", "env_grid"])
    def test_time_domain(self, request, fixture):
        """The time-domain estimate matches the analytic integral."""
        grid = request.getfixturevalue(fixture)
        energy_t, _ = energy_modal(grid)
        assert energy_t(grid.t, _field(grid)) == pytest.approx(TIME_INTEGRAL, rel=1e-3)

    @pytest.mark.parametrize("fixture", ["real_grid", "env_grid"])
    def test_parseval(self, request, fixture):
        """Time- and frequency-domain estimates agree."""
        grid = request.getfixturevalue(fixture)
        energy_t, energy_w = energy_modal(grid)
        Et = _field(grid)
        assert energy_w(grid.w, _spectrum(grid, Et)) == pytest.approx(
            energy_t(grid.t, Et), rel=1e-3
        )

    def test_multimode(self, real_grid):
        """Modes are integrated separately."""
        energy_t, energy_w = energy_modal(real_grid)
        Et = np.stack([_field(real_grid), 2 * _field(real_grid)], axis=1)
        np.testing.assert_allclose(energy_t(real_grid.t, Et), np.array([1, 4]) * TIME_INTEGRAL, rtol=1e-3)
        np.testing.assert_allclose(
            energy_w(real_grid.w, _spectrum(real_grid, Et)), np.array([1, 4]) * TIME_INTEGRAL, rtol=1e-3
        )


class TestRadialEnergy:
    """Radially symmetric beams."""

    def test_gaussian_beam(self, real_grid):
        """Time and frequency estimates match the analytic energy."""
        q = QDHT(4 * WAIST, 64, axis=1)
        energy_t, energy_w = energy_radial(real_grid, q)
        Et = _field(real_grid)[:, None] * np.exp(-((q.r / WAIST) ** 2))[None, :]
        Ew = q.forward(_spectrum(real_grid, Et))

        expected = c_light * epsilon_0 / 2 * 2 * np.pi * TIME_INTEGRAL * WAIST**2 / 4
        assert energy_t(real_grid.t, Et) == pytest.approx(expected, rel=1e-3)
        assert energy_w(real_grid.w, Ew) == pytest.approx(expected, rel=1e-3)


class TestFreeEnergy:
    """Full free-space beams."""

    @pytest.mark.parametrize(
        "fixture, factory", [("real_grid", energy_free), ("env_grid", energy_free_env)]
    )
    def test_gaussian_beam(self, request, fixture, factory):
        """The estimate matches the analytic energy."""
        grid = request.getfixturevalue(fixture)
        xy = FreeGrid(4 * WAIST, 32)
        r2 = xy.x[None, :] ** 2 + xy.y[:, None] ** 2
        Et = _field(grid)[:, None, None] * np.exp(-r2 / WAIST**2)[None]

        expected = c_light * epsilon_0 / 2 * TIME_INTEGRAL * np.pi * WAIST**2 / 2
        assert factory(xy.x, xy.y)(grid.t, Et) == pytest.approx(expected, rel=1e-3)


class TestPulse:
    """Input pulses scaled to the requested energy."""

    def _pulse(self, grid, shape="gaussian", **kwargs):
        par = PulseConfig(wavelength=800e-9, duration=30e-15, energy=1e-6, **kwargs)
        return Pulse(grid, shape, par)

    @pytest.mark.parametrize("shape", ["gaussian", "sech"])
    def test_fwhm(self, real_grid, shape):
        """The intensity profile has the requested FWHM."""
        pulse = self._pulse(real_grid, shape)
        assert pulse.intensity_profile(0.0) == pytest.approx(1.0)
        assert pulse.intensity_profile(15e-15) == pytest.approx(0.5)

    @pytest.mark.parametrize("fixture", ["real_grid", "env_grid"])
    def test_modal_energy(self, request, fixture):
        """The modal field carries the requested energy."""
        grid = request.getfixturevalue(fixture)
        energy_t, energy_w = energy_modal(grid)
        Ew = self._pulse(grid).field_modal(energy_t)
        assert Ew.shape == (len(grid.w),)
        assert energy_w(grid.w, Ew) == pytest.approx(1e-6, rel=1e-3)

    def test_extra_modes_empty(self, real_grid):
        """With several modes all the energy is in the first one."""
        energy_t, _ = energy_modal(real_grid)
        Ew = self._pulse(real_grid).field_modal(energy_t, nmodes=3)
        assert Ew.shape == (len(real_grid.w), 3)
        np.testing.assert_array_equal(Ew[:, 1:], 0.0)

    def test_radial_energy(self, real_grid):
        """The radial beam carries the requested energy."""
        q = QDHT(4 * WAIST, 32, axis=1)
        energy_t, energy_w = energy_radial(real_grid, q)
        Ew = self._pulse(real_grid, waist=WAIST).field_radial(q, energy_t)
        assert Ew.shape == (len(real_grid.w), 32)
        assert energy_w(real_grid.w, Ew) == pytest.approx(1e-6, rel=1e-3)

    def test_waist_required(self, real_grid):
        """Free-space beams need a waist."""
        q = QDHT(4 * WAIST, 32, axis=1)
        energy_t, _ = energy_radial(real_grid, q)
        with pytest.raises(ConfigurationError):
            self._pulse(real_grid).field_radial(q, energy_t)

    def test_unknown_shape(self, real_grid):
        """Only Gaussian and sech pulses are available."""
        with pytest.raises(ConfigurationError):
            self._pulse(real_grid, "square")

    def test_envelope_carrier(self, env_grid):
        """An envelope at the reference wavelength has no carrier."""
        Et = self._pulse(env_grid).time_field()
        np.testing.assert_allclose(Et.imag, 0.0, atol=1e-12)
