"""Tests for the normalisation factors."""

import numpy as np
import pytest
from scipy.constants import c as c_light
from scipy.constants import epsilon_0, mu_0

from polaris.mesh.grid import FreeGrid
from polaris.mesh.hankel import QDHT
from polaris.transforms.norms import (
    ConstantNorm,
    FreeNorm,
    ModalNorm,
    ModeAverageNorm,
    RadialNorm,
    const_norm_free,
)


def vacuum(w, z):
    return np.ones_like(w)


@pytest.fixture(scope="module")
def q():
    # narrow aperture so that part of the k grid is evanescent
    return QDHT(1e-5, 32, axis=1)


class TestRadialNorm:
    """sqrt(beta^2) / (mu0 w) on the Hankel wavenumbers."""

    def test_shape(self, real_grid, q):
        """One factor per frequency and radial wavenumber."""
        assert RadialNorm(real_grid, q, vacuum)(0.0).shape == (len(real_grid.w), q.N)

    def test_values(self, real_grid, q):
        """Propagating bins follow the formula, the rest are exactly one."""
        out = RadialNorm(real_grid, q, vacuum)(0.0)

        w = np.asarray(real_grid.w)[:, None]
        beta2 = (w / c_light) ** 2 - q.k[None, :] ** 2
        valid = real_grid.sidx[:, None] & (beta2 > 0)
        expected = np.sqrt(np.where(valid, beta2, 1.0)) / (mu_0 * np.where(w == 0, 1.0, w))

        np.testing.assert_allclose(out[valid], expected[valid], rtol=1e-12)
        np.testing.assert_array_equal(out[~valid], 1.0)

    def test_clamped_bins(self, real_grid, q):
        """Zero frequency, cut-off and out-of-band bins are all clamped."""
        out = RadialNorm(real_grid, q, vacuum)(0.0)
        np.testing.assert_array_equal(out[0], 1.0)
        np.testing.assert_array_equal(out[~real_grid.sidx], 1.0)

        w = np.asarray(real_grid.w)
        inband = real_grid.sidx
        evanescent = (w[inband, None] / c_light) ** 2 <= q.k[None, :] ** 2
        assert np.any(evanescent)
        np.testing.assert_array_equal(out[inband][evanescent], 1.0)

    def test_position_dependent(self, real_grid, q):
        """A z-dependent index gives a z-dependent factor."""
        def nfun(w, z):
            return np.full_like(w, 1.0 + 1e-3 * z)

        norm = RadialNorm(real_grid, q, nfun)
        first = norm(0.0).copy()
        second = norm(1.0)
        assert not np.array_equal(first, second)


class TestConstantNorm:
    """Constant providers ignore the position."""

    def test_same_values(self, real_grid, q):
        """The factor is computed once and returned for every z."""
        def nfun(w, z):
            return np.full_like(w, 1.0 + 1e-3 * z)

        norm = ConstantNorm(RadialNorm(real_grid, q, nfun))
        np.testing.assert_array_equal(norm(0.0), norm(5.0))
        np.testing.assert_array_equal(norm(5.0), RadialNorm(real_grid, q, nfun)(0.0))

    def test_private_copy(self, real_grid, q):
        """Later calls of the provider do not change the stored factor."""
        def nfun(w, z):
            return np.full_like(w, 1.0 + 1e-3 * z)

        provider = RadialNorm(real_grid, q, nfun)
        norm = ConstantNorm(provider)
        before = norm(0.0).copy()
        provider(10.0)
        np.testing.assert_array_equal(norm(0.0), before)


class TestFreeNorm:
    """Free-space factor on the (ky, kx) grid."""

    def test_axis_bin(self, real_grid):
        """At kx = ky = 0 the factor is n / (mu0 c)."""
        xy = FreeGrid(1e-4, 8)
        out = FreeNorm(real_grid, xy, vacuum)(0.0)
        assert out.shape == (len(real_grid.w), 8, 8)

        valid = real_grid.sidx & (np.asarray(real_grid.w) != 0)
        np.testing.assert_allclose(out[valid, 0, 0], 1 / (mu_0 * c_light), rtol=1e-12)

    def test_wavelength_index(self, real_grid):
        """const_norm_free accepts an index function of wavelength."""
        xy = FreeGrid(1e-4, 8)

        def index(wavelength):
            return np.full_like(wavelength, 1.5)

        out = const_norm_free(real_grid, xy, index)(3.0)
        valid = real_grid.sidx & (np.asarray(real_grid.w) != 0)
        np.testing.assert_allclose(out[valid, 0, 0], 1.5 / (mu_0 * c_light), rtol=1e-12)


class TestModeNorms:
    """Waveguide factors."""

    def test_modal(self, real_grid):
        """The modal factor is -i w / 4."""
        out = ModalNorm(real_grid.w)(0.0)
        np.testing.assert_allclose(out, -1j * np.asarray(real_grid.w) / 4)

    def test_mode_average(self, real_grid):
        """With beta = w / c the factor is constant over the valid band."""
        aeff = 1e-8

        def beta(w, z):
            return w / c_light

        out = ModeAverageNorm(real_grid, beta, lambda z: aeff)(0.0)
        valid = real_grid.sidx & (np.asarray(real_grid.w) != 0)
        expected = np.sqrt(c_light * 2 * epsilon_0 / aeff)

        np.testing.assert_allclose(out[valid], expected, rtol=1e-12)
        np.testing.assert_array_equal(out[~valid], 1.0)
