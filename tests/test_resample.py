"""Tests for resampling between the native and oversampled grids."""

import numpy as np
import pytest

from polaris.errors import ConfigurationError
from polaris.functions.fourier import EnvFourier, RealFourier
from polaris.functions.resample import copy_scale, copy_scale_both, to_freq, to_time

# native and oversampled sizes of the real-field tests
N_W, N_WO = 33, 129
N_T, N_TO = 2 * (N_W - 1), 2 * (N_WO - 1)


def _real_spectrum(rng, shape=()):
    Aw = rng.standard_normal((N_W,) + shape) + 1j * rng.standard_normal((N_W,) + shape)
    Aw[0] = 0
    Aw[-1] = 0
    return Aw


class TestRealResample:
    """Real fields: one-sided spectrum copied as a prefix."""

    def test_round_trip(self, rng):
        """to_freq(to_time(Aw)) recovers the native spectrum."""
        Aw = _real_spectrum(rng)
        Ato = np.zeros(N_TO)
        Awo = np.zeros(N_WO, dtype=np.complex128)
        ft = RealFourier(N_TO)

        to_time(Ato, Aw, Awo, ft)
        back = np.zeros_like(Aw)
        to_freq(back, Awo, Ato, ft)

        np.testing.assert_allclose(back, Aw, atol=1e-12)

    def test_interpolates_native_samples(self, rng):
        """Every fourth oversampled sample equals the native time samples."""
        Aw = _real_spectrum(rng)
        Ato = np.zeros(N_TO)
        Awo = np.zeros(N_WO, dtype=np.complex128)
        to_time(Ato, Aw, Awo, RealFourier(N_TO))

        native = np.fft.irfft(Aw, N_T)
        np.testing.assert_allclose(Ato[:: N_TO // N_T], native, atol=1e-12)

    def test_trailing_axes(self, rng):
        """Columns of a multi-dimensional field are resampled independently."""
        Aw = _real_spectrum(rng, (3,))
        Ato = np.zeros((N_TO, 3))
        Awo = np.zeros((N_WO, 3), dtype=np.complex128)
        ft = RealFourier(N_TO)
        to_time(Ato, Aw, Awo, ft)

        for col in range(3):
            single = np.zeros(N_TO)
            to_time(single, Aw[:, col], np.zeros(N_WO, dtype=np.complex128), ft)
            np.testing.assert_allclose(Ato[:, col], single, atol=1e-12)

    def test_mismatched_trailing_shape(self, rng):
        """Different trailing shapes are rejected."""
        Aw = _real_spectrum(rng, (3,))
        with pytest.raises(ConfigurationError):
            to_time(np.zeros((N_TO, 4)), Aw, np.zeros((N_WO, 4), dtype=np.complex128),
                    RealFourier(N_TO))


class TestEnvelopeResample:
    """Complex envelopes: two-sided spectrum copied at both ends."""

    n, no = 32, 128

    def test_round_trip(self, rng):
        """to_freq(to_time(Aw)) recovers the native spectrum."""
        Aw = rng.standard_normal(self.n) + 1j * rng.standard_normal(self.n)
        Ato = np.zeros(self.no, dtype=np.complex128)
        Awo = np.zeros(self.no, dtype=np.complex128)
        ft = EnvFourier(self.no)

        to_time(Ato, Aw, Awo, ft)
        back = np.zeros_like(Aw)
        to_freq(back, Awo, Ato, ft)

        np.testing.assert_allclose(back, Aw, atol=1e-12)

    def test_interpolates_native_samples(self, rng):
        """Every fourth oversampled sample equals the native time samples."""
        Aw = rng.standard_normal(self.n) + 1j * rng.standard_normal(self.n)
        Ato = np.zeros(self.no, dtype=np.complex128)
        to_time(Ato, Aw, np.zeros(self.no, dtype=np.complex128), EnvFourier(self.no))

        np.testing.assert_allclose(Ato[:: self.no // self.n], np.fft.ifft(Aw), atol=1e-12)


class TestCopyScale:
    """Low-level copy kernels."""

    def test_prefix_copy(self):
        """copy_scale only touches the first n entries."""
        dest = np.zeros(8)
        copy_scale(dest, np.arange(1.0, 9.0), 3, 2.0)
        np.testing.assert_array_equal(dest, [2, 4, 6, 0, 0, 0, 0, 0])

    @pytest.mark.parametrize(
        "n, expected",
        [
            (4, [1, 2, 0, 0, 0, 0, 3, 4]),
            (5, [1, 2, 3, 0, 0, 0, 4, 5]),
        ],
    )
    def test_both_ends(self, n, expected):
        """Non-negative half goes to the start, negative half to the end."""
        dest = np.zeros(8)
        copy_scale_both(dest, np.arange(1.0, n + 1.0), n, 1.0)
        np.testing.assert_array_equal(dest, expected)

    def test_single_sample(self):
        """A one-point spectrum only fills the zero-frequency bin."""
        dest = np.zeros(4, dtype=np.complex128)
        copy_scale_both(dest, np.array([2.0 + 1.0j]), 1, 4.0)
        np.testing.assert_array_equal(dest, [8.0 + 4.0j, 0, 0, 0])

    def test_shape_check(self):
        """Trailing shapes must agree."""
        with pytest.raises(ConfigurationError):
            copy_scale_both(np.zeros((8, 2)), np.zeros((4, 3)), 4, 1.0)
