"""
Fast Fourier Transform algorithm module.

How this works
--------------

1. Every transform in Polaris goes through SciPy's `scipy.fft`
API, so the actual FFT implementation can be swapped by
registering a different global backend.

2. When the `pyfftw` backend is requested, the module tries to
import the pyFFTW interface for SciPy and sets it as the global
backend. If pyFFTW is not installed, a warning is logged and the
SciPy (pocketfft) implementation is kept.

3. `rfftn`, `irfftn`, `fftn` and `ifftn` are the transforms used
by the Fourier plans. They are always called with `workers=-1`,
which allows parallelization across all available CPU cores.

"""

import scipy.fft

from ..logger import get_logger

logger = get_logger(__name__)


class FFTManager:
    """Fast Fourier Transform options configuration."""

    def __init__(self):
        self.backend = None
        self.workers = -1

    def set_fft_backend(self, backend: str = "scipy"):
        """FFT backend configuration"""
        backend_opt = backend.lower()
        if backend_opt == "pyfftw":
            try:
                import pyfftw.interfaces.scipy_fft as fftw_backend

                scipy.fft.set_global_backend(fftw_backend)
                self.backend = "pyfftw"
                logger.info("Using pyFFTW with SciPy backend")
                return
            except ImportError:
                logger.warning("pyFFTW not available. Falling back to SciPy")

        scipy.fft.set_global_backend("scipy")
        self.backend = "scipy"
        logger.info("Using SciPy FFT backend")

    def _ensure_backend(self):
        if self.backend is None:
            self.set_fft_backend("scipy")

    def rfftn(self, data, axes):
        """Real-input forward transform, halving the last axis in `axes`."""
        self._ensure_backend()
        return scipy.fft.rfftn(data, axes=axes, workers=self.workers)

    def irfftn(self, data, shape, axes):
        """Inverse of `rfftn` with output lengths `shape` along `axes`."""
        self._ensure_backend()
        return scipy.fft.irfftn(data, s=shape, axes=axes, workers=self.workers)

    def fftn(self, data, axes):
        """Complex forward transform along `axes`."""
        self._ensure_backend()
        return scipy.fft.fftn(data, axes=axes, workers=self.workers)

    def ifftn(self, data, axes):
        """Complex inverse transform along `axes`."""
        self._ensure_backend()
        return scipy.fft.ifftn(data, axes=axes, workers=self.workers)
