"""Helper module for the FFT shared instance."""
from .fft_manager import FFTManager

fft_manager = FFTManager()

def set_fft_backend(backend="scipy"):
    """Exposed method for selecting the FFT backend."""
    fft_manager.set_fft_backend(backend)
