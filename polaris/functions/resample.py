"""
Resampling between the native frequency grid and the oversampled time grid.

How this works
--------------

1. The nonlinear responses are evaluated on an oversampled time grid so
that the frequency mixing they produce does not alias back into the
propagated band. The native spectrum is embedded into a longer spectrum
which is zero outside the native band, and then transformed to time.

2. Real fields store only non-negative frequencies, so the native
spectrum is a contiguous prefix of the oversampled one. Complex
envelopes store a two-sided spectrum in FFT order, so the non-negative
half is copied to the start and the negative half to the end.

3. The FFT normalisation divides by the number of time samples, so the
copy is scaled by the ratio of the time-axis lengths to keep the
time-domain amplitude independent of the oversampling.

All kernels act along the leading axis. Any trailing axes (modes, radial
points, transverse points) must match between source and destination.
"""

import numpy as np

from ..errors import ConfigurationError


def _check_trailing(dest, source):
    if dest.shape[1:] != source.shape[1:]:
        raise ConfigurationError(
            "dest and source must have the same shape except along the first "
            f"axis, got {dest.shape} and {source.shape}"
        )


def copy_scale(dest, source, n, scale):
    """Copy the first `n` entries of `source` into `dest` times `scale`."""
    _check_trailing(dest, source)
    np.multiply(source[:n], scale, out=dest[:n])


def copy_scale_both(dest, source, n, scale):
    """
    Copy a two-sided spectrum of native length `n` times `scale`.

    The first (n+1)//2 entries (zero and positive frequencies) go to the
    start of `dest` and the last n//2 entries (negative frequencies) go to
    its end. For n == 1 only the zero-frequency entry is copied.
    """
    _check_trailing(dest, source)
    n_pos = (n + 1) // 2
    n_neg = n // 2
    np.multiply(source[:n_pos], scale, out=dest[:n_pos])
    if n_neg:
        nd = dest.shape[0]
        ns = source.shape[0]
        np.multiply(source[ns - n_neg:ns], scale, out=dest[nd - n_neg:nd])


def _real_scale(n, no):
    if n == 1:
        return 1.0
    return (no - 1) / (n - 1)


def to_time(Ato, Aw, Awo, ft):
    """
    Transform A(w) on the native grid to A(t) on the oversampled grid.

    Parameters
    ----------
    Ato : (nto, ...) ndarray
        Oversampled time-domain buffer (output). A real dtype selects the
        real-field variant, a complex dtype the envelope variant.
    Aw : (nw, ...) ndarray
        Native frequency-domain field.
    Awo : (nwo, ...) ndarray
        Oversampled frequency-domain scratch buffer.
    ft : RealFourier or EnvFourier
        Fourier plan of the oversampled axis.

    """
    n = Aw.shape[0]
    no = Awo.shape[0]
    Awo.fill(0)
    if np.iscomplexobj(Ato):
        copy_scale_both(Awo, Aw, n, no / n)
    else:
        copy_scale(Awo, Aw, n, _real_scale(n, no))
    ft.inverse(Awo, out=Ato)


def to_freq(Aw, Awo, Ato, ft):
    """
    Transform A(t) on the oversampled grid to A(w) on the native grid.

    Parameters
    ----------
    Aw : (nw, ...) ndarray
        Native frequency-domain buffer (output).
    Awo : (nwo, ...) ndarray
        Oversampled frequency-domain scratch buffer.
    Ato : (nto, ...) ndarray
        Oversampled time-domain field.
    ft : RealFourier or EnvFourier
        Fourier plan of the oversampled axis.

    """
    n = Aw.shape[0]
    no = Awo.shape[0]
    ft.forward(Ato, out=Awo)
    if np.iscomplexobj(Ato):
        copy_scale_both(Aw, Awo, n, n / no)
    else:
        copy_scale(Aw, Awo, n, 1 / _real_scale(n, no))
