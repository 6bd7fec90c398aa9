"""
Nonlinear term of a multi-mode waveguide field.

How this works
--------------

1. The field is a set of modal coefficients E_m(w). At a point of the
cross-section the real-space field is sum_m E_m(w) e_m(x), with e_m the
unit-power mode fields. It is taken to the oversampled time grid, the
responses are accumulated, and the polarisation is taken back to the
frequency grid and normalised.

2. Projecting the polarisation back onto every mode gives the
integrand of the overlap integral. It is integrated over the
cross-section with `scipy.integrate.cubature`: a 1D radial integral
(Gauss-Kronrod) for azimuthally symmetric problems, or a full 2D
integral (Genz-Malik) otherwise.

3. Convergence is judged on the whole output vector: the L2 norm of the
error must be below max(atol, rtol * L2 norm of the estimate). A coarse
Gauss-Legendre pass gives the size of the integral first, and its norm
becomes a per-component absolute tolerance for `cubature`, so that bins
holding only numerical noise do not force further subdivision.

4. Points on or outside the domain limits contribute exactly zero.
Non-convergence within the evaluation budget is not an error: the
estimate is used, and the error bound is stored on the transform
(`error`, `converged`) for the caller to inspect.

"""

import numpy as np
from numpy.polynomial.legendre import leggauss
from scipy.integrate import cubature

from ..errors import ConfigurationError
from ..functions.accumulate import accumulate_responses
from ..functions.resample import to_freq, to_time
from ..logger import get_logger
from .base import TransformBase, expand

logger = get_logger(__name__)

COMPONENTS = {
    "Ex": (0,),
    "Ey": (1,),
    "Exy": (0, 1),
}

# integrand evaluations per region: the estimate, then the nested pair
# of rules behind the error estimate
_RULE_POINTS = {1: ("gk21", 21 + 21 + 10), 2: ("genz-malik", 17 + 17 + 13)}

# Gauss-Legendre points per dimension of the coarse pass
_COARSE_POINTS = 8


class TransModal(TransformBase):
    """
    Transform E_m(w) -> P_nl,m(w) for a modal field.

    Parameters
    ----------
    grid : RealGrid or EnvGrid
        Simulation grid.
    nmodes : int
        Number of modes.
    dlfun : callable
        `dlfun(z)` returning the domain limits `(kind, lo, hi)`, with
        kind "polar" (r, theta) or "cartesian" (x, y).
    exyfun : callable
        `exyfun(z)` returning `nmodes` unit-power fields `f(x1, x2)`,
        each one giving an (npoints, 2) array of (Ex, Ey).
    ft : RealFourier or EnvFourier
        Fourier plan of the oversampled time axis.
    responses : sequence of callables
        Nonlinear responses.
    densityfun : callable
        Number density as a function of `z`.
    components : str
        "Ex", "Ey" or "Exy".
    normfun : callable
        Normalisation as a function of `z`, e.g. `ModalNorm`.
    rtol, atol : float
        Tolerances of the cross-section integral.
    max_evals : int
        Budget of integrand evaluations per call. It is never exceeded
        unless it is below `min_evals`, the cost of the coarse pass, the
        first region and one subdivision.
    full : bool
        Integrate over the full 2D cross-section instead of radially.

    """

    def __init__(self, grid, nmodes, dlfun, exyfun, ft, responses, densityfun,
                 components, normfun, rtol=1e-3, atol=0.0, max_evals=300, full=False):
        if components not in COMPONENTS:
            raise ConfigurationError(
                f"Invalid components: '{components}'. "
                f"Available options are: {', '.join(COMPONENTS)}"
            )
        super().__init__(grid, ft, responses, densityfun, normfun)
        self.check_shapes()
        self.nmodes = nmodes
        self.dlfun = dlfun
        self.exyfun = exyfun
        self.components = components
        self.indices = list(COMPONENTS[components])
        self.npol = len(self.indices)
        self.rtol = rtol
        self.atol = atol
        self.max_evals = max_evals
        self.full = full

        self.ndim = 2 if full else 1
        self.rule, npts = _RULE_POINTS[self.ndim]
        ncoarse = _COARSE_POINTS**self.ndim
        per_split = npts * 2**self.ndim
        self.min_evals = ncoarse + npts + per_split
        self.max_subdivisions = max(1, (max_evals - ncoarse - npts) // per_split)

        self.Emw = np.zeros((self.n_w, nmodes), dtype=np.complex128)
        self.z = 0.0
        self.exys = exyfun(0.0)
        self.dimlimits = dlfun(0.0)
        self.ncalls = 0
        self.error = None
        self.converged = True

    def __repr__(self):
        return f"TransModal({self.nmodes} modes)"

    def reset(self, Emw, z):
        """Load new coefficients and refresh fields and limits at `z`."""
        self.Emw[:] = np.reshape(Emw, self.Emw.shape)
        self.ncalls = 0
        self.z = z
        self.exys = self.exyfun(z)
        self.dimlimits = self.dlfun(z)

    def _mode_fields(self, x1, x2):
        """(npoints, nmodes, npol) fields at the given points."""
        fields = [np.asarray(f(x1, x2)) for f in self.exys]
        return np.stack(fields, axis=1)[:, :, self.indices]

    def pointcalc(self, xs):
        """
        Integrand of the overlap integral at a batch of points.

        Parameters
        ----------
        xs : (npoints, ndim) array_like
            Points of the cross-section.

        Returns
        -------
        fval : (npoints, 2 * nw * nmodes) ndarray
            Complex projections viewed as pairs of floats, times the
            Jacobian of the coordinates.

        """
        xs = np.atleast_2d(np.asarray(xs, dtype=np.float64))
        npoints = xs.shape[0]
        self.ncalls += npoints
        fval = np.zeros((npoints, 2 * self.n_w * self.nmodes))

        kind, lo, hi = self.dimlimits
        x1 = xs[:, 0]
        valid = (x1 > lo[0]) & (x1 < hi[0])
        if xs.shape[1] > 1:
            x2 = xs[:, 1]
            if kind == "polar":
                pre = x1
            else:
                valid &= (x2 > lo[1]) & (x2 < hi[1])
                pre = np.ones(npoints)
        else:
            x2 = np.zeros(npoints)
            pre = 2 * np.pi * x1 if kind == "polar" else np.ones(npoints)

        if not np.any(valid):
            return fval

        Ems = self._mode_fields(x1[valid], x2[valid])
        nv = Ems.shape[0]

        # (nw, nmodes) x (nv, nmodes, npol) -> (nw, nv, npol)
        Erw = np.einsum("wm,pmc->wpc", self.Emw, Ems)
        Ewo = np.zeros((self.n_wo, nv, self.npol), dtype=np.complex128)
        Er = np.zeros((self.n_to, nv, self.npol), dtype=self.field_dtype)
        Pr = np.zeros_like(Er)
        to_time(Er, Erw, Ewo, self.ft)

        idcs = list(np.ndindex(nv)) if self.npol > 1 else list(np.ndindex(nv, 1))
        accumulate_responses(Pr, Er, self.responses, idcs)
        Pr *= expand(self.grid.towin, 3)

        Prw = np.zeros((self.n_w, nv, self.npol), dtype=np.complex128)
        to_freq(Prw, Ewo, Pr, self.ft)
        Prw *= expand(self.grid.wwin * self.normfun(self.z), 3)

        # project back: (nw, nv, npol) x (nv, nmodes, npol) -> (nv, nw, nmodes)
        Prmw = np.einsum("wpc,pmc->pwm", Prw, Ems)
        Prmw *= pre[valid][:, None, None]
        fval[valid] = np.ascontiguousarray(Prmw).view(np.float64).reshape(nv, -1)
        return fval

    def _coarse_estimate(self, a, b):
        """Tensor Gauss-Legendre estimate of the overlap integral."""
        nodes, weights = leggauss(_COARSE_POINTS)
        half = (b - a) / 2
        axes = [half[i] * nodes + (a[i] + b[i]) / 2 for i in range(self.ndim)]
        xs = np.stack([g.ravel() for g in np.meshgrid(*axes, indexing="ij")], axis=-1)
        ws = np.prod(np.meshgrid(*[weights * h for h in half], indexing="ij"), axis=0)
        return ws.ravel() @ self.pointcalc(xs)

    def __call__(self, nl, Emw, z):
        self.reset(Emw, z)
        _, lo, hi = self.dimlimits
        a = np.asarray(lo[:self.ndim], dtype=np.float64)
        b = np.asarray(hi[:self.ndim], dtype=np.float64)

        coarse = self._coarse_estimate(a, b)
        tol = max(self.atol, self.rtol * np.linalg.norm(coarse))
        res = cubature(
            self.pointcalc, a, b,
            rule=self.rule,
            rtol=0.0,
            atol=tol / np.sqrt(coarse.size),
            max_subdivisions=self.max_subdivisions,
        )
        self.error = res.error
        error = np.linalg.norm(res.error)
        self.converged = bool(
            error <= max(self.atol, self.rtol * np.linalg.norm(res.estimate))
        )
        if not self.converged:
            logger.warning(
                "Modal integral not converged at z = %.4e after %d evaluations "
                "(error norm %.3e)", z, self.ncalls, error,
            )

        val = np.ascontiguousarray(res.estimate, dtype=np.float64)
        nl[:] = self.densityfun(z) * val.view(np.complex128).reshape(nl.shape)
