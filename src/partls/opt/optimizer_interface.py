# src/partls/opt/optimizer_interface.py
"""
High-level optimizer interface.

Provides:
- fit(X, y, P, n_iter, variant=...) -> FitResult(opt, alpha, beta, t, P)
- predict(result, X) -> fitted values
"""

from typing import Callable, Optional, Dict, Any
import numpy as np

from .alternating import fit_alt, fit_alt_nnls, no_checkpoint, identity_resume
from .model import FitResult, predict, objective
from .solvers import CvxpyBackend, scipy_nnls, scipy_lstsq
from ..config import ALT_DEFAULTS, NNLS_DEFAULTS
from ..utils.logging import get_logger

log = get_logger(__name__)

ALT = "alt"
ALT_NNLS = "alt_nnls"
VARIANTS = (ALT, ALT_NNLS)

__all__ = ["fit", "predict", "objective", "FitResult", "ALT", "ALT_NNLS", "VARIANTS"]


def _as_problem(X, y, P):
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float)
    P = np.asarray(P)
    if X.ndim != 2:
        raise ValueError(f"X must be 2-d, got shape {X.shape}")
    if y.shape != (X.shape[0],):
        raise ValueError(f"y must have shape ({X.shape[0]},), got {y.shape}")
    if P.ndim != 2 or P.shape[0] != X.shape[1]:
        raise ValueError(f"P must have shape ({X.shape[1]}, K), got {P.shape}")
    return X, y, P


def fit(
    X: np.ndarray,
    y: np.ndarray,
    P: np.ndarray,
    n_iter: Optional[int] = None,
    *,
    variant: str = ALT,
    eta: Optional[float] = None,
    get_solver: Optional[Callable] = None,
    qp_params: Optional[Dict[str, Any]] = None,
    nnls: Callable = scipy_nnls,
    lstsq: Callable = scipy_lstsq,
    checkpoint: Optional[Callable] = None,
    resume: Optional[Callable] = None,
    fake_run: bool = False,
    seed=None,
    rng: Optional[np.random.Generator] = None,
):
    """
    Fit a partitioned least squares model
      min ||X (P * alpha) beta + t - y||^2 + eta * (||beta||^2 + t^2)
      s.t. alpha >= 0, sum of alpha inside each partition == 1

    variant="alt" solves both blocks as convex programs (get_solver() -> backend with
    .solve(problem), default cvxpy with QP_DEFAULTS overridden by qp_params).
    qp_params only configures the default backend and is ignored, with a warning,
    when get_solver is passed.
    variant="alt_nnls" uses `nnls` / `lstsq` and ignores eta with a warning.

    Returns FitResult(opt, alpha, beta, t, P) for either variant, () when fake_run.
    """
    if variant not in VARIANTS:
        raise ValueError(f"unknown variant {variant!r}, expected one of {VARIANTS}")
    if fake_run:
        return ()

    X, y, P = _as_problem(X, y, P)
    defaults = ALT_DEFAULTS if variant == ALT else NNLS_DEFAULTS
    n_iter = defaults["n_iter"] if n_iter is None else int(n_iter)
    eta = defaults["eta"] if eta is None else float(eta)
    checkpoint = checkpoint or no_checkpoint
    resume = resume or identity_resume

    log.info("fitting %s: N=%d M=%d K=%d n_iter=%d eta=%g", variant, X.shape[0], P.shape[0], P.shape[1], n_iter, eta)

    if variant == ALT:
        if get_solver is None:
            params = dict(qp_params or {})
            get_solver = lambda: CvxpyBackend(params)
        elif qp_params:
            log.warning("qp_params %s ignored: get_solver was given and builds its own backend", qp_params)
        return fit_alt(X, y, P, n_iter, eta=eta, get_solver=get_solver, checkpoint=checkpoint,
                       resume=resume, seed=seed, rng=rng)
    return fit_alt_nnls(X, y, P, n_iter, eta=eta, nnls=nnls, lstsq=lstsq, checkpoint=checkpoint,
                        resume=resume, seed=seed, rng=rng)
