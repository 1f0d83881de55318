# src/partls/opt/alternating.py
"""
Alternating (block coordinate descent) fits of the partitioned least squares model.

- fit_alt: each block is a convex program handed to a cvxpy backend (supports ridge eta).
- fit_alt_nnls: alpha block via NNLS, beta block via ordinary least squares, intercept
  folded into an extra attribute/partition (homogeneous coordinates, eta must be 0).

Both run exactly `n_iter` iterations. After every iteration `checkpoint` receives the
state tuple (i, alpha, beta, t, objective); `resume` receives the default starting
state and returns the one to start from, so a fit can continue from a saved checkpoint.
"""

import numpy as np
from typing import Callable, Optional

from .model import FitResult
from .partition import check_alpha, homogeneous, rescale, weighted_design
from .program import PartitionedProgram
from .solvers import default_solver, scipy_nnls, scipy_lstsq
from ..config import ALT_DEFAULTS, NNLS_DEFAULTS, INIT_BETA_SCALE
from ..utils.logging import get_logger

log = get_logger(__name__)


def no_checkpoint(state):
    return None


def identity_resume(state):
    return state


def _generator(seed=None, rng: Optional[np.random.Generator] = None) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng(seed)


def fit_alt(
    X: np.ndarray,
    y: np.ndarray,
    P: np.ndarray,
    n_iter: int = ALT_DEFAULTS["n_iter"],
    eta: float = ALT_DEFAULTS["eta"],
    get_solver: Callable = default_solver,
    checkpoint: Callable = no_checkpoint,
    resume: Callable = identity_resume,
    fake_run: bool = False,
    seed=None,
    rng: Optional[np.random.Generator] = None,
):
    """
    Alternate between the alpha block (beta fixed) and the beta block (alpha fixed),
    both solved with `get_solver()` on the cvxpy encoding of the problem.

    Returns FitResult(opt, alpha, beta, t, P) where opt includes the eta term,
    or () when fake_run is set.
    """
    if fake_run:
        return ()

    rng = _generator(seed, rng)
    M, K = np.shape(P)
    program = PartitionedProgram(X, y, P, eta)

    alpha = rng.random(M)
    beta = (rng.random(K) - 0.5) * INIT_BETA_SCALE
    t = float(rng.random())
    initvals = (0, alpha, beta, t, program.loss(alpha, beta, t))

    i_start, alpha, beta, t, optval = resume(initvals)
    program.set_value(alpha, beta, t)

    for i in range(i_start + 1, n_iter + 1):
        optval = program.alpha_step(get_solver())
        log.debug("iter %d optval (beta fixed) %.6g", i, optval)

        optval = program.beta_step(get_solver())
        log.debug("iter %d optval (alpha fixed) %.6g", i, optval)

        alpha, beta, t = program.value
        checkpoint((i, alpha, beta, t, optval))

    alpha, beta, t = program.value
    return FitResult(optval, alpha, beta, t, P)


def _nnls_loss(Xo, Po, alpha, beta, y) -> float:
    return float(np.linalg.norm(weighted_design(Xo, Po, alpha) @ beta - y, 2))


def fit_alt_nnls(
    X: np.ndarray,
    y: np.ndarray,
    P: np.ndarray,
    n_iter: int = NNLS_DEFAULTS["n_iter"],
    eta: float = NNLS_DEFAULTS["eta"],
    nnls: Callable = scipy_nnls,
    lstsq: Callable = scipy_lstsq,
    checkpoint: Callable = no_checkpoint,
    resume: Callable = identity_resume,
    fake_run: bool = False,
    seed=None,
    rng: Optional[np.random.Generator] = None,
):
    """
    Alternating fit where the alpha block is an NNLS problem and the beta block an
    unconstrained least squares problem. The intercept rides along as attribute M
    in partition K of the homogeneous problem, so t = beta_o[K] * alpha_o[M].

    The objective reported here is the residual norm ||.||_2 (not squared).
    States exchanged with checkpoint/resume have the public shapes (M,), (K,), scalar.
    """
    if fake_run:
        return ()

    if eta != 0.0:
        log.warning("fit called with the NNLS variant and eta=%s != 0. Assuming eta == 0", eta)
        eta = 0.0

    y = np.asarray(y, dtype=float)
    Xo, Po = homogeneous(X, P)
    M, K = np.shape(P)

    rng = _generator(seed, rng)
    alpha = rng.random(M + 1)
    beta = (rng.random(K + 1) - 0.5) * INIT_BETA_SCALE
    initvals = (0, alpha[:M], beta[:K], float(beta[K] * alpha[M]), np.inf)

    i_start, alpha, beta, t, optval = resume(initvals)
    # the intercept attribute is alone in its partition, so its rescaled weight is 1
    alpha = np.append(np.asarray(alpha, dtype=float), 1.0)
    beta = np.append(np.asarray(beta, dtype=float), float(np.asarray(t).reshape(-1)[0]))

    for i in range(i_start + 1, n_iter + 1):
        # alpha block: X (P * alpha) beta == (X * (P @ beta)) @ alpha
        alpha = nnls(Xo * (Po @ beta), y)
        alpha = check_alpha(alpha, Po)
        alpha, beta = rescale(alpha, beta, Po)

        if not np.all(np.isfinite(alpha)):
            log.warning("found alpha containing non-finite values: %s iteration: %d beta: %s", alpha, i, beta)

        log.debug("iter %d optval (beta fixed) %.6g", i, _nnls_loss(Xo, Po, alpha, beta, y))

        beta = np.asarray(lstsq(weighted_design(Xo, Po, alpha), y), dtype=float)
        optval = _nnls_loss(Xo, Po, alpha, beta, y)
        log.debug("iter %d optval (alpha fixed) %.6g", i, optval)

        checkpoint((i, alpha[:M].copy(), beta[:K].copy(), float(beta[K] * alpha[M]), optval))

    result = FitResult(optval, alpha[:M], beta[:K], float(beta[K] * alpha[M]), P)
    log.debug("result %s", result)
    return result
