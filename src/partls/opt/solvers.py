# src/partls/opt/solvers.py
"""
Solver capabilities used by the alternating optimizers.
- CvxpyBackend: solves a cvxpy problem with a configurable solver, fails loudly on bad status.
- scipy_nnls / scipy_lstsq: NNLS and ordinary least squares subproblem solvers.

Every capability is a plain object or callable so tests can swap in deterministic fakes.
"""

import numpy as np
import cvxpy as cp
import scipy.linalg
import scipy.optimize
from typing import Optional, Dict, Any

from ..config import QP_DEFAULTS

OK_STATUSES = {cp.OPTIMAL, cp.OPTIMAL_INACCURATE}


class SolverFailedError(RuntimeError):
    """Raised when a subproblem solve ends with a non-optimal status."""

    def __init__(self, status, solver=None):
        self.status = status
        self.solver = solver
        super().__init__(f"subproblem solve ended with status {status!r} (solver={solver})")


class CvxpyBackend:
    """Solve a cvxpy problem in place and return its optimal value."""

    def __init__(self, params: Optional[Dict[str, Any]] = None):
        self.params = {**QP_DEFAULTS, **(params or {})}

    @property
    def solver(self) -> str:
        return self.params["solver"]

    def solve(self, problem: cp.Problem) -> float:
        problem.solve(solver=self.solver, verbose=bool(self.params["qp_verbose"]))
        if problem.status not in OK_STATUSES:
            raise SolverFailedError(problem.status, self.solver)
        return float(problem.value)


def default_solver() -> CvxpyBackend:
    return CvxpyBackend()


def _nan_solution(A, b):
    # non-finite input yields an all-nan solution instead of an error, so a
    # non-finite alpha is carried through the iteration and reported, not fatal
    if np.all(np.isfinite(A)) and np.all(np.isfinite(b)):
        return None
    return np.full(np.shape(A)[1], np.nan)


def scipy_nnls(A: np.ndarray, b: np.ndarray) -> np.ndarray:
    # scipy.optimize.nnls always validates finiteness, there is no check_finite flag
    x = _nan_solution(A, b)
    if x is not None:
        return x
    x, _ = scipy.optimize.nnls(A, b)
    return x


def scipy_lstsq(A: np.ndarray, b: np.ndarray) -> np.ndarray:
    # minimum-norm solution when A is rank deficient
    x = _nan_solution(A, b)
    if x is not None:
        return x
    x, *_ = scipy.linalg.lstsq(A, b, check_finite=False)
    return x
