# src/partls/opt/program.py
"""
cvxpy encoding of the partitioned least squares objective

    ||X (P * alpha) beta + t - y||^2 + eta * (||beta||^2 + t^2)
    s.t. P^T alpha == 1, alpha >= 0

The objective is bilinear in (alpha, beta), so it is split into two convex
block problems sharing the same variables. The block held fixed enters
through a cp.Parameter, which lets cvxpy cache the compiled problem across
iterations.
"""

import numpy as np
import cvxpy as cp
from typing import Tuple

from .partition import weighted_design


class PartitionedProgram:
    def __init__(self, X: np.ndarray, y: np.ndarray, P: np.ndarray, eta: float = 1.0):
        self.X = np.asarray(X, dtype=float)
        self.y = np.asarray(y, dtype=float)
        self.P = np.asarray(P, dtype=float)
        self.eta = float(eta)
        N, M = self.X.shape
        K = self.P.shape[1]

        self.alpha = cp.Variable(M, nonneg=True, name="alpha")
        self.beta = cp.Variable(K, name="beta")
        self.t = cp.Variable(name="t")

        # alpha block: X (P * alpha) beta == X @ ((P @ beta) * alpha)
        self.beta_fixed = cp.Parameter(K, name="beta_fixed")
        resid_a = self.X @ cp.multiply(self.P @ self.beta_fixed, self.alpha) + self.t - self.y
        # eta * ||beta||^2 is constant in this block and added back in alpha_step
        loss_a = cp.sum_squares(resid_a) + self.eta * cp.square(self.t)
        self.alpha_problem = cp.Problem(cp.Minimize(loss_a), [self.P.T @ self.alpha == np.ones(K)])

        # beta block: alpha fixed through the aggregated design X (P * alpha)
        self.X_alpha = cp.Parameter((N, K), name="X_alpha")
        resid_b = self.X_alpha @ self.beta + self.t - self.y
        loss_b = cp.sum_squares(resid_b) + self.eta * (cp.sum_squares(self.beta) + cp.square(self.t))
        self.beta_problem = cp.Problem(cp.Minimize(loss_b))

    @property
    def value(self) -> Tuple[np.ndarray, np.ndarray, float]:
        """Current (alpha, beta, t) as fresh numpy copies."""
        return (
            np.array(self.alpha.value, dtype=float),
            np.array(self.beta.value, dtype=float),
            float(self.t.value),
        )

    def set_value(self, alpha, beta, t):
        # solver output may sit a hair below zero, which a nonneg variable rejects
        self.alpha.value = np.maximum(np.asarray(alpha, dtype=float).reshape(-1), 0.0)
        self.beta.value = np.asarray(beta, dtype=float).reshape(-1)
        self.t.value = float(np.asarray(t, dtype=float).reshape(-1)[0])

    def alpha_step(self, backend) -> float:
        """Optimize (alpha, t) with beta held at its current value."""
        beta = np.asarray(self.beta.value, dtype=float)
        self.beta_fixed.value = beta
        return backend.solve(self.alpha_problem) + self.eta * float(beta @ beta)

    def beta_step(self, backend) -> float:
        """Optimize (beta, t) with alpha held at its current value."""
        self.X_alpha.value = weighted_design(self.X, self.P, self.alpha.value)
        return backend.solve(self.beta_problem)

    def loss(self, alpha, beta, t) -> float:
        beta = np.asarray(beta, dtype=float)
        t = float(np.asarray(t, dtype=float).reshape(-1)[0])
        r = weighted_design(self.X, self.P, alpha) @ beta + t - self.y
        return float(r @ r + self.eta * (beta @ beta + t * t))
