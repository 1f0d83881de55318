# src/partls/opt/model.py
"""Fitted model container and prediction."""

import numpy as np
from typing import NamedTuple

from .partition import weighted_design


class FitResult(NamedTuple):
    opt: float          # objective at the returned point
    alpha: np.ndarray   # (M,) attribute weights, sum to 1 inside each partition
    beta: np.ndarray    # (K,) partition coefficients
    t: float            # intercept
    P: np.ndarray       # (M, K) partition matrix the model was fitted with


def predict(result: FitResult, X: np.ndarray) -> np.ndarray:
    """f(X) = X (P * alpha) beta + t"""
    return weighted_design(X, result.P, result.alpha) @ np.asarray(result.beta, dtype=float) + result.t


def objective(result: FitResult, X: np.ndarray, y: np.ndarray) -> float:
    """Squared residual norm of the model on (X, y), no regularization term."""
    r = predict(result, X) - np.asarray(y, dtype=float)
    return float(r @ r)
