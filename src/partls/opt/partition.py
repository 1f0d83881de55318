# src/partls/opt/partition.py
"""
Partition helpers shared by the alternating optimizers.

- check_alpha: uniform fallback for partitions whose weights all collapsed to zero.
- homogeneous: fold the intercept into an extra attribute living in its own partition.
- partition_sums / rescale: restore sum(alpha) == 1 inside every partition.
"""

import numpy as np
from typing import Tuple


def check_alpha(alpha: np.ndarray, P: np.ndarray) -> np.ndarray:
    """Return a copy of alpha where every partition k with sum_m P[m,k]*alpha[m] == 0
    has its members reset to 1 / |k|. Other entries are left untouched.

    A partition with no members computes 1/0 and assigns it to nobody; an attribute
    in no partition is never repaired and goes non-finite in `rescale`.
    """
    alpha = np.array(alpha, dtype=float)
    P = np.asarray(P)
    suma = P.T @ alpha
    sizes = P.sum(axis=0)
    for k in np.flatnonzero(suma == 0.0):
        members = P[:, k] == 1
        with np.errstate(divide="ignore"):
            alpha[members] = 1.0 / sizes[k]
    return alpha


def homogeneous(X: np.ndarray, P: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Append a column of ones to X and a matching singleton partition to P.

    Xo is N x (M+1), Po is (M+1) x (K+1) with Po[M, K] == 1 the only entry
    in its row and column.
    """
    X = np.asarray(X, dtype=float)
    P = np.asarray(P)
    M, K = P.shape
    Xo = np.hstack([X, np.ones((X.shape[0], 1))])
    Po = np.zeros((M + 1, K + 1), dtype=P.dtype)
    Po[:M, :K] = P
    Po[M, K] = 1
    return Xo, Po


def partition_sums(alpha: np.ndarray, P: np.ndarray) -> np.ndarray:
    """Total alpha weight per partition (length K)."""
    return np.asarray(P).T @ np.asarray(alpha, dtype=float)


def rescale(alpha: np.ndarray, beta: np.ndarray, P: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    # alpha / s and beta * s keep (P * alpha) @ beta unchanged
    P = np.asarray(P)
    sums = partition_sums(alpha, P)
    per_attr = P @ sums
    return np.asarray(alpha, dtype=float) / per_attr, np.asarray(beta, dtype=float) * sums


def weighted_design(X: np.ndarray, P: np.ndarray, alpha: np.ndarray) -> np.ndarray:
    """X @ (P * alpha[:, None]): one aggregated column per partition (N x K)."""
    return np.asarray(X, dtype=float) @ (np.asarray(P, dtype=float) * np.asarray(alpha, dtype=float)[:, None])
