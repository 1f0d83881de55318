# src/partls/data/loader.py
"""Dataset helpers. Supports CSV and Parquet files.

Functions:
- partition_matrix: build the 0/1 attribute -> group matrix P from named groups.
- load_dataset: load a table into (X, y, P) given a target column and named groups.
- sample_data: small helper to produce a synthetic partitioned dataset for demos/tests.
"""

from pathlib import Path
import numpy as np
import pandas as pd
from typing import Dict, List, Sequence, Tuple

from ..opt.model import FitResult


def partition_matrix(columns: Sequence[str], groups: Dict[str, Sequence[str]]) -> Tuple[np.ndarray, List[str]]:
    """
    P[m, k] = 1 iff columns[m] is listed under the k-th group (in dict order).

    Columns not mentioned in any group get an all-zero row and columns listed in
    several groups get several ones; both are passed through as given.
    """
    columns = list(columns)
    index = {c: m for m, c in enumerate(columns)}
    group_names = list(groups)
    P = np.zeros((len(columns), len(group_names)), dtype=int)
    for k, name in enumerate(group_names):
        for col in groups[name]:
            if col not in index:
                raise ValueError(f"group {name!r} refers to unknown column {col!r}")
            P[index[col], k] = 1
    return P, group_names


def _read_table(path: Path) -> pd.DataFrame:
    if path.suffix in [".parquet", ".pq"]:
        return pd.read_parquet(path)
    if path.suffix in [".csv", ".gz"]:
        return pd.read_csv(path)
    raise ValueError(f"unsupported file type {path.suffix!r} for {path}")


def load_dataset(path: Path, target: str, groups: Dict[str, Sequence[str]]):
    """
    Load a table and return (X, y, P, attribute_names, group_names).

    Attributes are the grouped columns, in group order; every other column except
    `target` is dropped.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{path} not found")
    df = _read_table(path)

    attributes = [c for name in groups for c in groups[name]]
    missing = {target, *attributes} - set(df.columns)
    if missing:
        raise ValueError(f"Input file missing columns {sorted(missing)}. Found: {df.columns.tolist()}")

    df = df.dropna(subset=[target, *attributes])
    X = df.loc[:, attributes].to_numpy(dtype=float)
    y = df[target].to_numpy(dtype=float)
    P, group_names = partition_matrix(attributes, groups)
    return X, y, P, attributes, group_names


def sample_data(n_samples: int = 100, partition_sizes: Sequence[int] = (3, 2), noise: float = 0.01, seed: int = 0):
    """
    Draw (X, y, P, truth) from a known partitioned linear model: alpha ~ Dirichlet(1)
    inside each partition, beta ~ N(0, 2^2), t ~ N(0, 1), gaussian noise on y.
    truth is a FitResult whose opt is the squared norm of the injected noise.
    """
    rng = np.random.default_rng(seed)
    M, K = int(sum(partition_sizes)), len(partition_sizes)
    P = np.zeros((M, K), dtype=int)
    alpha = np.empty(M)
    start = 0
    for k, size in enumerate(partition_sizes):
        P[start:start + size, k] = 1
        alpha[start:start + size] = rng.dirichlet(np.ones(size))
        start += size
    beta = rng.normal(0.0, 2.0, size=K)
    t = float(rng.normal())

    X = rng.uniform(-1.0, 1.0, size=(n_samples, M))
    eps = rng.normal(0.0, noise, size=n_samples)
    y = X @ (P * alpha[:, None]) @ beta + t + eps
    return X, y, P, FitResult(float(eps @ eps), alpha, beta, t, P)
