# tests/test_loader.py
import numpy as np
import pandas as pd
import pytest

from partls.data.loader import partition_matrix, load_dataset, sample_data
from partls.opt.optimizer_interface import predict

def test_partition_matrix_follows_group_order():
    P, names = partition_matrix(["a", "b", "c", "d"], {"g2": ["c"], "g1": ["a", "b", "d"]})
    assert names == ["g2", "g1"]
    assert np.array_equal(P, [[0, 1], [0, 1], [1, 0], [0, 1]])

def test_partition_matrix_unknown_column():
    with pytest.raises(ValueError):
        partition_matrix(["a"], {"g": ["a", "zz"]})

def test_load_dataset_csv(tmp_path):
    df = pd.DataFrame({
        "x1": [1.0, 2.0, 3.0, None],
        "x2": [0.5, 0.1, 0.2, 0.3],
        "x3": [4.0, 5.0, 6.0, 7.0],
        "note": ["a", "b", "c", "d"],
        "y": [1.0, 2.0, 3.0, 4.0],
    })
    path = tmp_path / "data.csv"
    df.to_csv(path, index=False)
    X, y, P, attrs, groups = load_dataset(path, "y", {"lin": ["x1", "x3"], "other": ["x2"]})
    assert attrs == ["x1", "x3", "x2"] and groups == ["lin", "other"]
    assert X.shape == (3, 3) and np.array_equal(y, [1.0, 2.0, 3.0])
    assert np.array_equal(X[:, 1], [4.0, 5.0, 6.0])
    assert np.array_equal(P, [[1, 0], [1, 0], [0, 1]])

def test_load_dataset_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dataset(tmp_path / "nope.csv", "y", {"g": ["x"]})
    path = tmp_path / "d.csv"
    pd.DataFrame({"x": [1.0], "y": [2.0]}).to_csv(path, index=False)
    with pytest.raises(ValueError):
        load_dataset(path, "y", {"g": ["x", "w"]})

def test_sample_data_truth_reproduces_targets():
    X, y, P, truth = sample_data(n_samples=50, partition_sizes=(3, 2), noise=0.0, seed=2)
    assert X.shape == (50, 5) and P.shape == (5, 2)
    assert np.allclose(P.T @ truth.alpha, 1.0)
    assert np.allclose(predict(truth, X), y)
    assert truth.opt == 0.0

def test_load_dataset_parquet(tmp_path):
    X, y, P, _ = sample_data(n_samples=20, partition_sizes=(2, 1), seed=5)
    df = pd.DataFrame(X, columns=["a", "b", "c"]).assign(target=y)
    path = tmp_path / "data.parquet"
    df.to_parquet(path)
    X2, y2, P2, attrs, groups = load_dataset(path, "target", {"g1": ["a", "b"], "g2": ["c"]})
    assert attrs == ["a", "b", "c"] and groups == ["g1", "g2"]
    assert np.array_equal(X2, X) and np.array_equal(y2, y)
    assert np.array_equal(P2, P)
