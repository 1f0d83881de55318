# tests/test_persist.py
import numpy as np

from partls.data.loader import sample_data
from partls.opt.optimizer_interface import fit, ALT_NNLS
from partls.persist import FileCheckpoint, resume_from, save_model, load_model, load_state

def test_checkpoint_file_holds_latest_state(tmp_path):
    X, y, P, _ = sample_data(n_samples=40, partition_sizes=(2, 3), seed=1)
    path = tmp_path / "runs" / "fit.joblib"
    ckpt = FileCheckpoint(path, keep_history=10)
    fit(X, y, P, 3, variant=ALT_NNLS, seed=0, checkpoint=ckpt)
    assert path.exists()
    assert [s[0] for s in ckpt.history] == [1, 2, 3]
    i, alpha, beta, t, opt = load_state(path)
    assert i == 3
    assert np.array_equal(alpha, ckpt.last[1]) and opt == ckpt.last[4]

def test_interrupted_fit_continues_from_file(tmp_path):
    X, y, P, _ = sample_data(n_samples=40, partition_sizes=(2, 3), noise=0.1, seed=1)
    path = tmp_path / "fit.joblib"
    straight = fit(X, y, P, 6, variant=ALT_NNLS, seed=0)

    fit(X, y, P, 2, variant=ALT_NNLS, seed=0, checkpoint=FileCheckpoint(path), resume=resume_from(path))
    ckpt = FileCheckpoint(path, keep_history=10)
    resumed = fit(X, y, P, 6, variant=ALT_NNLS, seed=0, checkpoint=ckpt, resume=resume_from(path))

    assert [s[0] for s in ckpt.history] == [3, 4, 5, 6]
    assert np.isclose(resumed.opt, straight.opt)
    assert np.allclose(resumed.alpha, straight.alpha)
    assert np.allclose(resumed.beta, straight.beta)

def test_resume_without_file_returns_default(tmp_path):
    resume = resume_from(tmp_path / "missing.joblib")
    default = (0, np.ones(2), np.zeros(2), 0.0, np.inf)
    assert resume(default) is default

def test_model_roundtrip(tmp_path):
    X, y, P, _ = sample_data(n_samples=30, partition_sizes=(2, 1), seed=4)
    res = fit(X, y, P, 3, variant=ALT_NNLS, seed=0)
    save_model(res, tmp_path / "model.joblib")
    loaded = load_model(tmp_path / "model.joblib")
    assert loaded.opt == res.opt and loaded.t == res.t
    assert np.array_equal(loaded.alpha, res.alpha) and np.array_equal(loaded.P, res.P)

def test_checkpoint_history_is_bounded(tmp_path):
    X, y, P, _ = sample_data(n_samples=30, partition_sizes=(2, 2), seed=3)
    quiet = FileCheckpoint(tmp_path / "a.joblib")
    fit(X, y, P, 4, variant=ALT_NNLS, seed=0, checkpoint=quiet)
    assert len(quiet.history) == 0 and quiet.last[0] == 4

    short = FileCheckpoint(tmp_path / "b.joblib", keep_history=2)
    fit(X, y, P, 4, variant=ALT_NNLS, seed=0, checkpoint=short)
    assert [s[0] for s in short.history] == [3, 4]
