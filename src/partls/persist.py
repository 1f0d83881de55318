# src/partls/persist.py
"""
Persistence helpers: joblib-backed checkpoint sinks / resume sources and fitted models.

Usage:
    ckpt = FileCheckpoint("runs/fit.joblib")
    fit(X, y, P, 100, checkpoint=ckpt, resume=resume_from("runs/fit.joblib"))

Interrupting the fit and calling the same line again continues after the last
saved iteration.
"""
import joblib
from collections import deque
from pathlib import Path

from .opt.model import FitResult
from .utils.logging import get_logger

log = get_logger(__name__)


def save_state(state, path):
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(tuple(state), path)


def load_state(path):
    return tuple(joblib.load(path))


class FileCheckpoint:
    """Checkpoint sink keeping the latest state on disk.

    `history` holds the last `keep_history` states in memory (none by default,
    long fits would otherwise grow it without bound).
    """

    def __init__(self, path, keep_history: int = 0):
        self.path = Path(path)
        self.history = deque(maxlen=int(keep_history))
        self.last = None

    def __call__(self, state):
        self.last = state
        self.history.append(state)
        save_state(state, self.path)


def resume_from(path):
    """Resume source returning the state saved at `path`, or the default state if none exists."""
    path = Path(path)

    def resume(default_state):
        if not path.exists():
            return default_state
        state = load_state(path)
        log.info("resuming from %s at iteration %d (objective %.6g)", path, state[0], state[4])
        return state

    return resume


def save_model(result, path):
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(tuple(result), path)


def load_model(path):
    return FitResult(*joblib.load(path))
