"""Partitioned least squares regression fitted by alternating optimization."""

from .opt import fit, predict, objective, FitResult, ALT, ALT_NNLS, check_alpha, homogeneous
from .opt import CvxpyBackend, SolverFailedError
from .persist import FileCheckpoint, resume_from, save_model, load_model
from .utils.logging import configure_logging, get_logger

__version__ = "0.1.0"
