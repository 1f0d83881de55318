from .optimizer_interface import fit, predict, objective, FitResult, ALT, ALT_NNLS
from .partition import check_alpha, homogeneous
from .solvers import CvxpyBackend, SolverFailedError
