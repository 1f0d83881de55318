# src/partls/config.py
"""Global configuration and defaults used across the project."""

# Alternating optimization with a general convex solver
ALT_DEFAULTS = {
    "n_iter": 20,     # alternating loops, no convergence test
    "eta": 1.0,       # ridge weight on ||beta||^2 + t^2
}

# Alternating optimization with NNLS subproblems (no ridge support)
NNLS_DEFAULTS = {
    "n_iter": 20,
    "eta": 0.0,
}

# cvxpy backend defaults
QP_DEFAULTS = {
    "solver": "CLARABEL",   # any installed cvxpy solver name
    "qp_verbose": False,
}

# Random initial betas are drawn from U(-scale/2, scale/2)
INIT_BETA_SCALE = 10.0
