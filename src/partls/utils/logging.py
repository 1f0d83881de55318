# src/partls/utils/logging.py
"""
Logging setup for fits.
Usage:
    from partls.utils.logging import configure_logging, get_logger
    configure_logging(level="DEBUG")   # per-block objective values
    log = get_logger(__name__)
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-5s | %(name)s | %(message)s"

# third-party loggers that are chatty at DEBUG during every subproblem solve
SOLVER_LOGGERS = ("__cvxpy__", "cvxpy")

def configure_logging(level: str = "INFO", fmt: Optional[str] = None, solver_level: str = "WARNING"):
    """Route records to stdout. Solver libraries are held at `solver_level` so that
    DEBUG on partls shows the alternating loop without per-solve compiler output."""
    if fmt is None:
        fmt = DEFAULT_FORMAT
    logging.basicConfig(stream=sys.stdout, level=getattr(logging, level.upper(), logging.INFO), format=fmt)
    for name in SOLVER_LOGGERS:
        logging.getLogger(name).setLevel(getattr(logging, solver_level.upper(), logging.WARNING))

def get_logger(name: str):
    return logging.getLogger(name)
