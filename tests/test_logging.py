# tests/test_logging.py
import logging

from partls.utils.logging import configure_logging, get_logger, SOLVER_LOGGERS

def test_solver_loggers_are_quieted():
    configure_logging(level="DEBUG", solver_level="error")
    for name in SOLVER_LOGGERS:
        assert logging.getLogger(name).level == logging.ERROR

def test_get_logger_is_namespaced():
    assert get_logger("partls.opt.alternating").name == "partls.opt.alternating"
