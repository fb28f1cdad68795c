"""Central logging setup for the project."""
from __future__ import annotations
import logging
import sys

def setup_logging(level: int = logging.WARNING) -> None:
    """
    Configure root logger with sane defaults.

    Logs go to stderr; stdout carries the suggested command only.

    Args:
        level: Logging level.
    """
    handler = logging.StreamHandler(sys.stderr)
    fmt = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def level_from_verbosity(verbosity: int) -> int:
    """Map a repeated `-v` count to a logging level."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING
