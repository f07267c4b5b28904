# utils/__init__.py
# This file is part of Arbor - A Truth Tree Solver
#
# Utility module exports
#
# Document and rendering helpers import the tree model; import them from
# their own modules to keep the parser free of a circular import.

from .logger import LogLevel, get_logger, set_log_level, configure_logging

__all__ = [
    "LogLevel",
    "get_logger",
    "set_log_level",
    "configure_logging",
]
