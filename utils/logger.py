# utils/logger.py
# This file is part of Arbor - A Truth Tree Solver
#
# Logging utility for tableau solving with configurable levels

import logging
import sys
from enum import Enum
from typing import Iterable, Optional


class LogLevel(Enum):
    """Log levels for the truth tree solver."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class SolverLogger:
    """Centralized logger for the solver with structured output."""

    def __init__(self, name: str = "truthtree_solver", level: LogLevel = LogLevel.INFO):
        """Initialize the solver logger.

        Args:
            name: Logger name
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(SolverFormatter())

        self.logger.addHandler(console_handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    # Core logging methods
    def debug(self, message: str, **kwargs):
        """Log debug message (detailed internal state)."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message (general progress)."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message (unexpected but recoverable)."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message (serious problems)."""
        self.logger.error(message, **kwargs)

    # Specialized methods for solver events
    def solve_start(self, premises: Iterable[str], strategy: str):
        """Log solver initialization."""
        self.info("=== Starting Truth Tree ===")
        for text in premises:
            self.info(f"Premise: {text}")
        self.info(f"Expansion strategy: {strategy}")

    def expansion_selected(self, node_id: int, text: str, leaves: Iterable[int]):
        """Log the candidate chosen for one expansion step."""
        self.debug(f"    🌱 Expanding node {node_id} ({text}) on leaves {list(leaves)}")

    def branch_closed(self, leaf_id: int, ref1: int, ref2: int):
        """Log a branch closed by contradiction."""
        self.debug(f"    ❌ Branch at leaf {leaf_id} closed by nodes {ref1} and {ref2}")

    def branch_opened(self, leaf_id: int):
        """Log a branch terminated as open."""
        self.debug(f"    ⭕ Branch at leaf {leaf_id} is open")

    def closure_aborted(self, leaf_id: int, ancestor_id: int, validity: str):
        """Log a closure attempt stopped by the validity gate."""
        self.debug(
            f"    ⏸️  Closure at leaf {leaf_id} deferred: ancestor {ancestor_id} is {validity}"
        )

    def structural_failure(self, message: str):
        """Log a failed tree mutation."""
        self.warning(f"⚠️  Structural failure: {message}")

    def final_result(self, finished: bool, message: str):
        """Log the final verdict on the tree."""
        if finished:
            self.info(f"\n>>> TREE COMPLETE: {message} <<<")
        else:
            self.info(f"\n>>> TREE INCOMPLETE: {message} <<<")

    def validation_result(self, success: bool, message: str = ""):
        """Log validation results."""
        if success:
            self.debug(f"✅ {message}" if message else "✅ Validation successful")
        else:
            self.error(f"❌ {message}" if message else "❌ Validation failed")


class SolverFormatter(logging.Formatter):
    """Custom formatter for solver logging with clean output."""

    def format(self, record):
        # For INFO level and above, show message only (clean output)
        if record.levelno >= logging.INFO:
            return record.getMessage()

        if record.levelno == logging.DEBUG:
            return f"[DEBUG] {record.getMessage()}"

        return f"[{record.levelname}] {record.getMessage()}"


# Global logger instance
_global_logger: Optional[SolverLogger] = None


def get_logger(name: str = "truthtree_solver") -> SolverLogger:
    """Get or create the global solver logger instance.

    Args:
        name: Logger name (default: "truthtree_solver")

    Returns:
        SolverLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = SolverLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    logger = get_logger()
    logger.set_level(level)


def configure_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on command line flags.

    Args:
        verbose: Enable verbose (INFO) output
        debug: Enable debug output (overrides verbose)
    """
    if debug:
        set_log_level(LogLevel.DEBUG)
    elif verbose:
        set_log_level(LogLevel.INFO)
    else:
        set_log_level(LogLevel.WARNING)
