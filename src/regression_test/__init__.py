"""
Regression testing by recorded baselines.

This package records the rendered text of computed values on a first run,
persists it to a baseline file, and compares later runs against it.
"""

import logging
import sys

__version__ = "0.1.0"

# Configure logging for the package
def configure_logging(level=logging.INFO):
    """Configure logging for the regression_test package."""
    # Configure the package-level logger
    logger = logging.getLogger('regression_test')

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        formatter = logging.Formatter('%(levelname)s: %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(level)

    return logger

# Configure logging by default
configure_logging()

# Import main classes for public API
from .cli import RegTestCLI, main
from .comparator import Comparator, ComparisonResult, diff_lines
from .config import ConfigManager, RegTestConfig
from .decorator import baseline_path_for, regtest
from .errors import (
    MalformedBaseline,
    MismatchAtIndex,
    MissingEntries,
    RegressionFailures,
    RegressionTestError,
    UnexpectedExtraEntry,
    WriteError,
)
from .recorder import Mode, Recorder
from .rendering import Rendering, render
from .storage import BaselineManager, load_baseline, write_baseline

__all__ = [
    # Version
    "__version__",
    # Recorder
    "Recorder",
    "Mode",
    # Rendering
    "Rendering",
    "render",
    # Storage
    "BaselineManager",
    "load_baseline",
    "write_baseline",
    # Comparator
    "Comparator",
    "ComparisonResult",
    "diff_lines",
    # Test wrapper
    "regtest",
    "baseline_path_for",
    # Errors
    "RegressionTestError",
    "MalformedBaseline",
    "MismatchAtIndex",
    "UnexpectedExtraEntry",
    "MissingEntries",
    "WriteError",
    "RegressionFailures",
    # Config
    "ConfigManager",
    "RegTestConfig",
    # CLI
    "RegTestCLI",
    "main",
]
