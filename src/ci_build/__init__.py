"""
ci-build - Dispatcher for Cargo workspace CI actions.

This package maps a single subcommand (format, build, doc) to a fixed
sequence of Cargo invocations and exits with their status.
"""

__version__ = "1.0.0"

from ci_build.cli import app
from ci_build.exceptions import ToolchainError, ToolchainNotFoundError
from ci_build.services.dispatcher import Dispatcher

__all__ = [
    "app",
    "Dispatcher",
    "ToolchainError",
    "ToolchainNotFoundError",
    "__version__",
]
