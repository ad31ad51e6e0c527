"""Services package - Dispatch and toolchain execution."""

from ci_build.services.dispatcher import (
    SUBCOMMANDS,
    Dispatcher,
    Invocation,
    run_steps,
)
from ci_build.services.toolchain import ToolchainRunner

__all__ = [
    "SUBCOMMANDS",
    "Dispatcher",
    "Invocation",
    "run_steps",
    "ToolchainRunner",
]
