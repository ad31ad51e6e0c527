"""Toolchain runner - synchronous subprocess wrapper for external build tools."""

from __future__ import annotations

import logging
import signal
import subprocess
import time
from typing import Any, List, Optional, TYPE_CHECKING

from ci_build.exceptions import (
    TelemetryError,
    ToolchainError,
    ToolchainNotFoundError,
)
from ci_build.utils.telemetry import TelemetryClient

if TYPE_CHECKING:
    from ci_build.services.dispatcher import Invocation

logger = logging.getLogger(__name__)

# Exit status a POSIX shell reports for a child killed by signal N is 128 + N
SIGNAL_EXIT_BASE = 128


def normalize_exit_code(returncode: int) -> int:
    """Map a subprocess return code to a process exit status."""
    if returncode < 0:
        return SIGNAL_EXIT_BASE - returncode
    return returncode


class ToolchainRunner:
    """Runs one external invocation at a time, inheriting standard streams.

    Output is neither captured nor transformed and no timeout is applied; a
    tool that never exits blocks the caller.
    """

    def __init__(self, telemetry_client: Optional[TelemetryClient] = None):
        self.telemetry = telemetry_client or TelemetryClient()
        self._last_command: List[str] | None = None

    @property
    def last_command(self) -> List[str] | None:
        return self._last_command

    def _emit_telemetry(
        self, event: str, command: List[str], duration: float, **extra: Any
    ) -> None:
        try:
            self.telemetry.emit(
                event,
                command=" ".join(command),
                duration_ms=round(duration * 1000, 2),
                **extra,
            )
        except TelemetryError as exc:
            logger.debug("Telemetry write failed: %s", exc)

    def run(self, invocation: "Invocation") -> int:
        """Run ``invocation`` to completion.

        Returns 0 on success. Raises ``ToolchainError`` carrying the exit
        status on failure (130 when interrupted), or
        ``ToolchainNotFoundError`` when the program is not on PATH.
        """
        command = invocation.argv
        self._last_command = command
        start_time = time.time()

        logger.info("Executing: %s", invocation)
        try:
            result = subprocess.run(command, check=False)
        except FileNotFoundError as exc:
            error = ToolchainNotFoundError(command)
            self._emit_telemetry(
                "toolchain.not_found",
                command,
                time.time() - start_time,
                exit_code=error.exit_code,
            )
            logger.info("Toolchain binary not found: %s", exc)
            raise error from exc
        except KeyboardInterrupt:
            exit_code = SIGNAL_EXIT_BASE + signal.SIGINT
            self._emit_telemetry(
                "toolchain.interrupted",
                command,
                time.time() - start_time,
                exit_code=exit_code,
            )
            logger.info("Interrupted: %s", invocation)
            raise ToolchainError(command, exit_code) from None

        exit_code = normalize_exit_code(result.returncode)
        duration = time.time() - start_time

        if exit_code != 0:
            self._emit_telemetry(
                "toolchain.failure", command, duration, exit_code=exit_code
            )
            logger.info("Command failed with exit %d: %s", exit_code, invocation)
            raise ToolchainError(command, exit_code)

        self._emit_telemetry("toolchain.success", command, duration, exit_code=0)
        logger.info("Completed in %.2fs: %s", duration, invocation)
        return 0
