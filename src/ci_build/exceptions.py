"""Custom exception types for toolchain dispatch."""

from __future__ import annotations

from typing import Optional, Sequence


class CIBuildError(RuntimeError):
    """Base exception for ci-build failures."""


class ToolchainError(CIBuildError):
    """Raised when an external toolchain command exits unsuccessfully."""

    def __init__(
        self, command: Sequence[str], exit_code: int, message: Optional[str] = None
    ):
        self.command = list(command)
        self.exit_code = exit_code
        super().__init__(
            message
            or f"Toolchain command failed (exit {exit_code}): {' '.join(self.command)}"
        )


class ToolchainNotFoundError(ToolchainError):
    """Raised when the toolchain binary cannot be located."""

    def __init__(self, command: Sequence[str]):
        super().__init__(
            command,
            exit_code=127,
            message=f"Toolchain binary not found on PATH: {command[0]}",
        )


class UnknownSubcommandError(CIBuildError):
    """Raised in strict mode for a subcommand outside the table."""

    def __init__(self, name: str, known: Sequence[str]):
        self.name = name
        self.known = list(known)
        super().__init__(
            f"Unknown subcommand '{name}' (expected one of: {', '.join(self.known)})"
        )


class TelemetryError(RuntimeError):
    """Raised when telemetry logging itself fails."""

    def __init__(self, message: str):
        super().__init__(message)
