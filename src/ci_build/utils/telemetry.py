"""Lightweight telemetry writer for toolchain invocations."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Dict

from ci_build.exceptions import TelemetryError

DEFAULT_MAX_LOG_MB = 10

TELEMETRY_FILENAME = "ci_build_telemetry.jsonl"


class TelemetryClient:
    """Writes toolchain invocation telemetry to JSONL.

    A client without a log directory is disabled and writes nothing.
    """

    def __init__(
        self,
        log_directory: str | Path | None = None,
        max_mb: int = DEFAULT_MAX_LOG_MB,
    ):
        self._enabled = log_directory is not None
        self._log_dir = Path(log_directory) if log_directory else None
        self._log_file = self._log_dir / TELEMETRY_FILENAME if self._log_dir else None
        self._max_mb = max_mb

    @property
    def _max_log_size(self) -> int:
        """Maximum log file size before rotation."""
        return self._max_mb * 1024 * 1024

    def _rotate_if_needed(self) -> None:
        """Rotate log file if it exceeds size threshold."""
        if (
            self._log_file.exists()
            and self._log_file.stat().st_size > self._max_log_size
        ):
            rotated = self._log_file.with_suffix(".jsonl.1")
            if rotated.exists():
                rotated.unlink()
            self._log_file.rename(rotated)

    def emit(self, event: str, **fields: Any) -> None:
        """Write a telemetry event as a JSONL line."""
        if not self._enabled:
            return

        try:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            self._rotate_if_needed()

            record: Dict[str, Any] = {
                "timestamp": datetime.now(tz=UTC).isoformat(),
                "event": event,
                **fields,
            }
            with open(self._log_file, "a") as fh:
                fh.write(json.dumps(record) + "\n")
        except Exception as exc:
            raise TelemetryError(f"Failed to write telemetry: {exc}") from exc
