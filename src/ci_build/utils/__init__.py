"""Utils package - Settings and telemetry helpers."""

from ci_build.utils.config import CIBuildSettings, get_settings
from ci_build.utils.telemetry import TelemetryClient

__all__ = [
    "CIBuildSettings",
    "get_settings",
    "TelemetryClient",
]
