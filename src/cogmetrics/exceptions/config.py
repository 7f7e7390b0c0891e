"""Configuration and input validation exceptions."""

from typing import Any, Optional

from .base import CogMetricsError


class ConfigurationError(CogMetricsError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidArchiveError(ConfigurationError):
    """Raised when an uploaded archive is unreadable, unsafe or too large."""

    def __init__(self, reason: str, entry: Optional[str] = None):
        details = {"reason": reason}
        if entry:
            details["entry"] = entry

        super().__init__(f"Invalid archive: {reason}", details=details)
        self.reason = reason
        self.entry = entry
