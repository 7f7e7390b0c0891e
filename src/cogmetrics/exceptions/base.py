"""Root of the cogmetrics error hierarchy."""

from typing import Dict, Optional


class CogMetricsError(Exception):
    """Error raised deliberately by cogmetrics.

    Attributes:
        message: One-line summary, e.g. "Failed to parse javascript file: a.js"
        details: Context such as the file path, config key or parser reason;
            rendered after the message by ``str()``
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details) if details else {}

    @property
    def short_message(self) -> str:
        """The underlying reason when one was recorded, else the message.

        HTTP error bodies use this, so a parse failure reads
        ``Unexpected token (1:9)`` rather than the full summary.
        """
        return self.details.get("reason") or self.message

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
