"""Exception hierarchy for cogmetrics."""

from .analysis import AnalysisError, ParsingError, UnsupportedLanguageError
from .base import CogMetricsError
from .config import ConfigurationError, InvalidArchiveError, InvalidConfigError

__all__ = [
    "CogMetricsError",
    "AnalysisError",
    "ParsingError",
    "UnsupportedLanguageError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidArchiveError",
]
