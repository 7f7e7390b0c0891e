"""Analysis-related exceptions: parsing and language support."""

from typing import List

from .base import CogMetricsError


class AnalysisError(CogMetricsError):
    """Base class for analysis-related errors."""

    pass


class ParsingError(AnalysisError):
    """Raised when source text cannot be turned into a usable syntax tree."""

    def __init__(self, filepath: str, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": filepath, "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason


class UnsupportedLanguageError(AnalysisError):
    """Raised when no grammar is available for a file."""

    def __init__(self, language: str, supported_languages: List[str]):
        super().__init__(
            f"Unsupported language: {language}",
            details={"language": language, "supported": ", ".join(supported_languages)},
        )
        self.language = language
        self.supported_languages = supported_languages
