"""Tests for the exception hierarchy."""

import pytest

from cogmetrics.exceptions import (
    AnalysisError,
    CogMetricsError,
    ConfigurationError,
    InvalidArchiveError,
    InvalidConfigError,
    ParsingError,
    UnsupportedLanguageError,
)


class TestBaseError:
    def test_message_only(self):
        assert str(CogMetricsError("boom")) == "boom"

    def test_details_appended(self):
        err = CogMetricsError("boom", details={"file": "a.js"})
        assert str(err) == "boom (file=a.js)"
        assert err.message == "boom"


class TestHierarchy:
    @pytest.mark.parametrize(
        "error, parent",
        [
            (ParsingError("a.js", "javascript", "Unexpected token (1:2)"), AnalysisError),
            (UnsupportedLanguageError("cobol", ["javascript"]), AnalysisError),
            (InvalidConfigError("port", 0, "must be positive"), ConfigurationError),
            (InvalidArchiveError("not a zip file"), ConfigurationError),
        ],
    )
    def test_parents(self, error, parent):
        assert isinstance(error, parent)
        assert isinstance(error, CogMetricsError)


class TestFields:
    def test_parsing_error(self):
        err = ParsingError("src/a.js", "javascript", "Unexpected token (3:4)")
        assert err.filepath == "src/a.js"
        assert err.reason == "Unexpected token (3:4)"
        assert "src/a.js" in err.message

    def test_unsupported_language(self):
        err = UnsupportedLanguageError("cobol", ["javascript", "tsx"])
        assert err.details["supported"] == "javascript, tsx"

    def test_invalid_config(self):
        err = InvalidConfigError("port", 0, "must be positive")
        assert err.details == {"key": "port", "value": "0", "reason": "must be positive"}

    def test_invalid_archive_entry(self):
        err = InvalidArchiveError("path traversal in archive", entry="../x.js")
        assert err.message == "Invalid archive: path traversal in archive"
        assert err.details["entry"] == "../x.js"
        assert "entry" not in InvalidArchiveError("bad").details


class TestShortMessage:
    def test_reason_preferred(self):
        err = ParsingError("a.js", "javascript", "Unexpected token (1:9)")
        assert err.short_message == "Unexpected token (1:9)"

    def test_falls_back_to_message(self):
        assert CogMetricsError("boom").short_message == "boom"

    def test_details_copied(self):
        details = {"reason": "x"}
        err = CogMetricsError("boom", details=details)
        details["reason"] = "changed"
        assert err.details == {"reason": "x"}
