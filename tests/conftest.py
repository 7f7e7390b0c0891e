"""Shared test fixtures for cogmetrics tests."""

import io
import zipfile

import pytest

from cogmetrics.metrics import analyze_source
from cogmetrics.scanning import TreeSitterParser


@pytest.fixture(scope="session")
def parser():
    """One parser for the whole run; grammars load once."""
    return TreeSitterParser()


@pytest.fixture
def analyze(parser):
    """Analyze a snippet and return its FileMetrics."""

    def _analyze(code, path="test.js"):
        return analyze_source(code, path, parser)

    return _analyze


@pytest.fixture
def complexity_of(analyze):
    """Cognitive complexity of the first function in a snippet."""

    def _complexity_of(code, path="test.js"):
        return analyze(code, path).functions[0].cognitive_complexity

    return _complexity_of


@pytest.fixture
def make_zip():
    """Build zip bytes from ``{entry_name: text}``."""

    def _make_zip(entries):
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w") as zf:
            for name, text in entries.items():
                zf.writestr(name, text)
        return buf.getvalue()

    return _make_zip
