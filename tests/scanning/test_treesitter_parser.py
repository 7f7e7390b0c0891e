"""Tests for tree-sitter parser wrapper."""

import re

import pytest

from cogmetrics.exceptions import ParsingError, UnsupportedLanguageError
from cogmetrics.scanning.treesitter_parser import TreeSitterParser, get_supported_languages


class TestSupportedLanguages:
    def test_languages(self):
        assert set(get_supported_languages()) == {"javascript", "typescript", "tsx"}

    def test_is_language_supported(self, parser):
        assert parser.is_language_supported("tsx")
        assert not parser.is_language_supported("python")


class TestParse:
    """parse() with an explicit grammar."""

    def test_parse_javascript_returns_tree(self, parser):
        tree = parser.parse(b"function foo() { return 1; }\n", "javascript")
        assert tree.root_node.type == "program"
        assert not tree.root_node.has_error

    def test_parse_typescript(self, parser):
        tree = parser.parse(b"interface A { x: number }\nconst a: A = { x: 1 };\n", "typescript")
        assert tree.root_node.type == "program"

    def test_unsupported_language_raises(self, parser):
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            parser.parse(b"def foo(): pass", "python")
        assert exc_info.value.language == "python"
        assert "javascript" in exc_info.value.supported_languages

    def test_syntax_error_raises(self, parser):
        with pytest.raises(ParsingError) as exc_info:
            parser.parse(b"function (", "javascript", "bad.js")
        err = exc_info.value
        assert err.filepath == "bad.js"
        assert err.language == "javascript"
        assert err.reason

    def test_error_reason_has_position(self, parser):
        with pytest.raises(ParsingError) as exc_info:
            parser.parse(b"const a = 1;\nconst = ;\n", "javascript")
        assert re.search(r"\(\d+:\d+\)", exc_info.value.reason)

    def test_instance_is_reusable(self):
        parser = TreeSitterParser()
        first = parser.parse(b"let a = 1;", "javascript")
        second = parser.parse(b"let b = 2;", "javascript")
        assert first.root_node.text == b"let a = 1;"
        assert second.root_node.text == b"let b = 2;"


class TestParseSource:
    """parse_source() picks the grammar from the path."""

    def test_js_with_type_annotations_parses_as_tsx(self, parser):
        code = "const n: number = 1;"
        assert not parser.parse_source(code, "a.ts").root_node.has_error
        assert not parser.parse_source(code, "a.js").root_node.has_error

    def test_js_error_survives_fallback(self, parser):
        with pytest.raises(ParsingError) as exc_info:
            parser.parse_source("function (", "a.js")
        assert exc_info.value.details["language"] == "javascript"

    def test_tsx(self, parser):
        tree = parser.parse_source("const el = <div className='x' />;", "C.tsx")
        assert not tree.root_node.has_error

    def test_unknown_suffix_defaults_to_javascript(self, parser):
        tree = parser.parse_source("const x = () => <b />;", "snippet.txt")
        assert not tree.root_node.has_error
