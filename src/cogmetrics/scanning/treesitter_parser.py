"""Tree-sitter parser wrapper.

Provides one interface for parsing JavaScript, TypeScript and TSX sources
into tree-sitter syntax trees.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse_source(source_text, "src/app.js")
"""

from __future__ import annotations

from typing import Any, Iterator

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from ..exceptions import ParsingError, UnsupportedLanguageError
from ..logging_config import get_logger
from .languages import DEFAULT_LANGUAGE, detect_language

logger = get_logger(__name__)

_GRAMMARS = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}


# Superset grammar (types plus JSX) tried when JavaScript parsing fails.
FALLBACK_LANGUAGE = "tsx"


def get_supported_languages() -> list[str]:
    """Get list of languages with installed grammars."""
    return list(_GRAMMARS)


class TreeSitterParser:
    """Wrapper around tree-sitter for the supported grammars.

    Language objects are built once and shared; a fresh ``Parser`` is
    created per call, so one instance can be used from several threads.
    """

    def __init__(self) -> None:
        self._languages: dict[str, Any] = {
            name: tree_sitter.Language(loader()) for name, loader in _GRAMMARS.items()
        }

    def is_language_supported(self, language: str) -> bool:
        """Check if a language is supported."""
        return language in self._languages

    def parse(self, code: bytes, language: str, path: str = "<input>") -> tree_sitter.Tree:
        """Parse code and return its syntax tree.

        Args:
            code: Source code as UTF-8 bytes
            language: Grammar name (e.g., "javascript")
            path: File path used in error messages

        Returns:
            The parsed tree

        Raises:
            UnsupportedLanguageError: No grammar for *language*
            ParsingError: The source contains syntax errors
        """
        lang = self._languages.get(language)
        if lang is None:
            raise UnsupportedLanguageError(language, get_supported_languages())

        tree = tree_sitter.Parser(lang).parse(code)
        if tree.root_node.has_error:
            raise ParsingError(path, language, _describe_error(tree.root_node))
        return tree

    def parse_source(self, source: str, path: str) -> tree_sitter.Tree:
        """Parse *source*, picking the grammar from the suffix of *path*.

        JavaScript files (and unknown suffixes) that fail to parse are retried
        with the TSX grammar, so type annotations in a ``.js`` file are
        accepted. When both fail, the JavaScript error is raised.
        """
        code = source.encode("utf-8")
        language = detect_language(path, default=DEFAULT_LANGUAGE)
        if language != DEFAULT_LANGUAGE:
            return self.parse(code, language, path)

        try:
            return self.parse(code, language, path)
        except ParsingError as js_error:
            try:
                tree = self.parse(code, FALLBACK_LANGUAGE, path)
            except ParsingError:
                raise js_error from None
            logger.debug(f"{path}: parsed with the {FALLBACK_LANGUAGE} grammar")
            return tree


def _error_nodes(node: Any) -> Iterator[Any]:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            yield current
            continue
        if current.has_error:
            stack.extend(reversed(current.children))


def _describe_error(root: Any) -> str:
    """``Unexpected token (line:col)`` style message for the first syntax error."""
    for node in _error_nodes(root):
        line, column = node.start_point
        if node.is_missing:
            return f"Missing {node.type} ({line + 1}:{column})"
        return f"Unexpected token ({line + 1}:{column})"
    return "Syntax error"
