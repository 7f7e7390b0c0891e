"""Source parsing: tree-sitter grammars and node classification."""

from .languages import (
    DEFAULT_LANGUAGE,
    LANGUAGES,
    LanguageConfig,
    detect_language,
    get_all_known_extensions,
)
from .syntax import NodeKind, iter_preorder, node_kind
from .treesitter_parser import TreeSitterParser, get_supported_languages

__all__ = [
    # Language config
    "LanguageConfig",
    "LANGUAGES",
    "DEFAULT_LANGUAGE",
    "detect_language",
    "get_all_known_extensions",
    # Tree model
    "NodeKind",
    "node_kind",
    "iter_preorder",
    # Parser
    "TreeSitterParser",
    "get_supported_languages",
]
