"""Language detection: maps file names onto tree-sitter grammars.

Adding a language:
  1. Add an entry to LANGUAGES below.
  2. Register its grammar loader in treesitter_parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional


@dataclass(frozen=True)
class LanguageConfig:
    """Grammar name plus the file suffixes that select it."""

    name: str
    extensions: tuple[str, ...]


LANGUAGES = {
    "javascript": LanguageConfig(
        name="javascript",
        extensions=(".js", ".jsx", ".mjs", ".cjs"),
    ),
    "typescript": LanguageConfig(
        name="typescript",
        extensions=(".ts", ".mts", ".cts"),
    ),
    "tsx": LanguageConfig(
        name="tsx",
        extensions=(".tsx",),
    ),
}

# Inline snippets without a recognized suffix are parsed as JavaScript.
DEFAULT_LANGUAGE = "javascript"


def get_all_known_extensions() -> set[str]:
    """Every suffix that maps onto a grammar."""
    return {ext for cfg in LANGUAGES.values() for ext in cfg.extensions}


def detect_language(path: str, default: Optional[str] = None) -> Optional[str]:
    """Return the grammar name for *path*, or *default* when unknown."""
    suffix = PurePosixPath(path.replace("\\", "/")).suffix.lower()
    for name, cfg in LANGUAGES.items():
        if suffix in cfg.extensions:
            return name
    return default
