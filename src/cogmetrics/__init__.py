"""
cogmetrics - static code metrics for JavaScript and TypeScript sources.

Counts lines, inventories functions and scores each function's cognitive
complexity from a tree-sitter syntax tree. Results can be produced for a
single file, an inline snippet or a whole zip archive.
"""

__version__ = "0.1.0"

from .metrics import (
    ArchiveSummary,
    FileMetrics,
    FileResult,
    FunctionRecord,
    analyze_files,
    analyze_source,
    collect_functions,
    score,
)

__all__ = [
    "analyze_source",  # Main entry point for one file
    "analyze_files",
    "collect_functions",
    "score",
    "ArchiveSummary",
    "FileMetrics",
    "FileResult",
    "FunctionRecord",
]
