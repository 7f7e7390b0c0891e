"""Metrics records produced by the collector and aggregator.

All records are immutable and request-scoped. Aggregation builds new tuples
rather than editing existing records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FunctionRecord:
    """One function-like construct found in a file.

    Attributes:
        name: Resolved display name ("anonymous" when nothing applies)
        nloc: Non-blank lines in the function's source slice
        cognitive_complexity: Nesting-aware complexity score
        start_line: First line (1-indexed), None without position info
        end_line: Last line (1-indexed), None without position info
    """

    name: str
    nloc: int
    cognitive_complexity: int
    start_line: Optional[int] = None
    end_line: Optional[int] = None


@dataclass(frozen=True)
class FileMetrics:
    """Line counts and function inventory for one file.

    Attributes:
        total_lines: Number of newline-delimited lines
        non_blank_lines: Lines with non-whitespace content
        functions: Records in pre-order encounter order
    """

    total_lines: int
    non_blank_lines: int
    functions: tuple[FunctionRecord, ...] = ()

    @property
    def function_count(self) -> int:
        """Number of functions in this file."""
        return len(self.functions)

    @property
    def total_complexity(self) -> int:
        return sum(fn.cognitive_complexity for fn in self.functions)

    @property
    def max_complexity(self) -> int:
        if not self.functions:
            return 0
        return max(fn.cognitive_complexity for fn in self.functions)


@dataclass(frozen=True)
class FileResult:
    """Outcome of analyzing one file: metrics or an error, never both.

    Build instances through :meth:`success` and :meth:`failure`.
    """

    file_name: str
    metrics: Optional[FileMetrics] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.metrics is None) == (self.error is None):
            raise ValueError("FileResult needs exactly one of metrics or error")

    @classmethod
    def success(cls, file_name: str, metrics: FileMetrics) -> FileResult:
        return cls(file_name=file_name, metrics=metrics)

    @classmethod
    def failure(cls, file_name: str, error: str) -> FileResult:
        return cls(file_name=file_name, error=error)

    @property
    def ok(self) -> bool:
        return self.metrics is not None


@dataclass(frozen=True)
class ArchiveSummary:
    """Results for a batch of files.

    Attributes:
        root_folder: Single top-level folder shared by every entry, or None
        results: Per-file results in discovery order
    """

    root_folder: Optional[str]
    results: tuple[FileResult, ...] = ()

    @property
    def total_files(self) -> int:
        return len(self.results)

    @property
    def failed_files(self) -> tuple[FileResult, ...]:
        return tuple(r for r in self.results if not r.ok)
