"""Metrics engine: complexity scoring, function collection, aggregation."""

from .aggregator import analyze_entry, analyze_files, analyze_source, detect_root_folder
from .collector import collect_functions, count_lines, resolve_name
from .complexity import score
from .models import ArchiveSummary, FileMetrics, FileResult, FunctionRecord
from .report import build_code_report
from .summary import ComplexityStats, HotSpot, summarize

__all__ = [
    # Records
    "FunctionRecord",
    "FileMetrics",
    "FileResult",
    "ArchiveSummary",
    # Engine
    "score",
    "collect_functions",
    "count_lines",
    "resolve_name",
    "analyze_source",
    "analyze_entry",
    "analyze_files",
    "detect_root_folder",
    # Reports
    "build_code_report",
    "ComplexityStats",
    "HotSpot",
    "summarize",
]
