"""Flattened per-file report for inline code analysis.

Only cognitive complexity is computed. ``cyclomatic_complexity`` carries the
cognitive score, and ``token_count``, ``end_line`` and ``max_nesting_depth``
are always zero.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from .models import FileMetrics, FunctionRecord

REPORT_LANGUAGE = "javascript"


def _function_entry(fn: FunctionRecord) -> dict[str, Any]:
    return {
        "cyclomatic_complexity": fn.cognitive_complexity,
        "nloc": fn.nloc,
        "token_count": 0,
        "name": fn.name,
        "long_name": fn.name,
        "start_line": fn.start_line,
        "end_line": 0,
        "max_nesting_depth": 0,
    }


def complexity_average(metrics: FileMetrics) -> float:
    """Mean function complexity rounded half up to two decimals, 0.0 without functions.

    Rounding works on the exact binary value of the mean, so 1/8 gives 0.13
    where the builtin round() would give 0.12.
    """
    if not metrics.functions:
        return 0.0
    mean = metrics.total_complexity / metrics.function_count
    return float(Decimal(mean).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def build_code_report(metrics: FileMetrics, filename: str) -> dict[str, Any]:
    """Build the inline-code analysis payload for *metrics*."""
    return {
        "filename": filename,
        "language": REPORT_LANGUAGE,
        "total_loc": metrics.total_lines,
        "total_nloc": metrics.non_blank_lines,
        "function_count": metrics.function_count,
        "complexity_avg": complexity_average(metrics),
        "complexity_max": metrics.max_complexity,
        "functions": [_function_entry(fn) for fn in metrics.functions],
    }
