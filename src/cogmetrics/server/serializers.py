"""Convert metrics records to the service's JSON payloads.

Key names follow the wire format clients already consume: ``LOC``/``NLOC``/
``NOF`` per file and ``CC`` per function, with camelCase elsewhere.
"""

from __future__ import annotations

from typing import Any

from ..metrics.models import ArchiveSummary, FileMetrics, FileResult, FunctionRecord


def serialize_function(fn: FunctionRecord) -> dict[str, Any]:
    return {
        "name": fn.name,
        "NLOC": fn.nloc,
        "CC": fn.cognitive_complexity,
        "lineStart": fn.start_line,
        "lineEnd": fn.end_line,
    }


def serialize_metrics(metrics: FileMetrics) -> dict[str, Any]:
    return {
        "LOC": metrics.total_lines,
        "NLOC": metrics.non_blank_lines,
        "NOF": metrics.function_count,
        "functions": [serialize_function(fn) for fn in metrics.functions],
    }


def serialize_result(result: FileResult) -> dict[str, Any]:
    """Either ``{"fileName", "metrics"}`` or ``{"fileName", "error"}``."""
    if result.metrics is not None:
        return {"fileName": result.file_name, "metrics": serialize_metrics(result.metrics)}
    return {"fileName": result.file_name, "error": result.error}


def serialize_summary(summary: ArchiveSummary) -> dict[str, Any]:
    return {
        "rootFolder": summary.root_folder,
        "totalFiles": summary.total_files,
        "results": [serialize_result(r) for r in summary.results],
    }
