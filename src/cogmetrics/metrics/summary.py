"""Complexity distribution across an analyzed batch."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .models import ArchiveSummary


@dataclass(frozen=True)
class HotSpot:
    """A function ranked by cognitive complexity."""

    file_name: str
    name: str
    cognitive_complexity: int
    start_line: int | None


@dataclass(frozen=True)
class ComplexityStats:
    """Distribution of function complexity over every parsed file.

    Attributes:
        file_count: Files in the batch
        failed_count: Files that failed to parse
        function_count: Functions across parsed files
        total_lines: Sum of file line counts
        non_blank_lines: Sum of non-blank line counts
        mean / median / p90 / max: Complexity distribution (0 without functions)
        hotspots: Most complex functions, highest first
    """

    file_count: int
    failed_count: int
    function_count: int
    total_lines: int
    non_blank_lines: int
    mean: float = 0.0
    median: float = 0.0
    p90: float = 0.0
    max: int = 0
    hotspots: tuple[HotSpot, ...] = field(default_factory=tuple)


def summarize(summary: ArchiveSummary, top: int = 10) -> ComplexityStats:
    """Compute distribution stats and the *top* most complex functions."""
    spots: list[HotSpot] = []
    total_lines = 0
    non_blank_lines = 0
    for result in summary.results:
        if result.metrics is None:
            continue
        total_lines += result.metrics.total_lines
        non_blank_lines += result.metrics.non_blank_lines
        spots.extend(
            HotSpot(
                file_name=result.file_name,
                name=fn.name,
                cognitive_complexity=fn.cognitive_complexity,
                start_line=fn.start_line,
            )
            for fn in result.metrics.functions
        )

    base = dict(
        file_count=summary.total_files,
        failed_count=len(summary.failed_files),
        function_count=len(spots),
        total_lines=total_lines,
        non_blank_lines=non_blank_lines,
    )
    if not spots:
        return ComplexityStats(**base)

    scores = np.array([s.cognitive_complexity for s in spots], dtype=float)
    # stable sort keeps discovery order among equal scores
    ranked = sorted(spots, key=lambda s: -s.cognitive_complexity)
    return ComplexityStats(
        **base,
        mean=round(float(np.mean(scores)), 2),
        median=float(np.median(scores)),
        p90=round(float(np.percentile(scores, 90)), 2),
        max=int(np.max(scores)),
        hotspots=tuple(ranked[:top]),
    )
