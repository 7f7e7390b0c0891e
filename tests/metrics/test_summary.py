"""Tests for batch complexity statistics."""

import pytest

from cogmetrics.metrics import (
    ArchiveSummary,
    FileMetrics,
    FileResult,
    FunctionRecord,
    summarize,
)


def _file(name, *scores):
    functions = tuple(
        FunctionRecord(name=f"{name}_{i}", nloc=2, cognitive_complexity=s, start_line=i + 1)
        for i, s in enumerate(scores)
    )
    return FileResult.success(name, FileMetrics(total_lines=10, non_blank_lines=8, functions=functions))


@pytest.fixture
def summary():
    return ArchiveSummary(
        root_folder="proj",
        results=(
            _file("a.js", 1, 10),
            FileResult.failure("bad.js", "Unexpected token (1:3)"),
            _file("b.js", 2, 3),
        ),
    )


class TestSummarize:
    def test_counts(self, summary):
        stats = summarize(summary)
        assert stats.file_count == 3
        assert stats.failed_count == 1
        assert stats.function_count == 4
        assert stats.total_lines == 20
        assert stats.non_blank_lines == 16

    def test_distribution(self, summary):
        stats = summarize(summary)
        assert stats.mean == 4.0
        assert stats.median == 2.5
        assert stats.p90 == pytest.approx(7.9)
        assert stats.max == 10

    def test_hotspots_ranked(self, summary):
        stats = summarize(summary, top=2)
        assert [(h.file_name, h.name, h.cognitive_complexity) for h in stats.hotspots] == [
            ("a.js", "a.js_1", 10),
            ("b.js", "b.js_1", 3),
        ]

    def test_ties_keep_discovery_order(self):
        stats = summarize(ArchiveSummary(None, (_file("x.js", 5, 5), _file("y.js", 5))))
        assert [h.name for h in stats.hotspots] == ["x.js_0", "x.js_1", "y.js_0"]

    def test_no_functions(self):
        stats = summarize(ArchiveSummary(None, (_file("empty.js"),)))
        assert stats.function_count == 0
        assert stats.mean == 0.0
        assert stats.hotspots == ()
