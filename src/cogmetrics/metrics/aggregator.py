"""File/archive aggregator: per-file results plus an archive summary.

Usage:
    summary = analyze_files([("src/a.js", code_a), ("src/lib/b.ts", code_b)])
    summary.root_folder   # "src"
    summary.results       # FileResults for "a.js" and "lib/b.ts", in input order

Each file is parsed and measured independently. A parse failure is
recorded on that file's result and never aborts the batch.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

from ..exceptions import AnalysisError
from ..logging_config import get_logger
from ..scanning.treesitter_parser import TreeSitterParser
from .collector import collect_functions
from .models import ArchiveSummary, FileMetrics, FileResult

logger = get_logger(__name__)

# Resource-fork folders macOS adds to zip archives.
NOISE_FOLDERS = frozenset({"__MACOSX"})


def analyze_source(source: str, path: str, parser: Optional[TreeSitterParser] = None) -> FileMetrics:
    """Parse and measure one file.

    Raises:
        ParsingError: The source has syntax errors
        UnsupportedLanguageError: No grammar for the file
    """
    parser = parser or TreeSitterParser()
    tree = parser.parse_source(source, path)
    return collect_functions(tree, source, path)


def analyze_entry(path: str, source: str, parser: TreeSitterParser) -> FileResult:
    """Analyze one ``(path, source)`` entry, converting failures to a result."""
    try:
        return FileResult.success(path, analyze_source(source, path, parser))
    except AnalysisError as e:
        logger.warning(f"Skipping metrics for {path}: {e}")
        return FileResult.failure(path, str(e))


def analyze_files(
    entries: Iterable[tuple[str, str]],
    parser: Optional[TreeSitterParser] = None,
    workers: Optional[int] = None,
    entry_names: Optional[Iterable[str]] = None,
) -> ArchiveSummary:
    """Analyze a batch of ``(relative_path, source_text)`` entries.

    Args:
        entries: Files to analyze, in discovery order. Paths are archive
            entry names; results report them relative to the detected root.
        parser: Shared parser (a new one is built when omitted)
        workers: Thread count; None or 1 analyzes sequentially
        entry_names: Every name in the archive (directories and non-source
            files included) for root detection; defaults to the entry paths

    Returns:
        ArchiveSummary whose results keep the order of *entries*
    """
    entries = list(entries)
    parser = parser or TreeSitterParser()
    if entry_names is None:
        entry_names = [path for path, _ in entries]
    root_folder = detect_root_folder(entry_names)
    entries = [(relative_to_root(path, root_folder), source) for path, source in entries]

    if workers is None or workers <= 1 or len(entries) < 2:
        results = [analyze_entry(path, source, parser) for path, source in entries]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order
            results = list(
                executor.map(lambda entry: analyze_entry(entry[0], entry[1], parser), entries)
            )

    failed = sum(1 for r in results if not r.ok)
    if failed:
        logger.info(f"{failed}/{len(results)} file(s) failed to parse")

    return ArchiveSummary(root_folder=root_folder, results=tuple(results))


def clean_entry_name(entry_name: str) -> str:
    """Normalize separators to ``/`` and strip leading ``./`` segments."""
    clean = entry_name.replace("\\", "/")
    while clean.startswith("./"):
        clean = clean[2:].lstrip("/")
    return clean


def top_level_name(entry_name: str) -> str:
    """First path segment of an archive entry."""
    return clean_entry_name(entry_name).split("/", 1)[0]


def detect_root_folder(entry_names: Iterable[str]) -> Optional[str]:
    """Single top-level folder shared by every file entry, else None.

    Directory entries (trailing ``/``), empty names and ``__MACOSX`` noise
    are ignored. A file sitting directly at the top level means there is no
    single root.
    """
    tops: set[str] = set()
    for name in entry_names:
        if not name or name.endswith("/"):
            continue
        top = top_level_name(name)
        if not top or top in NOISE_FOLDERS:
            continue
        if "/" not in clean_entry_name(name):
            return None
        tops.add(top)

    if len(tops) == 1:
        return next(iter(tops))
    return None


def relative_to_root(entry_name: str, root_folder: Optional[str]) -> str:
    """Entry path relative to *root_folder*, ``/``-separated."""
    clean = clean_entry_name(entry_name)
    if root_folder and clean.startswith(root_folder + "/"):
        return clean[len(root_folder) + 1 :]
    return clean

