"""Source discovery for archives and directories.

Turns a zip upload (read fully in memory, nothing is extracted to disk) or a
local directory into ordered ``(entry_name, source_text)`` pairs for the
aggregator.

Traversal is depth-first; each directory's children are visited in name
order, with ignored directories pruned without being descended into. Only
files ending in a configured source extension are read.
"""

from __future__ import annotations

import io
import os
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Iterator, Optional

from .config import AnalysisConfig
from .exceptions import InvalidArchiveError
from .logging_config import get_logger
from .metrics.aggregator import NOISE_FOLDERS, analyze_files, clean_entry_name
from .metrics.models import ArchiveSummary
from .scanning.treesitter_parser import TreeSitterParser

logger = get_logger(__name__)


@dataclass(frozen=True)
class SourceBundle:
    """Files selected for analysis plus every entry name seen.

    Attributes:
        sources: ``(entry_name, text)`` in traversal order
        entry_names: All file entry names, used for root detection
    """

    sources: tuple[tuple[str, str], ...]
    entry_names: tuple[str, ...] = field(default_factory=tuple)


def decode_source(data: bytes) -> str:
    """Decode file bytes as UTF-8, dropping a BOM and replacing bad bytes."""
    return data.decode("utf-8-sig", errors="replace")


def _check_entry_name(name: str) -> str:
    clean = clean_entry_name(name)
    path = PurePosixPath(clean)
    if clean.startswith("/") or (path.parts and path.parts[0].endswith(":")):
        raise InvalidArchiveError("absolute path in archive", entry=name)
    if ".." in path.parts:
        raise InvalidArchiveError("path traversal in archive", entry=name)
    return clean


def read_archive(data: bytes, config: Optional[AnalysisConfig] = None) -> SourceBundle:
    """Select source files from zip *data*.

    Raises:
        InvalidArchiveError: Not a zip, too large packed or unpacked, unsafe
            entry names, damaged entries, or more source files than
            ``config.max_files``
    """
    config = config or AnalysisConfig()
    if len(data) > config.max_archive_bytes:
        raise InvalidArchiveError(
            f"archive is {len(data)} bytes, limit is {config.max_archive_bytes}"
        )

    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as e:
        raise InvalidArchiveError(f"not a zip file: {e}")

    with archive:
        tree: dict[str, Any] = {}
        names: list[str] = []
        for info in archive.infolist():
            if info.is_dir() or not info.filename:
                continue
            clean = _check_entry_name(info.filename)
            names.append(info.filename)
            node = tree
            *dirs, leaf = clean.split("/")
            for part in dirs:
                if not part:
                    continue
                child = node.setdefault(part, {})
                if not isinstance(child, dict):
                    raise InvalidArchiveError("entry is both a file and a folder", entry=info.filename)
                node = child
            if isinstance(node.get(leaf), dict):
                raise InvalidArchiveError("entry is both a file and a folder", entry=info.filename)
            node[leaf] = info

        selected = list(_walk_tree(tree, "", config))
        if len(selected) > config.max_files:
            raise InvalidArchiveError(
                f"archive holds {len(selected)} source files, limit is {config.max_files}"
            )
        unpacked = sum(info.file_size for _, info in selected)
        if unpacked > config.max_archive_bytes:
            raise InvalidArchiveError(
                f"source files unpack to {unpacked} bytes, limit is {config.max_archive_bytes}"
            )
        sources = tuple((name, decode_source(_read_entry(archive, info))) for name, info in selected)

    logger.debug(f"Archive: {len(names)} entries, {len(sources)} source file(s) selected")
    return SourceBundle(sources=sources, entry_names=tuple(names))


def _read_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> bytes:
    """Read one entry, turning damaged, encrypted or unsupported entries into InvalidArchiveError."""
    try:
        return archive.read(info)
    except zipfile.BadZipFile as e:
        raise InvalidArchiveError(f"corrupt entry: {e}", entry=info.filename)
    except zlib.error as e:
        raise InvalidArchiveError(f"corrupt compressed data: {e}", entry=info.filename)
    except RuntimeError as e:
        # zipfile raises RuntimeError for password-protected entries
        raise InvalidArchiveError(f"unreadable entry: {e}", entry=info.filename)
    except (NotImplementedError, EOFError) as e:
        raise InvalidArchiveError(f"unsupported or truncated entry: {e}", entry=info.filename)


def _walk_tree(node: dict[str, Any], prefix: str, config: AnalysisConfig) -> Iterator[tuple[str, Any]]:
    for name in sorted(node):
        child = node[name]
        path = f"{prefix}{name}"
        if isinstance(child, dict):
            if name in NOISE_FOLDERS or config.is_ignored_dir(name):
                logger.debug(f"Skipping ignored folder: {path}")
                continue
            yield from _walk_tree(child, path + "/", config)
        elif config.is_source_file(name):
            yield path, child


def read_directory(root: Path, config: Optional[AnalysisConfig] = None) -> SourceBundle:
    """Select source files under *root*.

    Entry names are prefixed with the directory's own name, as if the
    directory had been zipped, so it is detected as the root folder.
    """
    config = config or AnalysisConfig()
    root = root.resolve()
    selected: list[tuple[str, Path]] = []
    names: list[str] = []
    for name, path in _walk_directory(root, root.name + "/", config, names):
        selected.append((name, path))
        if len(selected) > config.max_files:
            raise InvalidArchiveError(f"more than {config.max_files} source files under {root}")

    sources = tuple((name, decode_source(path.read_bytes())) for name, path in selected)
    return SourceBundle(sources=sources, entry_names=tuple(names))


def _walk_directory(
    directory: Path, prefix: str, config: AnalysisConfig, names: list[str]
) -> Iterator[tuple[str, Path]]:
    with os.scandir(directory) as it:
        children = sorted(it, key=lambda e: e.name)
    for entry in children:
        path = f"{prefix}{entry.name}"
        if entry.is_dir(follow_symlinks=False):
            if config.is_ignored_dir(entry.name):
                logger.debug(f"Skipping ignored folder: {path}")
                continue
            yield from _walk_directory(Path(entry.path), path + "/", config, names)
        elif entry.is_file(follow_symlinks=False):
            names.append(path)
            if config.is_source_file(entry.name):
                yield path, Path(entry.path)


def analyze_bundle(
    bundle: SourceBundle,
    config: Optional[AnalysisConfig] = None,
    parser: Optional[TreeSitterParser] = None,
) -> ArchiveSummary:
    config = config or AnalysisConfig()
    return analyze_files(
        bundle.sources,
        parser=parser,
        workers=config.workers,
        entry_names=bundle.entry_names,
    )


def analyze_archive(
    data: bytes,
    config: Optional[AnalysisConfig] = None,
    parser: Optional[TreeSitterParser] = None,
) -> ArchiveSummary:
    """Read zip *data* and analyze every selected source file."""
    return analyze_bundle(read_archive(data, config), config, parser)
