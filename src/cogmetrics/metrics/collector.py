"""Function collector: per-file line counts and function inventory.

Walks a whole-file syntax tree in pre-order, records every function-like
node (nested ones included) and scores each with the complexity scorer.
"""

from __future__ import annotations

from typing import Any, Optional

from ..exceptions import ParsingError
from ..logging_config import get_logger
from ..scanning.syntax import (
    NESTING_KINDS,
    NodeKind,
    ancestors,
    expression_parent,
    is_function_like,
    iter_preorder,
    node_kind,
    node_text,
)
from .complexity import score
from .models import FileMetrics, FunctionRecord

logger = get_logger(__name__)

ANONYMOUS = "anonymous"


def count_lines(text: str) -> tuple[int, int]:
    """Return ``(total_lines, non_blank_lines)`` for *text*.

    Lines are the pieces between ``\\n`` separators, so an empty string is
    one line and a trailing newline adds an empty last line.
    """
    lines = text.split("\n")
    return len(lines), sum(1 for line in lines if line.strip())


def collect_functions(tree: Any, source: str, path: str = "<input>") -> FileMetrics:
    """Build FileMetrics for one parsed file.

    Args:
        tree: tree-sitter Tree parsed from ``source.encode("utf-8")``
        source: The source text the tree was parsed from
        path: File path for error messages

    Returns:
        FileMetrics with functions in pre-order

    Raises:
        ParsingError: If the tree cannot be walked
    """
    total_lines, non_blank_lines = count_lines(source)
    code = source.encode("utf-8")

    try:
        functions = tuple(
            _function_record(node, code) for node in iter_preorder(tree.root_node) if is_function_like(node)
        )
    except (AttributeError, TypeError) as e:
        raise ParsingError(path, "unknown", f"malformed syntax tree: {e}") from e

    logger.debug(f"{path}: {len(functions)} function(s), {total_lines} line(s)")
    return FileMetrics(
        total_lines=total_lines,
        non_blank_lines=non_blank_lines,
        functions=functions,
    )


def _function_record(node: Any, code: bytes) -> FunctionRecord:
    name = resolve_name(node)
    body = code[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
    _, nloc = count_lines(body)
    start_line, end_line = _line_range(node)

    return FunctionRecord(
        name=name,
        nloc=nloc,
        cognitive_complexity=score(node, base_nesting(node), name),
        start_line=start_line,
        end_line=end_line,
    )


def resolve_name(node: Any) -> str:
    """Display name for a function-like node.

    Priority: the function's own identifier, then the variable it is bound
    to, then the object property key it is the value of, then its method
    key. Falls back to ``"anonymous"``.
    """
    kind = node_kind(node)
    if kind is NodeKind.FUNCTION:
        own = node.child_by_field_name("name")
        if own is not None:
            return node_text(own)

    parent = expression_parent(node)
    parent_kind = node_kind(parent) if parent is not None else NodeKind.OTHER
    if parent_kind is NodeKind.VARIABLE_DECLARATOR:
        target = _identifier(parent.child_by_field_name("name"))
        if target is not None:
            return target
    elif parent_kind is NodeKind.OBJECT_PROPERTY:
        key = _identifier(parent.child_by_field_name("key"))
        if key is not None:
            return key
    elif kind is NodeKind.METHOD:
        key = _identifier(node.child_by_field_name("name"))
        if key is not None:
            return key

    return ANONYMOUS


def base_nesting(node: Any) -> int:
    """Count ancestors that open a nesting level (functions, ifs, loops...)."""
    return sum(1 for ancestor in ancestors(node) if node_kind(ancestor) in NESTING_KINDS)


def _identifier(node: Optional[Any]) -> Optional[str]:
    if node is None or node_kind(node) is not NodeKind.IDENTIFIER:
        return None
    return node_text(node)


def _line_range(node: Any) -> tuple[Optional[int], Optional[int]]:
    start = getattr(node, "start_point", None)
    end = getattr(node, "end_point", None)
    return (
        start[0] + 1 if start is not None else None,
        end[0] + 1 if end is not None else None,
    )
