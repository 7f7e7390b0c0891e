"""Cognitive complexity scoring for a single function.

Scoring rules, applied while walking the function's descendants:

    Structural (+1 + nesting, then nesting + 1 for descendants):
        if (not else-if), for / for-in / for-of, while, do-while,
        catch, ternary
    Nesting only (+0, nesting + 1 for descendants):
        switch
    Flat (+1):
        else branch that is not another if
        each case / default label
        a run of one logical operator (&&, ||, ??), counted once
        labeled break / continue
        direct self-recursion by name

An ``else if`` scores ``1 + (nesting - 1)`` and keeps nesting unchanged,
so a chain of else-ifs grows linearly instead of compounding.

Nested function bodies are skipped; each is scored on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..scanning.syntax import (
    FUNCTION_KINDS,
    NodeKind,
    else_branch,
    expression_parent,
    is_else_if,
    logical_operator,
    node_kind,
    node_text,
)

_STRUCTURAL_KINDS = frozenset(
    {
        NodeKind.FOR_LOOP,
        NodeKind.WHILE_LOOP,
        NodeKind.DO_WHILE_LOOP,
        NodeKind.CATCH,
        NodeKind.CONDITIONAL_EXPR,
    }
)


@dataclass
class _ScoreState:
    complexity: int
    nesting: int


def score(function_node: Any, base_nesting: int = 0, function_name: Optional[str] = None) -> int:
    """Score the cognitive complexity of *function_node*.

    Args:
        function_node: A function-like tree-sitter node
        base_nesting: Nesting depth the function itself sits at
        function_name: Resolved name, used to spot direct recursion

    Returns:
        Non-negative complexity score
    """
    state = _ScoreState(complexity=0, nesting=base_nesting)

    # (node, exiting, nesting delta to undo on exit)
    stack: list[tuple[Any, bool, int]] = [
        (child, False, 0) for child in reversed(function_node.children)
    ]
    while stack:
        node, exiting, delta = stack.pop()
        if exiting:
            state.nesting -= delta
            continue

        kind = node_kind(node)
        if kind in FUNCTION_KINDS:
            continue

        delta = _enter(node, kind, state, function_name)
        stack.append((node, True, delta))
        stack.extend((child, False, 0) for child in reversed(node.children))

    return state.complexity


def _enter(node: Any, kind: NodeKind, state: _ScoreState, function_name: Optional[str]) -> int:
    """Apply the rules for entering *node*; return the nesting it opened."""
    if kind is NodeKind.IF:
        opened = 0
        if is_else_if(node):
            state.complexity += 1 + (state.nesting - 1)
        else:
            state.complexity += 1 + state.nesting
            state.nesting += 1
            opened = 1
        alternate = else_branch(node)
        if alternate is not None and node_kind(alternate) is not NodeKind.IF:
            state.complexity += 1
        return opened

    if kind in _STRUCTURAL_KINDS:
        state.complexity += 1 + state.nesting
        state.nesting += 1
        return 1

    if kind is NodeKind.SWITCH:
        state.nesting += 1
        return 1

    if kind is NodeKind.SWITCH_CASE:
        state.complexity += 1
    elif kind is NodeKind.LOGICAL_EXPR:
        if not _continues_run(node):
            state.complexity += 1
    elif kind is NodeKind.CALL:
        if function_name and _is_self_call(node, function_name):
            state.complexity += 1
    elif kind in (NodeKind.BREAK, NodeKind.CONTINUE):
        if node.child_by_field_name("label") is not None:
            state.complexity += 1
    return 0


def _continues_run(node: Any) -> bool:
    """True if the parent expression uses the same logical operator."""
    parent = expression_parent(node)
    if parent is None or node_kind(parent) is not NodeKind.LOGICAL_EXPR:
        return False
    return logical_operator(parent) == logical_operator(node)


def _is_self_call(node: Any, function_name: str) -> bool:
    """Plain ``name(...)`` call; tagged templates and ``name?.()`` do not count."""
    callee = node.child_by_field_name("function")
    if callee is None or callee.type != "identifier":
        return False
    arguments = node.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return False
    if any(child.type == "optional_chain" for child in node.children):
        return False
    return node_text(callee) == function_name
