"""Node classification over tree-sitter JavaScript/TypeScript trees.

The metrics engine only cares about a fixed set of node kinds. ``node_kind``
maps grammar node types onto the closed ``NodeKind`` enum; anything the
engine does not know about is ``NodeKind.OTHER`` and has no effect.

Both the JavaScript and TypeScript grammars share these node type names.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Optional


class NodeKind(Enum):
    """Closed set of node kinds the metrics engine distinguishes."""

    FUNCTION = "function"
    METHOD = "method"
    IF = "if"
    SWITCH = "switch"
    SWITCH_CASE = "switch_case"
    FOR_LOOP = "for_loop"
    WHILE_LOOP = "while_loop"
    DO_WHILE_LOOP = "do_while_loop"
    CATCH = "catch"
    LOGICAL_EXPR = "logical_expr"
    CONDITIONAL_EXPR = "conditional_expr"
    CALL = "call"
    BREAK = "break"
    CONTINUE = "continue"
    IDENTIFIER = "identifier"
    VARIABLE_DECLARATOR = "variable_declarator"
    OBJECT_PROPERTY = "object_property"
    OTHER = "other"


_KINDS_BY_TYPE: dict[str, NodeKind] = {
    # named "function" is the expression form in grammars older than 0.21;
    # newer grammars use the same type for the anonymous keyword token
    "function": NodeKind.FUNCTION,
    "function_expression": NodeKind.FUNCTION,
    "function_declaration": NodeKind.FUNCTION,
    "generator_function": NodeKind.FUNCTION,
    "generator_function_declaration": NodeKind.FUNCTION,
    "arrow_function": NodeKind.FUNCTION,
    "method_definition": NodeKind.METHOD,
    "if_statement": NodeKind.IF,
    "switch_statement": NodeKind.SWITCH,
    "switch_case": NodeKind.SWITCH_CASE,
    "switch_default": NodeKind.SWITCH_CASE,
    "for_statement": NodeKind.FOR_LOOP,
    # covers both for-in and for-of
    "for_in_statement": NodeKind.FOR_LOOP,
    "while_statement": NodeKind.WHILE_LOOP,
    "do_statement": NodeKind.DO_WHILE_LOOP,
    "catch_clause": NodeKind.CATCH,
    "ternary_expression": NodeKind.CONDITIONAL_EXPR,
    "call_expression": NodeKind.CALL,
    "break_statement": NodeKind.BREAK,
    "continue_statement": NodeKind.CONTINUE,
    "identifier": NodeKind.IDENTIFIER,
    "property_identifier": NodeKind.IDENTIFIER,
    "variable_declarator": NodeKind.VARIABLE_DECLARATOR,
    "pair": NodeKind.OBJECT_PROPERTY,
}

LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})

FUNCTION_KINDS = frozenset({NodeKind.FUNCTION, NodeKind.METHOD})

# Ancestors that deepen the starting nesting of an inner function.
NESTING_KINDS = frozenset(
    {
        NodeKind.FUNCTION,
        NodeKind.METHOD,
        NodeKind.IF,
        NodeKind.FOR_LOOP,
        NodeKind.WHILE_LOOP,
        NodeKind.DO_WHILE_LOOP,
        NodeKind.SWITCH,
        NodeKind.CATCH,
    }
)


def node_kind(node: Any) -> NodeKind:
    """Classify a tree-sitter node. Anonymous tokens (keywords, punctuation) are OTHER."""
    if not node.is_named:
        return NodeKind.OTHER
    if node.type == "binary_expression":
        if logical_operator(node) is not None:
            return NodeKind.LOGICAL_EXPR
        return NodeKind.OTHER
    return _KINDS_BY_TYPE.get(node.type, NodeKind.OTHER)


def is_function_like(node: Any) -> bool:
    return node_kind(node) in FUNCTION_KINDS


def logical_operator(node: Any) -> Optional[str]:
    """The operator of a short-circuit ``binary_expression``, else None."""
    op = node.child_by_field_name("operator")
    if op is None or op.type not in LOGICAL_OPERATORS:
        return None
    return op.type


def expression_parent(node: Any) -> Optional[Any]:
    """Parent node with parentheses looked through."""
    parent = node.parent
    while parent is not None and parent.type == "parenthesized_expression":
        parent = parent.parent
    return parent


def is_else_if(node: Any) -> bool:
    """True if an ``if_statement`` is the alternate branch of another if."""
    parent = node.parent
    if parent is None or parent.type != "else_clause":
        return False
    grandparent = parent.parent
    return grandparent is not None and node_kind(grandparent) is NodeKind.IF


def else_branch(node: Any) -> Optional[Any]:
    """The statement held by an if's ``else`` clause, if any."""
    clause = node.child_by_field_name("alternative")
    if clause is None:
        return None
    if clause.type != "else_clause":
        return clause
    for child in clause.named_children:
        if child.type != "comment":
            return child
    return None


def node_text(node: Any) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text is not None else ""


def iter_preorder(root: Any) -> Iterator[Any]:
    """Yield *root* and its descendants in pre-order, without recursion."""
    stack = [root]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def ancestors(node: Any) -> Iterator[Any]:
    """Yield strict ancestors of *node*, nearest first."""
    parent = node.parent
    while parent is not None:
        yield parent
        parent = parent.parent
