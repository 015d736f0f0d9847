"""
Expression tree for tag queries.

Each node kind is its own frozen dataclass, so a tag leaf cannot carry
children and a NOT node always wraps exactly one child.
"""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class TagNode:
    """Leaf matching records that carry ``value`` (a normalized tag)."""

    value: str


@dataclass(frozen=True)
class AndNode:
    """Conjunction; with no children it matches every record."""

    children: Tuple["QueryNode", ...] = ()


@dataclass(frozen=True)
class OrNode:
    """Disjunction; with no children it matches no record."""

    children: Tuple["QueryNode", ...] = ()


@dataclass(frozen=True)
class NotNode:
    child: "QueryNode"


QueryNode = Union[TagNode, AndNode, OrNode, NotNode]

MATCH_ALL = AndNode()


def format_query(node: QueryNode) -> str:
    """
    Render a tree back to query text, parenthesizing every group.

    Negated operands get their own parentheses: a leading NOT negates
    everything after it.
    """
    if isinstance(node, TagNode):
        return node.value
    if isinstance(node, NotNode):
        return f"NOT {format_query(node.child)}"
    if isinstance(node, (AndNode, OrNode)):
        if not node.children:
            return ""
        operator = " AND " if isinstance(node, AndNode) else " OR "
        parts = []
        for child in node.children:
            text = format_query(child)
            parts.append(f"({text})" if isinstance(child, NotNode) else text)
        if len(parts) == 1:
            return parts[0]
        return "(" + operator.join(parts) + ")"
    raise TypeError(f"Unknown query node: {node!r}")
