"""
Recursive-descent parser for tag queries.

Precedence from loosest to tightest: OR, AND, tag. A leading NOT negates the
whole expression that follows it, so `NOT #a AND #b` is `NOT (#a AND #b)`;
write `(NOT #a) AND #b` to negate one operand. Parentheses group. Whatever is
left after splitting is one tag atom. Structurally empty input raises
QueryParseError and the caller decides on a fallback.
"""

import re
from typing import List, Optional

from colored_logger import get_colored_logger
from .errors import QueryParseError
from .query_nodes import MATCH_ALL, AndNode, NotNode, OrNode, QueryNode, TagNode
from .tags import normalize_tag

logger = get_colored_logger(__name__)

_PAREN = re.compile(r"([()])")


def _tokenize(expression: str) -> List[str]:
    return _PAREN.sub(r" \1 ", expression).split()


def _encloses_all(tokens: List[str]) -> bool:
    """True when the first '(' is closed by the last token."""
    depth = 0
    last = len(tokens) - 1
    for index, token in enumerate(tokens):
        if token == "(":
            depth += 1
        elif token == ")":
            depth -= 1
        if depth == 0 and index < last:
            return False
    return depth == 0


def _strip_enclosing_parens(tokens: List[str]) -> List[str]:
    while (
        len(tokens) >= 2
        and tokens[0] == "("
        and tokens[-1] == ")"
        and _encloses_all(tokens)
    ):
        tokens = tokens[1:-1]
    return tokens


def _split_top_level(tokens: List[str], operator: str) -> List[List[str]]:
    """Split on ``operator`` tokens that sit outside any parentheses."""
    parts = []
    current = []
    depth = 0

    for token in tokens:
        if token == "(":
            depth += 1
        elif token == ")":
            depth -= 1

        if depth == 0 and token.upper() == operator:
            if not current:
                raise QueryParseError(
                    f"Missing operand before {operator}", " ".join(tokens)
                )
            parts.append(current)
            current = []
        else:
            current.append(token)

    if parts and not current:
        raise QueryParseError(f"Missing operand after {operator}", " ".join(tokens))

    parts.append(current)
    return parts


def _parse_tokens(tokens: List[str]) -> QueryNode:
    tokens = _strip_enclosing_parens(tokens)
    if not tokens:
        raise QueryParseError("Empty expression")

    if tokens[0].upper() == "NOT":
        if len(tokens) == 1:
            raise QueryParseError("NOT without operand", " ".join(tokens))
        return NotNode(_parse_tokens(tokens[1:]))

    or_parts = _split_top_level(tokens, "OR")
    if len(or_parts) > 1:
        return OrNode(tuple(_parse_tokens(part) for part in or_parts))

    and_parts = _split_top_level(tokens, "AND")
    if len(and_parts) > 1:
        return AndNode(tuple(_parse_tokens(part) for part in and_parts))

    if all(token in ("(", ")") for token in tokens):
        raise QueryParseError("Expected a tag", " ".join(tokens))

    # Leftover words form one atom: "breakout morning" -> "#breakoutmorning"
    return TagNode(normalize_tag(" ".join(tokens)))


def parse_query(query: str) -> QueryNode:
    """
    Parse a query string into an expression tree.

    Args:
        query: Query text; blank input matches everything

    Returns:
        Root QueryNode

    Raises:
        QueryParseError: If the text has no valid expression tree
    """
    if not query or not query.strip():
        return MATCH_ALL

    node = _parse_tokens(_tokenize(query))
    logger.trace("Parsed %r into %r", query, node)
    return node


def try_parse_query(query: str) -> Optional[QueryNode]:
    """Like parse_query, but returns None instead of raising."""
    try:
        return parse_query(query)
    except QueryParseError as e:
        logger.debug("Query did not parse: %s", e)
        return None
    except RecursionError:
        logger.debug("Query nested too deeply to parse: %.80r", query)
        return None
