import re
from dataclasses import dataclass, field
from typing import List

from . import errors as messages

OPERATORS = frozenset(("AND", "OR", "NOT"))
BINARY_OPERATORS = frozenset(("AND", "OR"))

# Parentheses are tokens of their own; everything else splits on whitespace
_TOKEN_PATTERN = re.compile(r"[()]|[^\s()]+")


@dataclass
class ValidationOutcome:
    """Result of checking a query string before it is parsed."""

    is_valid: bool
    errors: List[str] = field(default_factory=list)


def tokenize_query(query: str) -> List[str]:
    """Split a query into parenthesis and word tokens."""
    return _TOKEN_PATTERN.findall(query or "")


def is_operator(token: str) -> bool:
    return token.upper() in OPERATORS


def _parenthesis_errors(query: str) -> List[str]:
    depth = 0
    unmatched_closing = False

    for char in query:
        if char == "(":
            depth += 1
        elif char == ")":
            if depth == 0:
                unmatched_closing = True
            else:
                depth -= 1

    found = []
    if unmatched_closing:
        found.append(messages.UNMATCHED_CLOSING_PAREN)
    if depth > 0:
        found.append(messages.UNMATCHED_OPENING_PAREN)
    return found


def _has_consecutive_operators(tokens: List[str]) -> bool:
    return any(
        is_operator(current) and is_operator(following)
        for current, following in zip(tokens, tokens[1:])
    )


def validate_query(query: str) -> ValidationOutcome:
    """
    Check a raw query string for syntax errors.

    Every check runs so the caller can show all problems at once. Blank input
    is valid and means "match everything".

    Args:
        query: Raw query text

    Returns:
        ValidationOutcome with the accumulated error messages
    """
    if not query or not query.strip():
        return ValidationOutcome(is_valid=True)

    found = _parenthesis_errors(query)
    tokens = tokenize_query(query)

    # A parenthesis between two keywords separates them: "#a AND (NOT #b)"
    if _has_consecutive_operators(tokens):
        found.append(messages.CONSECUTIVE_OPERATORS)

    # Start and end checks look through parentheses
    words = [
        token.upper() if is_operator(token) else token
        for token in tokens
        if token not in ("(", ")")
    ]

    if words and words[-1] in BINARY_OPERATORS:
        found.append(messages.DANGLING_OPERATOR)

    if words and words[0] in BINARY_OPERATORS:
        found.append(messages.LEADING_OPERATOR)

    if words and words[-1] == "NOT":
        found.append(messages.EMPTY_NOT)

    return ValidationOutcome(is_valid=not found, errors=found)
