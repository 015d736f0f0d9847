"""Exceptions and user-facing validation messages for tag queries."""

UNMATCHED_CLOSING_PAREN = "Unmatched closing parenthesis"
UNMATCHED_OPENING_PAREN = "Unmatched opening parenthesis"
CONSECUTIVE_OPERATORS = "Cannot have consecutive operators"
DANGLING_OPERATOR = "Query cannot end with AND or OR"
LEADING_OPERATOR = "Query cannot start with AND or OR"
EMPTY_NOT = "NOT operator must be followed by a tag"


class TagSearchError(Exception):
    """Base class for tag search errors."""


class QueryParseError(TagSearchError):
    """Raised by the parser when an expression has no valid tree."""

    def __init__(self, message: str, expression: str = ""):
        super().__init__(message)
        self.expression = expression

    def __str__(self) -> str:
        base = super().__str__()
        if self.expression:
            return f"{base}: {self.expression!r}"
        return base
