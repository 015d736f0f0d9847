"""
Tag Search Module

Boolean tag queries over tagged records: validation, parsing, evaluation,
highlighting and auto-complete.

Key Components:
- normalize_tag: Canonical '#tag' form used everywhere
- validate_query: Syntax checks run before parsing
- parse_query: Query text to expression tree (AND/OR/NOT, parentheses)
- evaluate_query: Expression tree applied to a record collection
- get_suggestions: Auto-complete for partially typed queries
- TagSearchEngine: Single entry point tying the above together
"""

from .config import SearchSettings, load_config
from .errors import QueryParseError, TagSearchError
from .highlights import SearchHighlight, extract_query_tags, get_search_highlights
from .query_evaluator import evaluate_query, matches_query
from .query_nodes import MATCH_ALL, AndNode, NotNode, OrNode, QueryNode, TagNode
from .query_parser import parse_query, try_parse_query
from .query_validator import ValidationOutcome, validate_query
from .records import TaggedRecord
from .search_engine import (
    SearchResult,
    TagSearchEngine,
    configure_logging,
    parse_with_fallback,
    search,
    suggest,
)
from .suggestions import get_suggestions
from .tag_filter import TagFilter, filter_records_by_tags, filter_to_search_query
from .tags import normalize_tag, process_tags, validate_tag
from .vocabulary import TagUsage, get_most_used_tags, get_tag_suggestions

__all__ = [
    "SearchSettings",
    "load_config",
    "QueryParseError",
    "TagSearchError",
    "SearchHighlight",
    "extract_query_tags",
    "get_search_highlights",
    "evaluate_query",
    "matches_query",
    "MATCH_ALL",
    "AndNode",
    "NotNode",
    "OrNode",
    "QueryNode",
    "TagNode",
    "parse_query",
    "try_parse_query",
    "ValidationOutcome",
    "validate_query",
    "TaggedRecord",
    "SearchResult",
    "TagSearchEngine",
    "configure_logging",
    "parse_with_fallback",
    "search",
    "suggest",
    "get_suggestions",
    "TagFilter",
    "filter_records_by_tags",
    "filter_to_search_query",
    "normalize_tag",
    "process_tags",
    "validate_tag",
    "TagUsage",
    "get_most_used_tags",
    "get_tag_suggestions",
]
