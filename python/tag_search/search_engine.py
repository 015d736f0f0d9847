from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from colored_logger import get_colored_logger, setup_colored_logging
from .config import SearchSettings
from .highlights import SearchHighlight, extract_query_tags, get_search_highlights
from .query_evaluator import evaluate_query
from .query_nodes import MATCH_ALL, QueryNode, TagNode, format_query
from .query_parser import try_parse_query
from .query_validator import ValidationOutcome, validate_query
from .suggestions import get_suggestions
from .tag_filter import TagFilter, filter_records_by_tags, is_tag_search
from .tags import TagValidationResult, normalize_tag, process_tags, validate_tags
from .vocabulary import TagUsage, get_most_used_tags, get_recent_tags

logger = get_colored_logger(__name__)


@dataclass
class SearchResult:
    """
    Outcome of one tag query over a record collection.
    """

    matched_records: List[Any] = field(default_factory=list)
    matched_tags: List[str] = field(default_factory=list)
    query: QueryNode = MATCH_ALL
    highlights: List[SearchHighlight] = field(default_factory=list)
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)


def parse_with_fallback(query: str) -> QueryNode:
    """
    Parse a query, never raising.

    Text with no valid tree becomes a single tag when it starts with '#',
    otherwise the match-all query.
    """
    node = try_parse_query(query)
    if node is not None:
        return node

    stripped = (query or "").strip()
    if stripped.startswith("#"):
        fallback = TagNode(normalize_tag(stripped))
    else:
        fallback = MATCH_ALL
    logger.debug("Falling back to %r for query %.80r", fallback, query)
    return fallback


class TagSearchEngine:
    """
    Boolean tag search over caller-owned records.

    Features:
    - Query validation with every syntax error reported at once
    - AND / OR / NOT queries with parentheses
    - Highlighting of the tags a query referenced
    - Query auto-complete from the records' tag vocabulary
    - Include/exclude tag filters

    The engine keeps no state between calls; settings are read-only.
    """

    def __init__(self, settings: SearchSettings = None):
        """
        Initialize the search engine.

        Args:
            settings: SearchSettings instance. If None, uses defaults.
        """
        self.settings = settings or SearchSettings()

    @classmethod
    def from_config(cls, config_path: Optional[str] = None) -> "TagSearchEngine":
        """Build an engine from a YAML config file (see tag_search.config)."""
        return cls(SearchSettings.load(config_path))

    def search(self, records: Iterable[Any], query: str) -> SearchResult:
        """
        Run a tag query against records.

        Args:
            records: Records with tags (objects with .tags or dicts with "tags")
            query: Raw query text

        Returns:
            SearchResult; invalid queries give is_valid=False and no records
        """
        validation = self.validate(query)
        if not validation.is_valid:
            logger.debug("Rejected query %.80r: %s", query, validation.errors)
            return SearchResult(is_valid=False, errors=list(validation.errors))

        node = self.parse(query)
        matched = evaluate_query(records, node)
        matched_tags = extract_query_tags(node)

        logger.debug(
            "Query %r matched %d records", format_query(node) or "*", len(matched)
        )
        return SearchResult(
            matched_records=matched,
            matched_tags=matched_tags,
            query=node,
            highlights=get_search_highlights(matched, matched_tags),
        )

    def validate(self, query: str) -> ValidationOutcome:
        return validate_query(query)

    def parse(self, query: str) -> QueryNode:
        return parse_with_fallback(query)

    def evaluate(self, records: Iterable[Any], node: QueryNode) -> List[Any]:
        return evaluate_query(records, node)

    def highlights(
        self, records: Iterable[Any], matching_tags: Iterable[str]
    ) -> List[SearchHighlight]:
        return get_search_highlights(records, matching_tags)

    def suggest(
        self, records: Iterable[Any], partial: str, limit: Optional[int] = None
    ) -> List[str]:
        """
        Suggest completions for a partially typed query.

        Args:
            records: Records providing the tag vocabulary
            partial: Text typed so far
            limit: Maximum suggestions; defaults to the configured limit

        Returns:
            Ordered suggestion strings
        """
        if limit is None:
            limit = self.settings.suggestion_limit
        return get_suggestions(records, partial, limit)

    def top_tags(
        self, records: Iterable[Any], limit: Optional[int] = None
    ) -> List[TagUsage]:
        """Most used tags, for showing the vocabulary next to a search box."""
        if limit is None:
            limit = self.settings.vocabulary_limit
        return get_most_used_tags(records, limit)

    def recent_tags(
        self, records: Iterable[Any], limit: Optional[int] = None
    ) -> List[TagUsage]:
        if limit is None:
            limit = self.settings.vocabulary_limit
        return get_recent_tags(records, limit)

    def filter_records(
        self, records: Iterable[Any], tag_filter: TagFilter
    ) -> List[Any]:
        return filter_records_by_tags(records, tag_filter)

    def is_tag_search(self, query: str) -> bool:
        return is_tag_search(query)

    def validate_record_tags(self, tags: List[str]) -> TagValidationResult:
        """Check the tags a user wants to store on one record."""
        return validate_tags(
            tags,
            max_tags=self.settings.max_tags_per_record,
            max_length=self.settings.max_tag_length,
        )

    def clean_tags(self, tags: Iterable[str]) -> List[str]:
        return process_tags(tags, max_length=self.settings.max_tag_length)


def configure_logging(settings: SearchSettings = None) -> None:
    """Set up colored console logging at the configured level."""
    settings = settings or SearchSettings()
    setup_colored_logging(settings.log_level)


def search(records: Iterable[Any], query: str) -> SearchResult:
    """Run a tag query with default settings."""
    return TagSearchEngine().search(records, query)


def suggest(records: Iterable[Any], partial: str, limit: int = 5) -> List[str]:
    """Suggest query completions with default settings."""
    return TagSearchEngine().suggest(records, partial, limit)
