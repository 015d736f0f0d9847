import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List

from .records import get_record_tags
from .tags import normalize_tags

_OPERATOR_WORD = re.compile(r"\b(and|or|not)\b", re.IGNORECASE)


@dataclass
class TagFilter:
    """
    Simple include/exclude tag filter, the non-query way of narrowing records.
    """

    include_tags: List[str] = field(default_factory=list)
    exclude_tags: List[str] = field(default_factory=list)
    mode: str = "AND"  # AND, OR

    def __post_init__(self):
        self.mode = (self.mode or "AND").upper()
        if self.mode not in ("AND", "OR"):
            raise ValueError(f"Filter mode must be AND or OR, got {self.mode!r}")


def filter_records_by_tags(records: Iterable[Any], tag_filter: TagFilter) -> List[Any]:
    """
    Apply a TagFilter.

    Excluded tags win over included ones. Records without tags only pass
    when the filter includes nothing.
    """
    include = normalize_tags(tag_filter.include_tags)
    exclude = set(normalize_tags(tag_filter.exclude_tags))
    matched = []

    for record in records:
        record_tags = set(normalize_tags(get_record_tags(record)))

        if not record_tags:
            if not include:
                matched.append(record)
            continue

        if record_tags & exclude:
            continue

        if not include:
            matched.append(record)
        elif tag_filter.mode == "AND":
            if all(tag in record_tags for tag in include):
                matched.append(record)
        elif any(tag in record_tags for tag in include):
            matched.append(record)

    return matched


def filter_to_search_query(
    include_tags: List[str], exclude_tags: List[str], mode: str = "AND"
) -> str:
    """
    Express an include/exclude filter as query text.

    Negations are parenthesized when joined with other parts, so the text
    passes validate_query and parses back to the same filter.

    >>> filter_to_search_query(["#morning"], ["#scalping", "#swing"], "AND")
    '#morning AND (NOT #scalping) AND (NOT #swing)'
    """
    mode = mode.upper()
    parts = []

    if len(include_tags) == 1:
        parts.append(include_tags[0])
    elif include_tags:
        parts.append("(" + f" {mode} ".join(include_tags) + ")")

    negations = [f"NOT {tag}" for tag in exclude_tags]
    if parts or len(negations) > 1:
        negations = [f"({negation})" for negation in negations]
    parts.extend(negations)
    return " AND ".join(parts)


def is_tag_search(query: str) -> bool:
    """Whether free text looks like a tag query (has '#' or an operator word)."""
    if not query:
        return False
    return "#" in query or bool(_OPERATOR_WORD.search(query))

