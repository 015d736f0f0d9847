from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from colored_logger import get_colored_logger
from .records import get_record_date, get_record_id, get_record_tags
from .tags import normalize_tag, normalize_tags

logger = get_colored_logger(__name__)


@dataclass
class TagUsage:
    """
    Usage statistics for one tag across a record collection.
    """

    tag: str
    count: int = 0
    last_used: Optional[Any] = None
    record_ids: List[Any] = field(default_factory=list)


def get_all_tags_with_counts(records: Iterable[Any]) -> List[TagUsage]:
    """
    Count how many records carry each tag.

    A tag repeated on the same record counts once.

    Args:
        records: Records to scan

    Returns:
        TagUsage list in first-seen order
    """
    usages: Dict[str, TagUsage] = {}

    for record in records:
        record_date = get_record_date(record)
        for tag in normalize_tags(get_record_tags(record)):
            usage = usages.get(tag)
            if usage is None:
                usage = usages[tag] = TagUsage(tag=tag)

            usage.count += 1
            usage.record_ids.append(get_record_id(record))
            if record_date is not None and (
                usage.last_used is None or record_date > usage.last_used
            ):
                usage.last_used = record_date

    logger.trace("Counted %d distinct tags", len(usages))
    return list(usages.values())


def get_most_used_tags(records: Iterable[Any], limit: int = 10) -> List[TagUsage]:
    """Tags by descending usage count; ties broken alphabetically."""
    usages = get_all_tags_with_counts(records)
    usages.sort(key=lambda usage: (-usage.count, usage.tag))
    return usages[: max(limit, 0)]


def get_recent_tags(records: Iterable[Any], limit: int = 10) -> List[TagUsage]:
    """Tags by most recent record date; tags seen only on undated records go last."""
    usages = sorted(get_all_tags_with_counts(records), key=lambda usage: usage.tag)
    dated = [usage for usage in usages if usage.last_used is not None]
    undated = [usage for usage in usages if usage.last_used is None]
    dated.sort(key=lambda usage: usage.last_used, reverse=True)
    return (dated + undated)[: max(limit, 0)]


def search_tags(records: Iterable[Any], query: str) -> List[TagUsage]:
    """Tags containing ``query`` (case-insensitive); blank query returns all."""
    usages = get_all_tags_with_counts(records)
    if not query or not query.strip():
        return usages

    needle = query.strip().lower()
    return [usage for usage in usages if needle in usage.tag]


def get_tag_suggestions(
    records: Iterable[Any], fragment: str, limit: int = 10
) -> List[str]:
    """
    Complete a partially typed tag.

    Matches are case-insensitive substrings of the tag without its '#'.
    Higher usage comes first; among equal counts, tags starting with the
    fragment come before tags merely containing it.

    Args:
        records: Records providing the tag vocabulary
        fragment: Partial tag, with or without '#'
        limit: Maximum suggestions to return

    Returns:
        List of normalized tags
    """
    records = list(records)
    term = normalize_tag(fragment)[1:]
    if not term:
        return [usage.tag for usage in get_most_used_tags(records, limit)]

    matches = [
        usage for usage in get_all_tags_with_counts(records) if term in usage.tag[1:]
    ]
    matches.sort(
        key=lambda usage: (
            -usage.count,
            not usage.tag[1:].startswith(term),
            usage.tag,
        )
    )
    return [usage.tag for usage in matches[: max(limit, 0)]]
