from dataclasses import dataclass, field
from typing import Any, Iterable, List

from .query_nodes import AndNode, NotNode, OrNode, QueryNode, TagNode
from .records import get_record_id, get_record_tags
from .tags import normalize_tags


@dataclass
class SearchHighlight:
    """Tags on one record that the query referenced."""

    record_id: Any
    matching_tags: List[str] = field(default_factory=list)


def extract_query_tags(node: QueryNode) -> List[str]:
    """
    Collect every tag leaf of a query tree.

    Tags under NOT are included: the result lists what the query references,
    not what positively matched.
    """
    found = []

    def walk(current: QueryNode) -> None:
        if isinstance(current, TagNode):
            if current.value and current.value not in found:
                found.append(current.value)
        elif isinstance(current, NotNode):
            walk(current.child)
        elif isinstance(current, (AndNode, OrNode)):
            for child in current.children:
                walk(child)

    walk(node)
    return found


def get_search_highlights(
    records: Iterable[Any], matching_tags: Iterable[str]
) -> List[SearchHighlight]:
    """
    Intersect each record's tags with the query's tags.

    Args:
        records: Records to annotate (usually the matched ones)
        matching_tags: Normalized tags from extract_query_tags

    Returns:
        One SearchHighlight per record, tags in the record's own order
    """
    wanted = set(matching_tags)
    return [
        SearchHighlight(
            record_id=get_record_id(record),
            matching_tags=[
                tag for tag in normalize_tags(get_record_tags(record)) if tag in wanted
            ],
        )
        for record in records
    ]
