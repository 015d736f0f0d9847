from typing import Any, Iterable, List, Set

from .query_nodes import AndNode, NotNode, OrNode, QueryNode, TagNode
from .records import get_record_tags
from .tags import normalize_tags


def record_tag_set(record: Any) -> Set[str]:
    """Normalized tags of a record as a set."""
    return set(normalize_tags(get_record_tags(record)))


def evaluate_query(records: Iterable[Any], node: QueryNode) -> List[Any]:
    """
    Return the records matching a query tree.

    AND and NOT keep input order; OR keeps first-occurrence order across its
    children. Records are compared by identity and never modified.

    Args:
        records: Records to filter
        node: Parsed query

    Returns:
        New list of matching records
    """
    records = list(records)

    if isinstance(node, TagNode):
        if not node.value:
            return []
        return [record for record in records if node.value in record_tag_set(record)]

    if isinstance(node, AndNode):
        narrowed = records
        for child in node.children:
            narrowed = evaluate_query(narrowed, child)
        return narrowed

    if isinstance(node, OrNode):
        seen = set()
        union = []
        for child in node.children:
            for record in evaluate_query(records, child):
                if id(record) not in seen:
                    seen.add(id(record))
                    union.append(record)
        return union

    if isinstance(node, NotNode):
        excluded = {id(record) for record in evaluate_query(records, node.child)}
        return [record for record in records if id(record) not in excluded]

    raise TypeError(f"Unknown query node: {node!r}")


def matches_query(record: Any, node: QueryNode) -> bool:
    """Whether a single record satisfies the query."""
    return bool(evaluate_query([record], node))
