import re
from typing import Any, Iterable, List, Optional

from colored_logger import get_colored_logger
from .query_validator import is_operator
from .vocabulary import get_most_used_tags, get_tag_suggestions

logger = get_colored_logger(__name__)

_WORD = re.compile(r"[^\s()]+")
_FRAGMENT_LEAD = re.compile(r"[\s(]*")


def _last_operator(partial: str) -> Optional[re.Match]:
    last = None
    for match in _WORD.finditer(partial):
        if is_operator(match.group()):
            last = match
    return last


def get_suggestions(records: Iterable[Any], partial: str, limit: int = 5) -> List[str]:
    """
    Suggest completions for a partially typed query.

    - blank input: the most used tags
    - input ending in AND/OR/NOT: the input followed by each most used tag
    - an operator earlier in the input: complete the tag after the last
      operator, keeping everything before it as typed
    - otherwise: complete the whole input as a tag

    Args:
        records: Records providing the tag vocabulary
        partial: Query text typed so far (need not be valid)
        limit: Maximum suggestions to return

    Returns:
        Ordered list of suggestion strings
    """
    records = list(records)
    partial = partial or ""

    if not partial.strip():
        return [usage.tag for usage in get_most_used_tags(records, limit)]

    operator = _last_operator(partial)
    if operator is not None:
        tail = partial[operator.end():]
        lead = _FRAGMENT_LEAD.match(tail).end()
        fragment = tail[lead:]

        if not fragment.strip():
            head = partial.rstrip()
            separator = "" if head.endswith("(") else " "
            logger.trace("Suggesting operands after %r", head)
            return [
                f"{head}{separator}{usage.tag}"
                for usage in get_most_used_tags(records, limit)
            ]

        prefix = partial[: operator.end() + lead]
        logger.trace("Completing %r after %r", fragment, prefix)
        return [
            f"{prefix}{tag}"
            for tag in get_tag_suggestions(records, fragment, limit)
        ]

    return get_tag_suggestions(records, partial, limit)
