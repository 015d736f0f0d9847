from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class TaggedRecord:
    """
    Minimal tagged record for callers without a record type of their own.

    The engine accepts any object with a ``tags`` attribute, or any mapping
    with a ``"tags"`` key, so this class is a convenience only.
    """

    id: Any
    tags: List[str] = field(default_factory=list)
    date: Optional[str] = None


def _read_field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


def get_record_tags(record: Any) -> List[str]:
    """Raw tag strings of a record; missing or None tags give an empty list."""
    tags = _read_field(record, "tags")
    if not tags:
        return []
    if isinstance(tags, str):
        return [tags]
    return [tag for tag in tags if isinstance(tag, str)]


def get_record_id(record: Any) -> Any:
    return _read_field(record, "id")


def get_record_date(record: Any) -> Optional[str]:
    return _read_field(record, "date")
