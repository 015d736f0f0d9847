import re
from dataclasses import dataclass, field
from typing import Iterable, List

from colored_logger import get_colored_logger

logger = get_colored_logger(__name__)

# Canonical empty tag; never matches a record
EMPTY_TAG = ""

MAX_TAG_LENGTH = 50
MAX_TAGS_PER_RECORD = 20

_ILLEGAL_CHARS = re.compile(r"[^a-z0-9_]")
_VALID_CONTENT = re.compile(r"^[a-zA-Z0-9_]+$")


@dataclass
class TagIssue:
    """A single tag validation problem."""

    code: str
    message: str


@dataclass
class TagValidationResult:
    is_valid: bool
    errors: List[TagIssue] = field(default_factory=list)


def normalize_tag(raw: str) -> str:
    """
    Normalize a tag to its canonical ``#[a-z0-9_]+`` form.

    Trims and lowercases, drops every character outside the tag alphabet
    (including any ``#``) and prefixes a single ``#``.

    Args:
        raw: Raw tag text, with or without a leading '#'

    Returns:
        Canonical tag, or EMPTY_TAG when nothing legal remains
    """
    if not raw or not isinstance(raw, str):
        return EMPTY_TAG

    content = _ILLEGAL_CHARS.sub("", raw.strip().lower())
    return f"#{content}" if content else EMPTY_TAG


def normalize_tags(tags: Iterable[str]) -> List[str]:
    """Normalize tags keeping order, dropping empties and duplicates."""
    normalized = []
    seen = set()
    for tag in tags:
        canonical = normalize_tag(tag)
        if canonical and canonical not in seen:
            seen.add(canonical)
            normalized.append(canonical)
    return normalized


def validate_tag(raw: str, max_length: int = MAX_TAG_LENGTH) -> TagValidationResult:
    """
    Validate a user-entered tag before it is stored on a record.

    Args:
        raw: Tag text, optionally '#'-prefixed
        max_length: Maximum length of the tag content (without '#')

    Returns:
        TagValidationResult listing every problem found
    """
    errors = []

    if not raw or not isinstance(raw, str) or not raw.strip():
        errors.append(TagIssue("TAG_EMPTY", "Tag cannot be empty"))
        return TagValidationResult(is_valid=False, errors=errors)

    trimmed = raw.strip()
    content = trimmed[1:] if trimmed.startswith("#") else trimmed

    if not content:
        errors.append(TagIssue("TAG_EMPTY", "Tag cannot be empty"))

    if len(content) > max_length:
        errors.append(
            TagIssue(
                "TAG_TOO_LONG",
                f"Tag cannot be longer than {max_length} characters",
            )
        )

    if content and not _VALID_CONTENT.match(content):
        errors.append(
            TagIssue(
                "TAG_INVALID_CHARS",
                "Tag can only contain letters, numbers, and underscores",
            )
        )

    return TagValidationResult(is_valid=not errors, errors=errors)


def validate_tags(
    tags: List[str],
    max_tags: int = MAX_TAGS_PER_RECORD,
    max_length: int = MAX_TAG_LENGTH,
) -> TagValidationResult:
    """Validate the full tag list of one record."""
    if not isinstance(tags, (list, tuple)):
        return TagValidationResult(
            is_valid=False, errors=[TagIssue("TAGS_NOT_LIST", "Tags must be a list")]
        )

    errors = []
    if len(tags) > max_tags:
        errors.append(
            TagIssue("TOO_MANY_TAGS", f"Cannot have more than {max_tags} tags")
        )

    for index, tag in enumerate(tags, 1):
        for issue in validate_tag(tag, max_length).errors:
            errors.append(TagIssue(issue.code, f"Tag {index}: {issue.message}"))

    return TagValidationResult(is_valid=not errors, errors=errors)


def process_tags(tags: Iterable[str], max_length: int = MAX_TAG_LENGTH) -> List[str]:
    """
    Clean up tags typed by a user: normalize, drop empty or over-long tags,
    and de-duplicate keeping first occurrence.
    """
    processed = []
    for tag in normalize_tags(tags):
        if validate_tag(tag, max_length).is_valid:
            processed.append(tag)
        else:
            logger.debug("Dropping invalid tag '%s'", tag)
    return processed
