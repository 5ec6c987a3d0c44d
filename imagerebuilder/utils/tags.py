"""
Image tag parsing and validation.
"""
import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from ..core.exceptions import InvalidTagError

TAG_PATTERN = re.compile(r'^[A-Za-z0-9_][-_.A-Za-z0-9]{0,127}$')
TIMESTAMP_PLACEHOLDER = "_timestamp"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H.%M.%SZ"
DEFAULT_TAGS = ["latest", TIMESTAMP_PLACEHOLDER]


def build_timestamp(now: Optional[datetime] = None) -> str:
    """UTC timestamp usable as an image tag, e.g. 2024-08-01T12.30.00Z"""
    if now is None:
        now = datetime.now(timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def is_valid_tag(tag: str) -> bool:
    return bool(TAG_PATTERN.fullmatch(tag))


def parse_tags(raw: Optional[str]) -> List[str]:
    """Split a comma separated tag list. Empty entries are dropped."""
    if not raw:
        return []
    return [tag for tag in re.split(r'[,\s]+', raw) if tag]


def expand_tags(
    tags: Iterable[str],
    timestamp: str,
    placeholder: str = TIMESTAMP_PLACEHOLDER
) -> List[str]:
    """
    Validate tags and replace the placeholder with the build timestamp.

    Args:
        tags: Tags as given by the operator
        timestamp: Value substituted for the placeholder
        placeholder: Reserved tag standing for the timestamp

    Returns:
        Tags in the given order, placeholder expanded

    Raises:
        InvalidTagError: If a tag does not match TAG_PATTERN
    """
    expanded = []
    for tag in tags:
        if tag == placeholder:
            expanded.append(timestamp)
        elif is_valid_tag(tag):
            expanded.append(tag)
        else:
            raise InvalidTagError(
                f"Tag {tag!r} does not seem to be a valid image tag due to invalid characters. "
                f"The image tags need to be comma separated and individually match the "
                f"following regex pattern: {TAG_PATTERN.pattern}"
            )
    return expanded
