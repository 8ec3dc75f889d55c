"""CSV column normalization — handles BOM, trailing spaces, issue-type names."""

from __future__ import annotations

import re

from issue_desk.domain.errors import ValidationError
from issue_desk.domain.value_objects.enums import IssueType


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff)
    - Strips leading/trailing whitespace
    - Replaces runs of spaces / non-breaking spaces with a single underscore
    - Lowercases
    - Drops anything that is not alphanumeric or underscore
    """
    name = name.replace("\ufeff", "")
    name = name.strip()
    name = re.sub(r"[\s\u00a0]+", "_", name)
    name = name.lower()
    name = re.sub(r"[^\w]", "", name, flags=re.UNICODE)
    return name


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_issue_type(raw: str | None) -> IssueType:
    """Map 'PAYMENT', 'payment', 'Payment Related' or 'mutual fund' to an IssueType.

    Raises:
        ValidationError: if the text names no known issue type.
    """
    text = clean_string(raw)
    if text is None:
        raise ValidationError("Issue type is missing")
    key = re.sub(r"[\s\-]+", "_", text).upper()
    for issue_type in IssueType:
        if key in (issue_type.name, issue_type.name + "_RELATED"):
            return issue_type
        if text.lower() == issue_type.value.lower():
            return issue_type
    raise ValidationError(f"Unknown issue type: {text!r}")


def parse_expertise(raw: str | None) -> set[IssueType]:
    """Parse 'PAYMENT; GOLD | Insurance Related' into a set of issue types.

    Only comma, semicolon and pipe separate entries, since values may contain spaces.
    """
    if not raw:
        return set()
    parts = re.split(r"[,;|]+", raw.strip())
    return {parse_issue_type(p) for p in parts if p.strip()}
