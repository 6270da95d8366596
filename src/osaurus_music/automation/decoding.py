"""Decoding of the flat text osascript hands back.

AppleScript results are flattened to a single string, so multi-field
values are joined with FIELD_DELIMITER and lists of records with the
longer RECORD_DELIMITER.
"""
from __future__ import annotations

from typing import Optional

FIELD_DELIMITER = "|||"
RECORD_DELIMITER = "~~~"


def split_fields(text: str, min_fields: int) -> Optional[list[str]]:
    """Split one record into fields; None when it has fewer than `min_fields`."""
    parts = text.split(FIELD_DELIMITER)
    if len(parts) < min_fields:
        return None
    return parts


def split_records(text: str, min_fields: int) -> list[list[str]]:
    """Split a record list, dropping records with fewer than `min_fields` fields."""
    if not text:
        return []
    out: list[list[str]] = []
    for record in text.split(RECORD_DELIMITER):
        fields = split_fields(record, min_fields)
        if fields is not None:
            out.append(fields)
    return out


def parse_number(text: str) -> Optional[int | float]:
    """Parse an AppleScript number (ints stay ints; comma decimals accepted)."""
    s = text.strip()
    if not s:
        return None
    try:
        return int(s)
    except ValueError:
        pass
    try:
        value = float(s.replace(",", "."))
    except ValueError:
        return None
    if value != value or value in (float("inf"), float("-inf")):
        return None
    return value


def parse_count(text: str) -> Optional[int]:
    # Number-first concatenations come back as a list ("12, |||, 3").
    try:
        return int(text.strip().strip(",").strip())
    except ValueError:
        return None
