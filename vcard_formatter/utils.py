from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from datetime import date

from .types import Entry, Labeled, Scalar

CRLF = "\r\n"
CHARSET_PARAM = ";CHARSET=utf-8"


def escape_text(s: object) -> str:
    """Escape text for a vCard property value.

    Newlines, commas and semicolons are backslash-escaped. Falsy input yields
    an empty string; anything else is converted with ``str`` first.
    """
    if not s:
        return ""
    value = s if isinstance(s, str) else str(s)
    return value.replace("\n", "\\n").replace(",", "\\,").replace(";", "\\;")


def format_date(d: date) -> str:
    """Render a date as YYYYMMDD. Time-of-day and tzinfo are ignored."""
    return f"{d.year:04d}{d.month:02d}{d.day:02d}"


def resolve_major_version(version: object) -> int | None:
    """Map a display version such as "3.0" to its major number.

    Returns None when the leading component is not an integer.
    """
    m = re.match(r"\s*(\d+)", str(version) if version is not None else "")
    return int(m.group(1)) if m else None


def at_least(major: int | None, threshold: int) -> bool:
    # An unresolved version sits below every threshold.
    return major is not None and major >= threshold


def above(major: int | None, threshold: int) -> bool:
    return major is not None and major > threshold


def encoding_prefix(major: int | None) -> str:
    return "" if at_least(major, 4) else CHARSET_PARAM


def normalize_entries(value: object, key: str) -> list[Entry]:
    """Turn a scalar, labeled pair or sequence of either into a fresh list.

    ``key`` names the dict field holding the value of a labeled pair
    ("number", "email" or "url"). The input is never modified.
    """
    if not value:
        return []
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
        items: Sequence[object] = [value]
    else:
        items = value
    entries: list[Entry] = []
    for item in items:
        if isinstance(item, (Scalar, Labeled)):
            entries.append(item)
        elif isinstance(item, Mapping):
            entries.append(Labeled(item.get("label"), item.get(key)))
        else:
            entries.append(Scalar(item))
    return entries


__all__ = [
    "CRLF",
    "CHARSET_PARAM",
    "escape_text",
    "format_date",
    "resolve_major_version",
    "at_least",
    "above",
    "encoding_prefix",
    "normalize_entries",
]
