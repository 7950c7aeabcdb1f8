"""Plain-text helpers: Portable Text to paragraphs, and ordinal dates."""

import re
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from hydration.models.content import PortableTextBlock

# Month names are fixed to English regardless of the page locale
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_MONTH_LOOKUP = {name.lower(): i for i, name in enumerate(MONTH_NAMES, start=1)}

_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n+")
_ISO_DATE_RE = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})")
_ORDINAL_RE = re.compile(r"(\d+)(st|nd|rd|th)", re.IGNORECASE)
_DATE_TEXT_RE = re.compile(r"^\s*(\d{1,2})\s+([A-Za-z]+),?\s+(\d{4})\s*$")

EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def _block_text(block: Any) -> str | None:
    """Joined span text of a text block, or None for any other entry."""
    if isinstance(block, PortableTextBlock):
        if not block.is_text:
            return None
        return "".join(span.text for span in block.children or [])
    if isinstance(block, dict):
        children = block.get("children")
        if block.get("_type") != "block" or not isinstance(children, list):
            return None
        return "".join(
            str(c.get("text") or "") for c in children if isinstance(c, dict)
        )
    return None


def to_paragraphs(body: Iterable[Any] | None) -> list[str]:
    """Flatten rich-text blocks into trimmed, non-empty paragraphs.

    A single block may hold several paragraphs separated by blank lines.
    """
    if body is None or isinstance(body, (str, bytes)):
        return []
    try:
        blocks = list(body)
    except TypeError:
        return []
    paragraphs: list[str] = []
    for block in blocks:
        plain = _block_text(block)
        if plain is None:
            continue
        parts = (part.strip() for part in _PARAGRAPH_BREAK_RE.split(plain))
        paragraphs.extend(part for part in parts if part)
    return paragraphs


def first_paragraph(body: Iterable[Any] | None) -> str:
    paragraphs = to_paragraphs(body)
    return paragraphs[0] if paragraphs else ""


def ordinal_suffix(day: int) -> str:
    if day % 10 == 1 and day != 11:
        return "st"
    if day % 10 == 2 and day != 12:
        return "nd"
    if day % 10 == 3 and day != 13:
        return "rd"
    return "th"


def format_date(iso: str | None) -> str:
    """Format an ISO timestamp as e.g. ``6th December 2025``.

    Uses the calendar date as written in the timestamp. Returns an empty
    string for missing or malformed input.
    """
    if not iso or not isinstance(iso, str):
        return ""
    m = _ISO_DATE_RE.match(iso)
    if not m:
        return ""
    year, month, day = (int(g) for g in m.groups())
    try:
        datetime(year, month, day)
    except ValueError:
        return ""
    return f"{day}{ordinal_suffix(day)} {MONTH_NAMES[month - 1]} {year}"


def parse_iso(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware datetime (UTC when unzoned)."""
    if not value or not isinstance(value, str):
        return None
    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_date_text(text: str | None) -> datetime | None:
    """Parse a rendered date such as ``6th December 2025`` back into a datetime."""
    if not text:
        return None
    cleaned = _ORDINAL_RE.sub(r"\1", text, count=1)
    m = _DATE_TEXT_RE.match(cleaned)
    if m:
        day, month_name, year = m.groups()
        month = _MONTH_LOOKUP.get(month_name.lower())
        if month is None:
            return None
        try:
            return datetime(int(year), month, int(day), tzinfo=timezone.utc)
        except ValueError:
            return None
    return parse_iso(cleaned)
