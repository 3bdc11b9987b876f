"""Decode inline tags into item metadata and write single-field edits back.

An item's raw text is the only source of truth. Metadata is always
rebuilt from it with decode(); edits go through encode_field_change(),
which only touches the span of the tag being changed.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any

from tagboard.errors import InvalidFieldValue
from tagboard.grammar import CATEGORY, DATE, KINDS, PRIORITY, STORY_POINTS, TIME, Grammar
from tagboard.ids import is_block_id

PRIORITIES = ("low", "medium", "high")

FIELDS = {
    DATE: "date",
    TIME: "time",
    PRIORITY: "priority",
    STORY_POINTS: "story_points",
    CATEGORY: "category",
}

_BLOCK_ID = re.compile(r"(^|\s)\^([A-Za-z0-9-]+)$")


@dataclass(frozen=True)
class Metadata:
    """Structured fields decoded from an item's raw text."""

    date: date | None = None
    time: time | None = None
    priority: str | None = None
    story_points: float | None = None
    category: str | None = None
    checked: bool = False
    block_id: str | None = None

    def get(self, kind: str) -> Any:
        """Value of the field for a tag kind."""
        return getattr(self, FIELDS[kind])


# --- Value parsing ---


def _parse_date(content: str, fmt: str) -> date | None:
    try:
        return datetime.strptime(content.strip(), fmt).date()
    except ValueError:
        return None


def _parse_time(content: str, fmt: str) -> time | None:
    try:
        return datetime.strptime(content.strip(), fmt).time()
    except ValueError:
        return None


def parse_story_points(content: str) -> float:
    """Parse story points, falling back to 0 for anything non-numeric."""
    try:
        value = float(content)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def decode_value(kind: str, content: str | None, grammar: Grammar) -> Any:
    """Convert raw tag content into the typed value for kind."""
    if content is None:
        return None
    if kind == DATE:
        return _parse_date(content, grammar.date_format)
    if kind == TIME:
        return _parse_time(content, grammar.time_format)
    if kind == PRIORITY:
        return content if content in PRIORITIES else None
    if kind == STORY_POINTS:
        return parse_story_points(content)
    if kind == CATEGORY:
        return content or None
    raise KeyError(kind)


def decode(raw_text: str, grammar: Grammar, checked: bool = False) -> Metadata:
    """Decode every tag kind in raw_text independently."""
    values = {FIELDS[kind]: decode_value(kind, grammar.find(raw_text, kind), grammar) for kind in KINDS}
    return Metadata(checked=checked, block_id=find_block_id(raw_text), **values)


# --- Value formatting ---


def format_story_points(value: float) -> str:
    """Format story points, dropping the decimal part of whole numbers.

    3.0 → "3", 2.5 → "2.5"
    """
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def format_value(kind: str, value: Any, grammar: Grammar) -> str:
    """Convert a typed value into tag content for kind."""
    if kind == DATE:
        if isinstance(value, (date, datetime)):
            return value.strftime(grammar.date_format)
        return str(value)
    if kind == TIME:
        if isinstance(value, (time, datetime)):
            return value.strftime(grammar.time_format)
        return str(value)
    if kind == PRIORITY:
        if value not in PRIORITIES:
            raise InvalidFieldValue(f"priority must be one of {', '.join(PRIORITIES)}, got {value!r}")
        return value
    if kind == STORY_POINTS:
        if isinstance(value, str):
            value = parse_story_points(value)
        return format_story_points(value)
    if kind == CATEGORY:
        return str(value)
    raise KeyError(kind)


# --- Editing ---


def _split_block_id(raw_text: str) -> tuple[str, str]:
    """Split off a trailing block id marker, boundary included."""
    match = _BLOCK_ID.search(raw_text)
    if not match:
        return raw_text, ""
    return raw_text[: match.start()], raw_text[match.start() :]


def _join_block_id(body: str, suffix: str) -> str:
    if not suffix:
        return body
    if not body:
        return suffix.lstrip()
    if not suffix[0].isspace():
        suffix = " " + suffix
    return body + suffix


def encode_field_change(raw_text: str, kind: str, value: Any, grammar: Grammar) -> str:
    """Return raw_text with one field set to value, or removed if value is None.

    Text is returned unchanged when the field already decodes to value.
    A trailing block id stays at the end of the text.
    """
    current = decode_value(kind, grammar.find(raw_text, kind), grammar)
    if value is None:
        if current is None:
            return raw_text
        content = None
    else:
        content = format_value(kind, value, grammar)
        if current is not None and current == decode_value(kind, content, grammar):
            return raw_text
    body, suffix = _split_block_id(raw_text)
    return _join_block_id(grammar.set(body, kind, content), suffix)


def find_block_id(raw_text: str) -> str | None:
    match = _BLOCK_ID.search(raw_text)
    return match.group(2) if match else None


def set_block_id(raw_text: str, block_id: str | None) -> str:
    """Write, replace or remove the trailing ``^block-id`` marker."""
    body, suffix = _split_block_id(raw_text)
    if block_id is None:
        return body.rstrip() if suffix else raw_text
    if not is_block_id(block_id):
        raise InvalidFieldValue(f"invalid block id {block_id!r}")
    if suffix:
        boundary = suffix[: len(suffix) - len(suffix.lstrip())]
        return f"{body}{boundary}^{block_id}"
    return _join_block_id(body, f"^{block_id}")


def strip_tags(raw_text: str, grammar: Grammar) -> str:
    """Remove every tag and the block id, leaving the display title."""
    text, _ = _split_block_id(raw_text)
    for kind in KINDS:
        text = grammar.set(text, kind, None)
    return text.strip()
