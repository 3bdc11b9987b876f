"""Parse and serialize board documents.

A board document looks like::

    ---
    priority-trigger: "!"
    ---

    ## Doing

    - [ ] Ship feature !{high}
        second line of the same card

    ## Done

    **Complete**

    - [x] Buy milk @{2024-01-01}

    ***

    ## Archive

    - [x] Old card

Front-matter holds board settings. Each ``## `` heading starts a lane,
``- [ ]`` lines are cards and indented lines continue the card above. Empty
lines between a card and its continuation belong to the card.
Anything else is ignored.
"""

import logging
import re

import yaml

logger = logging.getLogger(__name__)

COMPLETE_MARKER = "**Complete**"
ARCHIVE_DIVIDER = "***"
ARCHIVE_TITLE = "Archive"
CONTINUATION_INDENT = "    "

_HEADING = re.compile(r"^##\s+(.*?)\s*$")
_TASK = re.compile(r"^[-*+] \[(.)\] ?(.*)$")
_CONTINUATION = re.compile(r"^(?: {1,4}|\t)(.*)$")

ParsedItem = tuple[str, str]
ParsedLane = tuple[str, bool, list[ParsedItem]]


def parse_board_text(text: str) -> tuple[dict, list[ParsedLane], list[ParsedItem]]:
    """Parse a board document into (meta, lanes, archive).

    - meta is the front-matter dict (or {})
    - lanes is a list of (title, complete, items)
    - items and archive are lists of (check_char, raw_text)
    """
    text, meta = _extract_front_matter(text)

    lanes: list[list] = []
    archive: list[list[str]] = []
    current: list[list[str]] | None = None
    after_divider = False
    blanks = 0

    for line in text.split("\n"):
        if not line.strip() and not _CONTINUATION.match(line):
            if current:
                blanks += 1
            continue
        pending, blanks = blanks, 0
        if line.rstrip() == ARCHIVE_DIVIDER:
            after_divider = True
            current = archive
            continue
        heading = _HEADING.match(line)
        if heading:
            title = heading.group(1)
            if after_divider and title == ARCHIVE_TITLE:
                current = archive
                continue
            after_divider = False
            lane = [title, False, []]
            lanes.append(lane)
            current = lane[2]
            continue
        if line.rstrip() == COMPLETE_MARKER and lanes and current is lanes[-1][2]:
            lanes[-1][1] = True
            continue
        continuation = _CONTINUATION.match(line)
        if continuation and current:
            current[-1][1] += "\n" * pending + "\n" + continuation.group(1)
            continue
        task = _TASK.match(line)
        if task and current is not None:
            current.append([task.group(1), task.group(2)])

    return (
        meta,
        [(title, complete, [(c, raw) for c, raw in items]) for title, complete, items in lanes],
        [(c, raw) for c, raw in archive],
    )


def _task_lines(check_char: str, raw_text: str) -> list[str]:
    first, *rest = raw_text.split("\n")
    head = f"- [{check_char}]" + (f" {first}" if first else "")
    return [head] + [CONTINUATION_INDENT + line for line in rest]


def serialize_board_text(
    meta: dict | None,
    lanes: list[ParsedLane],
    archive: list[ParsedItem] | None = None,
) -> str:
    """Serialize (meta, lanes, archive) back to a board document.

    Meta becomes YAML front-matter if non-empty.
    """
    parts: list[str] = []

    if meta:
        parts.append("---")
        parts.append(yaml.dump(meta, default_flow_style=False, sort_keys=False, allow_unicode=True).rstrip())
        parts.append("---")
        parts.append("")

    for title, complete, items in lanes:
        parts.append(f"## {title}")
        parts.append("")
        if complete:
            parts.append(COMPLETE_MARKER)
            parts.append("")
        for check_char, raw_text in items:
            parts.extend(_task_lines(check_char, raw_text))
        if items:
            parts.append("")

    if archive:
        parts.extend([ARCHIVE_DIVIDER, "", f"## {ARCHIVE_TITLE}", ""])
        for check_char, raw_text in archive:
            parts.extend(_task_lines(check_char, raw_text))
        parts.append("")

    return "\n".join(parts).rstrip() + "\n"


def _extract_front_matter(text: str) -> tuple[str, dict]:
    """Extract YAML front-matter from text. Returns (remaining_text, meta)."""
    if not text.startswith("---"):
        return text, {}

    match = re.match(r"^---\n(.*?)\n---\n?", text, re.DOTALL)
    if not match:
        return text, {}

    remaining = text[match.end() :]
    try:
        meta = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        logger.warning("ignoring invalid front-matter: %s", exc)
        return remaining, {}

    if not isinstance(meta, dict):
        logger.warning("ignoring front-matter that is not a mapping")
        return remaining, {}
    return remaining, meta
