"""Compile configured trigger strings into inline tag matchers.

A tag is a trigger followed by a braced value, e.g. ``@{2024-01-01}`` or
``!{high}``. It must start the text or follow a whitespace character.
Dates may instead use a linked form, ``@[[2024-01-01]]`` or
``@[2024-01-01](path)``, when ``link-date-to-daily-note`` is enabled.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from tagboard.errors import InvalidFieldValue, InvalidGrammarConfig

logger = logging.getLogger(__name__)

DATE = "date"
TIME = "time"
PRIORITY = "priority"
STORY_POINTS = "story-points"
CATEGORY = "category"

KINDS = (DATE, TIME, PRIORITY, STORY_POINTS, CATEGORY)

_BRACE_CONTENT = r"\{([^}]+)\}"
_LINKED_CONTENT = r"(?:\[([^\]]+)\]\([^)]+\)|\[\[([^\]]+)\]\])"
_FORBIDDEN_IN_TRIGGER = re.compile(r"[\s{}]")


def trigger_key(kind: str) -> str:
    """Settings key holding the trigger for kind."""
    return f"{kind}-trigger"


# Settings that change how tags are read.
GRAMMAR_KEYS = frozenset(
    [*(trigger_key(kind) for kind in KINDS), "link-date-to-daily-note", "date-format", "time-format"]
)


@dataclass(frozen=True)
class TagMatcher:
    """A compiled matcher for one metadata kind."""

    kind: str
    trigger: str
    pattern: re.Pattern
    linked: bool = False

    def render(self, content: str) -> str:
        """Build the tag text for content."""
        closing = "]" if self.linked else "}"
        if not content or closing in content:
            raise InvalidFieldValue(f"{self.kind} value {content!r} cannot be written as a tag")
        if self.linked:
            return f"{self.trigger}[[{content}]]"
        return f"{self.trigger}{{{content}}}"


def compile_trigger(kind: str, trigger: str, linked: bool = False) -> TagMatcher:
    """Compile a literal trigger string into a matcher for kind."""
    if not isinstance(trigger, str) or not trigger:
        raise InvalidGrammarConfig(f"{trigger_key(kind)} must be a non-empty string")
    if _FORBIDDEN_IN_TRIGGER.search(trigger):
        raise InvalidGrammarConfig(f"{trigger_key(kind)} {trigger!r} may not contain whitespace or braces")
    content = _LINKED_CONTENT if linked else _BRACE_CONTENT
    pattern = re.compile(r"(^|\s)" + re.escape(trigger) + content)
    return TagMatcher(kind=kind, trigger=trigger, pattern=pattern, linked=linked)


def _content(match: re.Match) -> str:
    """Extract the tag value from a match of either shape."""
    for value in match.groups()[1:]:
        if value is not None:
            return value
    return ""


def find_tag(text: str, matcher: TagMatcher) -> str | None:
    """Return the value of the first tag matched in text, or None.

    Only the first tag of a kind is meaningful; later ones are inert.
    """
    match = matcher.pattern.search(text)
    return _content(match) if match else None


def _remove_span(text: str, match: re.Match) -> str:
    """Delete a matched tag along with the boundary before it."""
    head = text[: match.start()]
    tail = text[match.end() :]
    if not head.strip():
        return tail.lstrip()
    if not tail.strip():
        return head.rstrip()
    return head + tail


def set_tag(text: str, matcher: TagMatcher, content: str | None) -> str:
    """Write, replace or remove the tag for matcher's kind in text.

    - present, content given: replace the first tag in place
    - present, content None: remove every tag of this kind
    - absent, content given: append " " + tag
    - absent, content None: text unchanged
    """
    match = matcher.pattern.search(text)
    if content is None:
        while match:
            text = _remove_span(text, match)
            match = matcher.pattern.search(text)
        return text
    tag = matcher.render(content)
    if match:
        return text[: match.start()] + match.group(1) + tag + text[match.end() :]
    if not text:
        return tag
    return f"{text} {tag}"


@dataclass(frozen=True)
class Grammar:
    """Compiled matchers for every metadata kind plus value formats."""

    matchers: dict[str, TagMatcher]
    date_format: str = "%Y-%m-%d"
    time_format: str = "%H:%M"

    def __getitem__(self, kind: str) -> TagMatcher:
        return self.matchers[kind]

    def find(self, text: str, kind: str) -> str | None:
        return find_tag(text, self.matchers[kind])

    def set(self, text: str, kind: str, content: str | None) -> str:
        return set_tag(text, self.matchers[kind], content)


@lru_cache(maxsize=16)
def _compile(triggers: tuple[tuple[str, str], ...], linked: bool, date_format: str, time_format: str) -> Grammar:
    """Build and cache a Grammar for one combination of settings."""
    seen: dict[str, str] = {}
    matchers = {}
    for kind, trigger in triggers:
        if trigger in seen:
            raise InvalidGrammarConfig(
                f"{trigger_key(kind)} and {trigger_key(seen[trigger])} share the trigger {trigger!r}"
            )
        seen[trigger] = kind
        matchers[kind] = compile_trigger(kind, trigger, linked=linked and kind == DATE)
    logger.debug("compiled grammar %s (linked dates: %s)", dict(triggers), linked)
    return Grammar(matchers=matchers, date_format=date_format, time_format=time_format)


def compile_grammar(settings: Any) -> Grammar:
    """Compile a Grammar from anything with a ``get(key)`` method."""
    triggers = tuple((kind, settings.get(trigger_key(kind))) for kind in KINDS)
    for kind, trigger in triggers:
        if not isinstance(trigger, str):
            raise InvalidGrammarConfig(f"{trigger_key(kind)} must be a string, got {trigger!r}")
    linked = bool(settings.get("link-date-to-daily-note"))
    date_format = settings.get("date-format") or "%Y-%m-%d"
    time_format = settings.get("time-format") or "%H:%M"
    return _compile(triggers, linked, date_format, time_format)
