"""Board settings: a key/value source with defaults and a cached grammar."""

from __future__ import annotations

from typing import Any, Callable

from tagboard.errors import InvalidGrammarConfig
from tagboard.grammar import Grammar, compile_grammar

DEFAULT_CATEGORY_COLOR = "#4a90d9"

DEFAULTS: dict[str, Any] = {
    "date-trigger": "@",
    "time-trigger": "@@",
    "priority-trigger": "!",
    "story-points-trigger": "#",
    "category-trigger": "&",
    "link-date-to-daily-note": False,
    "date-format": "%Y-%m-%d",
    "time-format": "%H:%M",
    "new-card-insertion-method": "append",
    "categories": [],
}

Callback = Callable[["Settings", str, Any, Any], None]


class Settings:
    """Key/value settings with defaults.

    Only explicitly set values are stored (and written back to the board
    document); everything else falls back to DEFAULTS. Any change drops
    the compiled grammar so the next access recompiles it.
    """

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})
        self._watchers: list[Callback] = []
        self._grammar: Grammar | None = None

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._values:
            return self._values[key]
        return DEFAULTS.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def set(self, key: str, value: Any) -> None:
        """Set a value. None removes the key so the default applies again.

        A change that leaves the triggers uncompilable is rolled back and
        raises InvalidGrammarConfig.
        """
        old = self.get(key)
        previous = dict(self._values)
        if value is None:
            self._values.pop(key, None)
        else:
            self._values[key] = value
        self._grammar = None
        try:
            self._grammar = compile_grammar(self)
        except InvalidGrammarConfig:
            self._values = previous
            raise
        new = self.get(key)
        if old != new:
            for cb in list(self._watchers):
                cb(self, key, old, new)

    def update(self, values: dict[str, Any]) -> None:
        for key, value in values.items():
            self.set(key, value)

    def watch(self, callback: Callback) -> Callable[[], None]:
        """Watch for changes. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    @property
    def grammar(self) -> Grammar:
        """The grammar compiled from the current triggers."""
        if self._grammar is None:
            self._grammar = compile_grammar(self)
        return self._grammar

    def to_dict(self) -> dict[str, Any]:
        """Return the explicitly set values."""
        return dict(self._values)

    def __repr__(self) -> str:
        keys = ", ".join(self._values)
        return f"<Settings [{keys}]>"


# --- Categories ---
#
# Categories are stored as a list of {"name": ..., "color": ...} dicts
# under the "categories" key. The list is advisory: items may carry any
# category name.


def add_category(categories: list[dict], name: str = "", color: str = DEFAULT_CATEGORY_COLOR) -> list[dict]:
    """Return a new list with a category appended."""
    return [*categories, {"name": name, "color": color}]


def update_category(categories: list[dict], index: int, name: str, color: str) -> list[dict]:
    """Return a new list with the category at index replaced."""
    updated = list(categories)
    updated[index] = {"name": name, "color": color}
    return updated


def delete_category(categories: list[dict], index: int) -> list[dict]:
    """Return a new list without the category at index."""
    return [cat for i, cat in enumerate(categories) if i != index]


def move_category(categories: list[dict], from_index: int, to_index: int) -> list[dict]:
    """Return a new list with one category moved.

    Moving outside the list leaves it unchanged.
    """
    if to_index < 0 or to_index >= len(categories):
        return list(categories)
    updated = list(categories)
    cat = updated.pop(from_index)
    updated.insert(to_index, cat)
    return updated


def category_color(categories: list[dict], name: str | None) -> str | None:
    """Look up the color configured for a category name."""
    if not name:
        return None
    for cat in categories or []:
        if isinstance(cat, dict) and cat.get("name") == name:
            return cat.get("color") or DEFAULT_CATEGORY_COLOR
    return None
