"""Pure functions for building item indicator text."""

from __future__ import annotations

from datetime import date

from rich.text import Text

from tagboard.codec import format_story_points, strip_tags
from tagboard.model.node import Item, Lane
from tagboard.settings import Settings, category_color

ICON_CALENDAR = "📅"
ICON_CLOCK = "🕑"
ICON_CHECKED = "✔"
ICON_POINTS = "◆"

PRIORITY_STYLES = {
    "high": "bold red",
    "medium": "yellow",
    "low": "blue",
}

PRIORITY_LABELS = {
    "high": "H",
    "medium": "M",
    "low": "L",
}


def date_diff(target: date, reference: date) -> str:
    """Return compact string showing difference between dates.

    Examples: "today", "1d", "-3d", "2m", "-1m", "5y", "-2y"
    Uses days for <60 days, months for <24 months, years otherwise.
    """
    days = (target - reference).days
    if days == 0:
        return "today"

    sign = "" if days > 0 else "-"
    if abs(days) < 60:
        return f"{sign}{abs(days)}d"

    months = abs((target.year - reference.year) * 12 + (target.month - reference.month))
    if months < 24:
        return f"{sign}{months}m"
    return f"{sign}{abs(target.year - reference.year)}y"


def build_item_text(item: Item, settings: Settings, today: date | None = None) -> Text:
    """Build one line for an item: check mark, title, then its fields.

    Overdue dates are red, priorities use PRIORITY_STYLES and categories
    take their configured color.
    """
    today = today or date.today()
    meta = item.metadata
    result = Text()

    result.append(f"[{ICON_CHECKED if item.checked else ' '}] ", style="dim" if item.checked else "")
    title = strip_tags(item.title, settings.grammar)
    result.append(title or "(empty)", style="strike dim" if item.checked else "")

    parts: list[Text] = []
    if meta.date:
        style = "red" if meta.date < today and not item.checked else ""
        label = f"{ICON_CALENDAR}{meta.date.strftime(settings.get('date-format'))} ({date_diff(meta.date, today)})"
        parts.append(Text(label, style=style))
    if meta.time:
        parts.append(Text(f"{ICON_CLOCK}{meta.time.strftime(settings.get('time-format'))}"))
    if meta.priority:
        parts.append(Text(PRIORITY_LABELS[meta.priority], style=PRIORITY_STYLES[meta.priority]))
    if meta.story_points is not None:
        parts.append(Text(f"{ICON_POINTS}{format_story_points(meta.story_points)}", style="cyan"))
    if meta.category:
        color = category_color(settings.get("categories"), meta.category)
        parts.append(Text(meta.category, style=color or "dim"))

    for part in parts:
        result.append("  ")
        result.append(part)
    return result


def build_lane_header(lane: Lane) -> Text:
    """Lane title with its card count."""
    result = Text(lane.title or "(untitled)", style="bold")
    result.append(f"  {len(lane.children)}", style="dim")
    if lane.should_mark_items_complete:
        result.append(f" {ICON_CHECKED}", style="green")
    return result
