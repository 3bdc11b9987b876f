"""Tests for trigger compilation and tag find/set."""

import pytest

from tagboard.errors import InvalidFieldValue, InvalidGrammarConfig
from tagboard.grammar import (
    DATE,
    PRIORITY,
    STORY_POINTS,
    TIME,
    compile_grammar,
    compile_trigger,
    find_tag,
    set_tag,
)
from tagboard.settings import Settings


@pytest.fixture
def bang():
    return compile_trigger(PRIORITY, "!")


# --- compile ---


def test_trigger_metacharacters_are_literal():
    matcher = compile_trigger(STORY_POINTS, "$.*")
    assert find_tag("Task $.*{3}", matcher) == "3"
    assert find_tag("Task $xx{3}", matcher) is None


def test_empty_trigger_is_config_error():
    with pytest.raises(InvalidGrammarConfig):
        compile_trigger(PRIORITY, "")


def test_trigger_with_whitespace_is_config_error():
    with pytest.raises(InvalidGrammarConfig):
        compile_trigger(PRIORITY, "! ")


def test_trigger_with_brace_is_config_error():
    with pytest.raises(InvalidGrammarConfig):
        compile_trigger(PRIORITY, "{")


def test_duplicate_triggers_rejected():
    settings = Settings({"priority-trigger": "@"})
    with pytest.raises(InvalidGrammarConfig, match="share the trigger"):
        compile_grammar(settings)


def test_non_string_trigger_rejected():
    with pytest.raises(InvalidGrammarConfig):
        compile_grammar(Settings({"date-trigger": 5}))


def test_grammar_is_cached_per_configuration():
    assert compile_grammar(Settings()) is compile_grammar(Settings())
    assert compile_grammar(Settings()) is not compile_grammar(Settings({"priority-trigger": "!!"}))


# --- find ---


def test_find_at_start(bang):
    assert find_tag("!{high} do it", bang) == "high"


def test_find_requires_boundary(bang):
    assert find_tag("wow!{high}", bang) is None


def test_find_after_newline(bang):
    assert find_tag("title\n!{low}", bang) == "low"


def test_find_first_match_wins(bang):
    assert find_tag("a !{low} b !{high}", bang) == "low"


def test_find_absent(bang):
    assert find_tag("nothing here", bang) is None


def test_time_trigger_does_not_match_date_trigger():
    grammar = compile_grammar(Settings())
    text = "Call @@{09:30} @{2024-01-01}"
    assert grammar.find(text, DATE) == "2024-01-01"
    assert grammar.find(text, TIME) == "09:30"


def test_linked_date_shapes():
    grammar = compile_grammar(Settings({"link-date-to-daily-note": True}))
    assert grammar.find("Plan @[[2024-01-01]]", DATE) == "2024-01-01"
    assert grammar.find("Plan @[2024-01-01](daily/2024-01-01.md)", DATE) == "2024-01-01"
    assert grammar.find("Plan @{2024-01-01}", DATE) is None


def test_linked_mode_only_affects_dates():
    grammar = compile_grammar(Settings({"link-date-to-daily-note": True}))
    assert grammar.find("Plan !{high}", PRIORITY) == "high"


# --- set ---


def test_set_replaces_in_place(bang):
    assert set_tag("Task !{low} later", bang, "high") == "Task !{high} later"


def test_set_keeps_newline_boundary(bang):
    assert set_tag("Task\n!{low}", bang, "high") == "Task\n!{high}"


def test_set_appends_when_absent(bang):
    assert set_tag("Ship feature", bang, "high") == "Ship feature !{high}"


def test_set_appends_to_empty_text(bang):
    assert set_tag("", bang, "high") == "!{high}"


def test_set_append_keeps_trailing_whitespace(bang):
    assert set_tag("Task  ", bang, "low") == "Task   !{low}"


def test_remove_at_end(bang):
    assert set_tag("Buy milk !{low}", bang, None) == "Buy milk"


def test_remove_at_start(bang):
    assert set_tag("!{low} Buy milk", bang, None) == "Buy milk"


def test_remove_in_middle(bang):
    assert set_tag("Buy !{low} milk", bang, None) == "Buy milk"


def test_remove_every_tag_of_kind(bang):
    assert set_tag("a !{low} b !{high}", bang, None) == "a b"


def test_remove_absent_is_noop(bang):
    assert set_tag("Buy milk  ", bang, None) == "Buy milk  "


def test_remove_takes_newline_boundary(bang):
    assert set_tag("Title\n!{low} notes", bang, None) == "Title notes"


def test_remove_own_line_tag_leaves_no_empty_line(bang):
    assert set_tag("a\n!{low}\nb", bang, None) == "a\nb"


def test_closing_brace_in_content_rejected(bang):
    with pytest.raises(InvalidFieldValue):
        set_tag("Task", bang, "a}b")


def test_empty_content_rejected(bang):
    with pytest.raises(InvalidFieldValue):
        set_tag("Task", bang, "")


def test_linked_set_writes_wiki_link():
    grammar = compile_grammar(Settings({"link-date-to-daily-note": True}))
    assert grammar.set("Plan", DATE, "2024-02-03") == "Plan @[[2024-02-03]]"
    assert grammar.set("Plan @[2024-01-01](x.md)", DATE, "2024-02-03") == "Plan @[[2024-02-03]]"
