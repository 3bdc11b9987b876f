"""Tests for card and lane commands."""

from datetime import date

import pytest

from tagboard import commands
from tagboard.errors import InvalidFieldValue, PathOutOfRange
from tagboard.grammar import DATE, PRIORITY
from tagboard.model.loader import board_from_text
from tagboard.model.state import BoardState

DOC = """## Todo

- [ ] Buy milk @{2024-01-01}
- [ ] Ship feature
- [ ] first line
    second line

## Done

**Complete**

- [x] Old
"""


@pytest.fixture
def state():
    return BoardState(board_from_text(DOC))


def _texts(state, lane=0):
    return [item.raw_text for item in state.current().children[lane].children]


# --- Fields ---


def test_set_field(state):
    commands.set_field(state, (0, 1), PRIORITY, "high")
    assert _texts(state)[1] == "Ship feature !{high}"
    assert state.current().children[0].children[1].metadata.priority == "high"


def test_clear_field(state):
    commands.set_field(state, (0, 0), DATE, None)
    assert _texts(state)[0] == "Buy milk"


def test_set_field_keeps_identity(state):
    before = state.current().children[0].children[1].id
    commands.set_field(state, (0, 1), DATE, date(2024, 2, 2))
    assert state.current().children[0].children[1].id == before


def test_set_field_same_value_is_noop(state):
    commands.set_field(state, (0, 0), DATE, date(2024, 1, 1))
    assert state.version == 0


def test_set_field_invalid_value(state):
    with pytest.raises(InvalidFieldValue):
        commands.set_field(state, (0, 1), PRIORITY, "urgent")
    assert _texts(state)[1] == "Ship feature"


def test_set_field_on_lane_fails(state):
    with pytest.raises(TypeError):
        commands.set_field(state, (0,), PRIORITY, "high")


def test_set_field_out_of_range(state):
    with pytest.raises(PathOutOfRange):
        commands.set_field(state, (0, 9), PRIORITY, "high")


def test_toggle_priority(state):
    commands.toggle_priority(state, (0, 1), "low")
    assert _texts(state)[1] == "Ship feature !{low}"
    commands.toggle_priority(state, (0, 1), "low")
    assert _texts(state)[1] == "Ship feature"


def test_set_checked(state):
    commands.set_checked(state, (0, 1), True)
    item = state.current().children[0].children[1]
    assert item.checked
    assert item.metadata.checked


def test_copy_link_adds_block_id_once(state):
    link = commands.copy_link(state, (0, 1), "Board")
    block_id = state.current().children[0].children[1].metadata.block_id
    assert link == f"[[Board#^{block_id}]]"
    assert _texts(state)[1] == f"Ship feature ^{block_id}"

    assert commands.copy_link(state, (0, 1), "Board") == link
    assert state.version == 1


# --- Structure ---


def test_split_card(state):
    commands.split_card(state, (0, 2))
    assert _texts(state) == ["Buy milk @{2024-01-01}", "Ship feature", "first line", "second line"]


def test_split_single_line_is_noop(state):
    commands.split_card(state, (0, 1))
    assert state.version == 0


def test_duplicate_card(state):
    commands.duplicate_card(state, (0, 0))
    lane = state.current().children[0].children
    assert lane[0].raw_text == lane[1].raw_text
    assert lane[0].id != lane[1].id


def test_insert_card_before_and_after(state):
    commands.insert_card_before(state, (0, 1), "before")
    commands.insert_card_after(state, (0, 1), "after")
    assert _texts(state)[:4] == ["Buy milk @{2024-01-01}", "before", "after", "Ship feature"]


def test_move_to_top_and_bottom(state):
    commands.move_to_top(state, (0, 2))
    assert _texts(state)[0] == "first line\nsecond line"
    commands.move_to_bottom(state, (0, 0))
    assert _texts(state)[-1] == "first line\nsecond line"


def test_archive_card(state):
    commands.archive_card(state, (0, 0))
    assert _texts(state) == ["Ship feature", "first line\nsecond line"]
    assert [item.raw_text for item in state.current().archive] == ["Buy milk @{2024-01-01}"]


def test_archive_lane_fails(state):
    with pytest.raises(TypeError):
        commands.archive_card(state, (0,))


def test_delete_card(state):
    commands.delete_card(state, (0, 1))
    assert _texts(state) == ["Buy milk @{2024-01-01}", "first line\nsecond line"]


def test_move_to_lane(state):
    moved = state.current().children[0].children[1]
    commands.move_to_lane(state, (0, 1), 1)
    assert _texts(state, 1) == ["Ship feature", "Old"]
    assert state.current().children[1].children[0].id == moved.id


def test_move_to_same_lane_is_noop(state):
    commands.move_to_lane(state, (0, 1), 0)
    assert state.version == 0


def test_move_card(state):
    commands.move_card(state, (0, 0), (1, 1))
    assert _texts(state, 1) == ["Old", "Buy milk @{2024-01-01}"]


def test_add_items_appends(state):
    commands.add_items(state, 0, ["new one", "new two"])
    assert _texts(state)[-2:] == ["new one", "new two"]


def test_add_items_prepends(state):
    state.settings.set("new-card-insertion-method", "prepend")
    commands.add_items(state, 0, ["new"])
    assert _texts(state)[0] == "new"


def test_add_items_unknown_method_appends(state, caplog):
    state.settings.set("new-card-insertion-method", "sideways")
    commands.add_items(state, 0, ["new"])
    assert _texts(state)[-1] == "new"
    assert "sideways" in caplog.text


def test_add_items_to_complete_lane_are_checked(state):
    commands.add_items(state, 1, ["finished"])
    assert state.current().children[1].children[-1].checked


# --- Lanes ---


def test_add_lane(state):
    commands.add_lane(state, "Doing", 1)
    commands.add_lane(state, "Later")
    assert [lane.title for lane in state.current().children] == ["Todo", "Doing", "Done", "Later"]


def test_rename_lane(state):
    commands.rename_lane(state, 0, "Backlog")
    assert state.current().children[0].title == "Backlog"


def test_set_lane_complete(state):
    commands.set_lane_complete(state, 0, True)
    assert state.current().children[0].should_mark_items_complete


def test_delete_lane(state):
    commands.delete_lane(state, 0)
    assert [lane.title for lane in state.current().children] == ["Done"]


def test_duplicate_lane(state):
    commands.duplicate_lane(state, 1)
    lanes = state.current().children
    assert [lane.title for lane in lanes] == ["Todo", "Done", "Done"]
    assert lanes[1].id != lanes[2].id


def test_move_lane(state):
    commands.move_lane(state, 0, 1)
    assert [lane.title for lane in state.current().children] == ["Done", "Todo"]
    commands.move_lane(state, 1, 0)
    assert [lane.title for lane in state.current().children] == ["Todo", "Done"]
