"""Tests for the board document parser."""

from tagboard.parser import parse_board_text, serialize_board_text

DOC = """---
priority-trigger: "!"
---

## Doing

- [ ] Ship feature !{high}
    second line

## Done

**Complete**

- [x] Buy milk @{2024-01-01}

***

## Archive

- [x] Old card
"""


def test_parse_lanes_and_items():
    meta, lanes, archive = parse_board_text(DOC)
    assert meta == {"priority-trigger": "!"}
    assert lanes == [
        ("Doing", False, [(" ", "Ship feature !{high}\nsecond line")]),
        ("Done", True, [("x", "Buy milk @{2024-01-01}")]),
    ]
    assert archive == [("x", "Old card")]


def test_parse_empty():
    assert parse_board_text("") == ({}, [], [])


def test_parse_ignores_text_outside_lanes():
    meta, lanes, archive = parse_board_text("Intro text\n- [ ] orphan\n\n## Todo\n\nnot a card\n- [ ] card\n")
    assert lanes == [("Todo", False, [(" ", "card")])]


def test_parse_other_bullet_markers():
    _, lanes, _ = parse_board_text("## Todo\n* [ ] star\n+ [X] plus\n")
    assert lanes[0][2] == [(" ", "star"), ("X", "plus")]


def test_parse_empty_card():
    _, lanes, _ = parse_board_text("## Todo\n- [ ]\n")
    assert lanes[0][2] == [(" ", "")]


def test_parse_tab_continuation():
    _, lanes, _ = parse_board_text("## Todo\n- [ ] first\n\tsecond\n")
    assert lanes[0][2] == [(" ", "first\nsecond")]


def test_parse_blank_line_inside_card():
    _, lanes, _ = parse_board_text("## Todo\n- [ ] a\n\n    b\n- [ ] c\n")
    assert lanes[0][2] == [(" ", "a\n\nb"), (" ", "c")]


def test_blank_card_line_survives_stripped_whitespace():
    text = serialize_board_text({}, [("Todo", False, [(" ", "a\n\nb")])])
    stripped = "\n".join(line.rstrip() for line in text.split("\n"))
    _, lanes, _ = parse_board_text(stripped)
    assert lanes[0][2] == [(" ", "a\n\nb")]


def test_parse_blank_lines_between_cards_are_dropped():
    _, lanes, _ = parse_board_text("## Todo\n- [ ] a\n\n- [ ] b\n\n## Done\n")
    assert lanes[0][2] == [(" ", "a"), (" ", "b")]


def test_parse_invalid_front_matter():
    meta, lanes, _ = parse_board_text("---\ninvalid: yaml: content: [\n---\n## Todo\n")
    assert meta == {}
    assert lanes == [("Todo", False, [])]


def test_parse_non_mapping_front_matter():
    meta, _, _ = parse_board_text("---\n- a\n- b\n---\n## Todo\n")
    assert meta == {}


def test_parse_lane_named_archive_before_divider():
    _, lanes, archive = parse_board_text("## Archive\n- [ ] kept\n")
    assert lanes == [("Archive", False, [(" ", "kept")])]
    assert archive == []


def test_serialize_basic():
    text = serialize_board_text({}, [("Todo", False, [(" ", "A"), ("x", "B")])])
    assert text == "## Todo\n\n- [ ] A\n- [x] B\n"


def test_serialize_front_matter_and_complete():
    text = serialize_board_text({"new-card-insertion-method": "prepend"}, [("Done", True, [])])
    assert text == "---\nnew-card-insertion-method: prepend\n---\n\n## Done\n\n**Complete**\n"


def test_serialize_multiline_card():
    text = serialize_board_text({}, [("Todo", False, [(" ", "first\nsecond")])])
    assert "- [ ] first\n    second\n" in text


def test_serialize_archive():
    text = serialize_board_text({}, [("Todo", False, [])], [("x", "Old")])
    assert text.endswith("***\n\n## Archive\n\n- [x] Old\n")


def test_round_trip():
    meta, lanes, archive = parse_board_text(DOC)
    text = serialize_board_text(meta, lanes, archive)
    assert parse_board_text(text) == (meta, lanes, archive)


def test_round_trip_is_stable():
    meta, lanes, archive = parse_board_text(DOC)
    once = serialize_board_text(meta, lanes, archive)
    twice = serialize_board_text(*parse_board_text(once))
    assert once == twice
