"""Card and lane commands: user intents applied to a BoardState.

Each command reads what it needs from the state, builds the new tree
with the codec and tree functions, and submits it through
``state.apply``. The state is always passed in explicitly.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Any, Iterable, Sequence

from tagboard.codec import encode_field_change, set_block_id
from tagboard.grammar import PRIORITY
from tagboard.ids import generate_instance_id
from tagboard.model import tree
from tagboard.model.node import CHECKED, UNCHECKED, Board, Item, Lane, new_item, new_lane, with_check, with_text
from tagboard.model.path import as_path, resolve
from tagboard.model.state import BoardState

logger = logging.getLogger(__name__)

INSERTION_METHODS = ("append", "prepend", "prepend-compact")

_LINE_BREAKS = re.compile(r"[\r\n]+")


def _item_at(board: Board, path: Sequence[int]) -> Item:
    node = resolve(board, path)
    if not isinstance(node, Item):
        raise TypeError(f"path {list(path)} addresses a {type(node).__name__}, not an item")
    return node


def _edit_item(state: BoardState, path: Sequence[int], edit) -> Board:
    """Apply edit(item) -> item data to the item at path."""

    def updater(board: Board) -> Board:
        item = _item_at(board, path)
        updated = edit(item)
        if updated == item:
            return board
        return tree.update_item(board, path, updated)

    return state.apply(updater)


# --- Fields ---


def set_field(state: BoardState, path: Sequence[int], kind: str, value: Any) -> Board:
    """Set one tag field on an item; None removes it."""
    grammar = state.settings.grammar

    def edit(item: Item) -> Item:
        return with_text(item, encode_field_change(item.raw_text, kind, value, grammar), grammar)

    return _edit_item(state, path, edit)


def toggle_priority(state: BoardState, path: Sequence[int], level: str | None) -> Board:
    """Set priority to level, or clear it if the item already has that level."""
    current = _item_at(state.current(), path).metadata.priority
    return set_field(state, path, PRIORITY, None if level == current else level)


def set_checked(state: BoardState, path: Sequence[int], checked: bool) -> Board:
    grammar = state.settings.grammar
    return _edit_item(state, path, lambda item: with_check(item, checked, grammar))


def copy_link(state: BoardState, path: Sequence[int], file_name: str) -> str:
    """Return a wiki link to the item, giving it a block id first if needed."""
    item = _item_at(state.current(), path)
    block_id = item.metadata.block_id
    if block_id is None:
        block_id = generate_instance_id(6)
        grammar = state.settings.grammar
        _edit_item(state, path, lambda it: with_text(it, set_block_id(it.raw_text, block_id), grammar))
    return f"[[{file_name}#^{block_id}]]"


# --- Structure ---


def split_card(state: BoardState, path: Sequence[int]) -> Board:
    """Split a multi-line card into one card per line."""
    grammar = state.settings.grammar

    def updater(board: Board) -> Board:
        item = _item_at(board, path)
        lines = [line.strip() for line in _LINE_BREAKS.split(item.raw_text)]
        if len(lines) < 2:
            return board
        return tree.split_item(board, path, [new_item(line, grammar) for line in lines])

    return state.apply(updater)


def duplicate_card(state: BoardState, path: Sequence[int]) -> Board:
    return state.apply(lambda board: tree.duplicate_entity(board, path))


def insert_card_before(state: BoardState, path: Sequence[int], raw_text: str = "") -> Board:
    grammar = state.settings.grammar
    return state.apply(lambda board: tree.insert_items(board, path, [new_item(raw_text, grammar)]))


def insert_card_after(state: BoardState, path: Sequence[int], raw_text: str = "") -> Board:
    path = as_path(path)
    after = (*path[:-1], path[-1] + 1)
    grammar = state.settings.grammar
    return state.apply(lambda board: tree.insert_items(board, after, [new_item(raw_text, grammar)]))


def move_to_top(state: BoardState, path: Sequence[int]) -> Board:
    return state.apply(lambda board: tree.move_item_to_top(board, path))


def move_to_bottom(state: BoardState, path: Sequence[int]) -> Board:
    return state.apply(lambda board: tree.move_item_to_bottom(board, path))


def archive_card(state: BoardState, path: Sequence[int]) -> Board:
    """Remove a card from its lane and append it to the board's archive."""

    def updater(board: Board) -> Board:
        _item_at(board, path)
        board, removed = tree.archive_item(board, path)
        return replace(board, archive=board.archive + (removed,))

    return state.apply(updater)


def delete_card(state: BoardState, path: Sequence[int]) -> Board:
    return state.apply(lambda board: tree.delete_entity(board, path))


def move_to_lane(state: BoardState, path: Sequence[int], lane_index: int) -> Board:
    """Move a card to the top of another lane. Same lane is a no-op."""
    path = as_path(path)
    _item_at(state.current(), path)
    if path[0] == lane_index:
        return state.current()
    return state.apply(lambda board: tree.move_entity(board, path, (lane_index, 0)))


def move_card(state: BoardState, path: Sequence[int], target: Sequence[int]) -> Board:
    """Move a card to target, read against the board before the move."""
    return state.apply(lambda board: tree.move_entity(board, path, target))


def add_items(state: BoardState, lane_index: int, texts: Iterable[str]) -> Board:
    """Create cards from texts and add them to a lane.

    Cards added to a lane that marks items complete are checked. The
    new-card-insertion-method setting decides whether they go first or
    last.
    """
    grammar = state.settings.grammar
    method = state.settings.get("new-card-insertion-method")
    if method not in INSERTION_METHODS:
        logger.warning("unknown new-card-insertion-method %r, appending", method)
        method = "append"
    texts = list(texts)

    def updater(board: Board) -> Board:
        lane = resolve(board, (lane_index,))
        check_char = CHECKED if lane.should_mark_items_complete else UNCHECKED
        items = [new_item(text, grammar, check_char=check_char) for text in texts]
        if method == "append":
            return tree.append_items(board, (lane_index,), items)
        return tree.prepend_items(board, (lane_index,), items)

    return state.apply(updater)


# --- Lanes ---


def add_lane(state: BoardState, title: str, index: int | None = None) -> Board:
    def updater(board: Board) -> Board:
        position = len(board.children) if index is None else index
        return tree.insert_items(board, (position,), [new_lane(title)])

    return state.apply(updater)


def rename_lane(state: BoardState, lane_index: int, title: str) -> Board:
    def updater(board: Board) -> Board:
        lane: Lane = resolve(board, (lane_index,))
        return tree.update_item(board, (lane_index,), replace(lane, title=title))

    return state.apply(updater)


def set_lane_complete(state: BoardState, lane_index: int, complete: bool) -> Board:
    def updater(board: Board) -> Board:
        lane: Lane = resolve(board, (lane_index,))
        return tree.update_item(board, (lane_index,), replace(lane, should_mark_items_complete=complete))

    return state.apply(updater)


def delete_lane(state: BoardState, lane_index: int) -> Board:
    return state.apply(lambda board: tree.delete_entity(board, (lane_index,)))


def duplicate_lane(state: BoardState, lane_index: int) -> Board:
    return state.apply(lambda board: tree.duplicate_entity(board, (lane_index,)))


def move_lane(state: BoardState, lane_index: int, new_index: int) -> Board:
    """Move a lane so that it ends up at new_index."""

    def updater(board: Board) -> Board:
        target = new_index + 1 if new_index > lane_index else new_index
        return tree.move_entity(board, (lane_index,), (target,))

    return state.apply(updater)
