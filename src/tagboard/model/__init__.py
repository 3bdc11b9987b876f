"""Persistent board tree."""

from tagboard.model.loader import board_from_text, load_board
from tagboard.model.node import Board, Item, Lane, Node, new_board, new_item, new_lane
from tagboard.model.path import find_path, resolve
from tagboard.model.state import BoardState
from tagboard.model.tree import (
    append_items,
    archive_item,
    delete_entity,
    duplicate_entity,
    insert_items,
    move_entity,
    move_item_to_bottom,
    move_item_to_top,
    prepend_items,
    split_item,
    update_item,
)
from tagboard.model.writer import board_to_text, save_board

__all__ = [
    "Board",
    "BoardState",
    "Item",
    "Lane",
    "Node",
    "append_items",
    "archive_item",
    "board_from_text",
    "board_to_text",
    "delete_entity",
    "duplicate_entity",
    "find_path",
    "insert_items",
    "load_board",
    "move_entity",
    "move_item_to_bottom",
    "move_item_to_top",
    "new_board",
    "new_item",
    "new_lane",
    "prepend_items",
    "resolve",
    "save_board",
    "split_item",
    "update_item",
]
