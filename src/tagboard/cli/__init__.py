"""CLI argument parser and dispatch for tagboard."""

import argparse

from tagboard.cli.board import board_config, board_get, board_show, board_summary
from tagboard.cli.category import category_add, category_delete, category_edit, category_list, category_move
from tagboard.cli.init import init_board
from tagboard.cli.item import (
    item_add,
    item_archive,
    item_bottom,
    item_check,
    item_clear,
    item_delete,
    item_duplicate,
    item_get,
    item_insert,
    item_link,
    item_list,
    item_move,
    item_set,
    item_split,
    item_top,
)
from tagboard.cli.lane import (
    lane_add,
    lane_complete,
    lane_delete,
    lane_duplicate,
    lane_list,
    lane_move,
    lane_rename,
)
from tagboard.grammar import KINDS


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--file", "-f", default="board.md", help="Path to the board document (default: board.md)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("--verbose", "-v", action="store_true", help="Log debug output to stderr")

    parser = argparse.ArgumentParser(
        prog="tagboard",
        description="Markdown kanban board with inline metadata tags",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- init ---
    init_p = nouns.add_parser("init", help="Create a board document", parents=[common])
    init_p.set_defaults(func=init_board)

    # --- board ---
    board_p = nouns.add_parser("board", help="Board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_summary_p = board_verbs.add_parser("summary", help="Show board summary", parents=[common])
    board_summary_p.set_defaults(func=board_summary)

    board_show_p = board_verbs.add_parser("show", help="Render lanes and cards", parents=[common])
    board_show_p.set_defaults(func=board_show)

    board_get_p = board_verbs.add_parser("get", help="Dump the board document", parents=[common])
    board_get_p.set_defaults(func=board_get)

    board_config_p = board_verbs.add_parser("config", help="Get or set a board setting", parents=[common])
    board_config_p.add_argument("key", help="Setting name (e.g. date-trigger)")
    board_config_p.add_argument("value", nargs="?", help="New value; omit to print the current one")
    board_config_p.add_argument("--unset", action="store_true", help="Remove the setting")
    board_config_p.set_defaults(func=board_config)

    # board with no verb = summary
    board_p.set_defaults(func=board_summary)

    # --- lane ---
    lane_p = nouns.add_parser("lane", help="Lane operations", parents=[common])
    lane_verbs = lane_p.add_subparsers(dest="verb")

    lane_list_p = lane_verbs.add_parser("list", help="List lanes", parents=[common])
    lane_list_p.set_defaults(func=lane_list)

    lane_add_p = lane_verbs.add_parser("add", help="Create a lane", parents=[common])
    lane_add_p.add_argument("title", help="Lane title")
    lane_add_p.add_argument("--position", type=int, help="Position (1-indexed, default: last)")
    lane_add_p.add_argument("--complete", action="store_true", help="Cards in this lane are marked complete")
    lane_add_p.set_defaults(func=lane_add)

    lane_rename_p = lane_verbs.add_parser("rename", help="Rename a lane", parents=[common])
    lane_rename_p.add_argument("id", type=int, help="Lane ID")
    lane_rename_p.add_argument("title", help="New title")
    lane_rename_p.set_defaults(func=lane_rename)

    lane_complete_p = lane_verbs.add_parser("complete", help="Mark a lane's cards complete", parents=[common])
    lane_complete_p.add_argument("id", type=int, help="Lane ID")
    lane_complete_p.add_argument("--off", action="store_true", help="Stop marking cards complete")
    lane_complete_p.set_defaults(func=lane_complete)

    lane_move_p = lane_verbs.add_parser("move", help="Move a lane", parents=[common])
    lane_move_p.add_argument("id", type=int, help="Lane ID")
    lane_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    lane_move_p.set_defaults(func=lane_move)

    lane_duplicate_p = lane_verbs.add_parser("duplicate", help="Duplicate a lane", parents=[common])
    lane_duplicate_p.add_argument("id", type=int, help="Lane ID")
    lane_duplicate_p.set_defaults(func=lane_duplicate)

    lane_delete_p = lane_verbs.add_parser("delete", help="Delete a lane and its cards", parents=[common])
    lane_delete_p.add_argument("id", type=int, help="Lane ID")
    lane_delete_p.set_defaults(func=lane_delete)

    # lane with no verb = list
    lane_p.set_defaults(func=lane_list)

    # --- item ---
    item_p = nouns.add_parser("item", help="Card operations", parents=[common])
    item_verbs = item_p.add_subparsers(dest="verb")

    item_list_p = item_verbs.add_parser("list", help="List cards", parents=[common])
    item_list_p.add_argument("--lane", type=int, help="Only this lane")
    item_list_p.set_defaults(func=item_list)

    item_get_p = item_verbs.add_parser("get", help="Show a card", parents=[common])
    item_get_p.add_argument("ref", help="Card reference LANE.ITEM")
    item_get_p.set_defaults(func=item_get)

    item_add_p = item_verbs.add_parser("add", help="Create a card", parents=[common])
    item_add_p.add_argument("text", help="Card text, tags included")
    item_add_p.add_argument("--lane", type=int, default=1, help="Target lane ID (default: 1)")
    item_add_p.set_defaults(func=item_add)

    item_insert_p = item_verbs.add_parser("insert", help="Insert a card next to another", parents=[common])
    item_insert_p.add_argument("ref", help="Card reference LANE.ITEM")
    item_insert_p.add_argument("text", nargs="?", default="", help="Card text")
    item_insert_p.add_argument("--after", action="store_true", help="Insert after instead of before")
    item_insert_p.set_defaults(func=item_insert)

    item_set_p = item_verbs.add_parser("set", help="Set a tag field", parents=[common])
    item_set_p.add_argument("ref", help="Card reference LANE.ITEM")
    item_set_p.add_argument("kind", choices=KINDS, help="Field to set")
    item_set_p.add_argument("value", help="New value")
    item_set_p.set_defaults(func=item_set)

    item_clear_p = item_verbs.add_parser("clear", help="Remove a tag field", parents=[common])
    item_clear_p.add_argument("ref", help="Card reference LANE.ITEM")
    item_clear_p.add_argument("kind", choices=KINDS, help="Field to remove")
    item_clear_p.set_defaults(func=item_clear)

    item_check_p = item_verbs.add_parser("check", help="Check a card", parents=[common])
    item_check_p.add_argument("ref", help="Card reference LANE.ITEM")
    item_check_p.add_argument("--off", action="store_true", help="Uncheck instead")
    item_check_p.set_defaults(func=item_check)

    item_move_p = item_verbs.add_parser("move", help="Move a card", parents=[common])
    item_move_p.add_argument("ref", help="Card reference LANE.ITEM")
    item_move_p.add_argument("--lane", type=int, required=True, help="Target lane ID")
    item_move_p.add_argument("--position", type=int, help="Position in lane (1-indexed)")
    item_move_p.set_defaults(func=item_move)

    item_top_p = item_verbs.add_parser("top", help="Move a card to the top of its lane", parents=[common])
    item_top_p.add_argument("ref", help="Card reference LANE.ITEM")
    item_top_p.set_defaults(func=item_top)

    item_bottom_p = item_verbs.add_parser("bottom", help="Move a card to the bottom of its lane", parents=[common])
    item_bottom_p.add_argument("ref", help="Card reference LANE.ITEM")
    item_bottom_p.set_defaults(func=item_bottom)

    item_duplicate_p = item_verbs.add_parser("duplicate", help="Duplicate a card", parents=[common])
    item_duplicate_p.add_argument("ref", help="Card reference LANE.ITEM")
    item_duplicate_p.set_defaults(func=item_duplicate)

    item_split_p = item_verbs.add_parser("split", help="Split a card into one card per line", parents=[common])
    item_split_p.add_argument("ref", help="Card reference LANE.ITEM")
    item_split_p.set_defaults(func=item_split)

    item_archive_p = item_verbs.add_parser("archive", help="Archive a card", parents=[common])
    item_archive_p.add_argument("ref", help="Card reference LANE.ITEM")
    item_archive_p.set_defaults(func=item_archive)

    item_delete_p = item_verbs.add_parser("delete", help="Delete a card", parents=[common])
    item_delete_p.add_argument("ref", help="Card reference LANE.ITEM")
    item_delete_p.set_defaults(func=item_delete)

    item_link_p = item_verbs.add_parser("link", help="Print a link to a card", parents=[common])
    item_link_p.add_argument("ref", help="Card reference LANE.ITEM")
    item_link_p.add_argument("--name", help="Note name for the link (default: board file name)")
    item_link_p.set_defaults(func=item_link)

    # item with no verb = list
    item_p.set_defaults(func=item_list, lane=None)

    # --- category ---
    cat_p = nouns.add_parser("category", help="Category operations", parents=[common])
    cat_verbs = cat_p.add_subparsers(dest="verb")

    cat_list_p = cat_verbs.add_parser("list", help="List categories", parents=[common])
    cat_list_p.set_defaults(func=category_list)

    cat_add_p = cat_verbs.add_parser("add", help="Add a category", parents=[common])
    cat_add_p.add_argument("name", help="Category name")
    cat_add_p.add_argument("--color", help="Color (default: #4a90d9)")
    cat_add_p.set_defaults(func=category_add)

    cat_edit_p = cat_verbs.add_parser("edit", help="Rename or recolor a category", parents=[common])
    cat_edit_p.add_argument("id", type=int, help="Category ID")
    cat_edit_p.add_argument("--name", help="New name")
    cat_edit_p.add_argument("--color", help="New color")
    cat_edit_p.set_defaults(func=category_edit)

    cat_move_p = cat_verbs.add_parser("move", help="Move a category", parents=[common])
    cat_move_p.add_argument("id", type=int, help="Category ID")
    cat_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    cat_move_p.set_defaults(func=category_move)

    cat_delete_p = cat_verbs.add_parser("delete", help="Delete a category", parents=[common])
    cat_delete_p.add_argument("id", type=int, help="Category ID")
    cat_delete_p.set_defaults(func=category_delete)

    # category with no verb = list
    cat_p.set_defaults(func=category_list)

    return parser
