"""Shared helpers for CLI command handlers."""

import json
import sys
from pathlib import Path

from tagboard.errors import BoardError
from tagboard.model.loader import load_board
from tagboard.model.node import Board, Item
from tagboard.model.path import Path as TreePath
from tagboard.model.path import resolve
from tagboard.model.state import BoardState
from tagboard.model.writer import save_board


def load_state_or_die(file: str, json_mode: bool) -> BoardState:
    """Load the board document at file. Exit 1 with message if it fails."""
    try:
        board = load_board(Path(file))
    except (OSError, BoardError) as e:
        error(str(e), json_mode)
    return BoardState(board)


def find_lane(board: Board, lane_id: int, json_mode: bool) -> int:
    """Turn a 1-indexed lane number into an index. Exit 1 listing lanes if not found."""
    index = lane_id - 1
    if 0 <= index < len(board.children):
        return index
    available = [f"  {i}  {lane.title}" for i, lane in enumerate(board.children, 1)]
    error(f"Lane {lane_id} not found. Available:\n" + "\n".join(available), json_mode)


def parse_ref(ref: str, json_mode: bool) -> TreePath:
    """Parse a 1-indexed ``LANE.ITEM`` reference into a path."""
    try:
        lane, item = (int(part) for part in ref.split("."))
    except ValueError:
        error(f"Invalid item reference '{ref}', expected LANE.ITEM (e.g. 2.3)", json_mode)
    return (lane - 1, item - 1)


def find_item(board: Board, ref: str, json_mode: bool) -> tuple[TreePath, Item]:
    """Lookup an item by reference. Exit 1 if not found."""
    path = parse_ref(ref, json_mode)
    try:
        node = resolve(board, path)
    except BoardError:
        error(f"Item '{ref}' not found.", json_mode)
    return path, node


def format_ref(path: TreePath) -> str:
    return ".".join(str(i + 1) for i in path)


def save(state: BoardState, file: str) -> None:
    save_board(state.current(), Path(file))


def run_command(command, json_mode: bool, *args, **kwargs):
    """Call a board command, turning BoardErrors into an error exit."""
    try:
        return command(*args, **kwargs)
    except (BoardError, ValueError) as e:
        error(str(e), json_mode)


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def item_to_dict(path: TreePath, item: Item) -> dict:
    """Summarize an item for JSON output."""
    meta = item.metadata
    return {
        "ref": format_ref(path),
        "id": item.id,
        "text": item.raw_text,
        "checked": item.checked,
        "date": meta.date.isoformat() if meta.date else None,
        "time": meta.time.strftime("%H:%M") if meta.time else None,
        "priority": meta.priority,
        "story_points": meta.story_points,
        "category": meta.category,
        "block_id": meta.block_id,
    }


def build_lane_summaries(board: Board) -> list[dict]:
    """Build lane summary dicts from board."""
    return [
        {
            "id": i,
            "title": lane.title,
            "cards": len(lane.children),
            "complete": lane.should_mark_items_complete,
        }
        for i, lane in enumerate(board.children, 1)
    ]


def format_lane_line(lane: dict, indent: str = "") -> str:
    """Format a lane summary dict as a text line."""
    complete = "  (complete)" if lane["complete"] else ""
    cards = "card" if lane["cards"] == 1 else "cards"
    return f"{indent}{lane['id']}  {lane['title']:<16} {lane['cards']} {cards}{complete}"
