"""Handler for 'tagboard init'."""

from pathlib import Path

from tagboard.cli._common import error, output_json
from tagboard.model.loader import load_board
from tagboard.model.node import new_board, new_lane
from tagboard.model.writer import save_board
from tagboard.settings import Settings

DEFAULT_LANES = (("Todo", False), ("Doing", False), ("Done", True))


def init_board(args) -> int:
    """Create a board document with the default lanes."""
    path = Path(args.file).resolve()

    if path.exists():
        if not path.is_file():
            error(f"{path} is not a file", args.json)
        board = load_board(path)
        lanes = [lane.title for lane in board.children]
        if args.json:
            output_json({"file": str(path), "lanes": lanes, "created": False})
        else:
            print(f"Board already exists at {path}")
        return 0

    board = new_board(
        [new_lane(title, should_mark_items_complete=complete) for title, complete in DEFAULT_LANES],
        settings=Settings(),
    )
    save_board(board, path)

    lanes = [lane.title for lane in board.children]
    if args.json:
        output_json({"file": str(path), "lanes": lanes, "created": True})
    else:
        print(f"Initialized board at {path}")
        print(f"Lanes: {', '.join(lanes)}")

    return 0
