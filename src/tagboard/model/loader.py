"""Load a board document into a Board tree."""

import logging
from pathlib import Path

from tagboard.model.node import Board, new_board, new_item, new_lane
from tagboard.parser import parse_board_text
from tagboard.settings import Settings

logger = logging.getLogger(__name__)


def board_from_text(text: str) -> Board:
    """Build a Board from board document text.

    Front-matter becomes the board's Settings; every lane and item gets
    a fresh identity.
    """
    meta, lanes, archive = parse_board_text(text)
    settings = Settings(meta)
    grammar = settings.grammar

    built = [
        new_lane(
            title,
            [new_item(raw, grammar, check_char=check) for check, raw in items],
            should_mark_items_complete=complete,
        )
        for title, complete, items in lanes
    ]
    archived = [new_item(raw, grammar, check_char=check) for check, raw in archive]
    return new_board(built, settings=settings, archive=archived)


def load_board(path: str | Path) -> Board:
    """Read and parse the board document at path."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"No board document at {path}")
    board = board_from_text(path.read_text(encoding="utf-8"))
    logger.debug(
        "loaded %s: %d lanes, %d items",
        path,
        len(board.children),
        sum(len(lane.children) for lane in board.children),
    )
    return board
