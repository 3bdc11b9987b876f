"""Serialize a Board tree back to a board document."""

import logging
import os
import tempfile
from pathlib import Path

from tagboard.model.node import Board
from tagboard.parser import serialize_board_text

logger = logging.getLogger(__name__)


def board_to_text(board: Board) -> str:
    """Render board as board document text."""
    meta = board.settings.to_dict() if board.settings is not None else {}
    lanes = [
        (lane.title, lane.should_mark_items_complete, [(item.check_char, item.raw_text) for item in lane.children])
        for lane in board.children
    ]
    archive = [(item.check_char, item.raw_text) for item in board.archive]
    return serialize_board_text(meta, lanes, archive)


def save_board(board: Board, path: str | Path) -> None:
    """Write board to path, replacing the file atomically."""
    path = Path(path)
    text = board_to_text(board)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise
    logger.debug("saved %s", path)
