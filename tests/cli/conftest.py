"""Shared fixtures for CLI tests."""

from argparse import Namespace

import pytest

BOARD = """## Todo

- [ ] First card !{low}
- [ ] Second card
    with details

## Doing

## Done

**Complete**

- [x] Shipped
"""


@pytest.fixture
def board_file(tmp_path):
    """A board document with three lanes and three cards."""
    path = tmp_path / "board.md"
    path.write_text(BOARD)
    return path


def _args(board_file, json=False, **kwargs):
    """Build handler arguments for board_file."""
    return Namespace(file=str(board_file), json=json, verbose=False, **kwargs)
