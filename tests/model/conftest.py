"""Shared test helpers for model tests."""

import pytest

from tagboard.model.node import CHECKED, UNCHECKED, new_board, new_item, new_lane
from tagboard.settings import Settings


def _make_item(text, checked=False, settings=None):
    """Helper to build an item with metadata decoded from text."""
    grammar = (settings or Settings()).grammar
    return new_item(text, grammar, check_char=CHECKED if checked else UNCHECKED)


def _make_board(lanes=None, settings=None, archive=()):
    """Helper to build a board from {title: [text, ...]}."""
    settings = settings or Settings()
    built = [
        new_lane(title, [_make_item(text, settings=settings) for text in texts])
        for title, texts in (lanes or {}).items()
    ]
    return new_board(built, settings=settings, archive=archive)


def _texts(board):
    """Lane contents as lists of raw text."""
    return [[item.raw_text for item in lane.children] for lane in board.children]


@pytest.fixture
def board():
    """Two lanes: A = [x, y], B = []."""
    return _make_board({"A": ["x", "y"], "B": []})


@pytest.fixture
def big_board():
    """Three lanes with a few items each."""
    return _make_board(
        {
            "Todo": ["a", "b", "c"],
            "Doing": ["d"],
            "Done": ["e", "f"],
        }
    )
