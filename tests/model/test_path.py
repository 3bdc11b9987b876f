"""Tests for path resolution."""

import pytest

from tagboard.errors import PathOutOfRange
from tagboard.model.path import find_path, parent_path, resolve, resolve_container, siblings_of


def test_resolve_root(board):
    assert resolve(board, ()) is board


def test_resolve_lane_and_item(board):
    assert resolve(board, (0,)).title == "A"
    assert resolve(board, [0, 1]).raw_text == "y"


@pytest.mark.parametrize("path", [(2,), (-1,), (0, 2), (1, 0), (0, 0, 0)])
def test_resolve_out_of_range(board, path):
    with pytest.raises(PathOutOfRange) as exc_info:
        resolve(board, path)
    assert exc_info.value.path == path


def test_path_out_of_range_is_index_error(board):
    with pytest.raises(IndexError):
        resolve(board, (9,))


def test_resolve_container_rejects_item(board):
    with pytest.raises(PathOutOfRange):
        resolve_container(board, (0, 0))


def test_parent_path():
    assert parent_path((1, 2)) == (1,)
    with pytest.raises(PathOutOfRange):
        parent_path(())


def test_siblings_of(board):
    assert [i.raw_text for i in siblings_of(board, (0, 1))] == ["x", "y"]
    assert [lane.title for lane in siblings_of(board, (1,))] == ["A", "B"]


def test_find_path(board):
    y = board.children[0].children[1]
    assert find_path(board, y.id) == (0, 1)
    assert find_path(board, board.id) == ()
    assert find_path(board, "missing") is None
