"""Path-addressed structural edits on board trees.

Every function takes a tree and returns a new one. The input is never
modified; only the nodes along the edited path are copied, everything
else is shared. Paths are checked before anything is built, so a bad
path raises PathOutOfRange and nothing else happens.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable, Sequence

from tagboard.errors import InvalidMove, PathOutOfRange
from tagboard.model.node import Board, Node, redecode, with_new_ids
from tagboard.model.path import Path, as_path, parent_path, resolve, resolve_container
from tagboard.settings import Settings


def _replace_children(tree: Node, path: Path, fn: Callable[[tuple], tuple]) -> Node:
    """Rebuild tree with the children of the container at path passed through fn."""
    if not path:
        return replace(tree, children=tuple(fn(tree.children)))
    index = path[0]
    children = tree.children
    child = _replace_children(children[index], path[1:], fn)
    return replace(tree, children=children[:index] + (child,) + children[index + 1 :])


def _check_kind(parent: Node, nodes: Iterable[Node]) -> None:
    for node in nodes:
        if not isinstance(node, parent.child_type):
            raise TypeError(f"{type(parent).__name__} cannot hold {type(node).__name__}")


def _decoded(tree: Node, nodes: tuple) -> tuple:
    """Re-derive item metadata in incoming nodes from their raw text.

    Only boards know their grammar; a bare lane tree passes nodes through.
    """
    if not isinstance(tree, Board):
        return nodes
    grammar = (tree.settings or Settings()).grammar
    return tuple(redecode(node, grammar) for node in nodes)


def _insertion_point(tree: Node, path: Sequence[int]) -> tuple[Path, int, Node]:
    """Resolve the parent path, index and parent for inserting at path."""
    path = as_path(path)
    ppath = parent_path(path)
    parent = resolve_container(tree, ppath)
    index = path[-1]
    if index < 0 or index > len(parent.children):
        raise PathOutOfRange(path, f"cannot insert at {list(path)}: parent has {len(parent.children)} children")
    return ppath, index, parent


def _insert(tree: Node, path: Sequence[int], items: tuple, decode: bool) -> Node:
    ppath, index, parent = _insertion_point(tree, path)
    _check_kind(parent, items)
    if not items:
        return tree
    if decode:
        items = _decoded(tree, items)
    return _replace_children(tree, ppath, lambda ch: ch[:index] + items + ch[index:])


def insert_items(tree: Node, path: Sequence[int], items: Iterable[Node]) -> Node:
    """Insert items in order at path; later siblings shift right.

    Item metadata is re-derived from raw text with the board's grammar.
    """
    return _insert(tree, path, tuple(items), decode=True)


def append_items(tree: Node, parent: Sequence[int], items: Iterable[Node]) -> Node:
    """Insert items at the end of the container at parent."""
    parent = as_path(parent)
    count = len(resolve_container(tree, parent).children)
    return insert_items(tree, (*parent, count), items)


def prepend_items(tree: Node, parent: Sequence[int], items: Iterable[Node]) -> Node:
    """Insert items at the start of the container at parent."""
    return insert_items(tree, (*as_path(parent), 0), items)


def delete_entity(tree: Node, path: Sequence[int]) -> Node:
    """Remove the node at path; later siblings shift left."""
    path = as_path(path)
    resolve(tree, path)
    ppath = parent_path(path)
    index = path[-1]
    return _replace_children(tree, ppath, lambda ch: ch[:index] + ch[index + 1 :])


def archive_item(tree: Node, path: Sequence[int]) -> tuple[Node, Node]:
    """Remove the node at path. Returns (new_tree, removed_node)."""
    node = resolve(tree, path)
    return delete_entity(tree, path), node


def duplicate_entity(tree: Node, path: Sequence[int]) -> Node:
    """Insert a copy of the node at path right after it.

    The copy and all of its descendants get new identities.
    """
    path = as_path(path)
    node = resolve(tree, path)
    if not path:
        raise PathOutOfRange(path, "the board itself cannot be duplicated")
    return insert_items(tree, (*path[:-1], path[-1] + 1), [with_new_ids(node)])


def split_item(tree: Node, path: Sequence[int], items: Iterable[Node]) -> Node:
    """Replace the node at path with items, keeping its position.

    Item metadata is re-derived from raw text with the board's grammar.
    """
    path = as_path(path)
    resolve(tree, path)
    items = tuple(items)
    if not items:
        raise ValueError("split requires at least one item")
    ppath = parent_path(path)
    _check_kind(resolve(tree, ppath), items)
    items = _decoded(tree, items)
    index = path[-1]
    return _replace_children(tree, ppath, lambda ch: ch[:index] + items + ch[index + 1 :])


def adjust_target(from_path: Path, to_path: Path) -> Path:
    """Correct to_path for the removal of the node at from_path.

    When the target lies after the source under the same parent, every
    index at the source's depth shifts left by one once the source is
    detached.
    """
    depth = len(from_path) - 1
    if (
        len(to_path) > depth
        and to_path[:depth] == from_path[:depth]
        and to_path[depth] > from_path[depth]
    ):
        return (*to_path[:depth], to_path[depth] - 1, *to_path[depth + 1 :])
    return to_path


def move_entity(tree: Node, from_path: Sequence[int], to_path: Sequence[int]) -> Node:
    """Move the node at from_path so that it ends up at to_path.

    to_path is read against the tree before the move. The node keeps its
    identity. Returns tree itself when the move changes nothing.
    """
    from_path = as_path(from_path)
    to_path = as_path(to_path)
    node = resolve(tree, from_path)
    if not from_path:
        raise PathOutOfRange(from_path, "the board itself cannot be moved")
    if len(to_path) > len(from_path) and to_path[: len(from_path)] == from_path:
        raise InvalidMove(f"cannot move {list(from_path)} inside itself")
    _, _, parent = _insertion_point(tree, to_path)
    _check_kind(parent, [node])

    target = adjust_target(from_path, to_path)
    if target == from_path:
        return tree
    return _insert(delete_entity(tree, from_path), target, (node,), decode=False)


def move_item_to_top(tree: Node, path: Sequence[int]) -> Node:
    """Move the node at path to the first position of its parent."""
    path = as_path(path)
    return move_entity(tree, path, (*parent_path(path), 0))


def move_item_to_bottom(tree: Node, path: Sequence[int]) -> Node:
    """Move the node at path to the last position of its parent."""
    path = as_path(path)
    ppath = parent_path(path)
    count = len(resolve_container(tree, ppath).children)
    return move_entity(tree, path, (*ppath, count))


def update_item(tree: Node, path: Sequence[int], new_data: Node) -> Node:
    """Replace the node at path with new_data, keeping the old identity.

    Item metadata is re-derived from raw text with the board's grammar.
    """
    path = as_path(path)
    node = resolve(tree, path)
    if type(new_data) is not type(node):
        raise TypeError(f"cannot replace {type(node).__name__} with {type(new_data).__name__}")
    updated = replace(_decoded(tree, (new_data,))[0], id=node.id)
    if not path:
        return updated
    index = path[-1]
    return _replace_children(tree, path[:-1], lambda ch: ch[:index] + (updated,) + ch[index + 1 :])
