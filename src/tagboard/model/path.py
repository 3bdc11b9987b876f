"""Index paths addressing nodes in a board tree.

``()`` is the board, ``(i,)`` lane i, ``(i, j)`` item j of lane i.
A path is only meaningful against the snapshot it was taken from.
"""

from __future__ import annotations

from typing import Sequence

from tagboard.errors import PathOutOfRange
from tagboard.model.node import Node, is_container

Path = tuple[int, ...]


def as_path(path: Sequence[int]) -> Path:
    """Normalize a path-like sequence to a tuple of ints."""
    return tuple(int(i) for i in path)


def resolve(tree: Node, path: Sequence[int]) -> Node:
    """Walk path from tree and return the node it addresses."""
    path = as_path(path)
    node = tree
    for depth, index in enumerate(path):
        if not is_container(node) or index < 0 or index >= len(node.children):
            raise PathOutOfRange(path, f"path {list(path)} is out of range at depth {depth}")
        node = node.children[index]
    return node


def resolve_container(tree: Node, path: Sequence[int]) -> Node:
    """Resolve path and require the result to hold children."""
    node = resolve(tree, path)
    if not is_container(node):
        raise PathOutOfRange(path, f"path {list(path)} does not address a container")
    return node


def parent_path(path: Sequence[int]) -> Path:
    path = as_path(path)
    if not path:
        raise PathOutOfRange(path, "the root has no parent")
    return path[:-1]


def siblings_of(tree: Node, path: Sequence[int]) -> tuple:
    """Ordered children of the parent of path, the addressed node included."""
    return resolve_container(tree, parent_path(path)).children


def find_path(tree: Node, node_id: str) -> Path | None:
    """Find the current path of the node with identity node_id."""
    if tree.id == node_id:
        return ()
    if not is_container(tree):
        return None
    for i, child in enumerate(tree.children):
        found = find_path(child, node_id)
        if found is not None:
            return (i, *found)
    return None
