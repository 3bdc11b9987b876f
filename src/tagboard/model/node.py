"""Immutable board tree nodes: Board → Lane → Item."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, ClassVar

from tagboard.codec import Metadata, decode
from tagboard.grammar import Grammar
from tagboard.ids import new_id

UNCHECKED = " "
CHECKED = "x"


@dataclass(frozen=True)
class Item:
    """A leaf card. raw_text is authoritative; metadata is derived from it."""

    id: str
    raw_text: str
    metadata: Metadata = field(default_factory=Metadata)
    check_char: str = UNCHECKED

    @property
    def checked(self) -> bool:
        return self.check_char != UNCHECKED

    @property
    def title(self) -> str:
        """First line of the raw text."""
        return self.raw_text.split("\n", 1)[0]


@dataclass(frozen=True)
class Lane:
    """An ordered list of items with a title."""

    child_type: ClassVar[type] = Item

    id: str
    title: str
    children: tuple[Item, ...] = ()
    should_mark_items_complete: bool = False


@dataclass(frozen=True)
class Board:
    """The root of the tree.

    settings is shared by reference across snapshots and does not take
    part in equality. archive holds items removed by archiving.
    """

    child_type: ClassVar[type] = Lane

    id: str
    children: tuple[Lane, ...] = ()
    archive: tuple[Item, ...] = ()
    settings: Any = field(default=None, compare=False, repr=False)


Node = Board | Lane | Item


def is_container(node: Any) -> bool:
    return isinstance(node, (Board, Lane))


# --- Factories ---


def new_item(raw_text: str, grammar: Grammar, check_char: str = UNCHECKED) -> Item:
    """Create an item with a fresh identity and decoded metadata."""
    check_char = check_char or UNCHECKED
    metadata = decode(raw_text, grammar, checked=check_char != UNCHECKED)
    return Item(id=new_id(), raw_text=raw_text, metadata=metadata, check_char=check_char)


def new_lane(title: str, items=(), should_mark_items_complete: bool = False) -> Lane:
    """Create a lane with a fresh identity."""
    return Lane(
        id=new_id(),
        title=title,
        children=tuple(items),
        should_mark_items_complete=should_mark_items_complete,
    )


def new_board(lanes=(), settings: Any = None, archive=()) -> Board:
    """Create a board with a fresh identity."""
    return Board(id=new_id(), children=tuple(lanes), archive=tuple(archive), settings=settings)


def with_text(item: Item, raw_text: str, grammar: Grammar) -> Item:
    """Return item data with new raw text and re-decoded metadata, same identity."""
    return replace(item, raw_text=raw_text, metadata=decode(raw_text, grammar, checked=item.checked))


def with_check(item: Item, checked: bool, grammar: Grammar) -> Item:
    """Return item data with its task marker set or cleared, same identity."""
    if checked == item.checked:
        return item
    check_char = CHECKED if checked else UNCHECKED
    return replace(item, check_char=check_char, metadata=decode(item.raw_text, grammar, checked=checked))


def with_new_ids(node: Node) -> Node:
    """Deep copy of node where it and every descendant get a fresh identity."""
    if is_container(node):
        return replace(node, id=new_id(), children=tuple(with_new_ids(child) for child in node.children))
    return replace(node, id=new_id())


def iter_ids(node: Node):
    """Yield the identities of node and all its descendants."""
    yield node.id
    if is_container(node):
        for child in node.children:
            yield from iter_ids(child)


def _same(new: tuple, old: tuple) -> bool:
    return all(a is b for a, b in zip(new, old))


def redecode(node: Node, grammar: Grammar) -> Node:
    """Rebuild the metadata of every item under node with grammar.

    Returns node itself when no item's metadata changes.
    """
    if not is_container(node):
        metadata = decode(node.raw_text, grammar, checked=node.checked)
        return node if metadata == node.metadata else replace(node, metadata=metadata)
    children = tuple(redecode(child, grammar) for child in node.children)
    if isinstance(node, Board):
        archive = tuple(redecode(item, grammar) for item in node.archive)
        if _same(children, node.children) and _same(archive, node.archive):
            return node
        return replace(node, children=children, archive=archive)
    if _same(children, node.children):
        return node
    return replace(node, children=children)
