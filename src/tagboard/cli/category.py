"""Handlers for 'tagboard category' commands."""

from tagboard.cli._common import error, load_state_or_die, output_json, output_result, save
from tagboard.settings import (
    DEFAULT_CATEGORY_COLOR,
    add_category,
    delete_category,
    move_category,
    update_category,
)


def _categories(state) -> list[dict]:
    return list(state.settings.get("categories") or [])


def _find_category(categories: list[dict], category_id: int, json_mode: bool) -> int:
    index = category_id - 1
    if 0 <= index < len(categories):
        return index
    error(f"Category {category_id} not found.", json_mode)


def category_list(args) -> int:
    """List configured categories and their colors."""
    state = load_state_or_die(args.file, args.json)
    categories = _categories(state)

    if args.json:
        output_json([{"id": i, **cat} for i, cat in enumerate(categories, 1)])
    else:
        for i, cat in enumerate(categories, 1):
            print(f"{i}  {cat.get('name', ''):<16} {cat.get('color', '')}")
    return 0


def category_add(args) -> int:
    """Add a category."""
    state = load_state_or_die(args.file, args.json)
    categories = add_category(_categories(state), args.name, args.color or DEFAULT_CATEGORY_COLOR)

    state.settings.set("categories", categories)
    save(state, args.file)

    output_result(
        {"id": len(categories), **categories[-1]},
        f"Added category {len(categories)}: {args.name}",
        args.json,
    )
    return 0


def category_edit(args) -> int:
    """Rename or recolor a category."""
    state = load_state_or_die(args.file, args.json)
    categories = _categories(state)
    index = _find_category(categories, args.id, args.json)

    old = categories[index]
    name = args.name if args.name is not None else old.get("name", "")
    color = args.color if args.color is not None else old.get("color", DEFAULT_CATEGORY_COLOR)
    categories = update_category(categories, index, name, color)

    state.settings.set("categories", categories)
    save(state, args.file)

    output_result({"id": args.id, **categories[index]}, f"Updated category {args.id}: {name}", args.json)
    return 0


def category_move(args) -> int:
    """Move a category to a new position (1-indexed)."""
    state = load_state_or_die(args.file, args.json)
    categories = _categories(state)
    index = _find_category(categories, args.id, args.json)
    _find_category(categories, args.position, args.json)

    categories = move_category(categories, index, args.position - 1)
    state.settings.set("categories", categories)
    save(state, args.file)

    name = categories[args.position - 1].get("name", "")
    output_result(
        {"id": args.position, "name": name},
        f"Moved category {name} to position {args.position}",
        args.json,
    )
    return 0


def category_delete(args) -> int:
    """Delete a category. Cards keep their category tags."""
    state = load_state_or_die(args.file, args.json)
    categories = _categories(state)
    index = _find_category(categories, args.id, args.json)
    name = categories[index].get("name", "")

    state.settings.set("categories", delete_category(categories, index) or None)
    save(state, args.file)

    output_result({"id": args.id, "name": name}, f"Deleted category {args.id}: {name}", args.json)
    return 0
