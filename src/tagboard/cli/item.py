"""Handlers for 'tagboard item' commands."""

from pathlib import Path

from tagboard import commands
from tagboard.cli._common import (
    error,
    find_item,
    find_lane,
    format_ref,
    item_to_dict,
    load_state_or_die,
    output_json,
    output_result,
    run_command,
    save,
)
from tagboard.codec import decode_value, format_value
from tagboard.model.path import find_path, resolve


def item_list(args) -> int:
    """List cards grouped by lane."""
    state = load_state_or_die(args.file, args.json)
    board = state.current()
    only = find_lane(board, args.lane, args.json) if args.lane else None

    lanes = [(i, lane) for i, lane in enumerate(board.children) if only is None or i == only]

    if args.json:
        output_json(
            [
                {**item_to_dict((i, j), item), "lane": {"id": i + 1, "title": lane.title}}
                for i, lane in lanes
                for j, item in enumerate(lane.children)
            ]
        )
    else:
        for i, lane in lanes:
            print(f"{i + 1}  {lane.title}")
            for j, item in enumerate(lane.children):
                mark = "x" if item.checked else " "
                print(f"  {format_ref((i, j))}  [{mark}] {item.title}")

    return 0


def item_get(args) -> int:
    """Show one card's raw text and decoded fields."""
    state = load_state_or_die(args.file, args.json)
    path, item = find_item(state.current(), args.ref, args.json)

    if args.json:
        output_json(item_to_dict(path, item))
    else:
        print(item.raw_text)
    return 0


def item_add(args) -> int:
    """Create a card in a lane."""
    state = load_state_or_die(args.file, args.json)
    index = find_lane(state.current(), args.lane, args.json)
    before = state.current().children[index].children

    board = run_command(commands.add_items, args.json, state, index, [args.text])
    save(state, args.file)

    old_ids = {item.id for item in before}
    after = board.children[index].children
    position = next(j for j, item in enumerate(after) if item.id not in old_ids)
    path = (index, position)
    output_result(
        item_to_dict(path, after[position]),
        f"Created card {format_ref(path)} in {board.children[index].title}",
        args.json,
    )
    return 0


def item_insert(args) -> int:
    """Insert a card before (or after) another one."""
    state = load_state_or_die(args.file, args.json)
    path, _ = find_item(state.current(), args.ref, args.json)

    insert = commands.insert_card_after if args.after else commands.insert_card_before
    board = run_command(insert, args.json, state, path, args.text)
    save(state, args.file)

    new_path = (path[0], path[1] + 1) if args.after else path
    output_result(
        item_to_dict(new_path, resolve(board, new_path)),
        f"Inserted card {format_ref(new_path)}",
        args.json,
    )
    return 0


def item_set(args) -> int:
    """Set a tag field on a card."""
    state = load_state_or_die(args.file, args.json)
    path, _ = find_item(state.current(), args.ref, args.json)

    grammar = state.settings.grammar
    content = run_command(format_value, args.json, args.kind, args.value, grammar)
    if decode_value(args.kind, content, grammar) is None:
        error(f"Invalid {args.kind} value '{args.value}'", args.json)

    board = run_command(commands.set_field, args.json, state, path, args.kind, args.value)
    save(state, args.file)

    item = resolve(board, path)
    output_result(item_to_dict(path, item), item.raw_text, args.json)
    return 0


def item_clear(args) -> int:
    """Remove a tag field from a card."""
    state = load_state_or_die(args.file, args.json)
    path, _ = find_item(state.current(), args.ref, args.json)

    board = run_command(commands.set_field, args.json, state, path, args.kind, None)
    save(state, args.file)

    item = resolve(board, path)
    output_result(item_to_dict(path, item), item.raw_text, args.json)
    return 0


def item_check(args) -> int:
    """Check or uncheck a card."""
    state = load_state_or_die(args.file, args.json)
    path, _ = find_item(state.current(), args.ref, args.json)

    board = run_command(commands.set_checked, args.json, state, path, not args.off)
    save(state, args.file)

    item = resolve(board, path)
    verb = "Checked" if item.checked else "Unchecked"
    output_result(item_to_dict(path, item), f"{verb} card {args.ref}", args.json)
    return 0


def item_move(args) -> int:
    """Move a card to a lane, optionally at a position (1-indexed)."""
    state = load_state_or_die(args.file, args.json)
    board = state.current()
    path, item = find_item(board, args.ref, args.json)
    lane_index = find_lane(board, args.lane, args.json)

    if args.position is None:
        if lane_index == path[0]:
            error(f"Card {args.ref} is already in lane {args.lane}", args.json)
        board = run_command(commands.move_to_lane, args.json, state, path, lane_index)
    else:
        count = len(board.children[lane_index].children)
        if lane_index == path[0]:
            position = min(max(args.position - 1, 0), count - 1)
            target = position + 1 if position > path[1] else position
        else:
            target = min(max(args.position - 1, 0), count)
        board = run_command(commands.move_card, args.json, state, path, (lane_index, target))
    save(state, args.file)

    new_path = find_path(board, item.id)
    output_result(
        item_to_dict(new_path, resolve(board, new_path)),
        f"Moved card to {format_ref(new_path)} in {board.children[new_path[0]].title}",
        args.json,
    )
    return 0


def item_top(args) -> int:
    """Move a card to the top of its lane."""
    return _reorder(args, commands.move_to_top, "top")


def item_bottom(args) -> int:
    """Move a card to the bottom of its lane."""
    return _reorder(args, commands.move_to_bottom, "bottom")


def _reorder(args, command, where: str) -> int:
    state = load_state_or_die(args.file, args.json)
    path, item = find_item(state.current(), args.ref, args.json)

    board = run_command(command, args.json, state, path)
    save(state, args.file)

    new_path = find_path(board, item.id)
    output_result(
        item_to_dict(new_path, resolve(board, new_path)),
        f"Moved card {args.ref} to the {where} ({format_ref(new_path)})",
        args.json,
    )
    return 0


def item_duplicate(args) -> int:
    """Duplicate a card right after itself."""
    state = load_state_or_die(args.file, args.json)
    path, _ = find_item(state.current(), args.ref, args.json)

    board = run_command(commands.duplicate_card, args.json, state, path)
    save(state, args.file)

    new_path = (path[0], path[1] + 1)
    output_result(
        item_to_dict(new_path, resolve(board, new_path)),
        f"Duplicated card {args.ref} as {format_ref(new_path)}",
        args.json,
    )
    return 0


def item_split(args) -> int:
    """Split a multi-line card into one card per line."""
    state = load_state_or_die(args.file, args.json)
    path, item = find_item(state.current(), args.ref, args.json)
    before = len(state.current().children[path[0]].children)
    if "\n" not in item.raw_text:
        error(f"Card {args.ref} has a single line and cannot be split", args.json)

    board = run_command(commands.split_card, args.json, state, path)
    save(state, args.file)

    count = len(board.children[path[0]].children) - before + 1
    refs = [format_ref((path[0], path[1] + k)) for k in range(count)]
    output_result({"refs": refs}, f"Split card {args.ref} into {', '.join(refs)}", args.json)
    return 0


def item_archive(args) -> int:
    """Move a card into the board's archive."""
    state = load_state_or_die(args.file, args.json)
    path, _ = find_item(state.current(), args.ref, args.json)

    board = run_command(commands.archive_card, args.json, state, path)
    save(state, args.file)

    output_result(
        {"ref": args.ref, "archived": len(board.archive)},
        f"Archived card {args.ref}",
        args.json,
    )
    return 0


def item_delete(args) -> int:
    """Delete a card."""
    state = load_state_or_die(args.file, args.json)
    path, item = find_item(state.current(), args.ref, args.json)

    run_command(commands.delete_card, args.json, state, path)
    save(state, args.file)

    output_result({"ref": args.ref, "text": item.raw_text}, f"Deleted card {args.ref}", args.json)
    return 0


def item_link(args) -> int:
    """Print a link to a card, giving it a block id if it has none."""
    state = load_state_or_die(args.file, args.json)
    path, item = find_item(state.current(), args.ref, args.json)

    name = args.name or Path(args.file).stem
    link = run_command(commands.copy_link, args.json, state, path, name)
    if resolve(state.current(), path).raw_text != item.raw_text:
        save(state, args.file)

    output_result({"ref": args.ref, "link": link}, link, args.json)
    return 0
