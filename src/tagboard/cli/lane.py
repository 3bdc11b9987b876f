"""Handlers for 'tagboard lane' commands."""

from tagboard import commands
from tagboard.cli._common import (
    build_lane_summaries,
    find_lane,
    format_lane_line,
    load_state_or_die,
    output_json,
    output_result,
    run_command,
    save,
)


def lane_list(args) -> int:
    """List all lanes."""
    state = load_state_or_die(args.file, args.json)
    lanes = build_lane_summaries(state.current())

    if args.json:
        output_json(lanes)
    else:
        for lane in lanes:
            print(format_lane_line(lane))

    return 0


def lane_add(args) -> int:
    """Create a new lane."""
    state = load_state_or_die(args.file, args.json)
    count = len(state.current().children)
    index = count if args.position is None else min(max(args.position - 1, 0), count)

    board = run_command(commands.add_lane, args.json, state, args.title, index)
    if args.complete:
        board = commands.set_lane_complete(state, index, True)
    save(state, args.file)

    lane = board.children[index]
    output_result(
        {"id": index + 1, "title": lane.title},
        f"Created lane {index + 1}: {lane.title}",
        args.json,
    )
    return 0


def lane_rename(args) -> int:
    """Rename a lane."""
    state = load_state_or_die(args.file, args.json)
    index = find_lane(state.current(), args.id, args.json)
    old_title = state.current().children[index].title

    commands.rename_lane(state, index, args.title)
    save(state, args.file)

    output_result(
        {"id": args.id, "title": args.title},
        f"Renamed lane {args.id}: {old_title} → {args.title}",
        args.json,
    )
    return 0


def lane_complete(args) -> int:
    """Set or clear a lane's mark-items-complete flag."""
    state = load_state_or_die(args.file, args.json)
    index = find_lane(state.current(), args.id, args.json)

    board = commands.set_lane_complete(state, index, not args.off)
    save(state, args.file)

    lane = board.children[index]
    state_text = "marks cards complete" if lane.should_mark_items_complete else "leaves cards as they are"
    output_result(
        {"id": args.id, "complete": lane.should_mark_items_complete},
        f"Lane {args.id} ({lane.title}) {state_text}",
        args.json,
    )
    return 0


def lane_move(args) -> int:
    """Move a lane to a new position."""
    state = load_state_or_die(args.file, args.json)
    index = find_lane(state.current(), args.id, args.json)
    new_index = find_lane(state.current(), args.position, args.json)

    board = run_command(commands.move_lane, args.json, state, index, new_index)
    save(state, args.file)

    title = board.children[new_index].title
    output_result(
        {"id": args.position, "title": title},
        f"Moved lane {title} to position {args.position}",
        args.json,
    )
    return 0


def lane_duplicate(args) -> int:
    """Duplicate a lane and its cards."""
    state = load_state_or_die(args.file, args.json)
    index = find_lane(state.current(), args.id, args.json)

    board = commands.duplicate_lane(state, index)
    save(state, args.file)

    lane = board.children[index + 1]
    output_result(
        {"id": index + 2, "title": lane.title, "cards": len(lane.children)},
        f"Duplicated lane {args.id} as lane {index + 2}",
        args.json,
    )
    return 0


def lane_delete(args) -> int:
    """Delete a lane and all of its cards."""
    state = load_state_or_die(args.file, args.json)
    index = find_lane(state.current(), args.id, args.json)
    title = state.current().children[index].title

    commands.delete_lane(state, index)
    save(state, args.file)

    output_result({"id": args.id, "title": title}, f"Deleted lane {args.id}: {title}", args.json)
    return 0
