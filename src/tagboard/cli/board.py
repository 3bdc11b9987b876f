"""Handlers for 'tagboard board' commands."""

import sys
from datetime import date

from rich.console import Console

from tagboard.cli._common import (
    build_lane_summaries,
    format_lane_line,
    item_to_dict,
    load_state_or_die,
    output_json,
    output_result,
    run_command,
    save,
)
from tagboard.indicators import build_item_text, build_lane_header
from tagboard.model.writer import board_to_text


def board_summary(args) -> int:
    """Show board summary: lanes and card counts."""
    state = load_state_or_die(args.file, args.json)
    board = state.current()
    lanes = build_lane_summaries(board)

    if args.json:
        output_json({"file": args.file, "lanes": lanes, "archived": len(board.archive)})
    else:
        print(args.file)
        for lane in lanes:
            print(format_lane_line(lane, indent="  "))
        if board.archive:
            print(f"  {len(board.archive)} archived")

    return 0


def board_show(args) -> int:
    """Render every lane with its cards and their fields."""
    state = load_state_or_die(args.file, args.json)
    board = state.current()

    if args.json:
        output_json(
            [
                {
                    "id": i,
                    "title": lane.title,
                    "cards": [item_to_dict((i - 1, j), item) for j, item in enumerate(lane.children)],
                }
                for i, lane in enumerate(board.children, 1)
            ]
        )
        return 0

    console = Console(highlight=False)
    today = date.today()
    for i, lane in enumerate(board.children, 1):
        console.print(f"{i} ", end="")
        console.print(build_lane_header(lane))
        for j, item in enumerate(lane.children, 1):
            console.print(f"  {i}.{j} ", end="")
            console.print(build_item_text(item, state.settings, today))
    return 0


def board_get(args) -> int:
    """Dump the board document."""
    state = load_state_or_die(args.file, args.json)
    text = board_to_text(state.current())

    if args.json:
        output_json({"file": args.file, "settings": state.settings.to_dict(), "markdown": text})
    else:
        sys.stdout.write(text)

    return 0


def _parse_value(value: str):
    """Booleans are written as true/false; everything else stays a string."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


def board_config(args) -> int:
    """Get or set a board setting."""
    state = load_state_or_die(args.file, args.json)
    settings = state.settings

    if args.value is None and not args.unset:
        value = settings.get(args.key)
        output_result({"key": args.key, "value": value}, f"{args.key}: {value}", args.json)
        return 0

    # Trigger changes that would not compile are never written out
    run_command(settings.set, args.json, args.key, None if args.unset else _parse_value(args.value))
    save(state, args.file)

    value = settings.get(args.key)
    output_result({"key": args.key, "value": value}, f"Set {args.key}: {value}", args.json)
    return 0
