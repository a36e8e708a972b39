"""Command line client: play the demo map in a terminal.

    python server/cli.py [--name NAME] [--map]

--map dumps every room, path and user before play starts.
Prints the starting room, then reads one command per line after a '>>> '
prompt. Global actions (list_users, look, help) and path names are accepted;
see command_registry.py. End of input (Ctrl-D) quits.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Iterable, List, Optional

from action_router import process_input
from constants import CLI_PROMPT
from look_service import format_debug_map, format_room
from logging_setup import setup_logging
from world import World
from world_setup import create_basic_map

logger = logging.getLogger(__name__)

DEFAULT_PLAYER_NAME = "glenn"


def _print_lines(lines: Iterable[str], output_fn: Callable[[str], None]) -> None:
    for line in lines:
        output_fn(line)


def run_repl(world: World, user_name: str,
             input_fn: Optional[Callable[[str], str]] = None,
             output_fn: Optional[Callable[[str], None]] = None) -> int:
    """Run the read-eval-print loop until end of input; return the number of commands read.

    input_fn and output_fn default to the builtins input() and print().
    """
    input_fn = input_fn or input
    output_fn = output_fn or print
    _print_lines(format_room(world, user_name), output_fn)
    count = 0
    while True:
        output_fn("")
        try:
            line = input_fn(CLI_PROMPT)
        except EOFError:
            break
        count += 1
        outcome = process_input(world, user_name, line)
        _print_lines(outcome.messages, output_fn)
        if outcome.was_room_move():
            _print_lines(format_room(world, user_name), output_fn)
    logger.debug("input closed after %d commands", count)
    return count


def _parse_name(argv: List[str]) -> Optional[str]:
    """Return the value of --name/-n if given."""
    for i, arg in enumerate(argv):
        if arg in ("--name", "-n") and i + 1 < len(argv):
            return argv[i + 1]
        if arg.startswith("--name="):
            return arg.split("=", 1)[1]
    return None


def main(argv: Optional[List[str]] = None) -> int:
    setup_logging(default_level='WARNING')
    args = sys.argv[1:] if argv is None else argv
    user_name = (_parse_name(args) or DEFAULT_PLAYER_NAME).strip() or DEFAULT_PLAYER_NAME
    world = create_basic_map(user_name)
    if "--map" in args:
        _print_lines(format_debug_map(world), print)
    run_repl(world, user_name)
    return 0


if __name__ == '__main__':
    sys.exit(main())
