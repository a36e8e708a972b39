"""Result values shared by movement, exit conditions and global actions.

Every action in the engine returns exactly one of:
    ActionSuccess(messages)  - the action happened; messages are shown to the user
    ActionFailure(messages)  - the action did not happen; messages explain why

Failures are values, not exceptions: a player typing a bad direction is a
normal event. Exceptions are reserved for broken world construction (see
world.WorldBuildError).

Example success:
    return success(["You passed through, but it hurt you."])

Example silent failure (nothing worth saying, e.g. blank input):
    return failure()

A successful movement is additionally flagged with set_was_room_move() so
front ends know to redraw the user's surroundings; global actions never set
the flag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union


@dataclass
class ActionSuccess:
    messages: List[str] = field(default_factory=list)
    room_move: bool = False

    def set_was_room_move(self) -> None:
        self.room_move = True

    def was_room_move(self) -> bool:
        return self.room_move

    @property
    def ok(self) -> bool:
        return True


@dataclass
class ActionFailure:
    messages: List[str] = field(default_factory=list)

    def was_room_move(self) -> bool:
        return False

    @property
    def ok(self) -> bool:
        return False


ActionResult = Union[ActionSuccess, ActionFailure]


def success(messages: List[str] | None = None) -> ActionSuccess:
    """Helper to return a successful action with optional messages."""
    return ActionSuccess(messages=list(messages or []))


def failure(messages: List[str] | str | None = None) -> ActionFailure:
    """Helper to return a failed action.

    Accepts a single message string for convenience; no argument yields the
    silent failure used for input that is not a command at all.
    """
    if isinstance(messages, str):
        messages = [messages] if messages else []
    return ActionFailure(messages=list(messages or []))
