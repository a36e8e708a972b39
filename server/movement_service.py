"""Movement operations for the Faerie MUD engine.

Pure helper for moving a user along a named path out of their current room.
Returns an ActionSuccess/ActionFailure; the caller decides how to display it.
"""

from __future__ import annotations

import logging
from typing import List, TYPE_CHECKING

from action_contract import ActionFailure, ActionResult, failure, success
from direction import match_basic_aliases

if TYPE_CHECKING:  # import only for typing to avoid runtime cycles
    from world import World

logger = logging.getLogger(__name__)


def no_direction_message(path_name: str, room_name: str) -> str:
    return f"What? There's no direction {path_name} from {room_name}."


def attempt_move(world: "World", user_name: str, text: str) -> ActionResult:
    """Move a user along the path named by `text`.

    Contract:
    - Inputs: world (World), user_name (str, must exist), text (raw player input)
    - Output: ActionSuccess flagged as a room move, or ActionFailure
    - Blank input (after alias expansion) fails silently with no messages
    - Unknown path: failure explaining there is no such direction
    - Guarded path: the exit condition runs once; its refusal is returned unchanged,
      its messages on success come first in the result
    - On failure nothing about the user's location or any room's users changes
    """
    path_name = match_basic_aliases(text.strip())
    if not path_name:
        return failure()

    room_name = world.get_user_location(user_name)
    room = world.get_room(room_name)

    path = room.paths.get(path_name)
    if path is None:
        logger.debug("%s tried unknown path %r in %r", user_name, path_name, room_name)
        return failure(no_direction_message(path_name, room_name))

    messages: List[str] = []
    if path.exit_cond is not None:
        user = world.get_user(user_name)
        outcome = path.exit_cond(user)
        if isinstance(outcome, ActionFailure):
            logger.debug("%s refused on path %r from %r", user_name, path_name, room_name)
            return outcome
        messages.extend(outcome.messages)

    world.move_user(user_name, path.target_room_name)
    logger.info("%s moved %s: %r -> %r", user_name, path_name, room_name, path.target_room_name)

    result = success(messages)
    result.set_was_room_move()
    return result
