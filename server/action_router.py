from __future__ import annotations

"""Action router: the single entry point for a line of player input.

Every line is classified exactly once:
  - GLOBAL_ACTION: the stripped text is a registered global keyword
    (list_users, look, help...). The handler's result is returned and is never
    a room move.
  - MOVEMENT: anything else. The text goes through alias expansion and path
    lookup in movement_service.attempt_move().

Front ends (cli.py, server.py) call process_input() and render the messages;
when result.was_room_move() is True they also render the new room.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from action_contract import ActionResult
from command_registry import CommandRegistry, registry as default_registry
from movement_service import attempt_move

if TYPE_CHECKING:
    from world import World

logger = logging.getLogger(__name__)


class InputKind(Enum):
    GLOBAL_ACTION = "global_action"
    MOVEMENT = "movement"


@dataclass
class ProcessedInput:
    kind: InputKind
    result: ActionResult

    @property
    def ok(self) -> bool:
        return self.result.ok

    @property
    def messages(self) -> list[str]:
        return self.result.messages

    def was_room_move(self) -> bool:
        return self.result.was_room_move()


def classify(text: str, actions: CommandRegistry = default_registry) -> InputKind:
    if actions.is_global_action(text.strip()):
        return InputKind.GLOBAL_ACTION
    return InputKind.MOVEMENT


def process_input(world: "World", user_name: str, text: str,
                  actions: CommandRegistry = default_registry) -> ProcessedInput:
    """Classify and run one line of input for `user_name`.

    The user must exist; an unknown user is a bug in the caller and raises
    WorldBuildError from the World lookups.
    """
    world.get_user(user_name)
    keyword = text.strip()
    kind = classify(keyword, actions)
    if kind == InputKind.GLOBAL_ACTION:
        result = actions.try_handle(world, user_name, keyword)
    else:
        result = attempt_move(world, user_name, keyword)
    logger.debug("%s: %r -> %s ok=%s", user_name, keyword, kind.value, result.ok)
    return ProcessedInput(kind=kind, result=result)
