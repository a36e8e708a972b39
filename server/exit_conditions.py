"""Exit conditions: optional guards attached to a single path.

An exit condition is any callable taking the traversing User and returning an
ActionSuccess (let them through, show the messages) or an ActionFailure (stop
them, show the reason). It may change the user's attributes and may remember
things between calls; a closure is the usual way to keep per-path state.

Changes made by a guard stay in place even when it then refuses passage.
Nothing is rolled back: a guard that charges 1 hp and then says "the gate is
shut" has still charged the hp.

Guards are called at most once per move attempt and must not call back into
the World.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from enum import Enum
from typing import Callable, Optional, Union

from action_contract import ActionResult, failure, success
from user_model import BasicAttributes, User

logger = logging.getLogger(__name__)

ExitCondition = Callable[[User], ActionResult]

PAINFUL_MESSAGE = "You passed through, but it hurt you."


class PathType(Enum):
    """Ready-made kinds of path for World.add_path_special().

    Pass an ExitCondition callable instead of a PathType for a custom guard.
    """
    NORMAL = "normal"
    PAINFUL = "painful"


PathSpec = Union[PathType, ExitCondition, None]


def painful_exit(damage: int = 1) -> ExitCondition:
    """Always allow passage but take `damage` hit points."""
    def _guard(user: User) -> ActionResult:
        user.basic_attributes.hp -= damage
        logger.debug("painful exit: %s loses %d hp (now %d)", user.name, damage, user.basic_attributes.hp)
        return success([PAINFUL_MESSAGE])
    return _guard


def limited_passage(max_passes: int, refusal: str = "The way is closed now.") -> ExitCondition:
    """Allow the first `max_passes` traversals of this path, then refuse.

    The counter lives in the closure, so two paths built from separate calls
    keep separate counts.
    """
    state = {"passes": 0}

    def _guard(user: User) -> ActionResult:
        if state["passes"] >= max_passes:
            return failure(refusal)
        state["passes"] += 1
        return success()
    return _guard


def requires_attribute(attribute: str, minimum: int, refusal: str) -> ExitCondition:
    """Refuse passage unless the user's basic attribute (hp or mp) is at least `minimum`.

    Raises ValueError for a name BasicAttributes does not have.
    """
    known = [f.name for f in fields(BasicAttributes)]
    if attribute not in known:
        raise ValueError(f"Unknown attribute '{attribute}' (expected one of: {', '.join(known)})")

    def _guard(user: User) -> ActionResult:
        value = getattr(user.basic_attributes, attribute)
        if value < minimum:
            return failure(refusal)
        return success()
    return _guard


def resolve_exit_condition(path_spec: PathSpec) -> Optional[ExitCondition]:
    """Turn a PathType (or a custom guard callable) into the guard stored on a Path."""
    if path_spec is None or path_spec == PathType.NORMAL:
        return None
    if path_spec == PathType.PAINFUL:
        return painful_exit()
    if callable(path_spec):
        return path_spec
    raise TypeError(f"Unsupported path type: {path_spec!r}")
