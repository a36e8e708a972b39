"""World model for the Faerie MUD engine (small and in-memory).

Concepts:
- Room: a named place with a description, the paths leading out of it, and the
  names of the users currently standing in it.
- Path: a one-way, named connection from the room that owns it to a target
  room, optionally guarded by an exit condition (see exit_conditions.py).
- User: an actor with a role and a few attributes (see user_model.py).
- World: owns every room and user, builds the map, and moves users around.

Rooms, paths and users refer to each other by name only. The World holds the
two tables (rooms by name, users by name) and is the only thing that mutates
them.

Invariant kept by every World method: a user's `room_name` names an existing
room, and that room (and no other) lists the user in `users`.

Misusing the construction API (empty names, duplicates, paths to rooms that
don't exist) raises WorldBuildError. These are bugs in the bootstrap code, not
situations a player can cause, so nothing in the engine catches them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from action_contract import ActionResult
from direction import Direction, PathName, get_path_name, get_reverse
from exit_conditions import ExitCondition, PathSpec, resolve_exit_condition
from user_model import RoomName, User, UserName, UserType

logger = logging.getLogger(__name__)


class WorldBuildError(ValueError):
    """Raised when the world is constructed with invalid or inconsistent data."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise WorldBuildError(message)


@dataclass
class Path:
    target_room_name: RoomName
    path_name: PathName
    exit_cond: Optional[ExitCondition] = None

    def __post_init__(self) -> None:
        _require(bool(self.path_name), "Empty path names are not allowed!")


@dataclass
class Room:
    name: RoomName
    description: str
    paths: Dict[PathName, Path] = field(default_factory=dict)
    users: Set[UserName] = field(default_factory=set)

    def __post_init__(self) -> None:
        _require(bool(self.name), "Empty room names are not allowed!")
        _require(bool(self.description), "Empty room descriptions are not allowed!")

    def check_duplicate_path(self, path_name: PathName) -> None:
        _require(path_name not in self.paths, f"Path '{path_name}' from {self.name} already exists!")

    def add_path(self, target_room_name: RoomName, path_name: PathName,
                 exit_cond: Optional[ExitCondition] = None) -> Path:
        """Insert a new outgoing path. Existing paths are never replaced."""
        path = Path(target_room_name=target_room_name, path_name=path_name, exit_cond=exit_cond)
        self.check_duplicate_path(path_name)
        self.paths[path_name] = path
        return path

    def path_names(self) -> List[PathName]:
        return sorted(self.paths.keys())


class World:
    """The GameState: exclusive owner of all rooms and users."""

    def __init__(self) -> None:
        self.rooms: Dict[RoomName, Room] = {}
        self.users: Dict[UserName, User] = {}

    # --- Lookups ---
    def get_room(self, room_name: RoomName) -> Room:
        room = self.rooms.get(room_name)
        _require(room is not None, f"Failed to find room named {room_name}!")
        return room  # type: ignore[return-value]

    def _get_room_for_mutation(self, room_name: RoomName) -> Room:
        room = self.rooms.get(room_name)
        _require(room is not None, f"Failed to find room named {room_name} for mutation!")
        return room  # type: ignore[return-value]

    def check_room_exists(self, room_name: RoomName) -> None:
        _require(room_name in self.rooms, f"No room named {room_name} exists!")

    def get_user(self, user_name: UserName) -> User:
        user = self.users.get(user_name)
        _require(user is not None, f"Failed to find user named {user_name}!")
        return user  # type: ignore[return-value]

    def get_user_location(self, user_name: UserName) -> RoomName:
        user = self.get_user(user_name)
        self.check_room_exists(user.room_name)
        return user.room_name

    # --- Graph construction ---
    def create_room(self, name: RoomName, description: str) -> Room:
        """Create an empty room. Room names are unique and never reused."""
        room = Room(name=name, description=description)
        _require(name not in self.rooms, f"Room named {name} already exists!")
        self.rooms[name] = room
        logger.debug("created room %r", name)
        return room

    def create_room_from(self, name: RoomName, description: str,
                         other_room_name: RoomName, direction: Direction) -> Room:
        """Create a room and connect it from an existing room in `direction`.

        Example: create_room_from("North of Start", "...", "Start", Compass.NORTH)
        leaves "Start" by 'north' and comes back by 'south'.
        """
        room = self.create_room(name, description)
        self.add_path(other_room_name, name, direction)
        return room

    def add_path(self, source_room_name: RoomName, target_room_name: RoomName,
                 direction: Direction) -> None:
        """Connect two rooms; two-way directions also add the path back.

        The path back is a separate Path object, so a guard put on one side is
        not mirrored onto the other. Both inserts are checked before either is
        made: a failure leaves neither room changed.
        """
        forward_name = get_path_name(direction)
        reverse = get_reverse(direction)
        if reverse is not None:
            reverse_name = get_path_name(reverse)
            self._check_path_insert(source_room_name, target_room_name, forward_name)
            self._check_path_insert(target_room_name, source_room_name, reverse_name)
            _require(source_room_name != target_room_name or forward_name != reverse_name,
                     f"Path '{forward_name}' from {source_room_name} already exists!")
        self._add_path_impl(source_room_name, target_room_name, forward_name)
        if reverse is not None:
            self._add_path_impl(target_room_name, source_room_name, reverse_name)

    def add_path_special(self, source_room_name: RoomName, target_room_name: RoomName,
                         path_name: PathName, path_type: PathSpec) -> None:
        """Add a single one-way path carrying an exit condition.

        `path_type` is a PathType (NORMAL, PAINFUL) or any ExitCondition callable.
        """
        self._add_path_impl(source_room_name, target_room_name, path_name,
                            resolve_exit_condition(path_type))

    def _check_path_insert(self, source_room_name: RoomName, target_room_name: RoomName,
                           path_name: PathName) -> None:
        """Raise exactly what _add_path_impl would, without changing anything."""
        self.check_room_exists(target_room_name)
        source_room = self._get_room_for_mutation(source_room_name)
        _require(bool(path_name), "Empty path names are not allowed!")
        source_room.check_duplicate_path(path_name)

    def _add_path_impl(self, source_room_name: RoomName, target_room_name: RoomName,
                       path_name: PathName, exit_cond: Optional[ExitCondition] = None) -> None:
        self.check_room_exists(target_room_name)
        source_room = self._get_room_for_mutation(source_room_name)
        source_room.add_path(target_room_name, path_name, exit_cond)
        logger.debug("added path %r: %r -> %r%s", path_name, source_room_name, target_room_name,
                     " (guarded)" if exit_cond else "")

    # --- Users ---
    def create_user_in_room(self, user_name: UserName, room_name: RoomName,
                            user_type: UserType) -> User:
        """Create a user with its role's default attributes and place it in a room."""
        _require(bool(user_name), "Empty user names are not allowed!")
        _require(user_name not in self.users, f"User named {user_name} already exists!")
        room = self._get_room_for_mutation(room_name)
        user = User.create(user_name, room_name, user_type)
        self.users[user_name] = user
        room.users.add(user_name)
        logger.debug("created %s user %r in %r", user_type.value, user_name, room_name)
        return user

    def create_basic_user_in_room(self, user_name: UserName, room_name: RoomName) -> User:
        return self.create_user_in_room(user_name, room_name, UserType.CIVILIAN)

    def move_user(self, user_name: UserName, target_room_name: RoomName) -> None:
        """Transfer a user between rooms.

        The user joins the target room before leaving the source room so it is
        never absent from every room.
        """
        user = self.get_user(user_name)
        source_room = self._get_room_for_mutation(user.room_name)
        target_room = self._get_room_for_mutation(target_room_name)
        target_room.users.add(user_name)
        user.room_name = target_room_name
        if source_room is not target_room:
            source_room.users.discard(user_name)

    # --- Commands ---
    def process_input(self, user_name: UserName, text: str) -> ActionResult:
        """Run one line of player input and return its result.

        See action_router.process_input for the classification details.
        """
        from action_router import process_input  # local import to avoid an import cycle
        return process_input(self, user_name, text).result

    # --- Integrity ---
    def validate(self) -> List[str]:
        """Return a list of invariant violations. Empty means the world is consistent.

        Checks:
        - every path targets an existing room and is stored under its own name
        - every user stands in an existing room that lists it
        - no room lists a user that is elsewhere (or unknown)
        """
        errors: List[str] = []

        for room_name, room in self.rooms.items():
            if room.name != room_name:
                errors.append(f"Room stored as '{room_name}' is named '{room.name}'")
            for path_name, path in room.paths.items():
                if path.path_name != path_name:
                    errors.append(f"Room '{room_name}' path key '{path_name}' holds path named '{path.path_name}'")
                if path.target_room_name not in self.rooms:
                    errors.append(f"Room '{room_name}' path '{path_name}' points to non-existent room: {path.target_room_name}")
            for user_name in room.users:
                user = self.users.get(user_name)
                if user is None:
                    errors.append(f"Room '{room_name}' lists unknown user '{user_name}'")
                elif user.room_name != room_name:
                    errors.append(f"Room '{room_name}' lists user '{user_name}' who is in '{user.room_name}'")

        for user_name, user in self.users.items():
            if user.name != user_name:
                errors.append(f"User stored as '{user_name}' is named '{user.name}'")
            room = self.rooms.get(user.room_name)
            if room is None:
                errors.append(f"User '{user_name}' in non-existent room: {user.room_name}")
            elif user_name not in room.users:
                errors.append(f"User '{user_name}' not registered in room '{user.room_name}' users set")

        return errors
