from __future__ import annotations

"""
look_service.py: room presentation helpers.

Small, pure functions that turn World data into lines of text. No sockets, no
printing, no side-effects: the CLI prints the lines, the socket server joins
them into a payload, and tests just compare lists.

How to use it:
- format_room(world, user_name) -> the view a user gets after moving or typing
  'look': room name, indented description, then the available paths.
- format_debug_map(world) -> every room with its paths and users, followed by
  every user. Handy when building a new map.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from world import World


def format_room(w: "World", user_name: str) -> List[str]:
    """Return the room view for the given user.

    Contract:
    - Inputs: world (w), user_name (must exist)
    - Output: list of lines, e.g.
        Starting Point
          This seems like a nice place to start an adventure.

        paths:
        * north
    Paths are listed in sorted order so the output is stable.
    """
    room_name = w.get_user_location(user_name)
    room = w.get_room(room_name)
    lines = [room.name, f"  {room.description}", "", "paths:"]
    for path_name in room.path_names():
        lines.append(f"* {path_name}")
    return lines


def format_debug_map(w: "World") -> List[str]:
    """Return a full dump of rooms, their paths and occupants, then all users with their attributes."""
    lines: List[str] = ["Rooms:"]
    for room_name in sorted(w.rooms):
        room = w.rooms[room_name]
        lines.append(f"  {room.name}: ")
        lines.append("    paths:")
        for path_name in room.path_names():
            path = room.paths[path_name]
            marker = " (guarded)" if path.exit_cond is not None else ""
            lines.append(f"      * {path.path_name} -> {path.target_room_name}{marker}")
        lines.append("    users:")
        for user_name in sorted(room.users):
            lines.append(f"       @ {user_name}")
        lines.append("")
    lines.append("")
    lines.append("Users:")
    for user_name in sorted(w.users):
        user = w.users[user_name]
        attrs = user.basic_attributes
        special = "".join(f", {key} {value}" for key, value in sorted(user.special_attributes.values.items()))
        lines.append(f" {user.name} ({user.user_type.value}, hp {attrs.hp}, mp {attrs.mp}{special})")
    return lines
