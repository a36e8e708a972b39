"""Directions used when wiring rooms together.

A Direction is only a construction-time convenience: it expands to the path
name stored on a room, and (for two-way directions) to the reverse direction
used for the path coming back. Traversal never looks at Direction values, it
only matches path names, with the short movement aliases expanded by
match_basic_aliases().

Values:
- Compass.NORTH ... Compass.NORTHWEST: reverse to their opposite point.
- CustomOneWay(name): a single path called `name`, no way back.
- Custom(forward, backward): `forward` from the source, `backward` from the target.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

PathName = str


class Compass(Enum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"
    NORTHEAST = "northeast"
    SOUTHEAST = "southeast"
    SOUTHWEST = "southwest"
    NORTHWEST = "northwest"


_OPPOSITES: Dict[Compass, Compass] = {
    Compass.NORTH: Compass.SOUTH,
    Compass.SOUTH: Compass.NORTH,
    Compass.EAST: Compass.WEST,
    Compass.WEST: Compass.EAST,
    Compass.NORTHEAST: Compass.SOUTHWEST,
    Compass.SOUTHWEST: Compass.NORTHEAST,
    Compass.SOUTHEAST: Compass.NORTHWEST,
    Compass.NORTHWEST: Compass.SOUTHEAST,
}


@dataclass(frozen=True)
class CustomOneWay:
    """A named one-way passage (e.g. a slide or a trapdoor)."""
    name: PathName


@dataclass(frozen=True)
class Custom:
    """A named two-way passage, e.g. Custom("climb up", "climb down")."""
    forward: PathName
    backward: PathName


Direction = Union[Compass, CustomOneWay, Custom]

# Movement shorthands typed by players. Anything else is looked up verbatim.
BASIC_ALIASES: Dict[str, PathName] = {
    "n": "north",
    "s": "south",
    "w": "west",
    "e": "east",
    "ne": "northeast",
    "se": "southeast",
    "nw": "northwest",
    "sw": "southwest",
}


def get_path_name(direction: Direction) -> PathName:
    """Return the path name a direction creates on its source room."""
    if isinstance(direction, Compass):
        return direction.value
    if isinstance(direction, CustomOneWay):
        return direction.name
    if isinstance(direction, Custom):
        return direction.forward
    raise TypeError(f"Not a direction: {direction!r}")


def get_reverse(direction: Direction) -> Optional[Direction]:
    """Return the direction of the path leading back, or None for one-way paths."""
    if isinstance(direction, Compass):
        return _OPPOSITES[direction]
    if isinstance(direction, CustomOneWay):
        return None
    if isinstance(direction, Custom):
        return Custom(direction.backward, direction.forward)
    raise TypeError(f"Not a direction: {direction!r}")


def match_basic_aliases(text: str) -> PathName:
    """Expand a movement shorthand ('n' -> 'north'); other input passes through.

    Canonical names are returned unchanged, so the mapping is idempotent.
    """
    return BASIC_ALIASES.get(text, text)
