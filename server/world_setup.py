"""World setup: builds the starting map used by the CLI and the socket server.

The map is fixed and small:

    More North --west--> Over West --northwest--> The Odd Little Woods
        ^  |
    north  south
        |  v
    North of Start
        ^  |
    north  south
        |  v
    Starting Point

Every compass link is two-way. Two one-way extras show off exit conditions:
a bramble 'thicket' from the Woods back to the start that scratches whoever
pushes through it, and a 'slide' from More North down to the start that only
works a few times before it is jammed.
"""

from __future__ import annotations

import logging
from typing import Optional

from direction import Compass
from exit_conditions import PathType, limited_passage
from world import World

logger = logging.getLogger(__name__)

START_ROOM = "Starting Point"
NORTH_OF_START = "North of Start"
MORE_NORTH = "More North"
OVER_WEST = "Over West"
ODD_WOODS = "The Odd Little Woods"

SLIDE_USES = 3


def create_basic_map(starting_user: Optional[str] = None) -> World:
    """Build the demo world; optionally place `starting_user` at the start as a civilian."""
    world = World()

    world.create_room(START_ROOM, "This seems like a nice place to start an adventure.")
    world.create_room_from(
        NORTH_OF_START,
        "You're on a grassy plain. It's windy, but not uncomfortably so.",
        START_ROOM,
        Compass.NORTH,
    )
    world.create_room(MORE_NORTH, "A large swamp spreads out before you. It smells of sulfur.")
    world.create_room(
        OVER_WEST,
        "The secret glen doesn't seem all that secret, but the amber sunlight filtering "
        "through the trees really speaks to your soul. Maybe you should take a nap here.",
    )
    world.create_room(ODD_WOODS, "Ah, the real secret of this little township of the woods.")

    world.add_path(NORTH_OF_START, MORE_NORTH, Compass.NORTH)
    world.add_path(MORE_NORTH, OVER_WEST, Compass.WEST)
    world.add_path(OVER_WEST, ODD_WOODS, Compass.NORTHWEST)

    world.add_path_special(ODD_WOODS, START_ROOM, "thicket", PathType.PAINFUL)
    world.add_path_special(
        MORE_NORTH, START_ROOM, "slide",
        limited_passage(SLIDE_USES, "The slide is clogged with swamp muck."),
    )

    if starting_user:
        world.create_basic_user_in_room(starting_user, START_ROOM)

    logger.info("built demo map with %d rooms", len(world.rooms))
    return world
