from __future__ import annotations
"""Pytest shared fixtures.

Every test starts from a clean slate: the server module gets a freshly built
demo map and an empty session table, and the log-once memory of safe_utils is
cleared so warning assertions don't depend on test order.
"""
import os

import pytest

from direction import Compass
from world import World


@pytest.fixture(autouse=True)
def fresh_server_state():
    os.environ.pop('DEBUG_RAISE_EXCEPTIONS', None)
    from safe_utils import reset_seen_exceptions
    reset_seen_exceptions()
    import server
    from world_setup import create_basic_map
    server.world = create_basic_map()
    server.sessions.clear()
    yield
    server.sessions.clear()


@pytest.fixture
def world() -> World:
    """Two rooms joined north/south with one civilian, 'alice', in 'Hall'."""
    w = World()
    w.create_room("Hall", "A long stone hall.")
    w.create_room("Yard", "A muddy yard.")
    w.add_path("Hall", "Yard", Compass.NORTH)
    w.create_basic_user_in_room("alice", "Hall")
    return w


@pytest.fixture
def demo_world() -> World:
    """The starting map with 'glenn' at the start."""
    from world_setup import create_basic_map
    return create_basic_map("glenn")
