"""Tests for world.py - map construction, user placement and integrity checks.

This module tests:
- create_room / create_room_from / add_path / add_path_special
- create_user_in_room and its role defaults
- every construction-time WorldBuildError message
- validate() on consistent and deliberately broken worlds
"""

import pytest

from direction import Compass, Custom, CustomOneWay
from exit_conditions import PathType
from user_model import UserType
from world import World, WorldBuildError


def _two_rooms() -> World:
    w = World()
    w.create_room("R1", "Room one.")
    w.create_room("R2", "Room two.")
    return w


# ============================================================================
# Rooms
# ============================================================================

def test_create_room_starts_empty():
    w = World()
    room = w.create_room("Cellar", "Damp and dark.")
    assert w.get_room("Cellar") is room
    assert room.paths == {}
    assert room.users == set()


def test_create_room_empty_name_is_fatal():
    w = World()
    with pytest.raises(WorldBuildError, match="Empty room names are not allowed!"):
        w.create_room("", "desc")
    assert w.rooms == {}


def test_create_room_empty_description_is_fatal():
    with pytest.raises(WorldBuildError, match="Empty room descriptions are not allowed!"):
        World().create_room("Cellar", "")


def test_create_room_duplicate_is_fatal_and_keeps_original():
    w = World()
    w.create_room("Cellar", "Damp and dark.")
    with pytest.raises(WorldBuildError, match="Room named Cellar already exists!"):
        w.create_room("Cellar", "Something else.")
    assert w.get_room("Cellar").description == "Damp and dark."


def test_world_build_error_is_a_value_error():
    with pytest.raises(ValueError):
        World().create_room("", "desc")


def test_get_room_unknown_is_fatal():
    with pytest.raises(WorldBuildError, match="Failed to find room named Nowhere!"):
        World().get_room("Nowhere")


def test_create_room_from_links_both_ways():
    w = World()
    w.create_room("Start", "The start.")
    w.create_room_from("North of Start", "A plain.", "Start", Compass.NORTH)
    assert w.get_room("Start").paths["north"].target_room_name == "North of Start"
    assert w.get_room("North of Start").paths["south"].target_room_name == "Start"


# ============================================================================
# Paths
# ============================================================================

@pytest.mark.parametrize("direction,forward,backward", [
    (Compass.NORTH, "north", "south"),
    (Compass.EAST, "east", "west"),
    (Compass.NORTHEAST, "northeast", "southwest"),
    (Compass.SOUTHEAST, "southeast", "northwest"),
    (Custom("climb up", "climb down"), "climb up", "climb down"),
])
def test_add_path_two_way_is_symmetric(direction, forward, backward):
    w = _two_rooms()
    w.add_path("R1", "R2", direction)
    assert w.get_room("R1").paths[forward].target_room_name == "R2"
    assert w.get_room("R2").paths[backward].target_room_name == "R1"
    assert len(w.get_room("R1").paths) == 1
    assert len(w.get_room("R2").paths) == 1


def test_add_path_one_way_has_no_reverse():
    w = _two_rooms()
    w.add_path("R1", "R2", CustomOneWay("trapdoor"))
    assert list(w.get_room("R1").paths) == ["trapdoor"]
    assert w.get_room("R2").paths == {}


def test_two_way_paths_are_independent_objects():
    w = _two_rooms()
    w.add_path("R1", "R2", Compass.NORTH)
    assert w.get_room("R1").paths["north"] is not w.get_room("R2").paths["south"]


def test_add_path_to_missing_target_is_fatal():
    w = _two_rooms()
    with pytest.raises(WorldBuildError, match="No room named Nowhere exists!"):
        w.add_path("R1", "Nowhere", Compass.NORTH)
    assert w.get_room("R1").paths == {}


def test_add_path_from_missing_source_is_fatal():
    w = _two_rooms()
    with pytest.raises(WorldBuildError, match="Failed to find room named Nowhere for mutation!"):
        w.add_path("Nowhere", "R1", Compass.NORTH)


def test_add_path_empty_name_is_fatal():
    w = _two_rooms()
    with pytest.raises(WorldBuildError, match="Empty path names are not allowed!"):
        w.add_path("R1", "R2", CustomOneWay(""))


def test_duplicate_path_is_fatal_and_keeps_original():
    w = World()
    for name in ("R1", "R2", "R3"):
        w.create_room(name, f"Room {name}.")
    w.add_path("R1", "R2", CustomOneWay("door"))
    original = w.get_room("R1").paths["door"]
    with pytest.raises(WorldBuildError, match="Path 'door' from R1 already exists!"):
        w.add_path("R1", "R3", CustomOneWay("door"))
    assert w.get_room("R1").paths["door"] is original
    assert original.target_room_name == "R2"


def test_two_way_link_blocked_on_the_way_back_adds_nothing():
    w = _two_rooms()
    w.add_path("R2", "R1", CustomOneWay("south"))
    with pytest.raises(WorldBuildError, match="Path 'south' from R2 already exists!"):
        w.add_path("R1", "R2", Compass.NORTH)
    assert w.get_room("R1").paths == {}
    assert list(w.get_room("R2").paths) == ["south"]


def test_two_way_link_with_empty_name_back_adds_nothing():
    w = _two_rooms()
    with pytest.raises(WorldBuildError, match="Empty path names are not allowed!"):
        w.add_path("R1", "R2", Custom("up", ""))
    assert w.get_room("R1").paths == {}


def test_self_loop_with_one_name_both_ways_is_rejected_cleanly():
    w = _two_rooms()
    with pytest.raises(WorldBuildError, match="Path 'spin' from R1 already exists!"):
        w.add_path("R1", "R1", Custom("spin", "spin"))
    assert w.get_room("R1").paths == {}


def test_self_loop_with_two_names_is_allowed():
    w = _two_rooms()
    w.add_path("R1", "R1", Compass.NORTH)
    assert w.get_room("R1").path_names() == ["north", "south"]
    assert w.validate() == []


def test_add_path_special_painful_is_guarded_one_way():
    w = _two_rooms()
    w.add_path_special("R1", "R2", "thicket", PathType.PAINFUL)
    path = w.get_room("R1").paths["thicket"]
    assert path.exit_cond is not None
    assert w.get_room("R2").paths == {}


def test_add_path_special_normal_has_no_guard():
    w = _two_rooms()
    w.add_path_special("R1", "R2", "gate", PathType.NORMAL)
    assert w.get_room("R1").paths["gate"].exit_cond is None


def test_add_path_special_accepts_custom_guard():
    w = _two_rooms()

    def guard(user):
        raise AssertionError("not called at construction")

    w.add_path_special("R1", "R2", "portal", guard)
    assert w.get_room("R1").paths["portal"].exit_cond is guard


def test_add_path_special_rejects_unknown_type():
    w = _two_rooms()
    with pytest.raises(TypeError):
        w.add_path_special("R1", "R2", "portal", "painful")


def test_room_path_names_are_sorted():
    w = World()
    for name in ("Hub", "A", "B", "C"):
        w.create_room(name, f"Room {name}.")
    w.add_path("Hub", "C", Compass.WEST)
    w.add_path("Hub", "A", Compass.EAST)
    w.add_path("Hub", "B", Compass.NORTH)
    assert w.get_room("Hub").path_names() == ["east", "north", "west"]


# ============================================================================
# Users
# ============================================================================

def test_create_user_registers_in_room():
    w = _two_rooms()
    user = w.create_user_in_room("bjorn", "R1", UserType.VIKING)
    assert w.get_user("bjorn") is user
    assert user.room_name == "R1"
    assert "bjorn" in w.get_room("R1").users
    assert w.get_user_location("bjorn") == "R1"


@pytest.mark.parametrize("user_type,hp,mp,special", [
    (UserType.CIVILIAN, 20, 7, {"needless_chatter": 20}),
    (UserType.VIKING, 220, 9, {"brutish_swing": 2}),
    (UserType.ELF_LORD, 80, 28, {"arcane_infusion": 3}),
])
def test_user_role_defaults(user_type, hp, mp, special):
    w = _two_rooms()
    user = w.create_user_in_room("u", "R1", user_type)
    assert user.basic_attributes.hp == hp
    assert user.basic_attributes.mp == mp
    assert user.special_attributes.kind == user_type
    assert user.special_attributes.values == special


def test_create_basic_user_is_civilian():
    w = _two_rooms()
    user = w.create_basic_user_in_room("glenn", "R2")
    assert user.user_type == UserType.CIVILIAN
    assert "glenn" in w.get_room("R2").users


def test_create_user_empty_name_is_fatal():
    w = _two_rooms()
    with pytest.raises(WorldBuildError, match="Empty user names are not allowed!"):
        w.create_basic_user_in_room("", "R1")


def test_create_user_duplicate_is_fatal():
    w = _two_rooms()
    w.create_basic_user_in_room("glenn", "R1")
    with pytest.raises(WorldBuildError, match="User named glenn already exists!"):
        w.create_basic_user_in_room("glenn", "R2")
    assert w.get_user_location("glenn") == "R1"
    assert "glenn" not in w.get_room("R2").users


def test_create_user_in_missing_room_is_fatal():
    w = _two_rooms()
    with pytest.raises(WorldBuildError, match="Failed to find room named Nowhere for mutation!"):
        w.create_basic_user_in_room("glenn", "Nowhere")
    assert w.users == {}


def test_get_user_unknown_is_fatal():
    with pytest.raises(WorldBuildError, match="Failed to find user named ghost!"):
        World().get_user("ghost")


def test_move_user_transfers_membership(world):
    world.move_user("alice", "Yard")
    assert world.get_user_location("alice") == "Yard"
    assert "alice" in world.get_room("Yard").users
    assert "alice" not in world.get_room("Hall").users
    assert world.validate() == []


def test_move_user_to_same_room_keeps_membership(world):
    world.move_user("alice", "Hall")
    assert world.get_room("Hall").users == {"alice"}


# ============================================================================
# World.process_input
# ============================================================================

def test_world_process_input_returns_action_result(world):
    result = world.process_input("alice", "n")
    assert result.ok
    assert result.was_room_move()
    assert world.get_user_location("alice") == "Yard"


# ============================================================================
# validate()
# ============================================================================

def test_validate_consistent_world(world):
    assert world.validate() == []


def test_validate_reports_dangling_path(world):
    del world.rooms["Yard"]
    errors = world.validate()
    assert any("points to non-existent room: Yard" in e for e in errors)


def test_validate_reports_membership_disagreement(world):
    world.get_user("alice").room_name = "Yard"
    errors = world.validate()
    assert any("lists user 'alice' who is in 'Yard'" in e for e in errors)
    assert any("not registered in room 'Yard'" in e for e in errors)


def test_validate_reports_unknown_occupant(world):
    world.get_room("Yard").users.add("ghost")
    errors = world.validate()
    assert errors == ["Room 'Yard' lists unknown user 'ghost'"]
