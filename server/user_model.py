from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

UserName = str
RoomName = str


class UserType(Enum):
    """The closed set of actor kinds. Each kind has its own default attributes."""
    CIVILIAN = "civilian"
    VIKING = "viking"
    ELF_LORD = "elf_lord"


@dataclass
class BasicAttributes:
    """Attributes every user has. Exit conditions may change these."""
    hp: int
    mp: int

    @staticmethod
    def default(user_type: UserType) -> "BasicAttributes":
        if user_type == UserType.VIKING:
            return BasicAttributes(hp=220, mp=9)
        if user_type == UserType.ELF_LORD:
            return BasicAttributes(hp=80, mp=28)
        return BasicAttributes(hp=20, mp=7)


@dataclass
class SpecialAttributes:
    """Role-specific attributes.

    `kind` records which role the values belong to; `values` holds the named
    numbers (e.g. {'brutish_swing': 2} for a Viking).
    """
    kind: UserType
    values: Dict[str, int] = field(default_factory=dict)

    @staticmethod
    def default(user_type: UserType) -> "SpecialAttributes":
        if user_type == UserType.VIKING:
            return SpecialAttributes(kind=user_type, values={"brutish_swing": 2})
        if user_type == UserType.ELF_LORD:
            return SpecialAttributes(kind=user_type, values={"arcane_infusion": 3})
        return SpecialAttributes(kind=user_type, values={"needless_chatter": 20})


@dataclass
class User:
    name: UserName
    room_name: RoomName
    user_type: UserType
    basic_attributes: BasicAttributes
    special_attributes: SpecialAttributes

    @staticmethod
    def create(name: UserName, starting_room_name: RoomName, user_type: UserType) -> "User":
        """Build a user with the default attributes of its role."""
        return User(
            name=name,
            room_name=starting_room_name,
            user_type=user_type,
            basic_attributes=BasicAttributes.default(user_type),
            special_attributes=SpecialAttributes.default(user_type),
        )

