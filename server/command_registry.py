from __future__ import annotations

"""Registry of global actions for the Faerie MUD engine.

A global action is a command that is about the world or the user, not about
walking somewhere: listing who is online, looking around, asking for help.
Input that matches a registered keyword never reaches the movement pipeline,
so a room with a path called 'look' can't be entered by typing 'look'.

Registering an action:

    @registry.command(name="list_users", description="List users in the world")
    def list_users(world, user_name):
        return success(["Users online:", ...])

Handlers receive the World and the acting user's name and return an
ActionSuccess or ActionFailure. They must not raise for ordinary bad input.

The set of keywords is deliberately small and fixed at import time; adding an
action means adding a handler here.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, TYPE_CHECKING

from action_contract import ActionResult, success
from direction import BASIC_ALIASES
from look_service import format_room

if TYPE_CHECKING:
    from world import World

logger = logging.getLogger(__name__)

GlobalHandler = Callable[["World", str], ActionResult]


@dataclass
class CommandMetadata:
    """Metadata for a registered global action."""
    name: str                                    # Keyword typed by the player (e.g., "list_users")
    description: str                             # Human-readable description
    handler: Optional[GlobalHandler] = None

    # Aliases (alternative keywords)
    aliases: List[str] = field(default_factory=list)

    def generate_help_text(self) -> str:
        text = f"{self.name} - {self.description}"
        if self.aliases:
            text += f" (aliases: {', '.join(self.aliases)})"
        return text


class CommandRegistry:
    """Keyword -> global action lookup."""

    def __init__(self):
        self._commands: Dict[str, CommandMetadata] = {}
        self._aliases: Dict[str, str] = {}  # alias -> primary_name

    def register_command(self, metadata: CommandMetadata) -> None:
        """Register a global action. Keywords and aliases must be unique and a handler is required."""
        if metadata.handler is None:
            raise ValueError(f"Global action '{metadata.name}' has no handler")
        for keyword in [metadata.name, *metadata.aliases]:
            if keyword in self._commands or keyword in self._aliases:
                raise ValueError(f"Global action '{keyword}' already registered")
        self._commands[metadata.name] = metadata
        for alias in metadata.aliases:
            self._aliases[alias] = metadata.name

    def command(self, name: str, description: str = "", aliases: Optional[List[str]] = None):
        """Decorator for registering global actions."""
        def decorator(handler_func):
            metadata = CommandMetadata(
                name=name,
                description=description,
                handler=handler_func,
                aliases=aliases or [],
            )
            self.register_command(metadata)
            return handler_func
        return decorator

    def is_global_action(self, keyword: str) -> bool:
        return self.get_command(keyword) is not None

    def try_handle(self, world: "World", user_name: str, keyword: str) -> Optional[ActionResult]:
        """Run the action registered for `keyword`; None if the keyword is unknown."""
        metadata = self.get_command(keyword)
        if metadata is None:
            return None
        logger.debug("%s runs global action %r", user_name, metadata.name)
        return metadata.handler(world, user_name)

    def get_all_commands(self) -> List[CommandMetadata]:
        """Get list of all registered actions."""
        return list(self._commands.values())

    def get_command(self, name: str) -> Optional[CommandMetadata]:
        """Get action metadata by keyword or alias."""
        resolved_name = self._aliases.get(name, name)
        return self._commands.get(resolved_name)


# Global registry instance
registry = CommandRegistry()


@registry.command(name="list_users", description="List every user in the world")
def list_users(world: "World", user_name: str) -> ActionResult:
    messages = ["Users online:"]
    for name in world.users:
        messages.append(f"* {name}")
    return success(messages)


@registry.command(name="look", description="Describe the room you are in", aliases=["l"])
def look(world: "World", user_name: str) -> ActionResult:
    return success(format_room(world, user_name))


@registry.command(name="help", description="Show the available commands")
def help_command(world: "World", user_name: str) -> ActionResult:
    lines = ["Commands:"]
    for cmd in sorted(registry.get_all_commands(), key=lambda c: c.name):
        lines.append(f"  {cmd.generate_help_text()}")
    lines.append("")
    lines.append("Movement: type the name of a path to follow it.")
    shorthands = ", ".join(f"{short}={full}" for short, full in BASIC_ALIASES.items())
    lines.append(f"Shorthands: {shorthands}")
    return success(lines)
