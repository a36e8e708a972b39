from __future__ import annotations

"""
Flask-SocketIO server for the multi-user dungeon.

What this file does (in plain English):
- Starts a small Socket.IO server so any Socket.IO client can play.
- Keeps one in-memory World built by world_setup.create_basic_map().
- On connect, the client's `name` query argument picks its user. Unknown names
  get a fresh civilian in the starting room; a name already played by another
  live connection is refused.
- Each message the client sends is one line of input, run through
  action_router.process_input(). Every output line comes back as its own
  {'type': 'system'|'error', 'content': str} payload, followed by the new room
  view after a successful move.

Contract:
- Client -> server event: 'message_to_server' with { 'content': str }.
- Server -> client event: 'message' with { 'type', 'content' }.
- World mutations happen under atomic('world'); the sid -> user binding table
  is guarded by atomic('sessions').
- Users are never removed from the World. Disconnect only releases the name.

Environment:
- HOST, PORT: listen address (default 127.0.0.1:5000)
- SECRET_KEY: Flask secret (a development default is used with a warning)
- MUD_MAX_MESSAGE_LEN: longest accepted input line (default 1000)
- MUD_CORS_ALLOWED_ORIGINS: '*' or a comma separated list of origins
- MUD_LOG_LEVEL, MUD_LOG_FORMAT: see logging_setup.py
"""

import logging
import os
import secrets
import sys
from typing import Dict, List, Optional

from flask import Flask, request
from flask_socketio import ConnectionRefusedError, SocketIO, emit

from action_router import process_input
from concurrency_utils import atomic, atomic_many
from constants import (
    DEFAULT_HOST,
    DEFAULT_MAX_MESSAGE_LENGTH,
    DEFAULT_NAME_PREFIX,
    DEFAULT_PORT,
    ENV_CORS_ALLOWED_ORIGINS,
    ENV_HOST,
    ENV_MAX_MESSAGE_LEN,
    ENV_PORT,
    ENV_SECRET_KEY,
    MESSAGE_IN,
    MESSAGE_OUT,
    MSG_TYPE_ERROR,
    MSG_TYPE_SYSTEM,
    get_message_payload,
)
from logging_setup import setup_logging
from look_service import format_room
from safe_utils import safe_call, safe_call_with_default
from world import World
from world_setup import START_ROOM, create_basic_map

logger = logging.getLogger(__name__)


def _env_str(name: str, default: str) -> str:
    """Get environment variable as string with fallback to default."""
    v = os.getenv(name)
    return default if v is None else str(v)


def _env_int(name: str, default: int) -> int:
    """Get environment variable as int; malformed values fall back to default."""
    return safe_call_with_default(int, default, _env_str(name, str(default)))


def _parse_cors_origins(s: Optional[str]):
    """Return '*' (allow all) or a list of allowed origins from CSV env.

    - not set, empty or '*' -> '*'
    - otherwise split by comma and strip whitespace
    """
    if s is None:
        return '*'
    val = s.strip()
    if not val or val == '*':
        return '*'
    parts = [p.strip() for p in val.split(',') if p.strip()]
    return parts or '*'


app = Flask(__name__)
_secret = os.getenv(ENV_SECRET_KEY)
if not _secret:
    logger.warning("%s not set; using a development secret key", ENV_SECRET_KEY)
    _secret = 'dev-secret-key'
app.config['SECRET_KEY'] = _secret

socketio = SocketIO(
    app,
    cors_allowed_origins=_parse_cors_origins(os.getenv(ENV_CORS_ALLOWED_ORIGINS)),
    async_mode='threading',
)

# --- World state (in memory only) ---
world: World = create_basic_map()

# sid -> user name for every live connection
sessions: Dict[str, str] = {}


def get_sid() -> Optional[str]:
    """Return the Socket.IO session id (sid) for the current request."""
    return getattr(request, "sid", None)


def _generate_name() -> str:
    """Pick an unused `Adventurer-xxxx` name."""
    while True:
        name = f"{DEFAULT_NAME_PREFIX}-{secrets.token_hex(2)}"
        if name not in world.users:
            return name


def _sid_for_user(user_name: str) -> Optional[str]:
    for sid, name in sessions.items():
        if name == user_name:
            return sid
    return None


def _emit_lines(lines: List[str], msg_type: str) -> None:
    for line in lines:
        emit(MESSAGE_OUT, get_message_payload(msg_type, line))


def _emit_room_view(lines: List[str]) -> None:
    emit(MESSAGE_OUT, get_message_payload(MSG_TYPE_SYSTEM, "\n".join(lines)))


def broadcast_to_room(room_name: str, content: str, exclude_user: Optional[str] = None) -> None:
    """Send a system line to every connected user standing in the room."""
    with atomic_many(['world', 'sessions']):
        room = world.rooms.get(room_name)
        if room is None:
            return
        recipients = [_sid_for_user(name) for name in sorted(room.users) if name != exclude_user]
    payload = get_message_payload(MSG_TYPE_SYSTEM, content)
    for psid in recipients:
        if psid is None:
            continue
        # Best-effort broadcast; safe_call logs first occurrence of each error type
        safe_call(socketio.emit, MESSAGE_OUT, payload, to=psid)


@socketio.on('connect')
def handle_connect():
    """Bind the connection to a user, creating the user on first sight."""
    sid = get_sid()
    requested = (request.args.get('name') or '').strip()

    with atomic_many(['world', 'sessions']):
        user_name = requested or _generate_name()
        if user_name in sessions.values():
            logger.warning("refused connection %s: %s is already playing", sid, user_name)
            raise ConnectionRefusedError(f"{user_name} is already connected.")
        if user_name not in world.users:
            world.create_basic_user_in_room(user_name, START_ROOM)
            logger.info("created user %s in %s", user_name, START_ROOM)
        sessions[sid] = user_name
        room_name = world.get_user_location(user_name)
        room_view = format_room(world, user_name)

    logger.info("client %s connected as %s", sid, user_name)
    emit(MESSAGE_OUT, get_message_payload(MSG_TYPE_SYSTEM, f"Welcome, {user_name}."))
    _emit_room_view(room_view)
    broadcast_to_room(room_name, f"{user_name} arrives.", exclude_user=user_name)


@socketio.on('disconnect')
def handle_disconnect(*_args):
    """Release the name; the user stays where they are in the World."""
    sid = get_sid()
    with atomic('sessions'):
        user_name = sessions.pop(sid, None)
    if user_name is not None:
        logger.info("client %s (%s) disconnected", sid, user_name)


@socketio.on(MESSAGE_IN)
def handle_message(data):
    """Run one line of player input. Payload shape from client: { 'content': str }."""
    if not isinstance(data, dict) or not isinstance(data.get('content'), str):
        emit(MESSAGE_OUT, get_message_payload(
            MSG_TYPE_ERROR, 'Invalid payload; expected { "content": string }.'))
        return
    text = data['content']

    max_len = _env_int(ENV_MAX_MESSAGE_LEN, DEFAULT_MAX_MESSAGE_LENGTH)
    if len(text) > max_len:
        emit(MESSAGE_OUT, get_message_payload(MSG_TYPE_ERROR, f'Message too long (>{max_len} chars).'))
        return

    sid = get_sid()
    with atomic('sessions'):
        user_name = sessions.get(sid)
    if user_name is None:
        emit(MESSAGE_OUT, get_message_payload(MSG_TYPE_ERROR, 'You are not connected to a user.'))
        return

    logger.debug("%s: %r", user_name, text)
    room_view: List[str] = []
    with atomic('world'):
        origin = world.get_user_location(user_name)
        outcome = process_input(world, user_name, text)
        destination = world.get_user_location(user_name)
        if outcome.was_room_move():
            room_view = format_room(world, user_name)

    _emit_lines(outcome.messages, MSG_TYPE_SYSTEM if outcome.ok else MSG_TYPE_ERROR)
    if outcome.was_room_move():
        _emit_room_view(room_view)
        if destination != origin:
            broadcast_to_room(origin, f"{user_name} leaves.", exclude_user=user_name)
            broadcast_to_room(destination, f"{user_name} arrives.", exclude_user=user_name)


if __name__ == '__main__':
    setup_logging()
    host = _env_str(ENV_HOST, DEFAULT_HOST)
    port = _env_int(ENV_PORT, DEFAULT_PORT)

    print("\n=== MUD Server Starting ===")
    print(f"Listening on: {host}:{port}")
    print(f"Socket.IO URL: http://{host}:{port}/socket.io/")
    if host == "127.0.0.1":
        print("Note: Only this machine can connect. For LAN play, set HOST=0.0.0.0.")
    print("===========================\n")
    sys.stdout.flush()

    socketio.run(app, host=host, port=port, debug=False, allow_unsafe_werkzeug=True)
