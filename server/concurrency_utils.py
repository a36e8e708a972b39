"""
Named locks for the socket front end.

The engine itself is single-threaded: one command runs to completion before
the next starts. The Flask-SocketIO server, however, handles each client on
its own thread, so two players can send commands at the same moment. Every
World mutation done on behalf of a client happens inside `atomic('world')`,
which keeps a user's room_name and its room's users set from ever disagreeing.

Usage:
    from concurrency_utils import atomic, atomic_many

    with atomic('world'):
        outcome = process_input(world, user_name, text)

    with atomic_many(['world', 'sessions']):
        ... create a user and bind it to a session ...

atomic_many() takes its locks in sorted name order, so two callers asking for
the same set can never deadlock each other.
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from threading import RLock
from typing import Dict, Iterable, Iterator

_registry: Dict[str, RLock] = {}
_registry_guard = RLock()


def get_lock(name: str) -> RLock:
    """The process-wide re-entrant lock called `name` (created on first use)."""
    with _registry_guard:
        return _registry.setdefault(name, RLock())


@contextmanager
def atomic(name: str) -> Iterator[None]:
    with get_lock(name):
        yield


@contextmanager
def atomic_many(names: Iterable[str]) -> Iterator[None]:
    with ExitStack() as stack:
        for name in sorted(set(names)):
            stack.enter_context(get_lock(name))
        yield
