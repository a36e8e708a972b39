"""
Best-effort call helpers for the socket front end.

Some calls must never take the server down: emitting to a client that has just
vanished, reading a malformed environment variable. These helpers run such a
call, log the first failure of each kind as a warning, and hand back a default.

They are not for engine code. World construction errors and movement failures
are handled by the engine itself (exceptions and ActionFailure values); wrapping
them here would hide real bugs.

Environment Opt-In (Debug Raising):
    Set DEBUG_RAISE_EXCEPTIONS to a truthy value ('1', 'true', 'yes', or 'on')
    to re-raise after the first (still logged) occurrence. Read at call time, so
    tests can toggle it with monkeypatch.setenv.

Usage Examples:
    safe_call(socketio.emit, MESSAGE_OUT, payload, to=sid)

    port = safe_call_with_default(int, 5000, os.getenv('PORT'))
"""

import logging
import os
from typing import Callable, Optional, Set, TypeVar

# "function:ExceptionType" keys already reported
_seen_exceptions: Set[str] = set()

logger = logging.getLogger(__name__)

T = TypeVar('T')


def _debug_raise_enabled() -> bool:
    return os.getenv('DEBUG_RAISE_EXCEPTIONS', '').strip().lower() in ('1', 'true', 'yes', 'on')


def _report(helper: str, fn: Callable, exc: Exception, outcome: str) -> None:
    """Warn about the first failure of each (function, exception type) pair."""
    label = getattr(fn, '__name__', repr(fn))
    kind = type(exc).__name__
    key = f"{label}:{kind}"
    if key in _seen_exceptions:
        return
    _seen_exceptions.add(key)
    logger.warning("%s: %s failed with %s: %s (%s)", helper, label, kind, exc, outcome)


def safe_call(fn: Callable[..., T], *args, **kwargs) -> Optional[T]:
    """Call fn(*args, **kwargs); on any exception log it (once per kind) and return None."""
    try:
        return fn(*args, **kwargs)
    except Exception as exc:
        _report("safe_call", fn, exc, "later failures of this kind are not logged")
        if _debug_raise_enabled():
            raise
    return None


def safe_call_with_default(fn: Callable[..., T], default: T, *args, **kwargs) -> T:
    """Like safe_call, but hand back `default` instead of None.

    Example:
        max_len = safe_call_with_default(int, 1000, os.getenv('MUD_MAX_MESSAGE_LEN'))
    """
    try:
        return fn(*args, **kwargs)
    except Exception as exc:
        _report("safe_call_with_default", fn, exc, f"returning default: {default}")
        if _debug_raise_enabled():
            raise
    return default


def reset_seen_exceptions() -> None:
    """Forget which failures were reported (tests start each case clean)."""
    _seen_exceptions.clear()
