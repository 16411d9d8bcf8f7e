"""Process-local registry of one ViewController per browser session.

The registry is bounded: sessions idle longer than the configured timeout
are swept on each lookup, and the least recently used one is dropped once
the size cap is reached.
"""

import logging
import time
import uuid
from collections import OrderedDict

from mediguide.config import settings
from mediguide.views import ViewController

log = logging.getLogger(__name__)

COOKIE_NAME = "mediguide_session"

# session_id -> (last access, controller), least recently used first
_sessions: OrderedDict[str, tuple[float, ViewController]] = OrderedDict()


def _sweep(now: float) -> None:
    cutoff = now - settings.sessions.idle_timeout_s
    while _sessions:
        sid, (last_seen, _) = next(iter(_sessions.items()))
        if last_seen > cutoff:
            break
        del _sessions[sid]
        log.info("Expired idle session %s", sid[:8])


def get_or_create(session_id: str | None) -> tuple[str, ViewController]:
    """Return (session_id, controller), creating a fresh session if unknown."""
    now = time.monotonic()
    _sweep(now)

    if session_id and session_id in _sessions:
        _, controller = _sessions[session_id]
        _sessions[session_id] = (now, controller)
        _sessions.move_to_end(session_id)
        return session_id, controller

    while len(_sessions) >= settings.sessions.max_sessions:
        evicted, _ = _sessions.popitem(last=False)
        log.info("Evicted least recently used session %s", evicted[:8])

    new_id = uuid.uuid4().hex
    controller = ViewController()
    _sessions[new_id] = (now, controller)
    log.info("New session %s (%d active)", new_id[:8], len(_sessions))
    return new_id, controller


def clear() -> None:
    _sessions.clear()


def count() -> int:
    return len(_sessions)
