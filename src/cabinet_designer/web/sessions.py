"""In-memory store of server-held editing sessions.

Every request handler that touches a session is a coroutine with no await
between reading the session and mutating it, so the event loop applies one
mutation at a time and no locking is needed.
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass

from cabinet_designer.application import DesignSession
from cabinet_designer.web.exceptions import SessionNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 100


@dataclass
class SessionEntry:
    """A stored session and the number of steps applied through the API."""

    session: DesignSession
    steps_applied: int = 0


class SessionStore:
    """Holds sessions by id, evicting the least recently used one when full."""

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self._entries: OrderedDict[str, SessionEntry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, session: DesignSession, steps_applied: int = 0) -> str:
        """Store a session and return its new id."""
        session_id = uuid.uuid4().hex
        self._entries[session_id] = SessionEntry(session, steps_applied)
        while len(self._entries) > self.max_sessions:
            evicted, _ = self._entries.popitem(last=False)
            logger.info(f"Evicted session {evicted}: store holds {self.max_sessions}")
        logger.debug(f"Opened session {session_id}")
        return session_id

    def get(self, session_id: str) -> SessionEntry:
        """Return a stored session.

        Raises:
            SessionNotFoundError: If no session has this id.
        """
        entry = self._entries.get(session_id)
        if entry is None:
            raise SessionNotFoundError(session_id)
        self._entries.move_to_end(session_id)
        return entry

    def remove(self, session_id: str) -> None:
        if self._entries.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
        logger.debug(f"Closed session {session_id}")
