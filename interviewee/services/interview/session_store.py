"""
Session Store Module

In-memory registry of interview sessions. Sessions live for the lifetime of the
process only and are never written anywhere. Idle sessions expire after a time to
live, and once the store is full the least recently used session is dropped.

Dependencies:
- loguru: For logging evictions.
- interviewee.errors.exceptions: For SessionNotFound.
"""

import time
from collections import OrderedDict
from typing import Callable, Tuple
from loguru import logger
from interviewee.errors.exceptions import SessionNotFound
from interviewee.services.interview.interview_orchestrator import InterviewSession
from interviewee.services.model_gateway.model_gateway import ModelGateway

SESSION_TTL_SECONDS = 3600.0
MAX_SESSIONS = 500


class SessionStore:
    """
    Bounded registry of interview sessions keyed by session id.

    Attributes:
        ttl_seconds (float): Idle time after which a session is discarded.
        max_sessions (int): Upper bound on the number of stored sessions.
    """

    def __init__(
        self,
        ttl_seconds: float = SESSION_TTL_SECONDS,
        max_sessions: int = MAX_SESSIONS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions
        self._clock = clock
        # least recently used first
        self._sessions: "OrderedDict[str, Tuple[InterviewSession, float]]" = OrderedDict()

    def create(self, gateway: ModelGateway) -> InterviewSession:
        return self.add(InterviewSession(gateway))

    def add(self, session: InterviewSession) -> InterviewSession:
        self._evict_expired()
        self._sessions[session.session_id] = (session, self._clock())
        self._sessions.move_to_end(session.session_id)
        while len(self._sessions) > self.max_sessions:
            session_id, _ = self._sessions.popitem(last=False)
            logger.info(f"Interview session {session_id} evicted, store holds {self.max_sessions} sessions")
        return session

    def get(self, session_id: str) -> InterviewSession:
        """
        Look up a session and mark it as recently used.

        Raises:
            SessionNotFound: If no session has this id, or it has expired.
        """
        self._evict_expired()
        if session_id not in self._sessions:
            raise SessionNotFound(session_id)
        session, _ = self._sessions[session_id]
        self._sessions[session_id] = (session, self._clock())
        self._sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFound(session_id)
        logger.info(f"Interview session {session_id} discarded")

    def clear(self) -> None:
        self._sessions.clear()

    def _evict_expired(self) -> None:
        now = self._clock()
        while self._sessions:
            session_id, (_, last_seen) = next(iter(self._sessions.items()))
            if now - last_seen < self.ttl_seconds:
                break
            del self._sessions[session_id]
            logger.info(f"Interview session {session_id} expired after {self.ttl_seconds:g}s idle")

    def __len__(self) -> int:
        self._evict_expired()
        return len(self._sessions)


# Global instance for reuse across the application
session_store = SessionStore()
