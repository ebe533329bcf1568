"""In-memory session store with TTL.

Controllers own asyncio tasks and live references to provider clients, so
they stay in process memory; a session ends with the process.
"""

import threading
import time
import uuid
from typing import Any, Optional

from skycast.resolution_controller import ResolutionController
from skycast.session_store.base import SessionStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="session_store/in_memory_session_store")


class InMemorySessionStore(SessionStore):
    """Thread-safe, TTL-aware in-memory store."""

    def __init__(self, ttl_seconds: int = 3600, max_age_seconds: int | None = None) -> None:
        """Initialize the store with a sliding TTL and an optional absolute max age (seconds)."""
        logger.debug("Initializing InMemorySessionStore")
        self.ttl = ttl_seconds
        self.max_age = max_age_seconds
        self._sessions: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def _expired(self, exp: float, created_at: float) -> bool:
        now = time.monotonic()
        if exp < now:
            return True
        if self.max_age is None:
            return False
        return now - created_at > self.max_age

    def _next_expiry(self, created_at: float) -> float:
        next_exp = time.monotonic() + self.ttl
        if self.max_age is None:
            return next_exp
        return min(next_exp, created_at + self.max_age)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create_session(self, controller: ResolutionController) -> str:
        """Store `controller` under a fresh id and return the id."""
        with self._lock:
            sid = str(uuid.uuid4())
            created_at = time.monotonic()
            self._sessions[sid] = {
                "controller": controller,
                "created_at": created_at,
                "exp": self._next_expiry(created_at),
            }
            return sid

    def get_session(self, session_id: str) -> Optional[ResolutionController]:
        """Return the controller, refreshing TTL, or None if missing/expired."""
        with self._lock:
            data = self._sessions.get(session_id)
            if not data:
                return None
            if self._expired(data["exp"], data["created_at"]):
                self._sessions.pop(session_id, None)
                logger.debug("Session expired", extra={"session_id": session_id})
                return None
            data["exp"] = self._next_expiry(data["created_at"])
            return data["controller"]

    def delete_session(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()
