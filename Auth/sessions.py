# backend/Auth/sessions.py
"""
In-memory session store.

Maps an opaque bearer token to the user it was issued for and the moment it
stops being valid. Entries live only as long as the process. Expired entries
are dropped lazily, the first time somebody looks them up.
"""
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from Auth.security import SESSION_TTL, new_session_token

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionEntry:
    user_id: str
    expires_at: datetime


class SessionStore:
    def __init__(
        self,
        ttl: timedelta = SESSION_TTL,
        clock: Callable[[], datetime] = _now,
        token_factory: Callable[[], str] = new_session_token,
    ):
        self.ttl = ttl
        self._clock = clock
        self._token_factory = token_factory
        self._entries: Dict[str, SessionEntry] = {}
        # sync endpoints run in a thread pool
        self._lock = threading.Lock()

    def create(self, user_id: str) -> str:
        """Issue a fresh token for `user_id`, valid for `ttl`."""
        with self._lock:
            token = self._token_factory()
            while token in self._entries:
                logger.warning("Session token collision, regenerating")
                token = self._token_factory()
            self._entries[token] = SessionEntry(user_id, self._clock() + self.ttl)
        logger.info("Session created for user %s", user_id)
        return token

    def resolve(self, token: str) -> Optional[str]:
        """
        Return the user id bound to `token`, or None.
        An expired entry is removed on the way out.
        """
        with self._lock:
            entry = self._entries.get(token)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[token]
                return None
            return entry.user_id

    def revoke(self, token: str) -> None:
        with self._lock:
            if self._entries.pop(token, None) is not None:
                logger.info("Session revoked")

    def purge_expired(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [t for t, e in self._entries.items() if e.expires_at <= now]
            for t in expired:
                del self._entries[t]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, token: str) -> bool:
        with self._lock:
            return token in self._entries


session_store = SessionStore()


def get_session_store() -> SessionStore:
    return session_store
