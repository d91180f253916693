import logging
import secrets
import threading
import time
from typing import Callable

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Server-side session table: opaque token -> user id.

    Entries expire ttl seconds after creation. Expired entries are dropped
    lazily on lookup and in bulk at most once per check_period.
    """

    def __init__(
        self,
        ttl: int = 86400,
        check_period: int = 86400,
        clock: Callable[[], float] = time.monotonic
    ):
        self.ttl = ttl
        self.check_period = check_period
        self._clock = clock
        self._sessions: dict[str, tuple[int, float]] = {}
        self._lock = threading.Lock()
        self._last_prune = clock()

    def create(self, user_id: int) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._maybe_prune()
            self._sessions[token] = (user_id, self._clock() + self.ttl)
        return token

    def get(self, token: str | None) -> int | None:
        if not token:
            return None
        with self._lock:
            self._maybe_prune()
            entry = self._sessions.get(token)
            if entry is None:
                return None
            user_id, expires_at = entry
            if self._clock() >= expires_at:
                del self._sessions[token]
                return None
            return user_id

    def destroy(self, token: str | None) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def prune(self) -> int:
        with self._lock:
            return self._prune()

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _maybe_prune(self):
        if self._clock() - self._last_prune >= self.check_period:
            self._prune()

    def _prune(self) -> int:
        now = self._clock()
        expired = [t for t, (_, expires_at) in self._sessions.items() if now >= expires_at]
        for token in expired:
            del self._sessions[token]
        self._last_prune = now
        if expired:
            logger.info(f"Pruned {len(expired)} expired sessions.")
        return len(expired)
