"""
Session Store

In-memory registry of game sessions keyed by user id.
"""

import threading
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional

from ..models.game import GameSession


class _UserLock:
    """A per-user RLock plus the number of callers holding or waiting on it."""

    def __init__(self):
        self.lock = threading.RLock()
        self.users = 0


class SessionStore:
    """
    Owns every live GameSession.

    The registry lock only guards the dictionaries themselves. Work that reads
    and then mutates one user's session must run inside ``locked(user_id)``
    for the whole sequence. A user's lock exists only while some caller is
    inside that block, so the lock map never outgrows the active callers.
    """

    def __init__(self):
        self._sessions: Dict[str, GameSession] = {}
        self._locks: Dict[str, _UserLock] = {}
        self._registry_lock = threading.Lock()

    @contextmanager
    def locked(self, user_id: str) -> Iterator[None]:
        with self._registry_lock:
            entry = self._locks.get(user_id)
            if entry is None:
                entry = self._locks[user_id] = _UserLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._registry_lock:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[user_id]

    def get(self, user_id: str) -> Optional[GameSession]:
        with self._registry_lock:
            return self._sessions.get(user_id)

    def create(self, user_id: str, factory: Callable[[], GameSession]) -> GameSession:
        """Stores a fresh session for the user, replacing any existing one."""
        session = factory()
        with self._registry_lock:
            self._sessions[user_id] = session
        return session

    def delete(self, user_id: str) -> bool:
        """Drops the user's session; returns False if there was none."""
        with self._registry_lock:
            return self._sessions.pop(user_id, None) is not None

    def __contains__(self, user_id: str) -> bool:
        with self._registry_lock:
            return user_id in self._sessions

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._sessions)
