from __future__ import annotations

import logging
import os
import threading
import uuid
from collections import OrderedDict
from typing import Optional

from seat_picker.session import SeatSession


logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    return float(raw) if raw not in (None, "") else default


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    return int(raw) if raw not in (None, "") else default


class SessionStore:
    """
    In-memory registry of seat sessions. Sessions are isolated from each other;
    each one serializes its own commands. Oldest sessions are evicted once the
    store is full.
    """

    def __init__(self, max_sessions: int = 1000):
        self.max_sessions = max(1, max_sessions)
        self._lock = threading.Lock()
        self._sessions: "OrderedDict[str, SeatSession]" = OrderedDict()

    def add(self, session: SeatSession) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._sessions[session_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("evicted session %s", evicted)
        return session_id

    def get(self, session_id: str) -> Optional[SeatSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def remove(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


def default_occupancy_rate() -> float:
    return _env_float("SEAT_PICKER_OCCUPANCY_RATE", 0.3)


def default_seed() -> Optional[int]:
    return _env_int("SEAT_PICKER_SEED", None)


store = SessionStore(max_sessions=_env_int("SEAT_PICKER_MAX_SESSIONS", 1000) or 1000)
