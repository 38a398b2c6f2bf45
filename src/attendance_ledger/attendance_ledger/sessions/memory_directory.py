from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

from ..normalizer.record_normalizer import normalize_session
from .model import Session
from .repository import SessionDirectory


class InMemorySessionDirectory(SessionDirectory):
    def __init__(self, rows: Iterable[Mapping[str, Any]] = ()):
        self._sessions = [normalize_session(r) for r in rows]

    def get_by_id(self, session_id: int) -> Optional[Session]:
        for s in self._sessions:
            if s.id == session_id:
                return s
        return None

    def list_all(self) -> Sequence[Session]:
        return list(self._sessions)
