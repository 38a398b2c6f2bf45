from __future__ import annotations

import threading
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..normalizer.record_normalizer import record_id as raw_record_id, relation_id
from .repository import AttendanceStore, RawRecord

_LEGACY_FIELDS = ("sessionId", "participantId", "status", "timestamp", "notes")


class InMemoryAttendanceStore(AttendanceStore):
    """Process-local store holding rows in whatever shape they were seeded.

    Seeded rows without an id get one on load. Writes always produce the
    normalized shape. New identifiers are one
    greater than the highest identifier ever held, so deleted ids are not
    handed out again.
    """

    def __init__(self, rows: Iterable[Mapping[str, Any]] = ()):
        self._rows: list[dict] = [dict(r) for r in rows]
        self._lock = threading.Lock()
        self._high_water = max((raw_record_id(r) or 0 for r in self._rows), default=0)
        for row in self._rows:
            if raw_record_id(row) is None:
                self._high_water += 1
                row["Id"] = self._high_water

    def fetch_all(self) -> Sequence[RawRecord]:
        with self._lock:
            return [dict(r) for r in self._rows]

    def fetch_by_session(self, session_id: int) -> Sequence[RawRecord]:
        with self._lock:
            return [dict(r) for r in self._rows if relation_id(r, "session_id_c", "sessionId") == session_id]

    def fetch_by_participant(self, participant_id: int) -> Sequence[RawRecord]:
        with self._lock:
            return [
                dict(r) for r in self._rows if relation_id(r, "participant_id_c", "participantId") == participant_id
            ]

    def fetch_one(self, record_id: int) -> Optional[RawRecord]:
        with self._lock:
            row = self._find(record_id)
            return dict(row) if row is not None else None

    def insert(
        self,
        *,
        session_id: int,
        participant_id: int,
        status: str,
        timestamp: datetime,
        notes: str = "",
    ) -> RawRecord:
        with self._lock:
            self._high_water += 1
            row = {
                "Id": self._high_water,
                "Name": f"Attendance-{session_id}-{participant_id}",
                "session_id_c": session_id,
                "participant_id_c": participant_id,
                "status_c": status,
                "timestamp_c": timestamp.isoformat(),
                "notes_c": notes,
            }
            self._rows.append(row)
            return dict(row)

    def update(
        self,
        record_id: int,
        *,
        status: str,
        timestamp: datetime,
        notes: str = "",
    ) -> Optional[RawRecord]:
        with self._lock:
            row = self._find(record_id)
            if row is None:
                return None
            session_id = relation_id(row, "session_id_c", "sessionId")
            participant_id = relation_id(row, "participant_id_c", "participantId")
            for legacy in _LEGACY_FIELDS:
                row.pop(legacy, None)
            row["session_id_c"] = session_id
            row["participant_id_c"] = participant_id
            row["status_c"] = status
            row["timestamp_c"] = timestamp.isoformat()
            row["notes_c"] = notes
            return dict(row)

    def delete(self, record_id: int) -> bool:
        with self._lock:
            row = self._find(record_id)
            if row is None:
                return False
            self._rows.remove(row)
            return True

    def _find(self, record_id: int) -> Optional[dict]:
        for row in self._rows:
            if raw_record_id(row) == record_id:
                return row
        return None
