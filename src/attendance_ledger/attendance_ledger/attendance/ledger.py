from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Callable, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_status
from ..core.enums import AttendanceStatus
from ..core.exceptions import RecordNotFound, ValidationError
from ..normalizer.record_normalizer import normalize_attendance
from .model import AttendanceRecord
from .repository import AttendanceStore

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Attendance records keyed by (session, participant).

    ``upsert`` and ``cycle`` are the only write paths besides ``delete``: they
    keep at most one record per pair and preserves the record id across updates. Writes to
    the same pair are serialized; unrelated writes and reads are not blocked.
    """

    def __init__(self, store: AttendanceStore, *, clock=now_utc):
        self._store = store
        self._clock = clock
        self._locks: defaultdict[tuple[int, int], threading.Lock] = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    def list_all(self) -> list[AttendanceRecord]:
        return [normalize_attendance(r) for r in self._store.fetch_all()]

    def get_by_session(self, session_id: int) -> list[AttendanceRecord]:
        records = (normalize_attendance(r) for r in self._store.fetch_by_session(int(session_id)))
        return [r for r in records if r.session_id == int(session_id)]

    def get_by_participant(self, participant_id: int) -> list[AttendanceRecord]:
        records = (normalize_attendance(r) for r in self._store.fetch_by_participant(int(participant_id)))
        return [r for r in records if r.participant_id == int(participant_id)]

    def get_by_id(self, record_id: int) -> AttendanceRecord:
        raw = self._store.fetch_one(int(record_id))
        if raw is None:
            raise RecordNotFound("attendance record", record_id, operation="get_by_id")
        return normalize_attendance(raw)

    def find(self, session_id: int, participant_id: int) -> Optional[AttendanceRecord]:
        for record in self.get_by_session(session_id):
            if record.participant_id == int(participant_id):
                return record
        return None

    def upsert(
        self,
        session_id: int,
        participant_id: int,
        status: AttendanceStatus | str,
        notes: str = "",
    ) -> AttendanceRecord:
        session_id = int(session_id)
        participant_id = int(participant_id)
        status = require_status(status)

        with self._lock_for(session_id, participant_id):
            return self._write(session_id, participant_id, status, notes or "")

    def cycle(
        self,
        session_id: int,
        participant_id: int,
        policy: Callable[[Optional[AttendanceStatus]], AttendanceStatus],
    ) -> AttendanceRecord:
        """Read the current status and write ``policy(current)`` under one lock.

        Notes are reset, as with a plain status write.
        """
        session_id = int(session_id)
        participant_id = int(participant_id)

        with self._lock_for(session_id, participant_id):
            current = self.find(session_id, participant_id)
            status = require_status(policy(current.status if current else None))
            return self._write(session_id, participant_id, status, "")

    def delete(self, record_id: int, *, must_exist: bool = False) -> bool:
        removed = self._store.delete(int(record_id))
        if not removed and must_exist:
            raise RecordNotFound("attendance record", record_id, operation="delete")
        if removed:
            logger.info("Deleted attendance id=%s", record_id)
        return removed

    def _write(
        self,
        session_id: int,
        participant_id: int,
        status: AttendanceStatus,
        notes: str,
    ) -> AttendanceRecord:
        # caller holds the pair lock
        existing = self.find(session_id, participant_id)
        now = self._clock()

        if existing is None:
            raw = self._store.insert(
                session_id=session_id,
                participant_id=participant_id,
                status=status.value,
                timestamp=now,
                notes=notes,
            )
            logger.info(
                "Created attendance session=%s participant=%s status=%s",
                session_id, participant_id, status.value,
            )
            return normalize_attendance(raw)

        if existing.id is None:
            raise ValidationError(
                f"Stored attendance for session={session_id} participant={participant_id} has no id"
            )
        raw = self._store.update(existing.id, status=status.value, timestamp=now, notes=notes)
        if raw is None:
            raise RecordNotFound("attendance record", existing.id, operation="upsert")
        logger.info(
            "Updated attendance id=%s session=%s participant=%s status=%s",
            existing.id, session_id, participant_id, status.value,
        )
        return normalize_attendance(raw)

    def _lock_for(self, session_id: int, participant_id: int) -> threading.Lock:
        with self._locks_guard:
            return self._locks[(session_id, participant_id)]
