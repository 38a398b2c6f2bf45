from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import RecordNotFound, ValidationError
from ..participants.repository import ParticipantDirectory
from ..sessions.repository import SessionDirectory
from .cycle import next_status
from .ledger import AttendanceLedger
from .model import AttendanceRecord

UNMARKED = "unmarked"


@dataclass(frozen=True)
class SheetRow:
    """One roster line of a session; status None means unmarked."""

    participant_id: int
    name: str
    status: Optional[AttendanceStatus]
    record_id: Optional[int]
    notes: str = ""
    email: str = ""

    @property
    def is_marked(self) -> bool:
        return self.status is not None

    def matches(self, status_filter: Optional[str], search: str) -> bool:
        if status_filter is not None:
            current = self.status.value if self.status else UNMARKED
            if current != status_filter:
                return False
        if search:
            return search in self.name.lower() or search in self.email.lower()
        return True

    def to_dict(self) -> dict:
        return {
            "participant_id": self.participant_id,
            "name": self.name,
            "email": self.email,
            "status": self.status.value if self.status else UNMARKED,
            "record_id": self.record_id,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class SheetSummary:
    """Roster-wide tallies; unmarked is the roster size minus marked rows."""

    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    excused: int = 0

    @property
    def unmarked(self) -> int:
        return self.total - (self.present + self.absent + self.late + self.excused)

    @classmethod
    def from_rows(cls, rows: list[SheetRow]) -> "SheetSummary":
        tally = {s: 0 for s in AttendanceStatus}
        for row in rows:
            if row.status is not None:
                tally[row.status] += 1
        return cls(
            total=len(rows),
            present=tally[AttendanceStatus.PRESENT],
            absent=tally[AttendanceStatus.ABSENT],
            late=tally[AttendanceStatus.LATE],
            excused=tally[AttendanceStatus.EXCUSED],
        )

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "excused": self.excused,
            "unmarked": self.unmarked,
        }


@dataclass(frozen=True)
class SessionSheet:
    session_id: int
    rows: list[SheetRow] = field(default_factory=list)
    summary: SheetSummary = field(default_factory=SheetSummary)

    @property
    def participant_ids(self) -> list[int]:
        return [r.participant_id for r in self.rows]

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "rows": [r.to_dict() for r in self.rows],
            "summary": self.summary.to_dict(),
        }


def _status_filter(value: Optional[str]) -> Optional[str]:
    if value is None or str(value).strip() == "":
        return None
    token = str(value).strip().lower()
    if token == UNMARKED:
        return token
    status = AttendanceStatus.parse(token)
    if status is None:
        raise ValidationError(f"Unknown status filter: {value!r}")
    return status.value


class AttendanceService:
    """Use case: mark attendance from the session sheet."""

    def __init__(
        self,
        ledger: AttendanceLedger,
        sessions: SessionDirectory,
        participants: ParticipantDirectory,
    ):
        self._ledger = ledger
        self._sessions = sessions
        self._participants = participants

    def cycle_status(self, session_id: int, participant_id: int) -> AttendanceRecord:
        return self._ledger.cycle(session_id, participant_id, next_status)

    def set_status(
        self,
        session_id: int,
        participant_id: int,
        status: AttendanceStatus | str,
        notes: str = "",
    ) -> AttendanceRecord:
        return self._ledger.upsert(session_id, participant_id, status, notes)

    def session_sheet(
        self,
        session_id: int,
        *,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> SessionSheet:
        """Roster of a session with derived unmarked rows.

        ``status`` (a status name or ``"unmarked"``) and ``search`` (substring
        of name or email, case-insensitive) narrow the rows; the summary always
        covers the whole roster.
        """
        status_filter = _status_filter(status)
        needle = (search or "").strip().lower()

        session = self._sessions.get_by_id(session_id)
        if session is None:
            raise RecordNotFound("session", session_id, operation="session_sheet")

        by_participant = {r.participant_id: r for r in self._ledger.get_by_session(session_id)}
        rows = []
        for participant_id in session.participant_ids:
            participant = self._participants.get_by_id(participant_id)
            record = by_participant.get(participant_id)
            rows.append(
                SheetRow(
                    participant_id=participant_id,
                    name=participant.name if participant else "",
                    email=participant.email if participant else "",
                    status=record.status if record else None,
                    record_id=record.id if record else None,
                    notes=record.notes if record else "",
                )
            )

        return SessionSheet(
            session_id=int(session_id),
            rows=[r for r in rows if r.matches(status_filter, needle)],
            summary=SheetSummary.from_rows(rows),
        )
