from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..common.rates import percentage
from ..core.constants import UNKNOWN_DATE_LABEL
from ..core.enums import AttendanceStatus
from ..participants.model import Participant
from ..sessions.model import Session


@dataclass(frozen=True)
class StatusCounts:
    """Per-status tallies over a set of records.

    ``total`` counts records, not roster entries; ``rate`` is the share of
    PRESENT records as an integer percentage.
    """

    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    excused: int = 0

    @classmethod
    def from_records(cls, records: Iterable[AttendanceRecord]) -> "StatusCounts":
        total = 0
        tally = {s: 0 for s in AttendanceStatus}
        for r in records:
            total += 1
            if r.status is not None:
                tally[r.status] += 1
        return cls(
            total=total,
            present=tally[AttendanceStatus.PRESENT],
            absent=tally[AttendanceStatus.ABSENT],
            late=tally[AttendanceStatus.LATE],
            excused=tally[AttendanceStatus.EXCUSED],
        )

    @property
    def rate(self) -> int:
        return percentage(self.present, self.total)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "excused": self.excused,
            "rate": self.rate,
        }


@dataclass(frozen=True)
class ParticipantStats:
    participant_id: int
    counts: StatusCounts

    @property
    def total_sessions(self) -> int:
        return self.counts.total

    @property
    def attendance_rate(self) -> int:
        return self.counts.rate

    def to_dict(self) -> dict:
        data = self.counts.to_dict()
        data["participant_id"] = self.participant_id
        data["total_sessions"] = self.total_sessions
        return data


@dataclass(frozen=True)
class TrendPoint:
    session_id: Optional[int]
    session_name: str
    date: Optional[date]
    present: int
    total: int

    @property
    def attendance_rate(self) -> int:
        return percentage(self.present, self.total)

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "session_name": self.session_name,
            "date": self.date.isoformat() if self.date else UNKNOWN_DATE_LABEL,
            "attendance_rate": self.attendance_rate,
            "present": self.present,
            "total": self.total,
        }


@dataclass(frozen=True)
class PerformerRow:
    participant: Participant
    counts: StatusCounts

    @property
    def attendance_rate(self) -> int:
        return self.counts.rate

    def to_dict(self) -> dict:
        data = self.participant.to_dict()
        data.update(
            attendance_rate=self.attendance_rate,
            total_sessions=self.counts.total,
            present=self.counts.present,
        )
        return data


@dataclass(frozen=True)
class HistoryEntry:
    record: AttendanceRecord
    session: Session
    session_found: bool = True

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["session"] = self.session.to_dict()
        data["session_found"] = self.session_found
        return data


@dataclass(frozen=True)
class Overview:
    total_sessions: int
    total_participants: int
    total_records: int
    present_records: int

    @property
    def overall_rate(self) -> int:
        return percentage(self.present_records, self.total_records)

    def to_dict(self) -> dict:
        return {
            "total_sessions": self.total_sessions,
            "total_participants": self.total_participants,
            "total_records": self.total_records,
            "overall_attendance_rate": self.overall_rate,
        }


@dataclass(frozen=True)
class SessionCard:
    """Dashboard card: session plus counts against its roster size."""

    session: Session
    counts: StatusCounts

    @property
    def roster_size(self) -> int:
        return len(self.session.participant_ids)

    @property
    def roster_rate(self) -> int:
        return percentage(self.counts.present, self.roster_size)

    def to_dict(self) -> dict:
        return {
            "session": self.session.to_dict(),
            "total_participants": self.roster_size,
            "present": self.counts.present,
            "absent": self.counts.absent,
            "late": self.counts.late,
            "attendance_rate": self.roster_rate,
        }


@dataclass(frozen=True)
class Dashboard:
    today_sessions: list[SessionCard]
    recent_sessions: list[SessionCard]
    overview: Overview

    def to_dict(self) -> dict:
        return {
            "today_sessions": [c.to_dict() for c in self.today_sessions],
            "recent_sessions": [c.to_dict() for c in self.recent_sessions],
            "overview": self.overview.to_dict(),
        }
