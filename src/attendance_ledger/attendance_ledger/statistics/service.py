from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional

from ..attendance.ledger import AttendanceLedger
from ..attendance.model import AttendanceRecord
from ..core.constants import (
    DEFAULT_RECENT_SESSIONS_LIMIT,
    DEFAULT_TOP_PERFORMERS_LIMIT,
    UNKNOWN_SESSION_NAME,
    UNKNOWN_SESSION_TYPE,
)
from ..core.enums import AttendanceStatus
from ..core.exceptions import UpstreamUnavailable
from ..participants.repository import ParticipantDirectory
from ..sessions.model import Session
from ..sessions.repository import SessionDirectory
from .model import (
    Dashboard,
    HistoryEntry,
    Overview,
    ParticipantStats,
    PerformerRow,
    SessionCard,
    StatusCounts,
    TrendPoint,
)

logger = logging.getLogger(__name__)


def _undated_last(session_date: Optional[date]) -> tuple[bool, date]:
    return (session_date is None, session_date or date.min)


class StatisticsService:
    """Derived attendance statistics.

    Nothing is cached: every call recomputes from the ledger and the
    directories, so identical inputs always give identical outputs.
    """

    def __init__(
        self,
        ledger: AttendanceLedger,
        sessions: SessionDirectory,
        participants: ParticipantDirectory,
        *,
        top_performers_limit: int = DEFAULT_TOP_PERFORMERS_LIMIT,
        recent_sessions_limit: int = DEFAULT_RECENT_SESSIONS_LIMIT,
    ):
        self._ledger = ledger
        self._sessions = sessions
        self._participants = participants
        self._top_performers_limit = int(top_performers_limit)
        self._recent_sessions_limit = int(recent_sessions_limit)

    def session_stats(self, session_id: int) -> StatusCounts:
        return StatusCounts.from_records(self._ledger.get_by_session(session_id))

    def participant_stats(self, participant_id: int) -> ParticipantStats:
        records = self._ledger.get_by_participant(participant_id)
        return ParticipantStats(participant_id=int(participant_id), counts=StatusCounts.from_records(records))

    def attendance_trend(self) -> list[TrendPoint]:
        """One point per session, oldest first.

        Sessions sharing a date keep directory order; undated sessions go last.
        """
        by_session = self._group(self._ledger.list_all(), key=lambda r: r.session_id)
        sessions = sorted(self._sessions.list_all(), key=lambda s: _undated_last(s.date))

        points = []
        for s in sessions:
            counts = StatusCounts.from_records(by_session.get(s.id, ()))
            points.append(
                TrendPoint(
                    session_id=s.id,
                    session_name=s.name,
                    date=s.date,
                    present=counts.present,
                    total=counts.total,
                )
            )
        return points

    def ranked_participants(self) -> list[PerformerRow]:
        """Every participant, best attendance rate first.

        The sort is stable, so equal rates keep directory order on every call.
        """
        by_participant = self._group(self._ledger.list_all(), key=lambda r: r.participant_id)
        rows = [
            PerformerRow(participant=p, counts=StatusCounts.from_records(by_participant.get(p.id, ())))
            for p in self._participants.list_all()
        ]
        rows.sort(key=lambda row: row.attendance_rate, reverse=True)
        return rows

    def top_performers(self, limit: Optional[int] = None) -> list[PerformerRow]:
        """Head of ``ranked_participants``; ``limit=None`` uses the configured default."""
        ranked = self.ranked_participants()
        return ranked[: self._top_performers_limit if limit is None else max(int(limit), 0)]

    def participant_history(self, participant_id: int) -> list[HistoryEntry]:
        """Records of one participant joined with their sessions, newest first.

        Sessions are fetched once. A record whose session is missing, or a
        session directory that cannot be reached, yields a placeholder session.
        """
        records = self._ledger.get_by_participant(participant_id)
        try:
            sessions = {s.id: s for s in self._sessions.list_all()}
        except UpstreamUnavailable as exc:
            logger.warning("Session lookup failed for participant %s history: %s", participant_id, exc)
            sessions = {}

        entries = []
        for record in records:
            session = sessions.get(record.session_id) if record.session_id is not None else None
            if session is None:
                logger.debug("Session %s missing for attendance id=%s", record.session_id, record.id)
                entries.append(HistoryEntry(record=record, session=self._placeholder(record), session_found=False))
            else:
                entries.append(HistoryEntry(record=record, session=session))

        dated = sorted((e for e in entries if e.session.date is not None), key=lambda e: e.session.date, reverse=True)
        undated = [e for e in entries if e.session.date is None]
        return dated + undated

    def status_distribution(self) -> dict[AttendanceStatus, int]:
        counts = StatusCounts.from_records(self._ledger.list_all())
        return {
            AttendanceStatus.PRESENT: counts.present,
            AttendanceStatus.ABSENT: counts.absent,
            AttendanceStatus.LATE: counts.late,
            AttendanceStatus.EXCUSED: counts.excused,
        }

    def overview(self) -> Overview:
        counts = StatusCounts.from_records(self._ledger.list_all())
        return Overview(
            total_sessions=len(self._sessions.list_all()),
            total_participants=len(self._participants.list_all()),
            total_records=counts.total,
            present_records=counts.present,
        )

    def todays_sessions(self, today: date) -> list[Session]:
        return [s for s in self._sessions.list_all() if s.date == today]

    def recent_sessions(self, today: date, *, days: int = 7, limit: Optional[int] = None) -> list[Session]:
        """Sessions dated on or after ``today - days``, most recent first."""
        since = today - timedelta(days=days)
        recent = [s for s in self._sessions.list_all() if s.date is not None and s.date >= since]
        recent.sort(key=lambda s: s.date, reverse=True)
        return recent[: self._recent_sessions_limit if limit is None else int(limit)]

    def dashboard(self, today: date) -> Dashboard:
        by_session = self._group(self._ledger.list_all(), key=lambda r: r.session_id)

        def card(s: Session) -> SessionCard:
            return SessionCard(session=s, counts=StatusCounts.from_records(by_session.get(s.id, ())))

        return Dashboard(
            today_sessions=[card(s) for s in self.todays_sessions(today)],
            recent_sessions=[card(s) for s in self.recent_sessions(today)],
            overview=self.overview(),
        )

    @staticmethod
    def _group(records: Iterable[AttendanceRecord], *, key) -> dict:
        grouped: defaultdict = defaultdict(list)
        for r in records:
            grouped[key(r)].append(r)
        return grouped

    @staticmethod
    def _placeholder(record: AttendanceRecord) -> Session:
        return Session(
            id=record.session_id,
            name=UNKNOWN_SESSION_NAME,
            date=record.timestamp.date() if record.timestamp else None,
            type=UNKNOWN_SESSION_TYPE,
        )
