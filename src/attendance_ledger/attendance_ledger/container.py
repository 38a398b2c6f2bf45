from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .attendance.ledger import AttendanceLedger
from .attendance.memory_store import InMemoryAttendanceStore
from .attendance.mysql_attendance_store import MySQLAttendanceStore
from .attendance.repository import AttendanceStore
from .attendance.service import AttendanceService
from .bulk.coordinator import BulkAttendanceCoordinator
from .common.seed import load_seed
from .core.constants import DEFAULT_RECENT_SESSIONS_LIMIT, DEFAULT_TOP_PERFORMERS_LIMIT
from .core.exceptions import ValidationError
from .database.connection import DatabaseConnection, DBConfig
from .participants.memory_directory import InMemoryParticipantDirectory
from .participants.mysql_participant_directory import MySQLParticipantDirectory
from .participants.repository import ParticipantDirectory
from .sessions.memory_directory import InMemorySessionDirectory
from .sessions.mysql_session_directory import MySQLSessionDirectory
from .sessions.repository import SessionDirectory
from .statistics.service import StatisticsService


@dataclass(frozen=True)
class Container:
    attendance_store: AttendanceStore
    sessions: SessionDirectory
    participants: ParticipantDirectory

    ledger: AttendanceLedger
    attendance_service: AttendanceService
    statistics_service: StatisticsService
    bulk_coordinator: BulkAttendanceCoordinator


def build_container(settings: Any) -> Container:
    """Wire one instance of every store and service from a settings object."""
    backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()

    if backend == "mysql":
        conn = DatabaseConnection(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
        attendance_store: AttendanceStore = MySQLAttendanceStore(conn)
        sessions: SessionDirectory = MySQLSessionDirectory(conn)
        participants: ParticipantDirectory = MySQLParticipantDirectory(conn)
    elif backend == "memory":
        seed = load_seed(getattr(settings, "SEED_PATH", None))
        attendance_store = InMemoryAttendanceStore(seed.attendance)
        sessions = InMemorySessionDirectory(seed.sessions)
        participants = InMemoryParticipantDirectory(seed.participants)
    else:
        raise ValidationError(f"Unknown STORE_BACKEND {backend!r} (expected 'memory' or 'mysql')")

    return wire(
        attendance_store,
        sessions,
        participants,
        top_performers_limit=int(getattr(settings, "TOP_PERFORMERS_LIMIT", DEFAULT_TOP_PERFORMERS_LIMIT)),
        recent_sessions_limit=int(getattr(settings, "RECENT_SESSIONS_LIMIT", DEFAULT_RECENT_SESSIONS_LIMIT)),
    )


def wire(
    attendance_store: AttendanceStore,
    sessions: SessionDirectory,
    participants: ParticipantDirectory,
    *,
    top_performers_limit: int = DEFAULT_TOP_PERFORMERS_LIMIT,
    recent_sessions_limit: int = DEFAULT_RECENT_SESSIONS_LIMIT,
) -> Container:
    ledger = AttendanceLedger(attendance_store)
    return Container(
        attendance_store=attendance_store,
        sessions=sessions,
        participants=participants,
        ledger=ledger,
        attendance_service=AttendanceService(ledger, sessions, participants),
        statistics_service=StatisticsService(
            ledger,
            sessions,
            participants,
            top_performers_limit=top_performers_limit,
            recent_sessions_limit=recent_sessions_limit,
        ),
        bulk_coordinator=BulkAttendanceCoordinator(ledger, sessions),
    )
