from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .repository import AttendanceStore, RawRecord

_COLUMNS = "Id, Name, session_id_c, participant_id_c, status_c, timestamp_c, notes_c"


class MySQLAttendanceStore(AttendanceStore):
    """Attendance rows in the normalized ``attendance_c`` table."""

    def __init__(self, conn_factory: DatabaseConnection, *, table: str = "attendance_c"):
        self._conn_factory = conn_factory
        self._table = table

    def fetch_all(self) -> Sequence[RawRecord]:
        with db_cursor(self._conn_factory, operation="attendance.fetch_all") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM {self._table} ORDER BY Id ASC")
            return fetchall(cur)

    def fetch_by_session(self, session_id: int) -> Sequence[RawRecord]:
        with db_cursor(self._conn_factory, operation="attendance.fetch_by_session") as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM {self._table} WHERE session_id_c=%s ORDER BY Id ASC",
                (int(session_id),),
            )
            return fetchall(cur)

    def fetch_by_participant(self, participant_id: int) -> Sequence[RawRecord]:
        with db_cursor(self._conn_factory, operation="attendance.fetch_by_participant") as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM {self._table} WHERE participant_id_c=%s ORDER BY Id ASC",
                (int(participant_id),),
            )
            return fetchall(cur)

    def fetch_one(self, record_id: int) -> Optional[RawRecord]:
        with db_cursor(self._conn_factory, operation="attendance.fetch_one") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM {self._table} WHERE Id=%s", (int(record_id),))
            return fetchone(cur)

    def insert(
        self,
        *,
        session_id: int,
        participant_id: int,
        status: str,
        timestamp: datetime,
        notes: str = "",
    ) -> RawRecord:
        name = f"Attendance-{session_id}-{participant_id}"
        with db_cursor(self._conn_factory, operation="attendance.insert") as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {self._table}(Name, session_id_c, participant_id_c, status_c, timestamp_c, notes_c)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (name, int(session_id), int(participant_id), status, timestamp, notes),
            )
            return {
                "Id": int(cur.lastrowid),
                "Name": name,
                "session_id_c": int(session_id),
                "participant_id_c": int(participant_id),
                "status_c": status,
                "timestamp_c": timestamp,
                "notes_c": notes,
            }

    def update(
        self,
        record_id: int,
        *,
        status: str,
        timestamp: datetime,
        notes: str = "",
    ) -> Optional[RawRecord]:
        with db_cursor(self._conn_factory, operation="attendance.update") as (_, cur):
            cur.execute(
                f"""
                UPDATE {self._table}
                SET status_c=%s, timestamp_c=%s, notes_c=%s
                WHERE Id=%s
                """,
                (status, timestamp, notes, int(record_id)),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM {self._table} WHERE Id=%s", (int(record_id),))
            return fetchone(cur)

    def delete(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory, operation="attendance.delete") as (_, cur):
            cur.execute(f"DELETE FROM {self._table} WHERE Id=%s", (int(record_id),))
            return cur.rowcount > 0
