from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..normalizer.record_normalizer import normalize_session
from .model import Session
from .repository import SessionDirectory


class MySQLSessionDirectory(SessionDirectory):
    def __init__(self, conn_factory: DatabaseConnection, *, table: str = "session_c"):
        self._conn_factory = conn_factory
        self._table = table

    def get_by_id(self, session_id: int) -> Optional[Session]:
        with db_cursor(self._conn_factory, operation="sessions.get_by_id") as (_, cur):
            cur.execute(
                f"SELECT Id, Name, date_c, type_c, participant_ids_c FROM {self._table} WHERE Id=%s",
                (int(session_id),),
            )
            r = fetchone(cur)
            return normalize_session(r) if r else None

    def list_all(self) -> Sequence[Session]:
        with db_cursor(self._conn_factory, operation="sessions.list_all") as (_, cur):
            cur.execute(f"SELECT Id, Name, date_c, type_c, participant_ids_c FROM {self._table} ORDER BY Id ASC")
            return [normalize_session(r) for r in fetchall(cur)]
