from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..normalizer.record_normalizer import normalize_participant
from .model import Participant
from .repository import ParticipantDirectory


class MySQLParticipantDirectory(ParticipantDirectory):
    def __init__(self, conn_factory: DatabaseConnection, *, table: str = "participant_c"):
        self._conn_factory = conn_factory
        self._table = table

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        with db_cursor(self._conn_factory, operation="participants.get_by_id") as (_, cur):
            cur.execute(
                f"SELECT Id, Name, email_c, department_c FROM {self._table} WHERE Id=%s",
                (int(participant_id),),
            )
            r = fetchone(cur)
            return normalize_participant(r) if r else None

    def list_all(self) -> Sequence[Participant]:
        with db_cursor(self._conn_factory, operation="participants.list_all") as (_, cur):
            cur.execute(f"SELECT Id, Name, email_c, department_c FROM {self._table} ORDER BY Id ASC")
            return [normalize_participant(r) for r in fetchall(cur)]
