from __future__ import annotations

from datetime import datetime, timezone

import mysql.connector
import pytest

from attendance_ledger.attendance.ledger import AttendanceLedger
from attendance_ledger.attendance.mysql_attendance_store import MySQLAttendanceStore
from attendance_ledger.core.enums import AttendanceStatus
from attendance_ledger.core.exceptions import UpstreamUnavailable
from attendance_ledger.sessions.mysql_session_directory import MySQLSessionDirectory


class FakeCursor:
    def __init__(self, rows=None, *, fail_on_execute=False):
        self.rows = list(rows or [])
        self.executed = []
        self.lastrowid = 11
        self.rowcount = 1
        self.closed = False
        self._fail = fail_on_execute

    def execute(self, sql, params=None):
        if self._fail:
            raise mysql.connector.Error("lost connection")
        self.executed.append((" ".join(sql.split()), params))

    def fetchall(self):
        return self.rows

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, cursor=None, *, refuse=False):
        self.cursor = cursor or FakeCursor()
        self.connection = FakeConnection(self.cursor)
        self._refuse = refuse

    def connect(self):
        if self._refuse:
            raise mysql.connector.Error("Can't connect to MySQL server")
        return self.connection


def test_fetch_by_session_rows_are_normalized_by_ledger():
    cursor = FakeCursor(
        [
            {
                "Id": 3,
                "Name": "Attendance-1-2",
                "session_id_c": 1,
                "participant_id_c": 2,
                "status_c": "late",
                "timestamp_c": datetime(2024, 1, 8, 9, 0),
                "notes_c": None,
            }
        ]
    )
    factory = FakeConnFactory(cursor)
    ledger = AttendanceLedger(MySQLAttendanceStore(factory))

    records = ledger.get_by_session(1)

    assert len(records) == 1
    assert records[0].status == AttendanceStatus.LATE
    assert records[0].notes == ""
    assert cursor.executed[0][1] == (1,)
    assert factory.connection.committed
    assert factory.connection.closed


def test_insert_returns_row_with_store_assigned_id():
    factory = FakeConnFactory()
    store = MySQLAttendanceStore(factory)

    row = store.insert(
        session_id=1,
        participant_id=2,
        status="present",
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )

    assert row["Id"] == 11
    assert row["status_c"] == "present"
    assert "INSERT INTO attendance_c" in factory.cursor.executed[0][0]


def test_connect_failure_raises_upstream_unavailable():
    store = MySQLAttendanceStore(FakeConnFactory(refuse=True))

    with pytest.raises(UpstreamUnavailable) as exc:
        store.fetch_all()

    assert exc.value.operation == "attendance.fetch_all"


def test_query_failure_rolls_back():
    factory = FakeConnFactory(FakeCursor(fail_on_execute=True))

    with pytest.raises(UpstreamUnavailable):
        MySQLAttendanceStore(factory).delete(4)

    assert factory.connection.rolled_back
    assert factory.connection.closed
    assert factory.cursor.closed


def test_session_directory_normalizes_roster_string():
    cursor = FakeCursor(
        [{"Id": 2, "Name": "Training", "date_c": "2024-01-10", "type_c": "Training", "participant_ids_c": "3, 7,9"}]
    )

    session = MySQLSessionDirectory(FakeConnFactory(cursor)).get_by_id(2)

    assert session is not None
    assert session.participant_ids == (3, 7, 9)
