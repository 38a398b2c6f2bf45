from __future__ import annotations

import pytest

from attendance_ledger.attendance.memory_store import InMemoryAttendanceStore
from attendance_ledger.container import wire
from attendance_ledger.core.exceptions import UpstreamUnavailable
from attendance_ledger.main import create_app
from attendance_ledger.participants.memory_directory import InMemoryParticipantDirectory
from attendance_ledger.sessions.memory_directory import InMemorySessionDirectory


class ApiSettings:
    SECRET_KEY = "test-secret"
    STORE_BACKEND = "memory"
    SEED_PATH = ""
    TESTING = True
    LOG_LEVEL = "WARNING"


class DownStore(InMemoryAttendanceStore):
    def fetch_by_session(self, session_id):
        raise UpstreamUnavailable("attendance.fetch_by_session", "timeout")


def _container(store=None):
    return wire(
        store or InMemoryAttendanceStore(
            [
                {"Id": 1, "sessionId": 1, "participantId": 1, "status": "present"},
                {"Id": 2, "session_id_c": {"Id": 1}, "participant_id_c": 2, "status_c": "absent"},
            ]
        ),
        InMemorySessionDirectory(
            [{"Id": 1, "Name": "Standup", "date_c": "2024-03-01", "participant_ids_c": "1,2,3"}]
        ),
        InMemoryParticipantDirectory(
            [{"Id": 1, "name": "Ann"}, {"Id": 2, "Name": "Ben"}, {"Id": 3, "name": "Cid"}]
        ),
    )


@pytest.fixture
def client():
    app = create_app(ApiSettings, container=_container())
    return app.test_client()


def test_session_stats_endpoint(client):
    data = client.get("/api/sessions/1/stats").get_json()

    assert data["total"] == 2
    assert data["present"] == 1
    assert data["rate"] == 50


def test_cycle_endpoint_creates_then_advances(client):
    first = client.post("/api/sessions/1/participants/3/cycle").get_json()
    second = client.post("/api/sessions/1/participants/3/cycle").get_json()

    assert first["record"]["status"] == "present"
    assert second["record"]["status"] == "absent"
    assert first["record"]["id"] == second["record"]["id"] == 3


def test_next_status_lookup(client):
    assert client.get("/api/status/next").get_json()["next"] == "present"
    assert client.get("/api/status/next?current=excused").get_json()["next"] == "present"
    assert client.get("/api/status/next?current=present").get_json()["next"] == "absent"


def test_sheet_shows_unmarked(client):
    rows = client.get("/api/sessions/1/sheet").get_json()["rows"]

    assert [r["status"] for r in rows] == ["present", "absent", "unmarked"]


def test_sheet_filters_and_summary(client):
    data = client.get("/api/sessions/1/sheet?status=unmarked").get_json()

    assert [r["participant_id"] for r in data["rows"]] == [3]
    assert data["summary"]["unmarked"] == 1
    assert data["summary"]["total"] == 3

    found = client.get("/api/sessions/1/sheet?search=be").get_json()["rows"]
    assert [r["name"] for r in found] == ["Ben"]


def test_bulk_without_ids_targets_filtered_rows(client):
    resp = client.post("/api/sessions/1/bulk", json={"filter_status": "unmarked", "status": "excused"})

    assert resp.status_code == 200
    assert resp.get_json()["succeeded"] == [3]
    stats = client.get("/api/sessions/1/stats").get_json()
    assert (stats["present"], stats["absent"], stats["excused"]) == (1, 1, 1)


def test_put_rejects_bad_status(client):
    resp = client.put("/api/sessions/1/participants/3", json={"status": "asleep"})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_bulk_endpoint(client):
    resp = client.post("/api/sessions/1/bulk", json={"participant_ids": [1, 2, 3], "status": "late"})

    assert resp.status_code == 200
    assert resp.get_json()["succeeded"] == [1, 2, 3]
    assert client.get("/api/sessions/1/stats").get_json()["late"] == 3


def test_unknown_record_returns_404(client):
    assert client.get("/api/attendance/77").status_code == 404
    assert client.delete("/api/attendance/77").status_code == 404


def test_delete_record(client):
    assert client.delete("/api/attendance/2").status_code == 200
    assert client.get("/api/attendance/2").status_code == 404


def test_reports(client):
    top = client.get("/api/reports/top-performers?limit=all").get_json()["performers"]
    trend = client.get("/api/reports/trend").get_json()["trend"]
    dist = client.get("/api/reports/status-distribution").get_json()

    assert [p["name"] for p in top] == ["Ann", "Ben", "Cid"]
    assert trend[0]["attendance_rate"] == 50
    assert dist == {"present": 1, "absent": 1, "late": 0, "excused": 0}


def test_history_endpoint(client):
    history = client.get("/api/participants/1/history").get_json()["history"]

    assert history[0]["session"]["name"] == "Standup"


def test_dashboard_endpoint(client):
    data = client.get("/api/dashboard?today=2024-03-01").get_json()

    assert [c["session"]["name"] for c in data["today_sessions"]] == ["Standup"]
    assert data["overview"]["total_records"] == 2


def test_upstream_failure_returns_503():
    app = create_app(ApiSettings, container=_container(DownStore()))

    resp = app.test_client().get("/api/sessions/1/stats")

    assert resp.status_code == 503
    assert resp.get_json()["retryable"] is True
