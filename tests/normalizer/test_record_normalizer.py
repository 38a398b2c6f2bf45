from __future__ import annotations

from datetime import date, datetime, timezone

from attendance_ledger.core.enums import AttendanceStatus
from attendance_ledger.normalizer.record_normalizer import (
    normalize_attendance,
    normalize_participant,
    normalize_session,
    parse_roster,
)


def test_normalized_field_wins_over_legacy():
    rec = normalize_attendance(
        {
            "Id": 7,
            "sessionId": 1,
            "session_id_c": 2,
            "participantId": 10,
            "participant_id_c": 20,
            "status": "absent",
            "status_c": "present",
            "notes": "old",
            "notes_c": "new",
        }
    )

    assert rec.id == 7
    assert rec.session_id == 2
    assert rec.participant_id == 20
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.notes == "new"


def test_legacy_only_record():
    rec = normalize_attendance(
        {
            "Id": 3,
            "sessionId": 4,
            "participantId": 5,
            "status": "late",
            "timestamp": "2024-01-08T09:12:00Z",
            "notes": "Traffic",
        }
    )

    assert (rec.session_id, rec.participant_id) == (4, 5)
    assert rec.status == AttendanceStatus.LATE
    assert rec.timestamp == datetime(2024, 1, 8, 9, 12, tzinfo=timezone.utc)
    assert rec.notes == "Traffic"


def test_relation_objects_yield_their_identifier():
    rec = normalize_attendance(
        {
            "Id": 1,
            "session_id_c": {"Id": 12, "Name": "Training"},
            "participant_id_c": {"Id": 34, "Name": "Alice"},
            "status_c": "excused",
        }
    )

    assert rec.session_id == 12
    assert rec.participant_id == 34


def test_missing_fields_fall_back_to_defaults():
    rec = normalize_attendance({})

    assert rec.id is None
    assert rec.session_id is None
    assert rec.participant_id is None
    assert rec.status is None
    assert rec.timestamp is None
    assert rec.notes == ""


def test_zero_identifier_is_kept_distinct_from_missing():
    rec = normalize_attendance({"Id": 0, "sessionId": 0})

    assert rec.id == 0
    assert rec.session_id == 0
    assert rec.participant_id is None


def test_unknown_status_and_bad_timestamp_do_not_raise():
    rec = normalize_attendance({"status_c": "sleeping", "timestamp_c": "yesterday"})

    assert rec.status is None
    assert rec.timestamp is None


def test_status_is_case_insensitive():
    assert normalize_attendance({"status": " Present "}).status == AttendanceStatus.PRESENT


def test_roster_string_is_split_and_trimmed():
    session = normalize_session({"Id": 1, "participant_ids_c": "3, 7,9"})

    assert session.participant_ids == (3, 7, 9)


def test_roster_string_and_sequence_normalize_the_same():
    from_string = normalize_session({"participant_ids_c": "1,2,3"})
    from_list = normalize_session({"participantIds": [1, 2, 3]})

    assert from_string.participant_ids == from_list.participant_ids == (1, 2, 3)


def test_roster_drops_non_numeric_tokens():
    assert parse_roster("4, abc, ,5,x6") == (4, 5)
    assert parse_roster(["1", 2, None, "z"]) == (1, 2)
    assert parse_roster(None) == ()


def test_session_prefers_normalized_fields():
    session = normalize_session(
        {
            "Id": 2,
            "name": "Legacy name",
            "Name": "Product Training",
            "date": "2023-12-31",
            "date_c": "2024-01-10",
            "type": "Meeting",
            "type_c": "Training",
        }
    )

    assert session.name == "Product Training"
    assert session.date == date(2024, 1, 10)
    assert session.type == "Training"


def test_session_date_accepts_full_timestamp():
    session = normalize_session({"date_c": "2024-02-01T10:30:00Z"})

    assert session.date == date(2024, 2, 1)


def test_session_defaults():
    session = normalize_session({})

    assert session.id is None
    assert session.name == ""
    assert session.date is None
    assert session.type == ""
    assert session.participant_ids == ()


def test_participant_shapes():
    legacy = normalize_participant({"Id": 1, "name": "Alice", "email": "a@x.io", "department": "Eng"})
    normalized = normalize_participant(
        {"Id": 2, "Name": "Bob", "email_c": "b@x.io", "department_c": "Ops", "email": "stale@x.io"}
    )

    assert (legacy.name, legacy.email, legacy.department) == ("Alice", "a@x.io", "Eng")
    assert (normalized.name, normalized.email, normalized.department) == ("Bob", "b@x.io", "Ops")


def test_non_mapping_input_normalizes_to_defaults():
    for raw in (None, "Id=3", 42, ["Id", 1]):
        rec = normalize_attendance(raw)
        assert rec.id is None
        assert rec.session_id is None
        assert rec.status is None
        assert rec.notes == ""

    assert normalize_session(None).participant_ids == ()
    assert normalize_participant(None).name == ""
