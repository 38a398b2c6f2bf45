"""Boundary mapping from raw store/directory rows to canonical records.

Every field may arrive under a legacy bare name (``status``, ``sessionId``)
or a normalized backend name (``status_c``, ``session_id_c``). Relation
fields in the normalized shape may be an object exposing ``Id`` instead of
a raw integer. Resolution order per field:

1. normalized name
2. identifier of a relation object found there
3. legacy name
4. type default ("" for text, None for identifiers/dates)

None of these functions raise; internal code only sees canonical records.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import coerce_date, coerce_datetime
from ..core.enums import AttendanceStatus
from ..participants.model import Participant
from ..sessions.model import Session

_ID_KEYS = ("Id", "id", "ID")
_INT_TOKEN = re.compile(r"[+-]?\d+")


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


def pick(raw: Mapping[str, Any], normalized: str, legacy: str) -> Any:
    """Raw value under the normalized name, else under the legacy name."""
    value = raw.get(normalized)
    if _is_set(value):
        return value
    value = raw.get(legacy)
    if _is_set(value):
        return value
    return None


def to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        token = value.strip()
        if _INT_TOKEN.fullmatch(token):
            return int(token)
    return None


def relation_id(raw: Mapping[str, Any], normalized: str, legacy: str) -> Optional[int]:
    """Identifier of a relation field, unwrapping ``{"Id": ...}`` objects."""
    for name in (normalized, legacy):
        value = raw.get(name)
        if isinstance(value, Mapping):
            for key in _ID_KEYS:
                number = to_int(value.get(key))
                if number is not None:
                    return number
            continue
        number = to_int(value)
        if number is not None:
            return number
    return None


def record_id(raw: Mapping[str, Any]) -> Optional[int]:
    for key in _ID_KEYS:
        number = to_int(raw.get(key))
        if number is not None:
            return number
    return None


def text(raw: Mapping[str, Any], normalized: str, legacy: str) -> str:
    value = pick(raw, normalized, legacy)
    return "" if value is None else str(value)


def parse_roster(value: Any) -> tuple[int, ...]:
    """Roster from a native sequence or a comma-joined string.

    Non-numeric tokens are dropped silently.
    """
    if value is None:
        return ()
    tokens: Iterable[Any]
    if isinstance(value, str):
        tokens = value.split(",")
    elif isinstance(value, (list, tuple)):
        tokens = value
    else:
        tokens = (value,)

    roster = []
    for token in tokens:
        number = to_int(token)
        if number is not None:
            roster.append(number)
    return tuple(roster)


def _as_mapping(raw: Any) -> Mapping[str, Any]:
    return raw if isinstance(raw, Mapping) else {}


def normalize_attendance(raw: Any) -> AttendanceRecord:
    raw = _as_mapping(raw)
    return AttendanceRecord(
        id=record_id(raw),
        session_id=relation_id(raw, "session_id_c", "sessionId"),
        participant_id=relation_id(raw, "participant_id_c", "participantId"),
        status=AttendanceStatus.parse(pick(raw, "status_c", "status")),
        timestamp=coerce_datetime(pick(raw, "timestamp_c", "timestamp")),
        notes=text(raw, "notes_c", "notes"),
    )


def normalize_session(raw: Any) -> Session:
    raw = _as_mapping(raw)
    return Session(
        id=record_id(raw),
        name=text(raw, "Name", "name"),
        date=coerce_date(pick(raw, "date_c", "date")),
        type=text(raw, "type_c", "type"),
        participant_ids=parse_roster(pick(raw, "participant_ids_c", "participantIds")),
    )


def normalize_participant(raw: Any) -> Participant:
    raw = _as_mapping(raw)
    return Participant(
        id=record_id(raw),
        name=text(raw, "Name", "name"),
        email=text(raw, "email_c", "email"),
        department=text(raw, "department_c", "department"),
    )
