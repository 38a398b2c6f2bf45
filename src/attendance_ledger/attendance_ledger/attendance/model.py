from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Canonical attendance record (one per session/participant pair).

    Identifier fields are None when the raw record carried no value, so that
    "missing" stays distinguishable from a literal 0.
    """

    id: Optional[int]
    session_id: Optional[int]
    participant_id: Optional[int]
    status: Optional[AttendanceStatus]
    timestamp: Optional[datetime] = None
    notes: str = ""

    @property
    def key(self) -> tuple[Optional[int], Optional[int]]:
        return (self.session_id, self.participant_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "session_id": self.session_id,
            "participant_id": self.participant_id,
            "status": self.status.value if self.status else None,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "notes": self.notes,
        }
