from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceStatus

STATUS_CYCLE: tuple[AttendanceStatus, ...] = (
    AttendanceStatus.PRESENT,
    AttendanceStatus.ABSENT,
    AttendanceStatus.LATE,
    AttendanceStatus.EXCUSED,
)


def next_status(current: Optional[AttendanceStatus | str]) -> AttendanceStatus:
    """Next status in the click-through cycle; unmarked starts at PRESENT."""
    status = AttendanceStatus.parse(current)
    if status is None:
        return STATUS_CYCLE[0]
    return STATUS_CYCLE[(STATUS_CYCLE.index(status) + 1) % len(STATUS_CYCLE)]
