from attendance_ledger.attendance.cycle import STATUS_CYCLE, next_status
from attendance_ledger.core.enums import AttendanceStatus


def test_unmarked_starts_at_present():
    assert next_status(None) == AttendanceStatus.PRESENT


def test_cycle_order():
    assert next_status("present") == AttendanceStatus.ABSENT
    assert next_status(AttendanceStatus.ABSENT) == AttendanceStatus.LATE
    assert next_status("late") == AttendanceStatus.EXCUSED
    assert next_status("excused") == AttendanceStatus.PRESENT


def test_four_steps_return_to_start():
    status = AttendanceStatus.PRESENT
    for _ in range(len(STATUS_CYCLE)):
        status = next_status(status)

    assert status == AttendanceStatus.PRESENT


def test_unrecognized_value_is_treated_as_unmarked():
    assert next_status("") == AttendanceStatus.PRESENT
    assert next_status("unmarked") == AttendanceStatus.PRESENT
