from __future__ import annotations


def percentage(part: int, whole: int) -> int:
    """Integer percentage of part/whole, rounded half up; 0 when whole is 0."""
    if whole <= 0:
        return 0
    return (part * 200 + whole) // (2 * whole)
