from __future__ import annotations

from datetime import datetime, timezone

import pytest


class StepClock:
    """Deterministic clock: every call advances one minute."""

    def __init__(self, start: datetime):
        self._current = start
        self.calls = 0

    def __call__(self) -> datetime:
        value = self._current
        self.calls += 1
        self._current = datetime.fromtimestamp(value.timestamp() + 60, tz=timezone.utc)
        return value


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now) -> StepClock:
    return StepClock(fixed_now)
