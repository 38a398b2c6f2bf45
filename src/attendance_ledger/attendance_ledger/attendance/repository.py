from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

RawRecord = Mapping[str, Any]


class AttendanceStore(Protocol):
    """Record-store interface consumed by the ledger.

    Rows are returned raw (legacy or normalized shape); the ledger runs them
    through the normalizer. Implementations raise UpstreamUnavailable when
    the backend cannot be reached.
    """

    def fetch_all(self) -> Sequence[RawRecord]:
        raise NotImplementedError

    def fetch_by_session(self, session_id: int) -> Sequence[RawRecord]:
        raise NotImplementedError

    def fetch_by_participant(self, participant_id: int) -> Sequence[RawRecord]:
        raise NotImplementedError

    def fetch_one(self, record_id: int) -> Optional[RawRecord]:
        raise NotImplementedError

    def insert(
        self,
        *,
        session_id: int,
        participant_id: int,
        status: str,
        timestamp: datetime,
        notes: str = "",
    ) -> RawRecord:
        """Create a row; the store assigns the identifier."""

        raise NotImplementedError

    def update(
        self,
        record_id: int,
        *,
        status: str,
        timestamp: datetime,
        notes: str = "",
    ) -> Optional[RawRecord]:
        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError
