from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Session


class SessionDirectory(Protocol):
    """Read-only session lookups. The engine never mutates sessions."""

    def get_by_id(self, session_id: int) -> Optional[Session]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Session]:
        """All sessions in directory order."""

        raise NotImplementedError
