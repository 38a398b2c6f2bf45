from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Participant


class ParticipantDirectory(Protocol):
    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Participant]:
        """All participants in directory order (rankings break ties on it)."""

        raise NotImplementedError
