from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

from ..normalizer.record_normalizer import normalize_participant
from .model import Participant
from .repository import ParticipantDirectory


class InMemoryParticipantDirectory(ParticipantDirectory):
    def __init__(self, rows: Iterable[Mapping[str, Any]] = ()):
        self._participants = [normalize_participant(r) for r in rows]

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        for p in self._participants:
            if p.id == participant_id:
                return p
        return None

    def list_all(self) -> Sequence[Participant]:
        return list(self._participants)
