from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.constants import UNKNOWN_DATE_LABEL


@dataclass(frozen=True)
class Session:
    id: Optional[int]
    name: str
    date: Optional[date]
    type: str
    participant_ids: tuple[int, ...] = field(default_factory=tuple)

    @property
    def date_label(self) -> str:
        return self.date.isoformat() if self.date else UNKNOWN_DATE_LABEL

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date_label,
            "type": self.type,
            "participant_ids": list(self.participant_ids),
        }
