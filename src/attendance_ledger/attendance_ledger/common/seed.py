from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedData:
    """Raw rows for the in-memory backend, in either record shape."""

    sessions: list[dict] = field(default_factory=list)
    participants: list[dict] = field(default_factory=list)
    attendance: list[dict] = field(default_factory=list)


def load_seed(path: Optional[str | Path]) -> SeedData:
    if not path:
        return SeedData()
    seed_path = Path(path)
    if not seed_path.exists():
        logger.warning("Seed file %s not found; starting empty", seed_path)
        return SeedData()

    with seed_path.open(encoding="utf-8") as fh:
        raw = json.load(fh)
    data = SeedData(
        sessions=list(raw.get("sessions") or []),
        participants=list(raw.get("participants") or []),
        attendance=list(raw.get("attendance") or []),
    )
    logger.info(
        "Loaded seed %s (sessions=%d participants=%d attendance=%d)",
        seed_path, len(data.sessions), len(data.participants), len(data.attendance),
    )
    return data
