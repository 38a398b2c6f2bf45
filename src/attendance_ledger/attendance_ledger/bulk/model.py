from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BulkFailure:
    participant_id: int
    error: str


@dataclass(frozen=True)
class BulkResult:
    """Per-item outcome of a bulk status change.

    Partial failure is reported here, never raised; callers must check
    ``failed``.
    """

    succeeded: list[int] = field(default_factory=list)
    failed: list[BulkFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict:
        return {
            "succeeded": list(self.succeeded),
            "failed": [{"participant_id": f.participant_id, "error": f.error} for f in self.failed],
        }
