from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..attendance.ledger import AttendanceLedger
from ..common.validators import require_positive_id, require_status
from ..core.enums import AttendanceStatus
from ..core.exceptions import RecordNotFound
from ..sessions.repository import SessionDirectory
from .model import BulkFailure, BulkResult

logger = logging.getLogger(__name__)


class BulkAttendanceCoordinator:
    """Apply one status to many participants of a session.

    Each participant gets its own ``upsert``; a failure on one does not stop
    the others (no all-or-nothing transaction).
    """

    def __init__(self, ledger: AttendanceLedger, sessions: Optional[SessionDirectory] = None):
        self._ledger = ledger
        self._sessions = sessions

    def apply_bulk(
        self,
        session_id: int,
        participant_ids: Iterable[int],
        status: AttendanceStatus | str,
        *,
        notes: str = "",
    ) -> BulkResult:
        session_id = require_positive_id(session_id, "session_id")
        status = require_status(status)
        if self._sessions is not None and self._sessions.get_by_id(session_id) is None:
            raise RecordNotFound("session", session_id, operation="apply_bulk")

        result = BulkResult()
        for participant_id in participant_ids:
            try:
                self._ledger.upsert(session_id, int(participant_id), status, notes)
            except Exception as exc:
                logger.warning(
                    "Bulk %s failed for session=%s participant=%s: %s",
                    status.value, session_id, participant_id, exc,
                )
                result.failed.append(BulkFailure(participant_id=participant_id, error=str(exc)))
            else:
                result.succeeded.append(participant_id)

        logger.info(
            "Bulk %s on session=%s: %d succeeded, %d failed",
            status.value, session_id, len(result.succeeded), len(result.failed),
        )
        return result
