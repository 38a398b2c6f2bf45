from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import UpstreamUnavailable
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, operation: str, dictionary: bool = True):
    """Yield (connection, cursor); commit on success, rollback on error.

    Driver errors surface as UpstreamUnavailable tagged with ``operation``.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.exception("%s: cannot connect to record store", operation)
        raise UpstreamUnavailable(operation, str(exc)) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        logger.exception("%s: record store query failed", operation)
        raise UpstreamUnavailable(operation, str(exc)) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
