from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from .connection import DatabaseConnection


@contextmanager
def transaction(
    conn_factory: DatabaseConnection,
    *,
    isolation_level: Optional[str] = None,
    readonly: bool = False,
):
    """One connection, one explicit transaction: commit on success, rollback on error."""

    conn = conn_factory.connect()
    try:
        conn.start_transaction(isolation_level=isolation_level, readonly=readonly)
        cur = conn.cursor(dictionary=True)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
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


def is_duplicate_key(err: Exception, key_name: Optional[str] = None) -> bool:
    """True for a unique-key violation, optionally on a specific index."""

    if not isinstance(err, mysql.connector.IntegrityError) or err.errno != errorcode.ER_DUP_ENTRY:
        return False
    if key_name is None:
        return True
    return key_name in str(getattr(err, "msg", "") or err)


def like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
