"""Audit trail of builder requests, keyed by custom action."""

import os
import time
from pathlib import Path
from typing import Optional

import aiosqlite


def _get_db_path() -> Path:
    """Get database path, allowing override for tests."""
    return Path(os.getenv("BUILDER_AUDIT_DB_PATH", "/tmp/builder/audit.db"))


async def init_audit_db() -> None:
    """Initialize audit database."""
    db_path = _get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    async with aiosqlite.connect(db_path) as db:
        await db.execute(
            """
            CREATE TABLE IF NOT EXISTS action_audit (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp REAL,
                path TEXT,
                method TEXT,
                client_ip TEXT,
                action TEXT,
                status_code INTEGER,
                violation TEXT,
                error TEXT
            )
            """
        )
        await db.execute(
            "CREATE INDEX IF NOT EXISTS idx_action_audit_action ON action_audit (action)"
        )
        await db.commit()


async def log_request(
    path: str,
    method: str,
    client_ip: str,
    status_code: int,
    error: Optional[str] = None,
    action: Optional[str] = None,
    violation: Optional[str] = None,
) -> None:
    """
    Record one request.

    Args:
        action: Custom action the request registered or invoked, if any
        violation: Violation kind when a payload was rejected
    """
    async with aiosqlite.connect(_get_db_path()) as db:
        await db.execute(
            """
            INSERT INTO action_audit
               (timestamp, path, method, client_ip, action, status_code, violation, error)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (time.time(), path, method, client_ip, action, status_code, violation, error),
        )
        await db.commit()


async def get_recent_logs(limit: int = 100, action: Optional[str] = None) -> list[dict]:
    """Get recent audit entries, newest first, optionally for one action."""
    query = """
        SELECT timestamp, path, method, client_ip, action, status_code, violation, error
           FROM action_audit
    """
    params: tuple = ()
    if action is not None:
        query += " WHERE action = ?"
        params = (action,)
    query += " ORDER BY id DESC LIMIT ?"

    async with aiosqlite.connect(_get_db_path()) as db:
        db.row_factory = aiosqlite.Row
        cursor = await db.execute(query, params + (limit,))
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]
