from __future__ import annotations

import json
import os
import sqlite3
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Literal

from careerlens.core.config import settings

RecordKind = Literal["resume", "job", "match", "interview", "tailored"]
RECORD_KINDS: tuple[str, ...] = ("resume", "job", "match", "interview", "tailored")

_conn: sqlite3.Connection | None = None
_conn_lock = threading.Lock()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _get_connection() -> sqlite3.Connection:
    global _conn
    with _conn_lock:
        if _conn is not None:
            return _conn

        db_path = settings.records_db_path
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        _conn = sqlite3.connect(
            db_path,
            check_same_thread=False,
            timeout=5,
            isolation_level=None,
        )
        _conn.execute("PRAGMA journal_mode=WAL;")
        _conn.execute("PRAGMA synchronous=NORMAL;")
        _conn.execute("PRAGMA busy_timeout=5000;")
        _conn.execute(
            """
            CREATE TABLE IF NOT EXISTS analysis_records (
                record_id TEXT PRIMARY KEY,
                kind TEXT NOT NULL,
                user_id TEXT NOT NULL,
                payload_json TEXT NOT NULL,
                created_at TEXT NOT NULL
            );
            """
        )
        _conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_analysis_records_history
            ON analysis_records (kind, user_id, created_at);
            """
        )
        return _conn


def init_db() -> None:
    _get_connection()


def _check_kind(kind: str) -> None:
    if kind not in RECORD_KINDS:
        raise ValueError(f"Unknown record kind '{kind}'")


def _row_to_record(row: tuple) -> dict[str, Any]:
    payload = json.loads(row[2]) if row[2] else {}
    payload["id"] = row[0]
    payload["userId"] = row[1]
    payload["createdAt"] = row[3]
    return payload


def create_record(*, kind: RecordKind, user_id: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Store an immutable JSON payload and return it with id, userId and createdAt set."""
    _check_kind(kind)
    conn = _get_connection()
    record_id = uuid.uuid4().hex
    created_at = _utc_now().isoformat()
    body = {key: value for key, value in payload.items() if key not in {"id", "userId", "createdAt"}}
    payload_json = json.dumps(body, ensure_ascii=False)

    with _conn_lock:
        conn.execute(
            """
            INSERT INTO analysis_records (record_id, kind, user_id, payload_json, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (record_id, kind, user_id, payload_json, created_at),
        )
    return {**body, "id": record_id, "userId": user_id, "createdAt": created_at}


def get_record(*, kind: RecordKind, record_id: str, user_id: str) -> dict[str, Any] | None:
    _check_kind(kind)
    conn = _get_connection()
    with _conn_lock:
        cur = conn.execute(
            """
            SELECT record_id, user_id, payload_json, created_at
            FROM analysis_records
            WHERE kind = ? AND record_id = ? AND user_id = ?
            """,
            (kind, record_id, user_id),
        )
        row = cur.fetchone()
    return _row_to_record(row) if row else None


def latest_record(*, kind: RecordKind, user_id: str) -> dict[str, Any] | None:
    records = list_records(kind=kind, user_id=user_id, limit=1)
    return records[0] if records else None


def list_records(*, kind: RecordKind, user_id: str, limit: int | None = None) -> list[dict[str, Any]]:
    """History for one user, newest first."""
    _check_kind(kind)
    conn = _get_connection()
    max_rows = limit if limit is not None else settings.history_limit
    with _conn_lock:
        cur = conn.execute(
            """
            SELECT record_id, user_id, payload_json, created_at
            FROM analysis_records
            WHERE kind = ? AND user_id = ?
            ORDER BY created_at DESC, rowid DESC
            LIMIT ?
            """,
            (kind, user_id, max_rows),
        )
        rows = cur.fetchall()
    return [_row_to_record(row) for row in rows]


def delete_record(*, kind: RecordKind, record_id: str, user_id: str) -> bool:
    _check_kind(kind)
    conn = _get_connection()
    with _conn_lock:
        cur = conn.execute(
            "DELETE FROM analysis_records WHERE kind = ? AND record_id = ? AND user_id = ?",
            (kind, record_id, user_id),
        )
    return bool(cur.rowcount)


def clear_records() -> None:
    conn = _get_connection()
    with _conn_lock:
        conn.execute("DELETE FROM analysis_records")
