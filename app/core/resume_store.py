from __future__ import annotations

import json
import os
import secrets
import sqlite3
import threading
from datetime import datetime, timezone
from typing import Any

from app.core.config import settings
from app.core.errors import PersistenceError
from app.schemas.analysis import ResumeAssessment, ResumeRecord

_conn: sqlite3.Connection | None = None
_conn_lock = threading.Lock()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _get_connection() -> sqlite3.Connection:
    global _conn
    with _conn_lock:
        if _conn is not None:
            return _conn

        db_path = settings.resume_db_path
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
            CREATE TABLE IF NOT EXISTS resume_analyses (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                id TEXT NOT NULL UNIQUE,
                owner_id TEXT NOT NULL,
                file_name TEXT NOT NULL,
                score INTEGER NOT NULL,
                analysis_json TEXT NOT NULL,
                created_at TEXT NOT NULL
            );
            """
        )
        _conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_resume_analyses_owner
            ON resume_analyses (owner_id, seq);
            """
        )
        return _conn


def init_resume_store() -> None:
    _get_connection()


def _row_to_record(row: tuple[Any, ...]) -> ResumeRecord:
    return ResumeRecord(
        id=row[0],
        owner_id=row[1],
        file_name=row[2],
        score=int(row[3]),
        analysis=ResumeAssessment.model_validate(json.loads(row[4])),
        created_at=datetime.fromisoformat(row[5]),
    )


def save_resume_analysis(
    *,
    owner_id: str,
    file_name: str,
    score: int,
    assessment: ResumeAssessment,
) -> str:
    record_id = secrets.token_urlsafe(12)
    payload_json = json.dumps(assessment.model_dump(mode="json", by_alias=True), ensure_ascii=False)

    try:
        conn = _get_connection()
        with _conn_lock:
            conn.execute(
                """
                INSERT INTO resume_analyses (
                    id, owner_id, file_name, score, analysis_json, created_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    record_id,
                    owner_id,
                    file_name,
                    int(score),
                    payload_json,
                    _utc_now().isoformat(),
                ),
            )
    except sqlite3.Error as exc:
        raise PersistenceError(str(exc)) from exc
    return record_id


def list_resume_analyses(owner_id: str, limit: int = 50) -> list[ResumeRecord]:
    conn = _get_connection()
    with _conn_lock:
        cur = conn.execute(
            """
            SELECT id, owner_id, file_name, score, analysis_json, created_at
            FROM resume_analyses
            WHERE owner_id = ?
            ORDER BY seq DESC
            LIMIT ?
            """,
            (owner_id, limit),
        )
        rows = cur.fetchall()
    return [_row_to_record(row) for row in rows]


def get_resume_analysis(owner_id: str, record_id: str) -> ResumeRecord | None:
    conn = _get_connection()
    with _conn_lock:
        cur = conn.execute(
            """
            SELECT id, owner_id, file_name, score, analysis_json, created_at
            FROM resume_analyses
            WHERE owner_id = ? AND id = ?
            """,
            (owner_id, record_id),
        )
        row = cur.fetchone()
    if not row:
        return None
    return _row_to_record(row)


def delete_resume_analysis(owner_id: str, record_id: str) -> bool:
    conn = _get_connection()
    try:
        with _conn_lock:
            cur = conn.execute(
                "DELETE FROM resume_analyses WHERE owner_id = ? AND id = ?",
                (owner_id, record_id),
            )
    except sqlite3.Error as exc:
        raise PersistenceError(str(exc)) from exc
    return bool(cur.rowcount)


def clear_resume_analyses() -> None:
    conn = _get_connection()
    with _conn_lock:
        conn.execute("DELETE FROM resume_analyses")
