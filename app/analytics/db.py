from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from app.core.config import settings


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _get_db_path() -> Path:
    return Path(settings.analytics_db_path)


def init_db() -> None:
    if not settings.analytics_enabled:
        return
    db_path = _get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS analysis_runs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                created_at TEXT NOT NULL,
                run_id TEXT NOT NULL,
                owner_id TEXT,
                policy TEXT NOT NULL,
                source_type TEXT,
                similarity_status TEXT NOT NULL,
                status TEXT NOT NULL,
                error_code TEXT,
                score INTEGER,
                latency_ms INTEGER
            )
            """
        )
        conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_analysis_runs_created_at
            ON analysis_runs (created_at)
            """
        )
        conn.commit()


def log_analysis_run(
    *,
    run_id: str,
    owner_id: str | None,
    policy: str,
    source_type: str | None,
    similarity_status: str,
    status: str,
    error_code: str | None = None,
    score: int | None = None,
    latency_ms: int | None = None,
) -> None:
    if not settings.analytics_enabled:
        return
    init_db()
    with sqlite3.connect(_get_db_path()) as conn:
        conn.execute(
            """
            INSERT INTO analysis_runs (
                created_at, run_id, owner_id, policy, source_type, similarity_status,
                status, error_code, score, latency_ms
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                _utc_now(),
                run_id,
                owner_id,
                policy,
                source_type,
                similarity_status,
                status,
                error_code,
                score,
                latency_ms,
            ),
        )
        conn.commit()


def purge_old_records() -> dict[str, int]:
    if not settings.analytics_enabled:
        return {"analysis_runs": 0}

    init_db()
    retention = max(1, int(settings.analytics_retention_days))
    with sqlite3.connect(_get_db_path()) as conn:
        cur = conn.execute(
            "DELETE FROM analysis_runs WHERE created_at < ?",
            (_retention_cutoff(retention),),
        )
        deleted = int(cur.rowcount or 0)
        conn.commit()
    return {"analysis_runs": deleted}


def _retention_cutoff(days: int) -> str:
    return (datetime.now(timezone.utc) - timedelta(days=days)).isoformat()


def get_summary() -> dict[str, Any]:
    if not settings.analytics_enabled:
        return {"enabled": False}
    init_db()
    with sqlite3.connect(_get_db_path()) as conn:
        total = conn.execute("SELECT COUNT(*) FROM analysis_runs").fetchone()[0]
        succeeded = conn.execute(
            "SELECT COUNT(*) FROM analysis_runs WHERE status = 'success'"
        ).fetchone()[0]
        average = conn.execute(
            "SELECT AVG(score) FROM analysis_runs WHERE status = 'success'"
        ).fetchone()[0]
        by_policy_rows = conn.execute(
            "SELECT policy, COUNT(*) FROM analysis_runs GROUP BY policy ORDER BY policy"
        ).fetchall()
        failures_rows = conn.execute(
            """
            SELECT error_code, COUNT(*)
            FROM analysis_runs
            WHERE status != 'success' AND error_code IS NOT NULL
            GROUP BY error_code
            ORDER BY COUNT(*) DESC
            """
        ).fetchall()
    return {
        "enabled": True,
        "total": total,
        "succeeded": succeeded,
        "average_score": round(float(average), 1) if average is not None else None,
        "by_policy": {policy: count for policy, count in by_policy_rows},
        "failures": {code: count for code, count in failures_rows},
    }
