import uuid
from datetime import datetime, timezone
from typing import Any

from psycopg2.extras import Json

from droneforge.db.session import get_connection


def create_test_runs_table() -> None:
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS test_runs (
                    id TEXT PRIMARY KEY,
                    test_id TEXT NOT NULL,
                    status TEXT NOT NULL,
                    progress DOUBLE PRECISION NOT NULL DEFAULT 0,
                    params JSONB NOT NULL,
                    result JSONB,
                    error TEXT,
                    created_at TIMESTAMPTZ NOT NULL,
                    updated_at TIMESTAMPTZ NOT NULL
                )
                """
            )


def create_builds_table() -> None:
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS builds (
                    id TEXT PRIMARY KEY,
                    payload JSONB NOT NULL,
                    created_at TIMESTAMPTZ NOT NULL,
                    updated_at TIMESTAMPTZ NOT NULL
                )
                """
            )


def insert_build(payload: dict[str, Any]) -> str:
    build_id = str(uuid.uuid4())
    now = datetime.now(timezone.utc)
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO builds (id, payload, created_at, updated_at)
                VALUES (%s, %s, %s, %s)
                """,
                (build_id, Json(payload), now, now),
            )
    return build_id


def update_build(build_id: str, payload: dict[str, Any]) -> bool:
    now = datetime.now(timezone.utc)
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                UPDATE builds
                SET payload = %s,
                    updated_at = %s
                WHERE id = %s
                """,
                (Json(payload), now, build_id),
            )
            updated = cur.rowcount
    return updated > 0


def fetch_build(build_id: str) -> dict[str, Any] | None:
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT id, payload, created_at, updated_at
                FROM builds
                WHERE id = %s
                """,
                (build_id,),
            )
            row = cur.fetchone()
    if not row:
        return None
    return {
        "id": row[0],
        "payload": row[1],
        "created_at": row[2],
        "updated_at": row[3],
    }


def insert_test_run(test_id: str, params: dict[str, Any]) -> str:
    run_id = str(uuid.uuid4())
    now = datetime.now(timezone.utc)
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO test_runs (id, test_id, status, progress, params, created_at, updated_at)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                """,
                (run_id, test_id, "queued", 0.0, Json(params), now, now),
            )
    return run_id


def finish_test_run(
    run_id: str,
    status: str,
    progress: float | None = None,
    result: dict[str, Any] | None = None,
    error: str | None = None,
) -> bool:
    """Move an active run to a terminal status; False if it already left the active states."""
    now = datetime.now(timezone.utc)
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                UPDATE test_runs
                SET status = %s,
                    progress = COALESCE(%s, progress),
                    result = %s,
                    error = %s,
                    updated_at = %s
                WHERE id = %s AND status IN ('queued', 'running')
                """,
                (
                    status,
                    progress,
                    Json(result) if result is not None else None,
                    error,
                    now,
                    run_id,
                ),
            )
            updated = cur.rowcount
    return updated > 0


def fetch_test_run(run_id: str) -> dict[str, Any] | None:
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT id, test_id, status, progress, params, result, error, created_at, updated_at
                FROM test_runs
                WHERE id = %s
                """,
                (run_id,),
            )
            row = cur.fetchone()
    if not row:
        return None
    return {
        "id": row[0],
        "test_id": row[1],
        "status": row[2],
        "progress": row[3],
        "params": row[4],
        "result": row[5],
        "error": row[6],
        "created_at": row[7],
        "updated_at": row[8],
    }


def advance_test_run(run_id: str, progress: float) -> bool:
    """Record progress for an active run; False once the run is no longer active."""
    now = datetime.now(timezone.utc)
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                UPDATE test_runs
                SET status = 'running',
                    progress = %s,
                    updated_at = %s
                WHERE id = %s AND status IN ('queued', 'running')
                """,
                (progress, now, run_id),
            )
            updated = cur.rowcount
    return updated > 0


def cancel_test_run(run_id: str) -> bool:
    now = datetime.now(timezone.utc)
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                UPDATE test_runs
                SET status = 'cancelled',
                    updated_at = %s
                WHERE id = %s AND status IN ('queued', 'running')
                """,
                (now, run_id),
            )
            updated = cur.rowcount
    return updated > 0
