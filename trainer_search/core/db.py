"""SQLite database layer for trainer profiles and search run tracking."""

import json
import sqlite3
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

_TRAINERS_TABLE = """
CREATE TABLE IF NOT EXISTS trainer_profiles (
    id               TEXT    PRIMARY KEY,
    display_name     TEXT    NOT NULL,
    specializations  TEXT    NOT NULL DEFAULT '[]',
    experience_years INTEGER NOT NULL DEFAULT 0,
    city             TEXT,
    country          TEXT,
    hourly_rate      REAL,
    is_available     INTEGER NOT NULL DEFAULT 1
);
"""

_SEARCH_RUNS_TABLE = """
CREATE TABLE IF NOT EXISTS search_runs (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    query           TEXT    NOT NULL,
    intent_json     TEXT    NOT NULL,
    fetched_count   INTEGER NOT NULL,
    ranked_count    INTEGER NOT NULL,
    started_at      TEXT    NOT NULL,
    finished_at     TEXT    NOT NULL
);
"""


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(_TRAINERS_TABLE)
    conn.execute(_SEARCH_RUNS_TABLE)
    conn.commit()
    return conn


def upsert_trainer(conn: sqlite3.Connection, trainer: Mapping[str, Any]) -> bool:
    """Insert a trainer row, replacing any existing row with the same id.

    Returns True if a new row was inserted, False if an existing one was replaced.
    """
    trainer_id = str(trainer["id"])
    exists = conn.execute(
        "SELECT 1 FROM trainer_profiles WHERE id = ? LIMIT 1", (trainer_id,),
    ).fetchone() is not None
    conn.execute(
        """
        INSERT OR REPLACE INTO trainer_profiles
            (id, display_name, specializations, experience_years,
             city, country, hourly_rate, is_available)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            trainer_id,
            trainer["display_name"],
            json.dumps(list(trainer.get("specializations") or [])),
            trainer.get("experience_years") or 0,
            trainer.get("city"),
            trainer.get("country"),
            trainer.get("hourly_rate"),
            int(trainer.get("is_available", True)),
        ),
    )
    conn.commit()
    return not exists


def fetch_trainers(
    conn: sqlite3.Connection,
    only_available: bool = True,
    max_rate: float | None = None,
) -> list[dict[str, Any]]:
    """Return trainer rows as plain dicts, optionally pre-filtered.

    Rows with a NULL hourly_rate always pass the max_rate pre-filter.
    """
    sql = "SELECT * FROM trainer_profiles"
    clauses: list[str] = []
    params: list[Any] = []
    if only_available:
        clauses.append("is_available = 1")
    if max_rate is not None:
        clauses.append("(hourly_rate IS NULL OR hourly_rate <= ?)")
        params.append(max_rate)
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    sql += " ORDER BY id"

    rows = conn.execute(sql, params).fetchall()
    result: list[dict[str, Any]] = []
    for row in rows:
        data = dict(row)
        data["specializations"] = _decode_list(data.get("specializations"))
        data["is_available"] = bool(data.get("is_available"))
        result.append(data)
    return result


def insert_search_run(
    conn: sqlite3.Connection,
    query: str,
    intent_json: str,
    fetched_count: int,
    ranked_count: int,
    started_at: datetime,
    finished_at: datetime,
) -> int:
    """Record a completed search. Returns the row ID."""
    cursor = conn.execute(
        """
        INSERT INTO search_runs
            (query, intent_json, fetched_count, ranked_count, started_at, finished_at)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (
            query,
            intent_json,
            fetched_count,
            ranked_count,
            started_at.isoformat(),
            finished_at.isoformat(),
        ),
    )
    conn.commit()
    return cursor.lastrowid or 0


def _decode_list(raw: str | None) -> list[Any]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return []
    return value if isinstance(value, list) else []
