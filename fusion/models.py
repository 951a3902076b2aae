"""Lightweight database helpers for storing fused and custom records."""
from __future__ import annotations

import json
import os
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional
from urllib.parse import unquote, urlparse

from .entities import CustomRecord, FusedRecord, HistoryRecord

RECORD_RETENTION = timedelta(days=365)
RECORD_TYPES = ("fused", "custom")


class DatabaseSession:
    """Minimal DB-API session wrapper."""

    def __init__(self, connection) -> None:
        self.connection = connection

    def execute(self, sql: str, params: tuple = ()):
        cursor = self.connection.cursor()
        cursor.execute(sql, params)
        return cursor

    def fetchone(self, sql: str, params: tuple = ()):
        cursor = self.execute(sql, params)
        row = cursor.fetchone()
        cursor.close()
        return row

    def fetchall(self, sql: str, params: tuple = ()):
        cursor = self.execute(sql, params)
        rows = cursor.fetchall()
        cursor.close()
        return rows

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()

    def close(self) -> None:
        self.connection.close()


class SessionFactory:
    def __init__(self, url: str) -> None:
        self.url = url

    def __call__(self) -> DatabaseSession:
        return DatabaseSession(create_connection(self.url))


_engine_lock = threading.Lock()
_database_url: Optional[str] = None
_session_factory: Optional[SessionFactory] = None


# ---------------------------------------------------------------------------

def _default_database_url() -> str:
    return os.getenv("DATABASE_URL", "sqlite:///./fusion.db")


def configure_engine(url: Optional[str] = None) -> str:
    """Configure database access using the provided URL."""

    global _database_url, _session_factory
    with _engine_lock:
        _database_url = url or _default_database_url()
        parsed = urlparse(_database_url)
        if not (parsed.scheme.startswith("sqlite") or parsed.scheme == ""):
            raise ValueError(f"Unsupported database scheme: {parsed.scheme}")
        _session_factory = SessionFactory(_database_url)
    run_migrations()
    return _database_url


def create_connection(url: str):
    parsed = urlparse(url)
    path = unquote(parsed.path or parsed.netloc or ":memory:")
    db_path = path if path.startswith("/") or path == ":memory:" else os.path.abspath(path)
    connection = sqlite3.connect(db_path, check_same_thread=False)
    connection.row_factory = sqlite3.Row
    return connection


def get_session_factory() -> SessionFactory:
    if _session_factory is None:
        configure_engine()
    assert _session_factory is not None
    return _session_factory


@contextmanager
def session_scope(session_factory: Optional[SessionFactory] = None):
    factory = session_factory or get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# ---------------------------------------------------------------------------

def run_migrations() -> None:
    session = get_session_factory()()
    try:
        session.execute(
            """
            CREATE TABLE IF NOT EXISTS records (
                id VARCHAR(36) PRIMARY KEY,
                type VARCHAR(16) NOT NULL,
                data TEXT NOT NULL,
                timestamp TEXT NOT NULL,
                expires_at TEXT NOT NULL
            )
            """
        )
        session.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_records_timestamp
            ON records (timestamp)
            """
        )
        session.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_records_expires_at
            ON records (expires_at)
            """
        )
        session.commit()
    finally:
        session.close()


# ---------------------------------------------------------------------------

def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _expires_at() -> str:
    return (datetime.now(timezone.utc) + RECORD_RETENTION).isoformat()


def _sort_key(timestamp: str) -> str:
    """Render a stored timestamp as UTC ISO text so it sorts chronologically."""
    try:
        moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat()


def _insert_record(session: DatabaseSession, record_id: str, record_type: str, data: Any, timestamp: str) -> None:
    purge_expired(session)
    session.execute(
        """
        INSERT OR REPLACE INTO records (id, type, data, timestamp, expires_at)
        VALUES (?, ?, ?, ?, ?)
        """,
        (record_id, record_type, json.dumps(data), _sort_key(timestamp), _expires_at()),
    )


def save_fused_record(session: DatabaseSession, record: FusedRecord) -> None:
    _insert_record(session, record.id, "fused", record.as_dict(), record.fused_at)


def save_custom_record(session: DatabaseSession, record: CustomRecord) -> None:
    _insert_record(session, record.id, "custom", record.as_dict(), record.created_at)


def _history_from_row(row) -> HistoryRecord:
    return HistoryRecord(
        id=row["id"],
        type=row["type"],
        data=json.loads(row["data"]),
        timestamp=row["timestamp"],
    )


def list_history(session: DatabaseSession, page: int = 1, limit: int = 10) -> List[HistoryRecord]:
    """Return one page of stored records, newest first."""
    rows = session.fetchall(
        """
        SELECT id, type, data, timestamp FROM records
        WHERE type IN (?, ?) AND expires_at > ?
        ORDER BY timestamp DESC, id
        LIMIT ? OFFSET ?
        """,
        (*RECORD_TYPES, _utcnow_iso(), limit, (page - 1) * limit),
    )
    return [_history_from_row(row) for row in rows]


def count_records(session: DatabaseSession) -> int:
    row = session.fetchone(
        "SELECT COUNT(*) AS cnt FROM records WHERE expires_at > ?",
        (_utcnow_iso(),),
    )
    return int(row["cnt"])


def purge_expired(session: DatabaseSession) -> int:
    """Delete records past their retention and return how many went."""
    cursor = session.execute("DELETE FROM records WHERE expires_at <= ?", (_utcnow_iso(),))
    return cursor.rowcount


__all__ = [
    "DatabaseSession",
    "SessionFactory",
    "configure_engine",
    "count_records",
    "get_session_factory",
    "list_history",
    "purge_expired",
    "run_migrations",
    "save_custom_record",
    "save_fused_record",
    "session_scope",
]
