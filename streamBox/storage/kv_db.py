# kv_db.py
"""Persistent key-value store backing the session, favorites and ratings.

One SQLite table, string keys to string values. Callers serialize their own
records (JSON); this layer only knows text.
"""
from __future__ import annotations
import sqlite3, threading, atexit
from pathlib import Path

from streamBox.settings import DATABASE_PATH

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""

# ─── internal state ─────────────────────────────────────────────────────
_thread_local = threading.local()   # holds .conn and .path per thread
_init_lock    = threading.Lock()    # serialize first-time schema init
_db_path: Path = Path(DATABASE_PATH)
_schema_done: set[Path] = set()     # paths whose schema already ran
_opened: list[sqlite3.Connection] = []

# ─── internal helpers ────────────────────────────────────────────────────
def _new_connection() -> sqlite3.Connection:
    """Create a fresh sqlite3.Connection and run schema SQL once per path."""
    _db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(
        _db_path,
        check_same_thread=True,     # each thread uses its OWN connection
        isolation_level="DEFERRED",
    )
    conn.row_factory = sqlite3.Row

    if _db_path not in _schema_done:
        with _init_lock:
            if _db_path not in _schema_done:
                conn.executescript(_SCHEMA)
                conn.commit()
                _schema_done.add(_db_path)

    _opened.append(conn)
    return conn

# ─── public helpers ──────────────────────────────────────────────────────
def use_database(path: str | Path) -> None:
    """
    Point the store at another SQLite file. Connections already open on
    the current thread are dropped; other threads reconnect on next use.
    """
    global _db_path
    _close_thread_conn()
    _db_path = Path(path)


def database_path() -> Path:
    return _db_path


def connection() -> sqlite3.Connection:
    """
    Return this thread's sqlite3.Connection, creating it on first use or
    after the store was repointed with `use_database`.
    """
    conn = getattr(_thread_local, "conn", None)
    if conn is None or getattr(_thread_local, "path", None) != _db_path:
        _close_thread_conn()
        conn = _new_connection()
        _thread_local.conn = conn
        _thread_local.path = _db_path
    return conn


def attach_thread() -> None:
    """
    Call once at the start of each worker thread before any store helpers
    so the thread owns its own connection.
    """
    connection()


def get_item(key: str) -> str | None:
    row = connection().execute(
        "SELECT value FROM kv_store WHERE key=?", (key,)
    ).fetchone()
    return row["value"] if row else None


def set_item(key: str, value: str) -> None:
    conn = connection()
    conn.execute(
        "INSERT OR REPLACE INTO kv_store(key, value) VALUES(?,?)",
        (key, value),
    )
    conn.commit()


def remove_item(key: str) -> None:
    conn = connection()
    conn.execute("DELETE FROM kv_store WHERE key=?", (key,))
    conn.commit()


def multi_remove(keys: list[str]) -> None:
    """Delete every key in *keys* in one transaction."""
    conn = connection()
    try:
        conn.executemany("DELETE FROM kv_store WHERE key=?", [(k,) for k in keys])
        conn.commit()
    except sqlite3.Error:
        conn.rollback()
        raise


def all_keys() -> list[str]:
    rows = connection().execute("SELECT key FROM kv_store ORDER BY key").fetchall()
    return [r["key"] for r in rows]


def clear() -> None:
    conn = connection()
    conn.execute("DELETE FROM kv_store")
    conn.commit()

# ─── cleanup ──────────────────────────────────────────────────────────────
def close() -> None:
    """Close this thread's connection; the next call reconnects."""
    _close_thread_conn()


def _close_thread_conn() -> None:
    conn = getattr(_thread_local, "conn", None)
    if isinstance(conn, sqlite3.Connection):
        conn.close()
        if conn in _opened:
            _opened.remove(conn)
    _thread_local.conn = None
    _thread_local.path = None


@atexit.register
def _close_everything() -> None:
    """Close every connection opened by this process on exit."""
    for conn in list(_opened):
        try:
            conn.close()
        except sqlite3.ProgrammingError:
            # owned by a finished worker thread
            pass
    _opened.clear()
