# shopkeeper/database/versioning.py
"""
Schema version bookkeeping.

The version lives in SQLite's own `user_version` header field, so a fresh
file reads as 0 and no extra table is needed.
"""
import sqlite3


def get_current_version(conn: sqlite3.Connection) -> int:
    return conn.execute("PRAGMA user_version").fetchone()[0]


def set_current_version(conn: sqlite3.Connection, version: int) -> None:
    if not isinstance(version, int) or isinstance(version, bool) or version < 0:
        raise ValueError(f"Schema version must be a non-negative int, got {version!r}")
    # PRAGMA does not take bound parameters
    conn.execute(f"PRAGMA user_version = {version}")
