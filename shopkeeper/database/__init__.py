# shopkeeper/database/__init__.py
from __future__ import annotations

import logging
from pathlib import Path
import sqlite3

from .. import config
from ..constants import SCHEMA_VERSION
from . import schema as schema_module
from .errors import StoreError
from .store import RecordStore
from .versioning import get_current_version, set_current_version

_log = logging.getLogger(__name__)

MEMORY = ":memory:"


def get_connection(db_path: Path | str | None = None) -> sqlite3.Connection:
    """
    Returns a sqlite3.Connection with:
      - autocommit mode (isolation_level=None); RecordStore.transaction()
        issues BEGIN/COMMIT explicitly
      - WAL mode for file databases
      - row_factory = sqlite3.Row (so rows behave like dicts and tuples)
    Ensures the schema is applied and the schema version recorded.

    Pass ":memory:" for a throwaway database (tests).
    """
    if db_path is None:
        config.ensure_data_dir()
        db_path = config.DB_PATH
    target = str(db_path)
    if target != MEMORY:
        Path(target).parent.mkdir(parents=True, exist_ok=True)

    try:
        conn = sqlite3.connect(target, isolation_level=None)
        conn.row_factory = sqlite3.Row
        if target != MEMORY:
            conn.execute("PRAGMA journal_mode = WAL;")

        # Always apply the schema (idempotent: uses CREATE IF NOT EXISTS)
        schema_module.init_schema(conn)
        current = get_current_version(conn)
        if current != SCHEMA_VERSION:
            _log.info("schema version %s -> %s (%s)", current, SCHEMA_VERSION, target)
            set_current_version(conn, SCHEMA_VERSION)
    except sqlite3.Error as e:
        raise StoreError(f"Could not open database at {target}: {e}") from e
    return conn


def open_store(db_path: Path | str | None = None) -> RecordStore:
    return RecordStore(get_connection(db_path))


__all__ = [
    "get_connection",
    "open_store",
    "RecordStore",
    "MEMORY",
]
