# shopkeeper/database/store.py
"""
Keyed record store with secondary indexes, on top of sqlite3.

Each store (products, customers, sales, expenses) is a table holding the
JSON-encoded record plus one column per secondary index. Records are plain
dicts with a string "id"; repositories convert them to dataclasses.

Contract:
  - get() on a missing id returns None, it never raises.
  - delete() of a missing id is a no-op.
  - Unknown store/index names raise UnknownStoreError: that is a bug in the
    caller, not a runtime condition.
  - sqlite errors surface as StoreError and are not retried.

Writes commit immediately unless they run inside transaction().
"""
from __future__ import annotations

from contextlib import contextmanager
import json
import logging
import sqlite3
from typing import Any, Iterator, Optional

from ..constants import STORE_CUSTOMERS, STORE_EXPENSES, STORE_PRODUCTS, STORE_SALES
from .errors import StoreError, UnknownStoreError

_log = logging.getLogger(__name__)

# store -> {index name -> indexed record field}; the field name is also the column name
INDEXES: dict[str, dict[str, str]] = {
    STORE_PRODUCTS: {"by-category": "category"},
    STORE_CUSTOMERS: {"by-phone": "phone"},
    STORE_SALES: {
        "by-date": "created_at",
        "by-paid": "paid",
        "by-customer": "customer_id",
    },
    STORE_EXPENSES: {
        "by-date": "date",
        "by-category": "category",
    },
}

_MISSING = object()


def _column_value(value: Any) -> Any:
    # sqlite has no boolean type; the paid index stores 0/1
    if isinstance(value, bool):
        return int(value)
    return value


class RecordStore:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    # ---------------------------- helpers ----------------------------

    @staticmethod
    def _columns(store: str) -> list[str]:
        try:
            return list(INDEXES[store].values())
        except KeyError:
            raise UnknownStoreError(f"Unknown store: {store!r}") from None

    @staticmethod
    def _index_column(store: str, index: str) -> str:
        if store not in INDEXES:
            raise UnknownStoreError(f"Unknown store: {store!r}")
        try:
            return INDEXES[store][index]
        except KeyError:
            raise UnknownStoreError(f"Unknown index {index!r} on store {store!r}") from None

    @staticmethod
    def _decode(row: sqlite3.Row | None) -> dict | None:
        return json.loads(row["data"]) if row is not None else None

    def _row_params(self, store: str, record: dict) -> tuple[list[str], list[Any]]:
        if not record.get("id"):
            raise StoreError(f"Record for {store!r} has no id.")
        cols = self._columns(store)
        values = [record["id"]]
        values += [_column_value(record.get(c)) for c in cols]
        values.append(json.dumps(record, ensure_ascii=False, sort_keys=True))
        return ["id", *cols, "data"], values

    def _execute(self, sql: str, params: tuple | list = ()) -> sqlite3.Cursor:
        try:
            return self.conn.execute(sql, params)
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    # ---------------------------- TX helper ----------------------------

    @contextmanager
    def transaction(self) -> Iterator["RecordStore"]:
        """
        Start an IMMEDIATE transaction, commit on success, rollback on error.
        A nested call joins the transaction already in progress.
        """
        if self.conn.in_transaction:
            yield self
            return
        self._execute("BEGIN IMMEDIATE")
        try:
            yield self
        except BaseException:
            # sqlite may already have rolled back on its own (e.g. SQLITE_FULL)
            if self.conn.in_transaction:
                self.conn.execute("ROLLBACK")
            raise
        else:
            self._execute("COMMIT")

    # ---------------------------- reads ----------------------------

    def get(self, store: str, record_id: str) -> Optional[dict]:
        self._columns(store)
        row = self._execute(f"SELECT data FROM {store} WHERE id=?", (record_id,)).fetchone()
        return self._decode(row)

    def get_all(self, store: str) -> list[dict]:
        self._columns(store)
        rows = self._execute(f"SELECT data FROM {store} ORDER BY rowid").fetchall()
        return [self._decode(r) for r in rows]

    def query_by_index(
        self,
        store: str,
        index: str,
        key: Any = _MISSING,
        *,
        lower: Any = None,
        upper: Any = None,
    ) -> list[dict]:
        """
        Equality lookup when `key` is given, otherwise an inclusive range
        [lower, upper] where either bound may be omitted.
        Results are ordered by the indexed value, then insertion order.
        """
        col = self._index_column(store, index)
        where: list[str] = []
        params: list[Any] = []
        if key is not _MISSING:
            if key is None:
                where.append(f"{col} IS NULL")
            else:
                where.append(f"{col} = ?")
                params.append(_column_value(key))
        else:
            if lower is not None:
                where.append(f"{col} >= ?")
                params.append(_column_value(lower))
            if upper is not None:
                where.append(f"{col} <= ?")
                params.append(_column_value(upper))
        sql = f"SELECT data FROM {store}"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += f" ORDER BY {col}, rowid"
        return [self._decode(r) for r in self._execute(sql, params).fetchall()]

    # ---------------------------- writes ----------------------------

    def create(self, store: str, record: dict) -> dict:
        cols, values = self._row_params(store, record)
        marks = ",".join("?" for _ in cols)
        try:
            self.conn.execute(
                f"INSERT INTO {store}({','.join(cols)}) VALUES ({marks})", values
            )
        except sqlite3.IntegrityError as e:
            raise StoreError(f"{store} record {record['id']!r} already exists.") from e
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        _log.debug("created %s/%s", store, record["id"])
        return record

    def put(self, store: str, record: dict) -> dict:
        """Insert or replace the record with the same id."""
        cols, values = self._row_params(store, record)
        marks = ",".join("?" for _ in cols)
        updates = ", ".join(f"{c}=excluded.{c}" for c in cols if c != "id")
        self._execute(
            f"INSERT INTO {store}({','.join(cols)}) VALUES ({marks}) "
            f"ON CONFLICT(id) DO UPDATE SET {updates}",
            values,
        )
        _log.debug("put %s/%s", store, record["id"])
        return record

    def delete(self, store: str, record_id: str) -> None:
        self._columns(store)
        self._execute(f"DELETE FROM {store} WHERE id=?", (record_id,))
        _log.debug("deleted %s/%s", store, record_id)
