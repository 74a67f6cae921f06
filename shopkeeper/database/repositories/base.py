from __future__ import annotations

from dataclasses import asdict, fields, replace
from typing import Any, Generic, TypeVar
import uuid

from ...utils.helpers import now_iso
from ..errors import NotFoundError
from ..store import RecordStore

T = TypeVar("T")


class RecordRepo(Generic[T]):
    """
    Shared CRUD over one record store.

    Subclasses set STORE/ENTITY/MODEL and may override _validate() and
    _from_record() (for nested values). Every write returns the entity as
    read back from the store, so the store stays the source of truth.
    """

    STORE: str = ""
    ENTITY: str = ""
    MODEL: type = object

    def __init__(self, store: RecordStore):
        self.store = store

    # ---- Internal helpers -------------------------------------------------

    def _validate(self, entity: T) -> None:
        pass

    def _to_record(self, entity: T) -> dict[str, Any]:
        return asdict(entity)

    def _from_record(self, record: dict[str, Any]) -> T:
        # ignore keys this version of the model does not know about
        names = {f.name for f in fields(self.MODEL)}
        return self.MODEL(**{k: v for k, v in record.items() if k in names})

    def _many(self, records: list[dict]) -> list[T]:
        return [self._from_record(r) for r in records]

    # ---- Queries ----------------------------------------------------------

    def get(self, entity_id: str) -> T | None:
        record = self.store.get(self.STORE, entity_id)
        return self._from_record(record) if record is not None else None

    def require(self, entity_id: str) -> T:
        found = self.get(entity_id)
        if found is None:
            raise NotFoundError(self.ENTITY, entity_id)
        return found

    def list_all(self) -> list[T]:
        return self._many(self.store.get_all(self.STORE))

    # ---- Mutations --------------------------------------------------------

    def create(self, entity: T) -> T:
        """Assign a new id, stamp created/updated time, persist."""
        self._validate(entity)
        now = now_iso()
        entity = replace(entity, id=str(uuid.uuid4()), created_at=now, updated_at=now)
        self.store.create(self.STORE, self._to_record(entity))
        return self.require(entity.id)

    def update(self, entity: T) -> T:
        """Stamp updated time and write the full record. created_at is left as given."""
        self._validate(entity)
        if not entity.id or self.store.get(self.STORE, entity.id) is None:
            raise NotFoundError(self.ENTITY, entity.id)
        entity = replace(entity, updated_at=now_iso())
        self.store.put(self.STORE, self._to_record(entity))
        return self.require(entity.id)

    def delete(self, entity_id: str) -> None:
        """Idempotent: deleting an unknown id is not an error."""
        self.store.delete(self.STORE, entity_id)

    def restore(self, entity: T) -> T:
        """Write an entity verbatim, keeping its id and timestamps (imports)."""
        self._validate(entity)
        if not entity.id:
            entity = replace(entity, id=str(uuid.uuid4()))
        self.store.put(self.STORE, self._to_record(entity))
        return self.require(entity.id)
