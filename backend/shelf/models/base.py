"""Generic per-user CRUD over a flat-file store.

``OwnedRecordModel`` implements the contract every user-owned entity shares:
list and fetch filtered by owner, create with generated id and timestamps,
shallow-merge update and delete. Entity modules subclass it and add their
rules through the ``on_create`` / ``on_update`` / ``on_delete`` hooks.

Lookups, updates and deletes signal "not found" with ``None`` / ``False``.
Rule violations raise ``shelf.exceptions.ValidationError``.
"""

import logging
import uuid
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from ..database import JsonStore, Storage
from ..schemas import OwnedRecord, utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=OwnedRecord)
R = TypeVar("R", bound=BaseModel)

IMMUTABLE_FIELDS = {"id", "user_id", "created_at", "updated_at"}


def new_id() -> str:
    return str(uuid.uuid4())


def merge(record: R, patch: Dict[str, Any]) -> R:
    """Return a validated copy of ``record`` with ``patch`` laid over it."""
    data = record.model_dump()
    data.update(patch)
    data["updated_at"] = utc_now()
    return type(record).model_validate(data)


def index_of(records: List[T], record_id: str, user_id: str) -> Optional[int]:
    for i, record in enumerate(records):
        if record.id == record_id and record.user_id == user_id:
            return i
    return None


class OwnedRecordModel(Generic[T]):
    record_type: Type[T]
    store_name: str
    label: str = "record"

    def __init__(self, storage: Storage):
        self.storage = storage
        self.store: JsonStore[T] = getattr(storage, self.store_name)

    def _patch(self, data: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
        if isinstance(data, BaseModel):
            patch = data.model_dump(exclude_unset=True)
        else:
            patch = dict(data)
        fields = self.record_type.model_fields
        # Explicit nulls may clear optional fields but never required ones
        return {
            k: v for k, v in patch.items()
            if k in fields and k not in IMMUTABLE_FIELDS
            and (v is not None or not fields[k].is_required())
        }

    async def get_all(self, user_id: str) -> List[T]:
        return [r for r in await self.store.load() if r.user_id == user_id]

    async def get_by_id(self, record_id: str, user_id: str) -> Optional[T]:
        for record in await self.get_all(user_id):
            if record.id == record_id:
                return record
        return None

    async def create(self, data: BaseModel, user_id: str, **fields: Any) -> T:
        now = utc_now()
        values = {"id": new_id(), "user_id": user_id, "created_at": now, "updated_at": now}
        values.update(data.model_dump())
        values.update(fields)
        record = self.record_type.model_validate(values)

        async with self.store.transaction() as records:
            record = self.on_create(record, records)
            records.append(record)

        logger.info(f"Created {self.label} {record.id} for user {user_id}")
        return record

    async def update(
        self, record_id: str, data: Union[BaseModel, Dict[str, Any]], user_id: str, **fields: Any
    ) -> Optional[T]:
        patch = self._patch(data)
        patch.update(fields)

        async with self.store.transaction() as records:
            index = index_of(records, record_id, user_id)
            if index is None:
                return None
            current = records[index]
            updated = self.on_update(current, merge(current, patch), patch, records)
            records[index] = updated

        return updated

    async def delete(self, record_id: str, user_id: str) -> bool:
        async with self.store.transaction() as records:
            index = index_of(records, record_id, user_id)
            if index is None:
                return False
            removed = records.pop(index)

        await self.on_delete(removed)
        logger.info(f"Deleted {self.label} {record_id} for user {user_id}")
        return True

    # Hooks

    def on_create(self, record: T, records: List[T]) -> T:
        """Apply creation rules; ``records`` is every stored record of the type."""
        return record

    def on_update(self, current: T, updated: T, patch: Dict[str, Any], records: List[T]) -> T:
        return updated

    async def on_delete(self, record: T) -> None:
        """Best-effort cleanup of files associated with a removed record."""
