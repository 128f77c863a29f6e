"""
RecordStore — Record Service (Business Logic)
==============================================

What:  CRUD over the in-memory collection obtained from the RecordStore.
How:   Each operation loads the full collection, mutates a local list, and
       saves the full collection back. Nothing is cached between calls.
Who:   Called by the record route handlers; holds the injected RecordStore.

Operation Flow:
    ┌──────────┐    ┌──────────────┐    ┌──────────┐
    │  load()  │───▶│ find / merge │───▶│  save()  │
    │ (store)  │    │ append/filter│    │ (store)  │
    └──────────┘    └──────────────┘    └──────────┘

Merge semantics (update):
    {**existing, **fields, "id": <path id>, "updatedAt": <now>}
    Top-level keys only; nested objects and arrays are replaced wholesale.

Concurrency:
    By default two overlapping requests can both load, mutate and save, and
    the later save wins. With serialize_writes=True a single asyncio.Lock
    wraps every load-mutate-save cycle in this process.

Error Handling:
    RecordStoreError subclasses propagate unchanged. Anything else raised
    during an operation is logged and wrapped in UnexpectedError, so every
    failure reaches the client through the same exception handler.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from recordstore.exceptions import (
    NotFoundError,
    PersistenceError,
    RecordStoreError,
    UnexpectedError,
)
from recordstore.models.record import Record, generate_record_id, utc_timestamp
from recordstore.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class RecordService:
    """
    Business logic layer for record operations.

    Responsibilities:
        - list_all(): the whole collection, as stored
        - create(): append a new record with id and createdAt forced
        - update(): shallow-merge into an existing record, id pinned
        - delete(): remove every record with a given id
        - delete_all(): persist an empty collection
    """

    def __init__(self, store: RecordStore, serialize_writes: bool = False):
        self.store = store
        self._lock: Optional[asyncio.Lock] = asyncio.Lock() if serialize_writes else None

    @asynccontextmanager
    async def _operation(self, name: str, mutating: bool = True) -> AsyncIterator[None]:
        """Holds the write lock (when enabled) and wraps unknown errors."""
        try:
            if self._lock is None or not mutating:
                yield
            else:
                async with self._lock:
                    yield
        except RecordStoreError:
            raise
        except Exception as e:
            logger.error("Unexpected error during %s: %s", name, str(e), exc_info=True)
            raise UnexpectedError(
                message=str(e) or type(e).__name__,
                context={"operation": name, "error_type": type(e).__name__},
            ) from e

    async def _persist(self, records: List[Record], failure_message: str) -> None:
        if not await self.store.save(records):
            raise PersistenceError(
                message=failure_message,
                context={"data_file": str(self.store.data_file)},
            )

    async def list_all(self) -> List[Record]:
        async with self._operation("list", mutating=False):
            return await self.store.load()

    async def create(self, fields: Dict[str, Any]) -> Record:
        """
        Append a new record built from the caller's fields.

        `id` is kept when the caller supplies a truthy one, otherwise generated
        as `record_<epoch ms>`. `createdAt` is always set to now. Any other key,
        `updatedAt` included, is stored as sent. Duplicate ids are not checked.

        Raises:
            PersistenceError: the collection could not be saved
        """
        async with self._operation("create"):
            records = await self.store.load()
            record = Record.from_document(
                {
                    **fields,
                    "id": fields.get("id") or generate_record_id(),
                    "createdAt": utc_timestamp(),
                }
            )
            records.append(record)
            await self._persist(records, "Record could not be added")

        logger.info("Record created: %s", record.id)
        return record

    async def update(self, record_id: str, fields: Dict[str, Any]) -> Record:
        """
        Shallow-merge the caller's fields over an existing record.

        The stored `id` stays pinned to `record_id` whatever the body says;
        `updatedAt` is set to now. The body may overwrite `createdAt`. Keys keep
        the stored record's order, new keys are appended.

        Raises:
            NotFoundError: no record has this id
            PersistenceError: the collection could not be saved
        """
        async with self._operation("update"):
            records = await self.store.load()
            index = next(
                (i for i, r in enumerate(records) if r.id == record_id), None
            )
            if index is None:
                raise NotFoundError(resource="record", resource_id=record_id)

            merged = Record.from_document(
                {
                    **records[index].to_document(),
                    **fields,
                    "id": record_id,
                    "updatedAt": utc_timestamp(),
                }
            )
            records[index] = merged
            await self._persist(records, "Record could not be updated")

        logger.info("Record updated: %s", record_id)
        return merged

    async def delete(self, record_id: str) -> None:
        """
        Remove every record whose id equals `record_id`.

        Raises:
            NotFoundError: nothing was removed
            PersistenceError: the collection could not be saved
        """
        async with self._operation("delete"):
            records = await self.store.load()
            remaining = [r for r in records if r.id != record_id]
            if len(remaining) == len(records):
                raise NotFoundError(resource="record", resource_id=record_id)
            await self._persist(remaining, "Record could not be deleted")

        logger.info(
            "Record deleted: %s (%d removed)", record_id, len(records) - len(remaining)
        )

    async def delete_all(self) -> None:
        """Persist an empty collection; succeeds when already empty."""
        async with self._operation("delete_all"):
            await self._persist([], "Records could not be deleted")
        logger.info("All records deleted")
