"""Record store protocol and the in-memory, lock-guarded implementation.

:class:`RecordStore` is the async storage interface used by the tool
handlers.  :class:`InMemoryRecordStore` keeps records in an insertion-ordered
dict guarded by a single :class:`asyncio.Lock`, so concurrent channels
never interleave inside a create/update/delete.

Handlers that must mutate *and* snapshot atomically use
:meth:`InMemoryRecordStore.transaction`::

    async with store.transaction() as txn:
        record = txn.create("Buy milk")
        snapshot = txn.list()
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from todo_mcp.store.models import TodoPatch, TodoRecord

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from contextlib import AbstractAsyncContextManager

logger = logging.getLogger(__name__)


class StoreTransaction:
    """Synchronous view over the store's records, valid while the lock is held."""

    def __init__(self, records: dict[str, TodoRecord]) -> None:
        self._records = records

    def create(self, title: str, completed: bool = False) -> TodoRecord:
        record = TodoRecord(title=title, completed=completed)
        while record.id in self._records:
            record = TodoRecord(title=title, completed=completed)
        self._records[record.id] = record
        logger.debug("Created record %s", record.id)
        return record

    def list(self) -> list[TodoRecord]:
        return list(self._records.values())

    def update(self, record_id: str, patch: TodoPatch) -> TodoRecord | None:
        existing = self._records.get(record_id)
        if existing is None:
            return None
        changes = patch.model_dump(exclude_none=True)
        updated = existing.model_copy(update={**changes, "updated_at": datetime.now(UTC)})
        self._records[record_id] = updated
        logger.debug("Updated record %s (%s)", record_id, ", ".join(changes) or "no fields")
        return updated

    def delete(self, record_id: str) -> bool:
        removed = self._records.pop(record_id, None) is not None
        if removed:
            logger.debug("Deleted record %s", record_id)
        return removed


@runtime_checkable
class RecordStore(Protocol):
    """Async record storage used by the tool handlers."""

    async def create(self, title: str, completed: bool = False) -> TodoRecord:
        """Insert a new record with a freshly allocated id."""
        ...

    async def list(self) -> list[TodoRecord]:
        """Return a snapshot of all records in insertion order."""
        ...

    async def update(self, record_id: str, patch: TodoPatch) -> TodoRecord | None:
        """Merge *patch* onto a record; ``None`` if the id is unknown."""
        ...

    async def delete(self, record_id: str) -> bool:
        """Remove a record; ``False`` if the id is unknown."""
        ...

    def transaction(self) -> AbstractAsyncContextManager[StoreTransaction]:
        """Hold the store lock for a group of operations."""
        ...


class InMemoryRecordStore:
    """Dict-backed :class:`RecordStore`. Nothing survives a restart."""

    def __init__(self) -> None:
        self._records: dict[str, TodoRecord] = {}
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[StoreTransaction]:
        async with self._lock:
            yield StoreTransaction(self._records)

    async def create(self, title: str, completed: bool = False) -> TodoRecord:
        async with self.transaction() as txn:
            return txn.create(title, completed)

    async def list(self) -> list[TodoRecord]:
        async with self.transaction() as txn:
            return txn.list()

    async def update(self, record_id: str, patch: TodoPatch) -> TodoRecord | None:
        async with self.transaction() as txn:
            return txn.update(record_id, patch)

    async def delete(self, record_id: str) -> bool:
        async with self.transaction() as txn:
            return txn.delete(record_id)

    def __len__(self) -> int:
        return len(self._records)
