"""Record store — the todo records the tools operate on."""

from todo_mcp.store.memory import InMemoryRecordStore, RecordStore, StoreTransaction
from todo_mcp.store.models import TodoPatch, TodoRecord

__all__ = [
    "InMemoryRecordStore",
    "RecordStore",
    "StoreTransaction",
    "TodoPatch",
    "TodoRecord",
]
