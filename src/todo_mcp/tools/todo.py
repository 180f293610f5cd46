"""Todo tool handlers and the registry that exposes them.

Each handler mutates or reads the store and takes its snapshot inside the
same :meth:`~todo_mcp.store.InMemoryRecordStore.transaction`, then renders
the dashboard from that snapshot.  The UI attached to a result therefore
always shows the store exactly as the call left it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from todo_mcp.protocols.errors import RecordNotFoundError
from todo_mcp.store.models import TodoPatch
from todo_mcp.tools.contracts import (
    TOOL_CREATE,
    TOOL_DELETE,
    TOOL_LIST,
    TOOL_NAMES,
    TOOL_UPDATE,
    CreateTodoArgs,
    DeleteTodoArgs,
    ListTodoArgs,
    TodoDeleteResult,
    TodoListResult,
    TodoResult,
    UpdateTodoArgs,
)
from todo_mcp.tools.registry import RegisteredTool, ToolRegistry
from todo_mcp.ui.renderer import render_embedded

if TYPE_CHECKING:
    from todo_mcp.store.memory import RecordStore


class TodoTools:
    """The four todo tools, bound to one record store."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    async def create(self, args: CreateTodoArgs) -> TodoResult:
        async with self._store.transaction() as txn:
            record = txn.create(args.title, args.completed)
            snapshot = txn.list()
        return TodoResult(todo=record, todos=snapshot, ui=render_embedded(snapshot, tools=TOOL_NAMES))

    async def list(self, args: ListTodoArgs) -> TodoListResult:
        async with self._store.transaction() as txn:
            snapshot = txn.list()
        return TodoListResult(todos=snapshot, ui=render_embedded(snapshot, tools=TOOL_NAMES))

    async def update(self, args: UpdateTodoArgs) -> TodoResult:
        patch = TodoPatch(title=args.title, completed=args.completed)
        async with self._store.transaction() as txn:
            record = txn.update(args.id, patch)
            if record is None:
                raise RecordNotFoundError(args.id)
            snapshot = txn.list()
        return TodoResult(todo=record, todos=snapshot, ui=render_embedded(snapshot, tools=TOOL_NAMES))

    async def delete(self, args: DeleteTodoArgs) -> TodoDeleteResult:
        async with self._store.transaction() as txn:
            if not txn.delete(args.id):
                raise RecordNotFoundError(args.id)
            snapshot = txn.list()
        return TodoDeleteResult(id=args.id, todos=snapshot, ui=render_embedded(snapshot, tools=TOOL_NAMES))


def build_registry(store: RecordStore) -> ToolRegistry:
    """Build the tool catalog for *store*. Called once at startup."""
    tools = TodoTools(store)
    return ToolRegistry(
        tools=(
            RegisteredTool.create(
                TOOL_CREATE,
                "Create a todo item",
                arguments=CreateTodoArgs,
                result=TodoResult,
                handler=tools.create,
            ),
            RegisteredTool.create(
                TOOL_LIST,
                "List all todo items",
                arguments=ListTodoArgs,
                result=TodoListResult,
                handler=tools.list,
            ),
            RegisteredTool.create(
                TOOL_UPDATE,
                "Update a todo item",
                arguments=UpdateTodoArgs,
                result=TodoResult,
                handler=tools.update,
            ),
            RegisteredTool.create(
                TOOL_DELETE,
                "Delete a todo item",
                arguments=DeleteTodoArgs,
                result=TodoDeleteResult,
                handler=tools.delete,
            ),
        )
    )
