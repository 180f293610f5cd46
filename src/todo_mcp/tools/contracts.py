"""Input and output contracts for the todo tools.

Argument models are strict (no ``"true"`` for a bool, no ``1`` for a
string) and ignore unknown keys.  Their JSON Schemas are what
``tools/list`` advertises as ``inputSchema``/``outputSchema``.
"""

from __future__ import annotations

from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from todo_mcp.protocols.mcp.models import EmbeddedResource
from todo_mcp.store.models import TodoRecord

TOOL_CREATE = "todo_create"
TOOL_LIST = "todo_list"
TOOL_UPDATE = "todo_update"
TOOL_DELETE = "todo_delete"

# Keys used by the dashboard's script to address each tool.
TOOL_NAMES = MappingProxyType(
    {
        "create": TOOL_CREATE,
        "list": TOOL_LIST,
        "update": TOOL_UPDATE,
        "delete": TOOL_DELETE,
    }
)


def _require_non_blank(value: str) -> str:
    if not value.strip():
        msg = "must not be blank"
        raise ValueError(msg)
    return value


def describe_validation_error(exc: ValidationError) -> str:
    """Turn the first pydantic error into a one-line message for the caller."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "arguments"
    if error["type"] == "missing":
        return f"Missing required field: {field}"
    return f"Invalid field '{field}': {error['msg']}"


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------


class ToolArguments(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")


class CreateTodoArgs(ToolArguments):
    title: str = Field(description="Todo title")
    completed: bool = Field(default=False, description="Whether the todo is completed")

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        return _require_non_blank(value)


class ListTodoArgs(ToolArguments):
    pass


class UpdateTodoArgs(ToolArguments):
    id: str = Field(description="Todo identifier")
    title: str | None = Field(default=None, description="Updated title")
    completed: bool | None = Field(default=None, description="Updated completion state")

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, value: str) -> str:
        return _require_non_blank(value)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str | None) -> str | None:
        return None if value is None else _require_non_blank(value)


class DeleteTodoArgs(ToolArguments):
    id: str = Field(description="Todo identifier to delete")

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, value: str) -> str:
        return _require_non_blank(value)


# ---------------------------------------------------------------------------
# Results: each carries the snapshot it was rendered from plus the UI
# ---------------------------------------------------------------------------


class ToolResultModel(BaseModel):
    todos: list[TodoRecord]
    ui: EmbeddedResource


class TodoResult(ToolResultModel):
    todo: TodoRecord


class TodoListResult(ToolResultModel):
    pass


class TodoDeleteResult(ToolResultModel):
    id: str
    deleted: bool = True
