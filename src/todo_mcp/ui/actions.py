"""Action messages posted by a rendered dashboard to its hosting surface.

The embedded document and the host-side relay share nothing but this
contract::

    {"type": "tool",   "payload": {"toolName": "todo_list", "params": {}}}
    {"type": "notify", "payload": {"message": "Title is required"}}

:func:`parse_action` never raises: anything that is not a well-formed
``tool`` or ``notify`` action comes back as an :class:`UnknownAction`
carrying the reason, so a misbehaving document cannot break the relay.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError


class ToolActionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tool_name: str = Field(alias="toolName", min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)


class ToolAction(BaseModel):
    """Request that the host replay a tool call."""

    type: Literal["tool"] = "tool"
    payload: ToolActionPayload

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class NotifyPayload(BaseModel):
    message: str


class NotifyAction(BaseModel):
    """Ask the host to surface a message; never triggers a tool call."""

    type: Literal["notify"] = "notify"
    payload: NotifyPayload

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class UnknownAction(BaseModel):
    """Anything the relay does not understand."""

    type: str = ""
    raw: Any = None
    reason: str


Action = Annotated[ToolAction | NotifyAction, Field(discriminator="type")]

_action_adapter: TypeAdapter[ToolAction | NotifyAction] = TypeAdapter(Action)


def tool_action(tool_name: str, params: dict[str, Any] | None = None) -> ToolAction:
    """Build a ``tool`` action for *tool_name*."""
    return ToolAction(payload=ToolActionPayload(tool_name=tool_name, params=params or {}))


def parse_action(raw: Any) -> ToolAction | NotifyAction | UnknownAction:
    """Decode a posted message (dict or JSON text) into an action."""
    if isinstance(raw, str | bytes):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            return UnknownAction(raw=raw, reason=f"not valid JSON: {exc}")

    if not isinstance(raw, dict):
        return UnknownAction(raw=raw, reason="action must be a JSON object")

    kind = raw.get("type")
    if kind not in ("tool", "notify"):
        return UnknownAction(type=str(kind or ""), raw=raw, reason=f"unrecognized action type: {kind!r}")

    try:
        return _action_adapter.validate_python(raw)
    except ValidationError as exc:
        return UnknownAction(type=kind, raw=raw, reason=f"malformed {kind} action: {exc.errors()[0]['msg']}")
