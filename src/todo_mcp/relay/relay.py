"""ActionRelay — replays actions posted by a rendered dashboard as tool calls.

The relay sits on the host side, between a :class:`HostSurface` and
anything that can call tools (normally an
:class:`~todo_mcp.protocols.mcp.client.MCPClient`).  For each posted
message it:

1. decodes it with :func:`~todo_mcp.ui.actions.parse_action`;
2. for ``tool`` actions, issues ``tools/call`` and, when the result carries
   a UI resource, replaces the surface's document with it;
3. for ``notify`` actions, surfaces the message without calling anything;
4. for anything else, records a diagnostic and carries on.

Only one action per surface is in flight at a time.  A message that
arrives while a replay is still awaiting its response is rejected, not
queued, so a runaway document cannot build up a backlog of calls.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from todo_mcp.protocols.errors import ProtocolError
from todo_mcp.relay.surface import HostSurface, RelayEvent, RelayEventKind
from todo_mcp.ui.actions import NotifyAction, ToolAction, UnknownAction, parse_action
from todo_mcp.utils.telemetry import ATTR_ACTION_TYPE, ATTR_TOOL_NAME, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


@runtime_checkable
class ToolCaller(Protocol):
    """Anything that can issue ``tools/call`` and return the result payload."""

    async def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]: ...


class ActionRelay:
    """Turns one surface's actions into tool calls, one at a time."""

    def __init__(self, caller: ToolCaller, surface: HostSurface | None = None) -> None:
        self._caller = caller
        self.surface = surface or HostSurface()
        self._busy = False

    @property
    def busy(self) -> bool:
        """``True`` while an action is being replayed."""
        return self._busy

    async def submit(self, message: Any) -> RelayEvent:
        """Handle one posted message (dict or JSON text) to completion."""
        if self._busy:
            action = parse_action(message)
            logger.warning("Surface %s is busy; rejecting %s action", self.surface.surface_id, action.type)
            return self.surface.record(
                RelayEvent(
                    kind=RelayEventKind.REJECTED,
                    detail="another action is still in flight",
                    action_type=action.type,
                )
            )

        self._busy = True
        try:
            return await self._dispatch(parse_action(message))
        finally:
            self._busy = False

    async def _dispatch(self, action: ToolAction | NotifyAction | UnknownAction) -> RelayEvent:
        with _tracer.start_as_current_span("relay.action") as span:
            span.set_attribute(ATTR_ACTION_TYPE, action.type)
            if isinstance(action, ToolAction):
                span.set_attribute(ATTR_TOOL_NAME, action.payload.tool_name)
                return await self._replay(action)
            if isinstance(action, NotifyAction):
                return self._notify(action)
            return self._diagnose(action)

    async def _replay(self, action: ToolAction) -> RelayEvent:
        name = action.payload.tool_name
        logger.info("Replaying %s from surface %s", name, self.surface.surface_id)
        try:
            result = await self._caller.call_tool(name, action.payload.params)
        except ProtocolError as exc:
            logger.warning("Replay of %s failed: %s", name, exc)
            return self.surface.record(
                RelayEvent(kind=RelayEventKind.ERROR, detail=str(exc), action_type=action.type, tool_name=name)
            )

        resource = self.surface.show_result(result)
        if resource is None:
            return self.surface.record(
                RelayEvent(
                    kind=RelayEventKind.DIAGNOSTIC,
                    detail=f"{name} result carried no UI resource",
                    action_type=action.type,
                    tool_name=name,
                )
            )

        return self.surface.record(
            RelayEvent(kind=RelayEventKind.REPLACED, detail=resource.uri, action_type=action.type, tool_name=name)
        )

    def _notify(self, action: NotifyAction) -> RelayEvent:
        message = action.payload.message
        logger.info("Surface %s says: %s", self.surface.surface_id, message)
        self.surface.notify(message)
        return self.surface.record(RelayEvent(kind=RelayEventKind.NOTIFIED, detail=message, action_type=action.type))

    def _diagnose(self, action: UnknownAction) -> RelayEvent:
        logger.warning("Ignoring action from surface %s: %s", self.surface.surface_id, action.reason)
        return self.surface.record(
            RelayEvent(kind=RelayEventKind.DIAGNOSTIC, detail=action.reason, action_type=action.type)
        )
