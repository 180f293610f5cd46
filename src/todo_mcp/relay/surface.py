"""HostSurface — the slot in a host page that displays one UI resource.

The surface never merges documents: :meth:`HostSurface.replace` swaps the
whole resource and bumps :attr:`generation`.  Everything the relay does to
a surface is also recorded as a :class:`RelayEvent`.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ValidationError

from todo_mcp.protocols.mcp.models import EmbeddedResource, UIResource

logger = logging.getLogger(__name__)


class RelayEventKind(StrEnum):
    REPLACED = "replaced"
    NOTIFIED = "notified"
    DIAGNOSTIC = "diagnostic"
    REJECTED = "rejected"
    ERROR = "error"


class RelayEvent(BaseModel):
    """One outcome of handling an action."""

    kind: RelayEventKind
    detail: str = ""
    action_type: str = ""
    tool_name: str | None = None


def extract_ui(result: dict[str, Any]) -> UIResource | None:
    """Return the UI resource attached to a tool result, if it has a valid one."""
    ui = result.get("ui")
    if ui is None:
        return None
    try:
        return EmbeddedResource.model_validate(ui).resource
    except ValidationError:
        logger.warning("Tool result carries a malformed ui payload")
        return None


class HostSurface:
    """Holds the currently displayed UI resource and the relay's event log."""

    def __init__(self, resource: UIResource | None = None, *, surface_id: str = "") -> None:
        self.surface_id = surface_id
        self._current = resource
        self.generation = 0 if resource is None else 1
        self.events: list[RelayEvent] = []
        self.messages: list[str] = []

    @property
    def current(self) -> UIResource | None:
        return self._current

    def replace(self, resource: UIResource) -> None:
        """Display *resource* instead of whatever was shown before."""
        self._current = resource
        self.generation += 1
        logger.debug("Surface %s now shows %s (generation %d)", self.surface_id, resource.uri, self.generation)

    def show_result(self, result: dict[str, Any]) -> UIResource | None:
        """Replace the display with the UI attached to *result*.

        Returns the resource now shown, or ``None`` (display untouched) if
        the result carries none.
        """
        resource = extract_ui(result)
        if resource is not None:
            self.replace(resource)
        return resource

    def notify(self, message: str) -> None:
        self.messages.append(message)

    def record(self, event: RelayEvent) -> RelayEvent:
        self.events.append(event)
        return event
