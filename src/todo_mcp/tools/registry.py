"""ToolRegistry — the immutable catalog of tools a channel can call.

Built once at startup (see :func:`todo_mcp.tools.todo.build_registry`) and
shared by reference between every connection.  Nothing here is mutable
after construction.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ValidationError

from todo_mcp.protocols.errors import ToolArgumentError, ToolNotFoundError
from todo_mcp.protocols.mcp.models import ToolDefinition
from todo_mcp.tools.contracts import describe_validation_error

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any], Awaitable[BaseModel]]


@dataclass(frozen=True)
class RegisteredTool:
    """A tool definition bound to its argument contract and handler."""

    definition: ToolDefinition
    arguments: type[BaseModel]
    handler: ToolHandler

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        *,
        arguments: type[BaseModel],
        result: type[BaseModel],
        handler: ToolHandler,
    ) -> RegisteredTool:
        """Derive the advertised schemas from the contract models."""
        definition = ToolDefinition(
            name=name,
            description=description,
            input_schema=arguments.model_json_schema(),
            output_schema=result.model_json_schema(mode="serialization", by_alias=True),
        )
        return cls(definition=definition, arguments=arguments, handler=handler)

    @property
    def name(self) -> str:
        return self.definition.name

    def validate(self, arguments: Any) -> BaseModel:
        """Check *arguments* against the input contract."""
        try:
            return self.arguments.model_validate(arguments if arguments is not None else {})
        except ValidationError as exc:
            raise ToolArgumentError(self.name, describe_validation_error(exc)) from exc

    async def invoke(self, arguments: Any) -> dict[str, Any]:
        """Validate, run the handler, and serialise its result for the wire."""
        args = self.validate(arguments)
        logger.debug("Invoking tool %s", self.name)
        result = await self.handler(args)
        return result.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class ToolRegistry:
    """Ordered, name-indexed, read-only collection of tools."""

    tools: tuple[RegisteredTool, ...]
    _index: Mapping[str, RegisteredTool] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, RegisteredTool] = {}
        for tool in self.tools:
            if tool.name in index:
                msg = f"Duplicate tool name: {tool.name}"
                raise ValueError(msg)
            index[tool.name] = tool
        object.__setattr__(self, "_index", MappingProxyType(index))

    def get(self, name: str) -> RegisteredTool:
        """Look up a tool by name; raise :class:`ToolNotFoundError` if absent."""
        tool = self._index.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        return tool

    def definitions(self) -> list[ToolDefinition]:
        """Tool definitions in declaration order."""
        return [tool.definition for tool in self.tools]

    def names(self) -> list[str]:
        return [tool.name for tool in self.tools]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self.tools)
