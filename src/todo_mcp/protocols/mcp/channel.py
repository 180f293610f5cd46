"""ProtocolChannel — per-connection JSON-RPC framing and dispatch.

One channel is created for every connection.  It decodes inbound frames,
routes requests by method, and encodes the response with the request's
own id.  Nothing a client sends can make it raise:

- frames that are not a JSON object, or carry no usable ``id`` (this
  includes notifications), are logged and dropped without a reply;
- unknown methods get ``-32601``;
- unknown tools, bad arguments, missing records, and render failures get
  ``-32001``;
- anything else a handler raises is logged and answered with ``-32603``.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from todo_mcp.protocols.errors import (
    INTERNAL_ERROR,
    ApplicationError,
    FramingError,
    MethodNotFoundError,
    ProtocolError,
)
from todo_mcp.protocols.mcp.models import (
    DEFAULT_PROTOCOL_VERSION,
    InitializeResult,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
)
from todo_mcp.utils.telemetry import (
    ATTR_CONNECTION_ID,
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_REQUEST_ID,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from todo_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


def _resolvable_id(value: Any) -> bool:
    # bool is an int subclass but never a valid correlation token
    return isinstance(value, str) or (isinstance(value, int) and not isinstance(value, bool))


class ProtocolChannel:
    """Serves ``initialize``, ``ping``, ``tools/list`` and ``tools/call`` for one connection.

    The channel holds no state shared with other connections except the
    registry, which is immutable.  Messages are handled one at a time, in
    the order the connection delivers them.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        server_info: ServerInfo,
        protocol_version: str = DEFAULT_PROTOCOL_VERSION,
        connection_id: str = "",
    ) -> None:
        self._registry = registry
        self._server_info = server_info
        self._protocol_version = protocol_version
        self.connection_id = connection_id
        self.initialized = False
        self.client_info: dict[str, Any] = {}
        self._methods: dict[str, Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]] = {
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
        }

    async def handle_raw(self, raw: str | bytes) -> str | None:
        """Handle one inbound frame; return the encoded reply, if any."""
        try:
            message = self.decode(raw)
        except FramingError as exc:
            logger.warning("[%s] Dropping malformed frame: %s", self.connection_id, exc)
            return None
        response = await self.handle_message(message)
        if response is None:
            return None
        return json.dumps(response.to_wire())

    @staticmethod
    def decode(raw: str | bytes) -> dict[str, Any]:
        """Parse a frame into a JSON object.

        Raises:
            FramingError: If the frame is not JSON or not an object.
        """
        try:
            message = json.loads(raw)
        except ValueError as exc:
            raise FramingError(f"invalid JSON ({exc})") from exc
        if not isinstance(message, dict):
            raise FramingError(f"expected a JSON object, got {type(message).__name__}")
        return message

    async def handle_message(self, message: dict[str, Any]) -> JsonRpcResponse | None:
        """Dispatch a decoded message; ``None`` means nothing is sent back."""
        request = self._to_request(message)
        if request is None:
            return None

        with _tracer.start_as_current_span("mcp.request") as span:
            span.set_attribute(ATTR_METHOD, request.method)
            span.set_attribute(ATTR_CONNECTION_ID, self.connection_id)
            span.set_attribute(ATTR_REQUEST_ID, str(request.id))
            try:
                handler = self._methods.get(request.method)
                if handler is None:
                    raise MethodNotFoundError(request.method)
                result = await handler(request.params)
            except ProtocolError as exc:
                span.set_attribute(ATTR_ERROR_CODE, exc.code)
                logger.info(
                    "[%s] %s (id=%r) failed with %d: %s",
                    self.connection_id,
                    request.method,
                    request.id,
                    exc.code,
                    exc,
                )
                return JsonRpcResponse.failure(request.id, exc.code, str(exc))
            except Exception:
                span.set_attribute(ATTR_ERROR_CODE, INTERNAL_ERROR)
                logger.exception(
                    "[%s] Unhandled error in %s (id=%r)", self.connection_id, request.method, request.id
                )
                return JsonRpcResponse.failure(request.id, INTERNAL_ERROR, "Internal error")

        return JsonRpcResponse.success(request.id, result)

    def _to_request(self, message: dict[str, Any]) -> JsonRpcRequest | None:
        request_id = message.get("id")
        if not _resolvable_id(request_id):
            logger.warning(
                "[%s] Dropping message without a resolvable id (method=%r)",
                self.connection_id,
                message.get("method"),
            )
            return None

        method = message.get("method")
        params = message.get("params")
        return JsonRpcRequest(
            id=request_id,
            method=method if isinstance(method, str) else "",
            params=params if isinstance(params, dict) else {},
        )

    # ------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------

    async def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        client_info = params.get("clientInfo")
        self.client_info = client_info if isinstance(client_info, dict) else {}
        self.initialized = True
        logger.info(
            "[%s] Initialized for client %s (protocol %s)",
            self.connection_id,
            self.client_info.get("name", "<unnamed>"),
            params.get("protocolVersion", "<unspecified>"),
        )
        result = InitializeResult(protocol_version=self._protocol_version, server_info=self._server_info)
        return result.model_dump(by_alias=True)

    async def _ping(self, params: dict[str, Any]) -> dict[str, Any]:
        return {}

    async def _tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": [definition.to_wire() for definition in self._registry.definitions()]}

    async def _tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        if not isinstance(name, str) or not name:
            msg = "Missing required field: name"
            raise ApplicationError(msg)

        tool = self._registry.get(name)
        with _tracer.start_as_current_span("mcp.tools.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            logger.debug("[%s] tools/call %s", self.connection_id, name)
            return await tool.invoke(params.get("arguments"))
