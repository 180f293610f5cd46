"""Shared error types for the protocol layer.

Server-side errors carry the JSON-RPC ``code`` they are reported with, so
the channel can turn any of them into an error envelope without a lookup
table.
"""

METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603
APPLICATION_ERROR = -32001


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code = INTERNAL_ERROR


class ConnectionError(ProtocolError):
    """Failed to connect to an external service."""


class FramingError(ProtocolError):
    """An inbound message could not be decoded into a request."""


class MethodNotFoundError(ProtocolError):
    """The request names a method the channel does not serve."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Unknown method: {method}")


class ApplicationError(ProtocolError):
    """A request was understood but could not be carried out."""

    code = APPLICATION_ERROR


class ToolNotFoundError(ApplicationError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ToolArgumentError(ApplicationError):
    """Tool arguments do not satisfy the tool's input contract."""

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(detail)


class RecordNotFoundError(ApplicationError):
    """A tool referenced a record that is not in the store."""

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__("Todo not found")


class RenderError(ApplicationError):
    """The record snapshot could not be rendered into a UI resource."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Unable to render todo dashboard" + (f": {detail}" if detail else ""))


class ToolExecutionError(ProtocolError):
    """A tool invocation came back with an error envelope (client side)."""

    def __init__(self, name: str, detail: str = "", code: int = APPLICATION_ERROR) -> None:
        self.name = name
        self.detail = detail
        self.code = code
        super().__init__(f"Tool execution failed: {name}" + (f": {detail}" if detail else ""))
