"""Protocol error types and error codes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cdpclient.protocol.messages import Request, ResponseFailure

# Standard JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Generic server error, used by DevTools for most domain failures
SERVER_ERROR = -32000

# Error code to message mapping
ERROR_MESSAGES = {
    PARSE_ERROR: "Parse error",
    INVALID_REQUEST: "Invalid Request",
    METHOD_NOT_FOUND: "Method not found",
    INVALID_PARAMS: "Invalid params",
    INTERNAL_ERROR: "Internal error",
    SERVER_ERROR: "Server error",
}


class ProtocolError(Exception):
    """Base exception for protocol-level errors."""

    pass


class RequestFailed(ProtocolError):
    """
    The remote end answered a request with an error reply.

    Raised only to the caller that issued the request. Carries the
    original request and the failure reply.
    """

    def __init__(self, request: "Request", response: "ResponseFailure"):
        super().__init__(f"Request failed: {response.error.message}")
        self.request = request
        self.response = response

    @property
    def code(self) -> int | None:
        return self.response.error.code

    @property
    def message(self) -> str:
        return self.response.error.message

    @property
    def data(self) -> Any:
        return self.response.error.data

    def __repr__(self) -> str:
        return (
            f"RequestFailed(method={self.request.method!r}, "
            f"code={self.code}, message={self.message!r})"
        )


class ConnectionClosedError(ProtocolError):
    """
    The connection closed before a reply arrived, or the client is not open.

    `request` is set when a pending request was failed by the close.
    """

    def __init__(self, reason: str, request: "Request | None" = None):
        super().__init__(reason)
        self.reason = reason
        self.request = request
