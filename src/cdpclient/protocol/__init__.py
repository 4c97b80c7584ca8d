"""
DevTools Protocol Core.

Implements message classification, request/response correlation,
event dispatch, and the client session state machine.
"""

from cdpclient.protocol.messages import (
    Command,
    Request,
    RequestID,
    Response,
    ResponseSuccess,
    ResponseFailure,
    ResponseError,
    Event,
    Unrecognized,
)
from cdpclient.protocol.errors import (
    ProtocolError,
    RequestFailed,
    ConnectionClosedError,
    PARSE_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
    INTERNAL_ERROR,
    SERVER_ERROR,
)
from cdpclient.protocol.classifier import classify
from cdpclient.protocol.pending import PendingRequest, PendingTable
from cdpclient.protocol.dispatch import EventDispatcher, EventHandler
from cdpclient.protocol.state import (
    SessionState,
    SessionStateMachine,
    InvalidStateTransition,
)
from cdpclient.protocol.client import CDPClient, connect

__all__ = [
    # Messages
    "Command",
    "Request",
    "RequestID",
    "Response",
    "ResponseSuccess",
    "ResponseFailure",
    "ResponseError",
    "Event",
    "Unrecognized",
    # Errors
    "ProtocolError",
    "RequestFailed",
    "ConnectionClosedError",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "SERVER_ERROR",
    # Classification and routing
    "classify",
    "PendingRequest",
    "PendingTable",
    "EventDispatcher",
    "EventHandler",
    # State
    "SessionState",
    "SessionStateMachine",
    "InvalidStateTransition",
    # Client
    "CDPClient",
    "connect",
]
