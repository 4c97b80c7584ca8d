"""
Chrome DevTools Protocol client.

Sends typed requests over a WebSocket connection, correlates replies with
the requests that caused them, and dispatches server-pushed events to
registered handlers.

Submodules:
- transport: WebSocket transport layer
- protocol: message classification, correlation, event dispatch, client
- discovery: resolving HTTP DevTools endpoints to WebSocket URLs
- config: endpoint configuration files
"""

# Transport layer
from cdpclient.transport import (
    WebSocketTransport,
    TransportConfig,
    Transport,
    TransportError,
    ConnectionError,
    SessionError,
)

# Protocol layer
from cdpclient.protocol import (
    CDPClient,
    Command,
    ConnectionClosedError,
    Event,
    ProtocolError,
    Request,
    RequestFailed,
    ResponseError,
    SessionState,
    connect,
)

# Discovery and configuration
from cdpclient.discovery import (
    BrowserVersion,
    TargetInfo,
    get_version,
    list_targets,
    resolve_websocket_url,
)
from cdpclient.config import EndpointConfig, connect_endpoint, load_endpoints

__all__ = [
    # Transport
    "WebSocketTransport",
    "TransportConfig",
    "Transport",
    "TransportError",
    "ConnectionError",
    "SessionError",
    # Protocol
    "CDPClient",
    "Command",
    "ConnectionClosedError",
    "Event",
    "ProtocolError",
    "Request",
    "RequestFailed",
    "ResponseError",
    "SessionState",
    "connect",
    # Discovery
    "BrowserVersion",
    "TargetInfo",
    "get_version",
    "list_targets",
    "resolve_websocket_url",
    # Config
    "EndpointConfig",
    "connect_endpoint",
    "load_endpoints",
]
