"""
Transport layer.

A duplex message transport over WebSocket, as exposed by DevTools endpoints.
"""

from cdpclient.transport.types import TransportConfig, TransportEvent, TransportEventType
from cdpclient.transport.base import Transport, TransportError, ConnectionError, SessionError
from cdpclient.transport.websocket import WebSocketTransport

__all__ = [
    "Transport",
    "TransportConfig",
    "TransportEvent",
    "TransportEventType",
    "TransportError",
    "ConnectionError",
    "SessionError",
    "WebSocketTransport",
]
