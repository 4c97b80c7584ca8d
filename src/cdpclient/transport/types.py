"""Transport layer types and configuration."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any
from urllib.parse import urlparse

# DevTools replies (screenshots, heap snapshots) routinely exceed the
# websockets default of 1 MiB.
DEFAULT_MAX_MESSAGE_SIZE = 256 * 1024 * 1024


class TransportEventType(Enum):
    """Types of transport events for observability."""

    CONNECTING = auto()
    CONNECTED = auto()
    DISCONNECTING = auto()
    DISCONNECTED = auto()
    MESSAGE_SENT = auto()
    MESSAGE_RECEIVED = auto()
    ERROR = auto()


@dataclass
class TransportEvent:
    """Event emitted by transport for observability."""

    type: TransportEventType
    timestamp: float
    data: dict[str, Any] | None = None
    error: Exception | None = None

    def __str__(self) -> str:
        base = f"[{self.type.name}]"
        if self.data:
            base += f" {self.data}"
        if self.error:
            base += f" error={self.error}"
        return base


@dataclass
class TransportConfig:
    """Configuration for the WebSocket transport."""

    url: str
    """WebSocket URL of the DevTools target (ws:// or wss://)."""

    connect_timeout: float = 10.0
    """Opening handshake timeout in seconds."""

    headers: dict[str, str] = field(default_factory=dict)
    """Additional headers sent with the opening handshake."""

    max_message_size: int | None = DEFAULT_MAX_MESSAGE_SIZE
    """Largest accepted inbound frame in bytes, None for no limit."""

    ping_interval: float | None = None
    """Keepalive ping interval in seconds, None to disable."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.url:
            raise ValueError("url is required")
        scheme = urlparse(self.url).scheme
        if scheme not in ("ws", "wss"):
            raise ValueError(f"url must be a ws:// or wss:// URL, got {self.url!r}")
        if self.connect_timeout <= 0:
            raise ValueError("connect_timeout must be positive")
        if self.max_message_size is not None and self.max_message_size < 1:
            raise ValueError("max_message_size must be at least 1")
        if self.ping_interval is not None and self.ping_interval <= 0:
            raise ValueError("ping_interval must be positive")
