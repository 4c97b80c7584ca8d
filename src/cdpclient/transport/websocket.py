"""WebSocket transport implementation for DevTools endpoints."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import AsyncIterator

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import (
    ConnectionClosed,
    ConnectionClosedError,
    WebSocketException,
)

from cdpclient.transport.base import (
    Transport,
    ConnectionError,
    SessionError,
)
from cdpclient.transport.types import (
    TransportConfig,
    TransportEvent,
    TransportEventType,
)

logger = logging.getLogger(__name__)


class WebSocketTransport(Transport):
    """
    Duplex transport over a single WebSocket connection.

    Outbound messages are sent as text frames. Inbound frames are yielded
    unparsed by receive(); binary frames are passed through as bytes.
    """

    def __init__(self, config: TransportConfig):
        super().__init__(config)
        self._ws: ClientConnection | None = None
        self._connected: bool = False
        self._closing: bool = False

    async def connect(self) -> None:
        """Perform the opening handshake."""
        if self._connected:
            return

        self._emit_event(
            TransportEvent(
                type=TransportEventType.CONNECTING,
                timestamp=time.time(),
                data={"url": self.config.url},
            )
        )

        try:
            self._ws = await connect(
                self.config.url,
                additional_headers=self.config.headers or None,
                open_timeout=self.config.connect_timeout,
                max_size=self.config.max_message_size,
                ping_interval=self.config.ping_interval,
            )
        except asyncio.TimeoutError as e:
            raise ConnectionError(
                f"Timed out connecting to {self.config.url}", cause=e
            )
        except (WebSocketException, OSError) as e:
            raise ConnectionError(
                f"Failed to connect to {self.config.url}: {e}", cause=e
            )

        self._connected = True
        self._closing = False
        logger.debug(f"Connected to {self.config.url}")

        self._emit_event(
            TransportEvent(
                type=TransportEventType.CONNECTED,
                timestamp=time.time(),
            )
        )

    async def disconnect(self) -> None:
        """Close the connection. Safe to call repeatedly."""
        if self._ws is None:
            return

        self._closing = True

        self._emit_event(
            TransportEvent(
                type=TransportEventType.DISCONNECTING,
                timestamp=time.time(),
            )
        )

        ws, self._ws = self._ws, None
        await ws.close()
        self._connected = False

        self._emit_event(
            TransportEvent(
                type=TransportEventType.DISCONNECTED,
                timestamp=time.time(),
            )
        )

    async def send(self, payload: str) -> None:
        """Send one text frame."""
        if self._ws is None or not self._connected:
            raise SessionError("Transport not connected")

        if self._closing:
            raise SessionError("Transport is closing")

        try:
            await self._ws.send(payload)
        except ConnectionClosed as e:
            self._connected = False
            raise ConnectionError(f"Connection closed while sending: {e}", cause=e)

        self._emit_event(
            TransportEvent(
                type=TransportEventType.MESSAGE_SENT,
                timestamp=time.time(),
                data={"size": len(payload)},
            )
        )

    async def receive(self) -> AsyncIterator[str | bytes]:
        """Yield inbound frames until the connection closes."""
        if self._ws is None:
            raise SessionError("Transport not connected")

        ws = self._ws
        try:
            async for message in ws:
                self._emit_event(
                    TransportEvent(
                        type=TransportEventType.MESSAGE_RECEIVED,
                        timestamp=time.time(),
                        data={"size": len(message)},
                    )
                )
                yield message
        except ConnectionClosedError as e:
            self._connected = False
            if self._closing:
                return
            self._emit_event(
                TransportEvent(
                    type=TransportEventType.ERROR,
                    timestamp=time.time(),
                    error=e,
                )
            )
            raise ConnectionError(f"Connection lost: {e}", cause=e)

        # Clean close by either side
        self._connected = False

    def is_connected(self) -> bool:
        """Check if transport is connected."""
        return self._connected and not self._closing
