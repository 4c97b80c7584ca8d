"""Abstract base transport and error types."""

import logging
from abc import ABC, abstractmethod
from typing import AsyncIterator, Callable

from cdpclient.transport.types import TransportConfig, TransportEvent

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Base exception for transport errors."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class ConnectionError(TransportError):
    """Connection could not be established, or was lost."""

    pass


class SessionError(TransportError):
    """Operation attempted on a transport that is not open."""

    pass


class Transport(ABC):
    """
    Abstract base class for duplex message transports.

    A transport owns one connection, sends text frames, and exposes the
    inbound frames as an async iterator for a single consumer.
    """

    def __init__(self, config: TransportConfig):
        self.config = config
        self._event_handlers: list[Callable[[TransportEvent], None]] = []

    def on_event(self, handler: Callable[[TransportEvent], None]) -> None:
        """
        Register an event handler for transport events.

        Args:
            handler: Callback invoked when transport events occur.
        """
        self._event_handlers.append(handler)

    def _emit_event(self, event: TransportEvent) -> None:
        """Emit an event to all registered handlers."""
        for handler in self._event_handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(f"Transport event handler failed for {event}")

    @abstractmethod
    async def connect(self) -> None:
        """
        Open the connection.

        Raises:
            ConnectionError: If the connection cannot be established.
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """
        Close the connection and release all resources.

        This method must be safe to call multiple times.
        """
        pass

    @abstractmethod
    async def send(self, payload: str) -> None:
        """
        Send one text message.

        Raises:
            SessionError: If the transport is not open.
            ConnectionError: If the connection drops while sending.
        """
        pass

    @abstractmethod
    def receive(self) -> AsyncIterator[str | bytes]:
        """
        Async iterator yielding raw inbound messages.

        Ends normally when the connection is closed cleanly.

        Raises:
            ConnectionError: If the connection is lost.
        """
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if transport is currently open."""
        pass

    async def __aenter__(self) -> "Transport":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.disconnect()
