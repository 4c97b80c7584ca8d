"""Pytest configuration and fixtures."""

import asyncio
from typing import AsyncIterator

import pytest
import pytest_asyncio

from cdpclient.lib import oj
from cdpclient.protocol.client import CDPClient
from cdpclient.transport.base import ConnectionError, SessionError, Transport
from cdpclient.transport.types import TransportConfig

# Async test support; tests opt in with @pytest.mark.asyncio
pytest_plugins = ["pytest_asyncio"]

_CLOSE = object()


class MemoryTransport(Transport):
    """
    In-memory transport for driving a client from tests.

    Frames written by the client are queued as parsed dicts for
    next_sent(); frames pushed with feed() are yielded by receive().
    """

    def __init__(self) -> None:
        super().__init__(TransportConfig(url="ws://localhost:9222/devtools/browser"))
        self.connected = False
        self.disconnect_calls = 0
        self.fail_connect = False
        self.sent: asyncio.Queue[dict] = asyncio.Queue()
        self._inbound: asyncio.Queue = asyncio.Queue()

    async def connect(self) -> None:
        if self.fail_connect:
            raise ConnectionError("Connection refused")
        self.connected = True

    async def disconnect(self) -> None:
        self.disconnect_calls += 1
        self.connected = False

    async def send(self, payload: str) -> None:
        if not self.connected:
            raise SessionError("Transport not connected")
        self.sent.put_nowait(oj.loads(payload))

    async def receive(self) -> AsyncIterator[str | bytes]:
        while True:
            item = await self._inbound.get()
            if item is _CLOSE:
                return
            if isinstance(item, Exception):
                raise item
            yield item

    def is_connected(self) -> bool:
        return self.connected

    def feed(self, message: dict | str) -> None:
        """Deliver an inbound frame; dicts are serialized first."""
        if isinstance(message, dict):
            message = oj.dumps_str(message)
        self._inbound.put_nowait(message)

    def close_remote(self) -> None:
        """End the inbound stream as a clean remote close."""
        self._inbound.put_nowait(_CLOSE)

    def drop(self, reason: str = "connection reset") -> None:
        """End the inbound stream with a transport failure."""
        self._inbound.put_nowait(ConnectionError(reason))

    async def next_sent(self, timeout: float = 1.0) -> dict:
        return await asyncio.wait_for(self.sent.get(), timeout=timeout)


@pytest.fixture
def transport():
    return MemoryTransport()


@pytest_asyncio.fixture
async def client(transport):
    client = CDPClient(transport)
    await client.connect()
    yield client
    await client.close()
