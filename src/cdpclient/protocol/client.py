"""DevTools protocol client implementation."""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Callable, overload

from cdpclient.discovery import resolve_websocket_url
from cdpclient.transport.base import ConnectionError, Transport, TransportError
from cdpclient.transport.types import DEFAULT_MAX_MESSAGE_SIZE, TransportConfig
from cdpclient.transport.websocket import WebSocketTransport
from cdpclient.protocol.classifier import classify
from cdpclient.protocol.dispatch import EventDispatcher, EventHandler
from cdpclient.protocol.errors import ConnectionClosedError
from cdpclient.protocol.messages import (
    Command,
    Event,
    ParamsT,
    Request,
    RequestID,
    ResultT,
    Unrecognized,
)
from cdpclient.protocol.pending import PendingTable
from cdpclient.protocol.state import SessionState, SessionStateMachine

logger = logging.getLogger(__name__)

# Longest slice of an unrecognized message included in log records
_LOG_PREVIEW = 200


def _random_request_id() -> str:
    return str(uuid.uuid4())


def _preview(raw: str | bytes) -> str:
    text = raw if isinstance(raw, str) else raw.decode("utf-8", errors="replace")
    if len(text) > _LOG_PREVIEW:
        return text[:_LOG_PREVIEW] + "..."
    return text


class CDPClient:
    """
    DevTools protocol client.

    Sends requests over a transport, correlates each reply with the request
    that caused it, and routes events to handlers registered with on().
    One background task reads the transport and handles inbound messages
    strictly in arrival order.
    """

    def __init__(
        self,
        transport: Transport,
        id_factory: Callable[[], RequestID] | None = None,
    ):
        """
        Initialize the client.

        Args:
            transport: Transport to communicate over. The client owns it
                and disconnects it on close().
            id_factory: Source of request ids. Defaults to random UUIDs;
                a replacement must never repeat an id for this client.
        """
        self.transport = transport
        self._id_factory = id_factory or _random_request_id

        self._state = SessionStateMachine()
        self._pending = PendingTable()
        self._dispatcher = EventDispatcher()
        self._receive_task: asyncio.Task | None = None
        self._closing = False

    @property
    def state(self) -> SessionState:
        """Current session state."""
        return self._state.state

    @property
    def is_open(self) -> bool:
        """Check if the client can send requests."""
        return self._state.is_open

    @property
    def pending_count(self) -> int:
        """Number of requests awaiting a reply."""
        return len(self._pending)

    def on_state_change(
        self,
        callback: Callable[[SessionState, SessionState], None],
    ) -> None:
        """Register callback for state changes."""
        self._state.on_transition(callback)

    async def connect(self) -> None:
        """
        Connect the transport and start the receive loop.

        Raises:
            ConnectionError: If the transport cannot connect. The client
                is CLOSED afterwards.
            InvalidStateTransition: If the client was already connected.
        """
        self._state.transition(SessionState.CONNECTING)

        try:
            await self.transport.connect()
        except BaseException:
            self._state.transition(SessionState.CLOSED)
            raise

        self._state.transition(SessionState.OPEN)
        self._receive_task = asyncio.create_task(
            self._receive_loop(),
            name="cdp-receive-loop",
        )

    @overload
    async def call(
        self,
        method: Command[ParamsT, ResultT],
        params: ParamsT | None = None,
        session_id: str | None = None,
    ) -> ResultT: ...

    @overload
    async def call(
        self,
        method: str,
        params: Any = None,
        session_id: str | None = None,
    ) -> Any: ...

    async def call(self, method, params=None, session_id=None):
        """
        Send a request and wait for its reply.

        Args:
            method: Method name, or a Command from a protocol schema.
            params: Method parameters. Defaults to an empty object.
            session_id: Target session to route the request to.

        Returns:
            The reply's result, unmodified.

        Raises:
            RequestFailed: If the remote end replied with an error.
            ConnectionClosedError: If the client is not open, or the
                connection closed before the reply arrived.
            TransportError: If sending failed.
        """
        name = str(method)
        if not self._state.is_open:
            raise ConnectionClosedError(
                f"Cannot send {name}: client is {self._state.state.name.lower()}"
            )

        request = Request(
            id=self._id_factory(),
            method=name,
            params=params if params is not None else {},
            session_id=session_id,
        )
        payload = request.to_json()

        # The entry must exist before the reply can possibly arrive
        entry = self._pending.register(request)
        try:
            await self.transport.send(payload)
            logger.debug(f"Sent {request}")
            return await entry.future
        finally:
            self._pending.discard(request.id)

    def on(self, event: str | Command, handler: EventHandler) -> None:
        """
        Register the handler for an event, replacing any previous one.

        The handler is called with (method, params) from the receive loop.
        It must return promptly: while it runs no other message is
        processed, so awaiting call() inside a handler deadlocks.

        Args:
            event: Event name, e.g. "Target.targetCreated".
            handler: Plain or async function receiving (method, params).
        """
        self._dispatcher.on(str(event), handler)

    async def close(self) -> None:
        """
        Close the session.

        Pending requests fail with ConnectionClosedError. Safe to call
        multiple times.
        """
        state = self._state.state
        if state == SessionState.NEW:
            self._state.transition(SessionState.CLOSED)
            return
        if self._closing or state not in (SessionState.OPEN, SessionState.LOST):
            return

        self._closing = True
        self._state.transition(SessionState.CLOSING)

        # close() may run inside an event handler, i.e. on the receive task
        task = self._receive_task
        self._receive_task = None
        if task and task is not asyncio.current_task() and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        self._pending.fail_all("Client closed")

        try:
            await self.transport.disconnect()
        finally:
            self._state.transition(SessionState.CLOSED)

    async def _receive_loop(self) -> None:
        """Background task processing inbound messages."""
        reason = "Connection closed by remote end"
        try:
            async for raw in self.transport.receive():
                await self._handle_message(raw)
                if self._closing:
                    return
        except asyncio.CancelledError:
            if self._closing:
                return
            # Cancelled from inside, e.g. by an event handler
            logger.error("Receive loop cancelled while the session was open")
            self._state.transition(SessionState.LOST)
            self._pending.fail_all("Receive loop cancelled")
            raise
        except TransportError as e:
            logger.error(f"Connection lost: {e}")
            reason = f"Connection lost: {e}"
        except Exception as e:
            logger.exception("Receive loop error")
            reason = f"Receive loop error: {e}"

        if self._closing:
            return

        logger.warning(f"Session ended without close(): {reason}")
        self._state.transition(SessionState.LOST)
        self._pending.fail_all(reason)

    async def _handle_message(self, raw: str | bytes) -> None:
        """Route one inbound message."""
        message = classify(raw)

        if isinstance(message, Event):
            await self._dispatcher.dispatch(message)
        elif isinstance(message, Unrecognized):
            logger.warning(
                f"Discarding unrecognized message ({message.reason}): {_preview(raw)}"
            )
        elif not self._pending.resolve(message):
            logger.warning(
                f"Received a response for request '{message.id}' but no "
                "outstanding request with that ID exists"
            )

    async def __aenter__(self) -> "CDPClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()


async def connect(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    connect_timeout: float = 10.0,
    max_message_size: int | None = DEFAULT_MAX_MESSAGE_SIZE,
    id_factory: Callable[[], RequestID] | None = None,
) -> CDPClient:
    """
    Open a client session to a DevTools endpoint.

    Args:
        url: WebSocket URL of a target, or the http(s) address of a
            DevTools endpoint, which is resolved to the browser's
            WebSocket URL first.
        headers: Extra handshake headers.
        connect_timeout: Handshake timeout in seconds.
        max_message_size: Largest accepted inbound frame, None for no limit.
        id_factory: Source of request ids.

    Returns:
        A connected client.

    Raises:
        ConnectionError: If the endpoint cannot be reached or the URL
            is not a usable DevTools address.
    """
    if url.startswith(("http://", "https://")):
        url = await resolve_websocket_url(url)

    try:
        config = TransportConfig(
            url=url,
            headers=headers or {},
            connect_timeout=connect_timeout,
            max_message_size=max_message_size,
        )
    except ValueError as e:
        raise ConnectionError(f"Cannot connect to {url!r}: {e}", cause=e) from e
    client = CDPClient(WebSocketTransport(config), id_factory=id_factory)
    await client.connect()
    return client
