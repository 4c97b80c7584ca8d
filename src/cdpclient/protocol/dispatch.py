"""Routing of protocol events to registered handlers."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable

from cdpclient.protocol.messages import Event

logger = logging.getLogger(__name__)

# Handlers receive (method, params) and may be plain or async functions
EventHandler = Callable[[str, Any], Awaitable[None] | None]


class EventDispatcher:
    """
    Maps event method names to handlers.

    At most one handler per method; registering again replaces the previous
    handler. Events with no handler are dropped.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, EventHandler] = {}

    def on(self, method: str, handler: EventHandler) -> None:
        """
        Register the handler for an event method.

        Args:
            method: Event name, e.g. "Target.targetCreated".
            handler: Called with (method, params) for each matching event.
        """
        if method in self._handlers:
            logger.debug(f"Replacing handler for {method}")
        self._handlers[method] = handler

    def handles(self, method: str) -> bool:
        """Check if a handler is registered for the method."""
        return method in self._handlers

    async def dispatch(self, event: Event) -> bool:
        """
        Invoke the handler registered for the event, if any.

        Awaitable results are awaited before returning, so events are fully
        handled in arrival order. Handler exceptions are logged.

        Returns:
            True if a handler was invoked.
        """
        handler = self._handlers.get(event.method)
        if handler is None:
            logger.debug(f"No handler for event {event.method}")
            return False

        try:
            result = handler(event.method, event.params)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception(f"Event handler error for {event.method}")
        return True
