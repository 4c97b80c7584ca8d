"""Pending request bookkeeping for reply correlation."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from cdpclient.protocol.errors import ConnectionClosedError, RequestFailed
from cdpclient.protocol.messages import (
    Request,
    RequestID,
    Response,
    ResponseFailure,
)

logger = logging.getLogger(__name__)


class PendingRequest:
    """
    A request awaiting its reply.

    Settles at most once, through resolve() or fail(). Later attempts are
    ignored and return False.
    """

    def __init__(self, request: Request, future: asyncio.Future[Any]):
        self.request = request
        self.future = future
        self._settled = False

    @property
    def settled(self) -> bool:
        return self._settled

    def resolve(self, response: Response) -> bool:
        """Complete the waiting caller with the reply."""
        if self._settled:
            return False
        self._settled = True

        if self.future.done():
            # Caller stopped waiting
            return False

        if isinstance(response, ResponseFailure):
            self.future.set_exception(RequestFailed(self.request, response))
        else:
            self.future.set_result(response.result)
        return True

    def fail(self, exc: BaseException) -> bool:
        """Complete the waiting caller with an error."""
        if self._settled:
            return False
        self._settled = True

        if self.future.done():
            return False

        self.future.set_exception(exc)
        return True


class PendingTable:
    """Requests awaiting replies, keyed by request id."""

    def __init__(self) -> None:
        self._entries: dict[RequestID, PendingRequest] = {}

    def register(self, request: Request) -> PendingRequest:
        """
        Add an entry for a request about to be sent.

        Raises:
            ValueError: If a request with the same id is already pending.
        """
        if request.id in self._entries:
            raise ValueError(f"Request id already pending: {request.id!r}")

        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        entry = PendingRequest(request, future)
        self._entries[request.id] = entry
        return entry

    def resolve(self, response: Response) -> bool:
        """
        Remove the entry matching the reply and settle it.

        Returns:
            False if no entry exists for the reply's id.
        """
        entry = self._entries.pop(response.id, None)
        if entry is None:
            return False
        entry.resolve(response)
        return True

    def discard(self, request_id: RequestID) -> None:
        """Remove an entry without settling it."""
        self._entries.pop(request_id, None)

    def fail_all(self, reason: str) -> int:
        """
        Fail every pending request with ConnectionClosedError.

        Returns:
            Number of callers that were still waiting.
        """
        entries = list(self._entries.values())
        self._entries.clear()

        failed = 0
        for entry in entries:
            if entry.fail(ConnectionClosedError(reason, request=entry.request)):
                failed += 1

        if failed:
            logger.debug(f"Failed {failed} pending request(s): {reason}")
        return failed

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, request_id: object) -> bool:
        return request_id in self._entries
