"""Classification of inbound messages into replies and events."""

from __future__ import annotations

from typing import Any

from cdpclient.lib import oj
from cdpclient.protocol.messages import (
    Event,
    ResponseError,
    ResponseFailure,
    ResponseSuccess,
    Unrecognized,
)

InboundMessage = ResponseSuccess | ResponseFailure | Event | Unrecognized


def _valid_id(value: Any) -> bool:
    # bool is an int subclass but never a request id
    return isinstance(value, str) or (
        isinstance(value, int) and not isinstance(value, bool)
    )


def classify(raw: str | bytes) -> InboundMessage:
    """
    Decide what an inbound message is.

    A message with an `id` and a `result` or `error` member is a reply.
    When a reply inexplicably carries both, `result` wins, even if it is
    empty or null. A message with `method` and `params` and no `id` is an
    event. Anything else, including unparseable text, is Unrecognized.

    Never raises.
    """
    try:
        data = oj.loads(raw)
    except oj.JSONDecodeError:
        return Unrecognized(raw=raw, reason="parse error")

    if not isinstance(data, dict):
        return Unrecognized(raw=raw, reason="not a JSON object")

    if "id" in data and ("result" in data or "error" in data):
        request_id = data["id"]
        if not _valid_id(request_id):
            return Unrecognized(raw=raw, reason=f"invalid id: {request_id!r}")
        if "result" in data:
            return ResponseSuccess(id=request_id, result=data["result"])
        return ResponseFailure(
            id=request_id,
            error=ResponseError.from_value(data["error"]),
        )

    if "method" in data and "params" in data and "id" not in data:
        method = data["method"]
        if not isinstance(method, str):
            return Unrecognized(raw=raw, reason=f"invalid method: {method!r}")
        session_id = data.get("sessionId")
        return Event(
            method=method,
            params=data["params"],
            session_id=session_id if isinstance(session_id, str) else None,
        )

    return Unrecognized(raw=raw, reason="neither a response nor an event")
