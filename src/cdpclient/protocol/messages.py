"""DevTools protocol message types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from cdpclient.lib import oj
from cdpclient.protocol.errors import ERROR_MESSAGES

RequestID = str | int

ParamsT = TypeVar("ParamsT")
ResultT = TypeVar("ResultT")


@dataclass(frozen=True)
class Command(Generic[ParamsT, ResultT]):
    """
    Typed handle for a protocol method.

    A protocol schema declares one Command per method, binding the method
    name to its params and result types:

        navigate: Command[NavigateParams, NavigateResult] = Command("Page.navigate")

    The client only uses the name; the type parameters exist for checkers.
    """

    method: str

    def __str__(self) -> str:
        return self.method


@dataclass(frozen=True)
class Request:
    """
    Outbound request message.

    Every request expects exactly one reply carrying the same id.
    """

    id: RequestID
    method: str
    params: Any = field(default_factory=dict)
    session_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        msg: dict[str, Any] = {"id": self.id}
        if self.session_id is not None:
            msg["sessionId"] = self.session_id
        msg["method"] = self.method
        msg["params"] = self.params
        return msg

    def to_json(self) -> str:
        """Serialize for a text frame."""
        return oj.dumps_str(self.to_dict())

    def __str__(self) -> str:
        return f"Request({self.method}, id={self.id})"


@dataclass(frozen=True)
class ResponseError:
    """Error object carried by a failure reply, kept as received."""

    code: int | float | None
    message: str
    data: Any = None
    raw: Any = field(default=None, compare=False, repr=False)
    """The wire `error` member, extra members included."""

    @classmethod
    def from_value(cls, value: Any) -> "ResponseError":
        """Build from the wire `error` member, whatever its shape."""
        if not isinstance(value, dict):
            return cls(code=None, message=str(value), raw=value)

        code = value.get("code")
        if not isinstance(code, (int, float)) or isinstance(code, bool):
            code = None

        # Only an absent message is filled in; an empty one is kept
        if "message" not in value or value["message"] is None:
            message = ERROR_MESSAGES.get(code, "Unknown error")
        elif isinstance(value["message"], str):
            message = value["message"]
        else:
            message = str(value["message"])

        return cls(code=code, message=message, data=value.get("data"), raw=value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        if isinstance(self.raw, dict):
            return dict(self.raw)
        error: dict[str, Any] = {"message": self.message}
        if self.code is not None:
            error["code"] = self.code
        if self.data is not None:
            error["data"] = self.data
        return error


@dataclass(frozen=True)
class ResponseSuccess:
    """Reply carrying a result."""

    id: RequestID
    result: Any = None

    @property
    def is_error(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"Response(id={self.id}, success)"


@dataclass(frozen=True)
class ResponseFailure:
    """Reply carrying an error."""

    id: RequestID
    error: ResponseError

    @property
    def is_error(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"Response(id={self.id}, error={self.error.code})"


Response = ResponseSuccess | ResponseFailure


@dataclass(frozen=True)
class Event:
    """
    Unsolicited message pushed by the remote end.

    Events never carry an id. `session_id` is set for events routed
    through a flattened target session.
    """

    method: str
    params: Any = None
    session_id: str | None = None

    def __str__(self) -> str:
        return f"Event({self.method})"


@dataclass(frozen=True)
class Unrecognized:
    """An inbound message that is neither a reply nor an event."""

    raw: str | bytes
    reason: str

    def __str__(self) -> str:
        return f"Unrecognized({self.reason})"
