"""Tests for protocol message types."""

import pytest

from cdpclient.lib import oj
from cdpclient.protocol import (
    INTERNAL_ERROR,
    Command,
    Request,
    ResponseError,
    ResponseSuccess,
    classify,
)


class TestRequest:

    def test_to_dict_without_session(self):
        request = Request(id="r1", method="Page.navigate", params={"url": "https://example.com"})
        assert request.to_dict() == {
            "id": "r1",
            "method": "Page.navigate",
            "params": {"url": "https://example.com"},
        }

    def test_to_dict_with_session(self):
        request = Request(id=3, method="Runtime.enable", session_id="S1")
        assert request.to_dict() == {
            "id": 3,
            "sessionId": "S1",
            "method": "Runtime.enable",
            "params": {},
        }

    def test_to_json_is_text(self):
        request = Request(id="r1", method="Browser.getVersion")
        payload = request.to_json()
        assert isinstance(payload, str)
        assert oj.loads(payload) == request.to_dict()

    def test_immutable(self):
        request = Request(id="r1", method="Browser.getVersion")
        with pytest.raises(AttributeError):
            request.method = "Browser.close"

    @pytest.mark.parametrize("request_id", ["5f1c-uuid", 42])
    def test_reply_id_round_trip(self, request_id):
        request = Request(id=request_id, method="Page.reload")
        sent = oj.loads(request.to_json())
        reply = classify(oj.dumps_str({"id": sent["id"], "result": {}}))
        assert isinstance(reply, ResponseSuccess)
        assert reply.id == request.id
        assert type(reply.id) is type(request.id)


class TestResponseError:

    def test_from_value(self):
        error = ResponseError.from_value({"code": -32000, "message": "No target", "data": "x"})
        assert error == ResponseError(code=-32000, message="No target", data="x")

    def test_missing_message_uses_standard_text(self):
        error = ResponseError.from_value({"code": INTERNAL_ERROR})
        assert error.message == "Internal error"

    def test_missing_message_unknown_code(self):
        error = ResponseError.from_value({"code": 1234})
        assert error.message == "Unknown error"

    def test_non_numeric_code_dropped(self):
        error = ResponseError.from_value({"code": "bad", "message": "m"})
        assert error.code is None

    def test_float_code_kept(self):
        error = ResponseError.from_value({"code": -32000.0, "message": "m"})
        assert error.code == -32000.0
        assert isinstance(error.code, float)

    def test_empty_message_kept(self):
        error = ResponseError.from_value({"code": -32000, "message": ""})
        assert error.message == ""

    def test_raw_payload_kept(self):
        value = {"code": -32000, "message": "m", "data": {"k": 1}, "extra": [1, 2]}
        error = ResponseError.from_value(value)
        assert error.raw == value
        assert error.to_dict() == value

    def test_to_dict_omits_empty_fields(self):
        assert ResponseError(code=None, message="m").to_dict() == {"message": "m"}


class TestCommand:

    def test_str_is_method(self):
        navigate: Command[dict, dict] = Command("Page.navigate")
        assert str(navigate) == "Page.navigate"
        assert navigate.method == "Page.navigate"
