"""Tests for the pending request table."""

import asyncio

import pytest

from cdpclient.protocol import (
    ConnectionClosedError,
    PendingTable,
    Request,
    RequestFailed,
    ResponseError,
    ResponseFailure,
    ResponseSuccess,
)


def make_request(request_id="r1", method="Page.navigate"):
    return Request(id=request_id, method=method, params={"url": "https://example.com"})


class TestPendingTable:

    @pytest.mark.asyncio
    async def test_register_and_resolve(self):
        table = PendingTable()
        entry = table.register(make_request())
        assert "r1" in table
        assert len(table) == 1

        assert table.resolve(ResponseSuccess(id="r1", result={"frameId": "f1"})) is True
        assert "r1" not in table
        assert await entry.future == {"frameId": "f1"}

    @pytest.mark.asyncio
    async def test_duplicate_registration_rejected(self):
        table = PendingTable()
        table.register(make_request())
        with pytest.raises(ValueError, match="already pending"):
            table.register(make_request())

    @pytest.mark.asyncio
    async def test_unknown_id_not_resolved(self):
        table = PendingTable()
        assert table.resolve(ResponseSuccess(id="missing", result={})) is False

    @pytest.mark.asyncio
    async def test_second_reply_is_unmatched(self):
        table = PendingTable()
        entry = table.register(make_request())
        assert table.resolve(ResponseSuccess(id="r1", result=1)) is True
        assert table.resolve(ResponseSuccess(id="r1", result=2)) is False
        assert await entry.future == 1

    @pytest.mark.asyncio
    async def test_failure_reply_raises_request_failed(self):
        table = PendingTable()
        request = make_request()
        entry = table.register(request)
        failure = ResponseFailure(
            id="r1",
            error=ResponseError(code=-32000, message="Cannot navigate", data={"u": 1}),
        )
        table.resolve(failure)

        with pytest.raises(RequestFailed) as exc_info:
            await entry.future
        assert exc_info.value.request is request
        assert exc_info.value.response is failure
        assert exc_info.value.code == -32000
        assert exc_info.value.data == {"u": 1}
        assert str(exc_info.value) == "Request failed: Cannot navigate"

    @pytest.mark.asyncio
    async def test_resolving_one_leaves_others(self):
        table = PendingTable()
        a = table.register(make_request("a"))
        b = table.register(make_request("b"))

        table.resolve(ResponseSuccess(id="a", result="A"))
        assert await a.future == "A"
        assert not b.future.done()
        assert "b" in table

    @pytest.mark.asyncio
    async def test_fail_all(self):
        table = PendingTable()
        first = table.register(make_request("a"))
        second = table.register(make_request("b"))

        assert table.fail_all("gone") == 2
        assert len(table) == 0
        for entry in (first, second):
            with pytest.raises(ConnectionClosedError, match="gone") as exc_info:
                await entry.future
            assert exc_info.value.request is entry.request

    @pytest.mark.asyncio
    async def test_discard(self):
        table = PendingTable()
        table.register(make_request())
        table.discard("r1")
        table.discard("r1")
        assert len(table) == 0


class TestPendingRequest:

    @pytest.mark.asyncio
    async def test_settles_once(self):
        table = PendingTable()
        entry = table.register(make_request())

        assert entry.resolve(ResponseSuccess(id="r1", result=1)) is True
        assert entry.settled
        assert entry.resolve(ResponseSuccess(id="r1", result=2)) is False
        assert entry.fail(ConnectionClosedError("late")) is False
        assert await entry.future == 1

    @pytest.mark.asyncio
    async def test_cancelled_caller(self):
        table = PendingTable()
        entry = table.register(make_request())
        entry.future.cancel()

        assert entry.resolve(ResponseSuccess(id="r1", result=1)) is False
        assert entry.settled
        with pytest.raises(asyncio.CancelledError):
            await entry.future
