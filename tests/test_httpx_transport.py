"""Tests for the httpx transport adapter using httpx.MockTransport."""

import httpx
import pytest

from honest_mark.adapters.transport.httpx_client import HttpxTransport
from honest_mark.core.errors import TransportAppError

URL = "https://example.test/api/v3/lk/documents/create"


def _transport(handler) -> HttpxTransport:
    return HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_send_returns_status_and_text() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, text='{"value":"abc"}')

    transport = _transport(handler)

    response = await transport.send(
        "POST",
        URL,
        {"Authorization": "Bearer t", "Content-Type": "application/json"},
        '{"productGroup":"SHOES"}',
    )

    assert response.status_code == 201
    assert response.body == '{"value":"abc"}'
    assert seen[0].method == "POST"
    assert seen[0].headers["Authorization"] == "Bearer t"
    assert seen[0].content == b'{"productGroup":"SHOES"}'
    await transport.close()


@pytest.mark.asyncio
async def test_connect_error_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = _transport(handler)

    with pytest.raises(TransportAppError) as exc:
        await transport.send("POST", URL, {}, "{}")

    assert exc.value.code == "transport_error"
    assert exc.value.details["url"] == URL
    await transport.close()


@pytest.mark.asyncio
async def test_timeout_is_wrapped_with_own_code() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    transport = _transport(handler)

    with pytest.raises(TransportAppError) as exc:
        await transport.send("POST", URL, {}, "{}")

    assert exc.value.code == "transport_timeout"
    await transport.close()


@pytest.mark.asyncio
async def test_close_twice_is_safe() -> None:
    transport = _transport(lambda request: httpx.Response(200))

    await transport.close()
    await transport.close()

    assert transport.client.is_closed
