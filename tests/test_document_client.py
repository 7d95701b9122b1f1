"""Tests for HonestMarkClient: validation, transport call, classification, lifecycle."""

import asyncio
import time
from unittest.mock import AsyncMock

import pytest

from honest_mark.adapters.rate_limit.in_memory import InMemoryQuotaTracker
from honest_mark.adapters.transport.base import TransportResponse
from honest_mark.core.config import DEFAULT_API_URL
from honest_mark.core.errors import (
    ApiAppError,
    ClientClosedAppError,
    TransportAppError,
    ValidationAppError,
)
from honest_mark.core.rate_limit import AdmissionGate
from honest_mark.schemas.document import DocumentType, HonestMarkDocument, ProductGroup
from honest_mark.schemas.time_unit import TimeUnit
from honest_mark.services.document_service import HonestMarkClient, classify_response


def _client(transport: AsyncMock, **kwargs) -> HonestMarkClient:
    return HonestMarkClient(TimeUnit.MINUTES, 5, "secret-token", transport=transport, **kwargs)


class TestConstruction:
    @pytest.mark.parametrize("limit", [0, -3])
    def test_non_positive_limit_fails_fast(self, transport: AsyncMock, limit: int) -> None:
        with pytest.raises(ValidationAppError) as exc:
            HonestMarkClient(TimeUnit.SECONDS, limit, "token", transport=transport)
        assert exc.value.code == "invalid_request_limit"

    def test_empty_token_fails_fast(self, transport: AsyncMock) -> None:
        with pytest.raises(ValidationAppError) as exc:
            HonestMarkClient(TimeUnit.SECONDS, 1, "", transport=transport)
        assert exc.value.code == "auth_token_missing"

    def test_default_gate_uses_time_unit_window(self, transport: AsyncMock) -> None:
        client = HonestMarkClient(TimeUnit.HOURS, 7, "token", transport=transport)
        assert client.gate.tracker.capacity == 7
        assert client.gate.tracker.window_seconds == 3600.0


class TestSubmit:
    @pytest.mark.asyncio
    async def test_success_posts_json_with_bearer_token(
        self, transport: AsyncMock, document: HonestMarkDocument
    ) -> None:
        client = _client(transport)

        response = await client.submit(document, "sig")

        assert response.value == "ok"
        transport.send.assert_awaited_once()
        method, url, headers, body = transport.send.await_args.args
        assert method == "POST"
        assert url == DEFAULT_API_URL
        assert headers == {
            "Authorization": "Bearer secret-token",
            "Content-Type": "application/json",
        }
        assert '"productGroup":"SHOES"' in body
        assert '"documentFormat":"MANUAL"' in body

    @pytest.mark.asyncio
    async def test_null_format_fails_without_network_call(self, transport: AsyncMock) -> None:
        client = _client(transport)
        document = HonestMarkDocument(
            product_document="x",
            product_group=ProductGroup.SHOES,
            type=DocumentType.LP_INTRODUCE_GOODS,
        )

        with pytest.raises(ValidationAppError):
            await client.submit(document, "sig")

        assert transport.send.await_count == 0

    @pytest.mark.asyncio
    async def test_null_document_fails_without_network_call(self, transport: AsyncMock) -> None:
        client = _client(transport)

        with pytest.raises(ValidationAppError):
            await client.submit(None, "sig")

        transport.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_validation_failure_consumes_no_permit(self, transport: AsyncMock) -> None:
        tracker = InMemoryQuotaTracker(capacity=1, window_seconds=60)
        client = _client(transport, gate=AdmissionGate(tracker))

        with pytest.raises(ValidationAppError):
            await client.submit(HonestMarkDocument(product_document="x"), "sig")

        assert tracker.remaining == 1

    @pytest.mark.asyncio
    async def test_business_error_in_200_body(
        self, transport: AsyncMock, document: HonestMarkDocument
    ) -> None:
        transport.send.return_value = TransportResponse(
            status_code=200, body='{"errorCode":"E1","errorMessage":"bad"}'
        )
        client = _client(transport)

        with pytest.raises(ApiAppError) as exc:
            await client.submit(document, "sig")

        assert exc.value.message == "bad"
        assert exc.value.details["error_code"] == "E1"

    @pytest.mark.asyncio
    async def test_non_200_status(self, transport: AsyncMock, document: HonestMarkDocument) -> None:
        transport.send.return_value = TransportResponse(status_code=500, body="boom")
        client = _client(transport)

        with pytest.raises(ApiAppError) as exc:
            await client.submit(document, "sig")

        assert exc.value.status_code == 500
        assert exc.value.body == "boom"
        assert "500" in exc.value.message
        assert "boom" in exc.value.message

    @pytest.mark.asyncio
    async def test_unparseable_200_body(self, transport: AsyncMock, document: HonestMarkDocument) -> None:
        transport.send.return_value = TransportResponse(status_code=200, body="<html>")
        client = _client(transport)

        with pytest.raises(ApiAppError) as exc:
            await client.submit(document, "sig")

        assert exc.value.code == "response_parse_failed"

    @pytest.mark.asyncio
    async def test_os_error_from_transport_becomes_transport_error(
        self, transport: AsyncMock, document: HonestMarkDocument
    ) -> None:
        transport.send.side_effect = ConnectionResetError("reset by peer")
        client = _client(transport)

        with pytest.raises(TransportAppError) as exc:
            await client.submit(document, "sig")

        assert isinstance(exc.value.__cause__, ConnectionResetError)
        transport.send.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_transport_app_error_passes_through(
        self, transport: AsyncMock, document: HonestMarkDocument
    ) -> None:
        original = TransportAppError(code="transport_timeout", message="timed out")
        transport.send.side_effect = original
        client = _client(transport)

        with pytest.raises(TransportAppError) as exc:
            await client.submit(document, "sig")

        assert exc.value is original

    @pytest.mark.asyncio
    async def test_five_concurrent_submits_with_capacity_two(self, document: HonestMarkDocument) -> None:
        window = 0.25
        sent_at: list[float] = []

        async def send(*args) -> TransportResponse:
            sent_at.append(time.monotonic())
            return TransportResponse(status_code=200, body='{"value":"ok"}')

        transport = AsyncMock()
        transport.send.side_effect = send
        start = time.monotonic()
        gate = AdmissionGate(InMemoryQuotaTracker(capacity=2, window_seconds=window))
        client = HonestMarkClient(TimeUnit.SECONDS, 2, "token", transport=transport, gate=gate)

        results = await asyncio.gather(*(client.submit(document, "sig") for _ in range(5)))

        assert [r.value for r in results] == ["ok"] * 5
        early = [t for t in sent_at if t - start < window]
        late = [t for t in sent_at if t - start >= window]
        assert len(early) == 2
        assert len(late) == 3


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, transport: AsyncMock) -> None:
        client = _client(transport)

        await client.close()
        await client.close()

        assert client.closed is True
        transport.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_submit_after_close_fails(self, transport: AsyncMock, document: HonestMarkDocument) -> None:
        client = _client(transport)
        await client.close()

        with pytest.raises(ClientClosedAppError):
            await client.submit(document, "sig")
        transport.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_close_while_waiting_for_quota(self, transport: AsyncMock, document: HonestMarkDocument) -> None:
        gate = AdmissionGate(InMemoryQuotaTracker(capacity=1, window_seconds=0.1))
        client = _client(transport, gate=gate)
        await client.submit(document, "sig")

        waiting = asyncio.create_task(client.submit(document, "sig"))
        await asyncio.sleep(0.01)
        await client.close()

        with pytest.raises(ClientClosedAppError):
            await waiting
        assert transport.send.await_count == 1

    @pytest.mark.asyncio
    async def test_async_context_manager_closes(self, transport: AsyncMock) -> None:
        async with _client(transport) as client:
            assert client.closed is False
        assert client.closed is True


def test_classify_prefers_error_over_value() -> None:
    raw = TransportResponse(status_code=200, body='{"value":"id-1","errorMessage":"rejected"}')
    with pytest.raises(ApiAppError, match="rejected"):
        classify_response(raw)


def test_classify_success_returns_parsed_response() -> None:
    raw = TransportResponse(status_code=200, body='{"value":"id-1"}')
    assert classify_response(raw).value == "id-1"
