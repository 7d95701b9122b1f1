"""Honest Mark document client orchestrating validation, throttling and HTTP.

A submission runs through these steps:
- Validate the document and build the outbound request (no network call on
  failure)
- Serialize the request to JSON
- Wait for admission under the client-wide quota
- POST the body to the document creation endpoint
- Classify the HTTP outcome into a DocumentResponse or an ApiAppError

Exactly one HTTP call is issued per submission that passes validation and
serialization. Nothing is retried here.
"""

from __future__ import annotations

import logging

from honest_mark.adapters.transport.base import AbstractTransport, TransportResponse
from honest_mark.adapters.transport.httpx_client import HttpxTransport
from honest_mark.core.config import DEFAULT_API_URL
from honest_mark.core.errors import (
    ApiAppError,
    AppError,
    ClientClosedAppError,
    TransportAppError,
    ValidationAppError,
)
from honest_mark.core.rate_limit import AdmissionGate, build_admission_gate
from honest_mark.schemas.document import DocumentResponse, HonestMarkDocument
from honest_mark.schemas.time_unit import TimeUnit
from honest_mark.services.request_factory import build_request, decode_response, encode_request

logger = logging.getLogger(__name__)


def classify_response(response: TransportResponse) -> DocumentResponse:
    """Turn a raw HTTP outcome into a typed response.

    Args:
        response: Status code and body returned by the transport.

    Returns:
        Parsed DocumentResponse when the service reports success.

    Raises:
        ApiAppError: For non-200 statuses, unparseable bodies, or business
            errors reported in the body.
    """
    if response.status_code != 200:
        raise ApiAppError(
            code="api_http_error",
            message=(
                f"Request failed with status: {response.status_code}, "
                f"body: {response.body}"
            ),
            details={"http_status": response.status_code, "body": response.body},
        )

    parsed = decode_response(response.body)
    if parsed.has_error():
        details = {"http_status": 200, "body": response.body}
        if parsed.error_code:
            details["error_code"] = parsed.error_code
        if parsed.error_description:
            details["error_description"] = parsed.error_description
        raise ApiAppError(
            code="api_business_error",
            message=parsed.error_message or parsed.error_code or "",
            details=details,
        )
    return parsed


class HonestMarkClient:
    """Thread-safe, asyncio-native client for the document creation endpoint.

    One instance owns one quota window and one transport; every submission
    through it shares both. Use it as an async context manager or call
    ``close()`` explicitly.

    Example:
        >>> async with HonestMarkClient(TimeUnit.MINUTES, 5, "token") as client:
        ...     response = await client.submit(document, "signature")
    """

    def __init__(
        self,
        time_unit: TimeUnit,
        request_limit: int,
        auth_token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        transport: AbstractTransport | None = None,
        gate: AdmissionGate | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            time_unit: Length of one rate limit window.
            request_limit: Maximum submissions admitted per window.
            auth_token: Bearer token for the Authorization header.
            api_url: Document creation endpoint.
            transport: HTTP transport; defaults to an httpx-backed one.
            gate: Admission gate; defaults to an in-memory window built from
                time_unit and request_limit.
            timeout_seconds: Timeout of the default transport.

        Raises:
            ValidationAppError: If request_limit is not positive or the token
                is empty.
        """
        if time_unit is None:
            raise ValidationAppError(code="time_unit_missing", message="Time unit is required")
        if request_limit < 1:
            raise ValidationAppError(
                code="invalid_request_limit",
                message="Request limit must be a positive integer",
                details={"context": {"request_limit": request_limit}},
            )
        if not auth_token:
            raise ValidationAppError(
                code="auth_token_missing",
                message="Authentication token must be a non-empty string",
            )

        self.api_url = api_url
        self._headers = {
            "Authorization": f"Bearer {auth_token}",
            "Content-Type": "application/json",
        }
        self.gate = gate or build_admission_gate(time_unit, request_limit)
        self.transport = transport or HttpxTransport(timeout_seconds=timeout_seconds)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> "HonestMarkClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedAppError(
                code="client_closed",
                message="Client is closed; create a new client to submit documents",
            )

    async def _send(self, body: str) -> DocumentResponse:
        # Re-check after a possibly long admission wait.
        self._ensure_open()
        try:
            raw = await self.transport.send("POST", self.api_url, dict(self._headers), body)
        except AppError:
            raise
        except OSError as exc:
            raise TransportAppError(
                code="transport_error",
                message=f"Request to document API failed: {exc}",
                details={"url": self.api_url, "error_type": type(exc).__name__},
            ) from exc
        return classify_response(raw)

    async def submit(self, document: HonestMarkDocument | None, signature: str) -> DocumentResponse:
        """Submit a document for creation, waiting for quota if necessary.

        Args:
            document: Document to introduce into circulation.
            signature: Detached signature of the document.

        Returns:
            DocumentResponse reported by the service on success.

        Raises:
            ValidationAppError: If the document is incomplete (no HTTP call).
            EncodingAppError: If the request cannot be serialized (no HTTP call).
            TransportAppError: If the HTTP call fails at the connection level.
            ApiAppError: If the service rejects the document or answers garbage.
            ClientClosedAppError: If the client was closed.
        """
        self._ensure_open()

        request = build_request(document, signature)
        body = encode_request(request)

        logger.info(
            "document.submit_started",
            extra={
                "product_group": request.product_group,
                "document_format": request.document_format.value,
                "document_type": request.type.value,
            },
        )

        try:
            response = await self.gate.execute(lambda: self._send(body))
        except AppError as exc:
            logger.warning(
                "document.submit_failed",
                extra={
                    "error_code": exc.code,
                    "error_type": type(exc).__name__,
                    "http_status": (exc.details or {}).get("http_status"),
                },
            )
            raise

        logger.info("document.created", extra={"document_id": response.value})
        return response

    async def close(self) -> None:
        """Release transport resources. Calling it again is a no-op."""
        if self._closed:
            return
        self._closed = True
        await self.transport.close()
