"""httpx-based transport adapter."""

from __future__ import annotations

import logging

import httpx

from honest_mark.adapters.transport.base import AbstractTransport, TransportResponse
from honest_mark.core.errors import TransportAppError

logger = logging.getLogger(__name__)


class HttpxTransport(AbstractTransport):
    """Transport backed by a pooled ``httpx.AsyncClient``.

    One instance is shared by every submission of a client, so connections
    are reused across calls.
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout_seconds: Timeout applied to connect, read and write.
            client: Optional preconfigured client (e.g. with a MockTransport
                in tests). Ownership passes to this adapter.
        """
        self.client = client or httpx.AsyncClient(timeout=timeout_seconds)
        self._closed = False

    async def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str,
    ) -> TransportResponse:
        """Send the request and return status and body text.

        Raises:
            TransportAppError: On connection errors, timeouts and other
                transport-level httpx failures.
        """
        try:
            response = await self.client.request(
                method,
                url,
                headers=headers,
                content=body.encode("utf-8"),
            )
        except httpx.TimeoutException as exc:
            raise TransportAppError(
                code="transport_timeout",
                message=f"Request to document API timed out: {exc}",
                details={"url": url, "error_type": type(exc).__name__},
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportAppError(
                code="transport_error",
                message=f"Request to document API failed: {exc}",
                details={"url": url, "error_type": type(exc).__name__},
            ) from exc

        return TransportResponse(status_code=response.status_code, body=response.text)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self.client.aclose()
        logger.debug("transport.closed")
