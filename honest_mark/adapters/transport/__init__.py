"""HTTP transport adapter layer - abstracts over the HTTP client library."""

from honest_mark.adapters.transport.base import AbstractTransport, TransportResponse
from honest_mark.adapters.transport.httpx_client import HttpxTransport

__all__ = [
    "AbstractTransport",
    "HttpxTransport",
    "TransportResponse",
]
