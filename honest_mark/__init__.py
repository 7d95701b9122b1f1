"""Rate-limited asyncio client for the Honest Mark document creation API."""

from honest_mark.core.errors import (
    ApiAppError,
    AppError,
    ClientClosedAppError,
    EncodingAppError,
    TransportAppError,
    ValidationAppError,
)
from honest_mark.schemas.document import (
    DocumentFormat,
    DocumentResponse,
    DocumentType,
    HonestMarkDocument,
    ProductGroup,
)
from honest_mark.schemas.time_unit import TimeUnit
from honest_mark.services.document_service import HonestMarkClient

__all__ = [
    "ApiAppError",
    "AppError",
    "ClientClosedAppError",
    "DocumentFormat",
    "DocumentResponse",
    "DocumentType",
    "EncodingAppError",
    "HonestMarkClient",
    "HonestMarkDocument",
    "ProductGroup",
    "TimeUnit",
    "TransportAppError",
    "ValidationAppError",
]
