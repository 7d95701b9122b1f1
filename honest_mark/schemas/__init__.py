"""Pydantic schemas and enums for documents and rate limit configuration."""

from honest_mark.schemas.document import (
    DocumentFormat,
    DocumentRequest,
    DocumentResponse,
    DocumentType,
    HonestMarkDocument,
    ProductGroup,
)
from honest_mark.schemas.time_unit import TimeUnit

__all__ = [
    "DocumentFormat",
    "DocumentRequest",
    "DocumentResponse",
    "DocumentType",
    "HonestMarkDocument",
    "ProductGroup",
    "TimeUnit",
]
