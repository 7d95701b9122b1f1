"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any module imports the settings, so
the global ``settings`` object is built from test values.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("APP_API_KEY_REQUIRED", "true")
os.environ.setdefault("APP_API_KEYS", "test-api-key-123,test-api-key-456")
os.environ.setdefault("LOG_FORMAT", "plain")

from unittest.mock import AsyncMock

import pytest

from honest_mark.adapters.transport.base import AbstractTransport, TransportResponse
from honest_mark.schemas.document import (
    DocumentFormat,
    DocumentType,
    HonestMarkDocument,
    ProductGroup,
)


@pytest.fixture
def document() -> HonestMarkDocument:
    return HonestMarkDocument(
        product_document="x",
        product_group=ProductGroup.SHOES,
        document_format=DocumentFormat.MANUAL,
        type=DocumentType.LP_INTRODUCE_GOODS,
    )


@pytest.fixture
def transport() -> AsyncMock:
    """Transport mock answering 200 with a created document id."""
    mock = AsyncMock(spec=AbstractTransport)
    mock.send.return_value = TransportResponse(status_code=200, body='{"value":"ok"}')
    return mock
