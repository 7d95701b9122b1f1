from __future__ import annotations

"""Application factory for the document gateway.

Centralizes app construction (metadata, middleware, handlers, routers and the
shared document client lifecycle) so tests can build isolated apps.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from honest_mark.api.routes import documents_router, health_router
from honest_mark.core.config import settings
from honest_mark.core.exception_handlers import setup_exception_handlers
from honest_mark.core.logging import configure_logging
from honest_mark.core.middleware import request_id_middleware
from honest_mark.services.document_service import HonestMarkClient
from honest_mark.services.factory import create_document_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    if app.state.document_client is None and settings.client.auth_token:
        app.state.document_client = create_document_client()
        logger.info(
            "gateway.client_created",
            extra={
                "request_limit": settings.client.request_limit,
                "time_unit": settings.client.time_unit.value,
            },
        )
    elif app.state.document_client is None:
        logger.warning("gateway.client_not_configured")

    try:
        yield
    finally:
        client: HonestMarkClient | None = app.state.document_client
        if client is not None:
            await client.close()


def create_app(client: HonestMarkClient | None = None, *, configure_logs: bool = True) -> FastAPI:
    """Create and configure the gateway FastAPI app.

    Args:
        client: Optional preconfigured client. When omitted, one is built
            from settings at startup (if HONEST_MARK_AUTH_TOKEN is set).
        configure_logs: Whether to (re)configure root logging.

    Returns:
        Configured FastAPI app. The client is closed on shutdown.
    """
    # Logging first so subsequent init logs are formatted as desired
    if configure_logs:
        configure_logging(settings.log)

    app = FastAPI(
        title="Honest Mark Document Gateway",
        description=(
            "Submits 'introduce goods' documents to the Honest Mark API under a "
            "shared request quota. Requires X-API-Key."
        ),
        version="0.1.0",
        lifespan=_lifespan,
    )
    app.state.document_client = client

    app.middleware("http")(request_id_middleware)
    setup_exception_handlers(app)

    app.include_router(documents_router, prefix="/v1")
    app.include_router(health_router)

    return app
