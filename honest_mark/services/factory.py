"""Factory for creating document clients from settings."""

from honest_mark.core.config import ClientSettings, settings
from honest_mark.core.errors import ValidationAppError
from honest_mark.services.document_service import HonestMarkClient


def create_document_client(client_settings: ClientSettings | None = None) -> HonestMarkClient:
    """Instantiate a HonestMarkClient from configuration.

    Reads ``settings.client`` (HONEST_MARK_* environment variables) unless
    explicit settings are passed.

    Returns:
        HonestMarkClient: Configured client owning its own quota window.

    Raises:
        ValidationAppError: If no auth token is configured.
    """
    cfg = client_settings or settings.client

    if not cfg.auth_token:
        raise ValidationAppError(
            code="auth_token_missing",
            message="Honest Mark client requires HONEST_MARK_AUTH_TOKEN environment variable",
        )

    return HonestMarkClient(
        time_unit=cfg.time_unit,
        request_limit=cfg.request_limit,
        auth_token=cfg.auth_token,
        api_url=cfg.api_url,
        timeout_seconds=cfg.timeout_seconds,
    )
