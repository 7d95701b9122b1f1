"""API key authentication for the gateway.

Keys are validated against a comma-separated list from environment
variables (APP_API_KEYS). The pure validation function is kept separate
from the FastAPI dependency so it can be tested without a request.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Annotated

from fastapi import Header

from honest_mark.core.config import settings
from honest_mark.core.errors import AuthenticationAppError

logger = logging.getLogger(__name__)


def parse_api_keys(keys_string: str | None) -> set[str]:
    """Parse comma-separated API keys into a set of trimmed, non-empty keys.

    Examples:
        >>> sorted(parse_api_keys("key1, key2 ,key1"))
        ['key1', 'key2']
        >>> parse_api_keys(None)
        set()
    """
    if not keys_string:
        return set()
    return {key.strip() for key in keys_string.split(",") if key.strip()}


def _key_fingerprint(key: str) -> str:
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def validate_api_key(provided_key: str | None) -> None:
    """Validate that the provided API key matches a configured key.

    Raises:
        AuthenticationAppError: If the key is missing/invalid, or auth is
            required but no keys are configured.
    """
    if not settings.app.api_key_required:
        return

    valid_keys = parse_api_keys(settings.app.api_keys)
    if not valid_keys:
        logger.error("auth.failed", extra={"reason": "api_keys_not_configured"})
        raise AuthenticationAppError(
            code="api_keys_not_configured",
            message="API key authentication is enabled but no valid keys are configured",
            details={"hint": "Set APP_API_KEYS or disable auth with APP_API_KEY_REQUIRED=false"},
        )

    if not provided_key or provided_key not in valid_keys:
        logger.warning(
            "auth.failed",
            extra={
                "reason": "invalid_api_key" if provided_key else "missing_api_key",
                "api_key_hash": _key_fingerprint(provided_key) if provided_key else None,
            },
        )
        raise AuthenticationAppError(
            code="invalid_api_key",
            message="Invalid or missing API key",
        )


async def verify_api_key(
    x_api_key: Annotated[str | None, Header(alias="X-API-Key")] = None,
) -> None:
    """FastAPI dependency enforcing X-API-Key on gateway routes.

    Authentication errors are rendered as 403 by the global exception
    handlers.
    """
    validate_api_key(x_api_key)
    if settings.app.api_key_required:
        logger.debug("auth.success", extra={"api_key_hash": _key_fingerprint(x_api_key or "")})
