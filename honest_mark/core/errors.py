"""Application-level exception types.

This module defines the errors raised across the client, transport and
gateway layers, enabling consistent error handling, logging, and API
responses. Every failure path of a document submission ends in one of
these types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients.

    Fields are optional to keep shapes flexible while encouraging
    consistency across the codebase.
    """

    code: str
    message: str
    hint: str
    field: str
    http_status: int
    body: str
    error_code: str
    error_description: str
    error_type: str
    url: str
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails. No network call is made."""


class EncodingAppError(AppError):
    """Raised when an outbound request cannot be serialized."""


class TransportAppError(AppError):
    """Raised when the HTTP call fails at the connection/IO level."""


class ApiAppError(AppError):
    """Raised when the remote service rejects or garbles a submission.

    Covers non-200 statuses, unparseable 200 bodies and business errors
    reported by the service inside a 200 body.
    """

    @property
    def status_code(self) -> int | None:
        return (self.details or {}).get("http_status")

    @property
    def body(self) -> str | None:
        return (self.details or {}).get("body")


class ClientClosedAppError(AppError):
    """Raised when submitting through a client that was already closed."""


class AuthenticationAppError(AppError):
    """Raised when gateway authentication/authorization fails."""
