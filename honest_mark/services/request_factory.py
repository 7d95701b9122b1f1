"""Validation, serialization and response decoding for document submissions."""

from __future__ import annotations

import json

from pydantic import ValidationError

from honest_mark.core.errors import ApiAppError, EncodingAppError, ValidationAppError
from honest_mark.schemas.document import DocumentRequest, DocumentResponse, HonestMarkDocument


def validate_document(document: HonestMarkDocument | None) -> HonestMarkDocument:
    """Check that a document can be submitted.

    Args:
        document: Document to check.

    Returns:
        The same document, for chaining.

    Raises:
        ValidationAppError: If the document, its format or its type is missing.
    """
    if document is None:
        raise ValidationAppError(
            code="document_missing",
            message="Document cannot be null",
        )
    if document.document_format is None:
        raise ValidationAppError(
            code="document_format_missing",
            message="Document format is required",
            details={"field": "document_format"},
        )
    if document.type is None:
        raise ValidationAppError(
            code="document_type_missing",
            message="Document type is required",
            details={"field": "type"},
        )
    return document


def build_request(document: HonestMarkDocument | None, signature: str) -> DocumentRequest:
    """Validate a document and project it, with its signature, into a request.

    Raises:
        ValidationAppError: If the document is incomplete or the signature is
            not a string.
    """
    document = validate_document(document)
    if not isinstance(signature, str):
        raise ValidationAppError(
            code="signature_missing",
            message="Signature is required",
            details={"field": "signature"},
        )

    product_group = document.product_group.value if document.product_group else None
    return DocumentRequest(
        product_document=document.product_document,
        product_group=product_group,
        document_format=document.document_format,
        type=document.type,
        signature=signature,
    )


def encode_request(request: DocumentRequest) -> str:
    """Serialize a request to its JSON wire form (camelCase field names).

    Raises:
        EncodingAppError: If the request cannot be serialized.
    """
    try:
        return request.model_dump_json(by_alias=True)
    except (ValueError, TypeError) as exc:
        raise EncodingAppError(
            code="request_encoding_failed",
            message=f"Failed to serialize document request: {exc}",
            details={"error_type": type(exc).__name__},
        ) from exc


def decode_response(body: str) -> DocumentResponse:
    """Parse a 200 response body.

    Raises:
        ApiAppError: If the body is not a JSON object of the expected shape.
    """
    try:
        payload = json.loads(body)
        if not isinstance(payload, dict):
            raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
        return DocumentResponse.model_validate(payload)
    except (ValueError, ValidationError) as exc:
        # json.JSONDecodeError is a ValueError
        raise ApiAppError(
            code="response_parse_failed",
            message="Failed to parse response",
            details={"http_status": 200, "body": body, "error_type": type(exc).__name__},
        ) from exc
