from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from honest_mark.core.auth import verify_api_key
from honest_mark.core.errors import ClientClosedAppError
from honest_mark.schemas.document import (
    DocumentFormat,
    DocumentResponse,
    DocumentType,
    HonestMarkDocument,
    ProductGroup,
)
from honest_mark.services.document_service import HonestMarkClient

router = APIRouter(tags=["Documents"])


class DocumentSubmission(BaseModel):
    """Gateway request body: a document plus its detached signature.

    Format and type are optional here so that a missing value surfaces as the
    client's own validation error (400) rather than a schema error.
    """

    product_document: str | None = Field(default=None, description="Document body.")
    product_group: ProductGroup | None = Field(default=None)
    document_format: DocumentFormat | None = Field(default=None)
    type: DocumentType | None = Field(default=None)
    signature: str = Field(..., description="Detached signature of product_document.")

    def to_document(self) -> HonestMarkDocument:
        return HonestMarkDocument(
            product_document=self.product_document,
            product_group=self.product_group,
            document_format=self.document_format,
            type=self.type,
        )


def get_document_client(request: Request) -> HonestMarkClient:
    """FastAPI dependency returning the app-wide client.

    Raises:
        ClientClosedAppError: If no client is configured or it was closed.
    """
    client: HonestMarkClient | None = getattr(request.app.state, "document_client", None)
    if client is None or client.closed:
        raise ClientClosedAppError(
            code="client_unavailable",
            message="Document client is not configured",
            details={"hint": "Set HONEST_MARK_AUTH_TOKEN"},
        )
    return client


@router.post(
    "/documents",
    response_model=DocumentResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    dependencies=[Depends(verify_api_key)],
)
async def create_document(
    submission: DocumentSubmission,
    client: HonestMarkClient = Depends(get_document_client),
) -> DocumentResponse:
    """Submit a document to Honest Mark, waiting for quota if needed.

    Errors are rendered by the global handlers: 400 for incomplete documents,
    502 for upstream or transport failures, 503 when no client is available.
    """
    return await client.submit(submission.to_document(), submission.signature)
