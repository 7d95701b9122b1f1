"""Pydantic schemas for Honest Mark documents, requests and responses."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ProductGroup(str, Enum):
    """Commodity groups accepted by the document creation endpoint."""

    CLOTHES = "CLOTHES"
    SHOES = "SHOES"
    TOBACCO = "TOBACCO"
    PERFUMES = "PERFUMES"
    TIRES = "TIRES"
    ELECTRONICS = "ELECTRONICS"
    DAIRY = "DAIRY"


class DocumentFormat(str, Enum):
    MANUAL = "MANUAL"
    CSV = "CSV"
    XML = "XML"


class DocumentType(str, Enum):
    LP_INTRODUCE_GOODS = "LP_INTRODUCE_GOODS"


class HonestMarkDocument(BaseModel):
    """Document describing goods to be introduced into circulation.

    Format and type are deliberately optional at the model level: a missing
    value is rejected by the request factory with a validation error rather
    than defaulted.
    """

    model_config = ConfigDict(frozen=True)

    product_document: str | None = Field(
        default=None,
        description="Document body in the declared format (base64 or raw text).",
    )
    product_group: ProductGroup | None = Field(
        default=None,
        description="Commodity group the document belongs to.",
    )
    document_format: DocumentFormat | None = Field(
        default=None,
        description="Format of product_document: MANUAL, CSV or XML.",
    )
    type: DocumentType | None = Field(
        default=None,
        description="Document type, currently only LP_INTRODUCE_GOODS.",
    )


class DocumentRequest(BaseModel):
    """Outbound payload sent to the document creation endpoint.

    Field names follow the wire contract (camelCase) via aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_document: str | None = Field(default=None, alias="productDocument")
    product_group: str | None = Field(default=None, alias="productGroup")
    document_format: DocumentFormat = Field(..., alias="documentFormat")
    type: DocumentType = Field(...)
    signature: str = Field(...)


class DocumentResponse(BaseModel):
    """Response body of the document creation endpoint.

    A body may carry both ``value`` and error fields; ``has_error`` is the
    only success/failure discriminator and error wins.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: str | None = Field(
        default=None,
        description="Identifier of the created document on success.",
    )
    error_code: str | None = Field(default=None, alias="errorCode")
    error_message: str | None = Field(default=None, alias="errorMessage")
    error_description: str | None = Field(default=None, alias="errorDescription")

    def has_error(self) -> bool:
        return bool(self.error_code) or bool(self.error_message)
