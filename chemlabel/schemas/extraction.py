"""Request and response models for SDS extraction."""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ExtractionRequest(BaseModel):
    """Extraction request.

    Attributes:
        document_id: SDS document to extract
        bucket_url: Storage URL of the PDF, preferred over source_url
        source_url: Original web URL of the PDF
    """

    document_id: UUID = Field(..., description="SDS document to extract")
    bucket_url: Optional[str] = Field(default=None, description="Storage URL of the PDF")
    source_url: Optional[str] = Field(default=None, description="Original web URL of the PDF")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "document_id": "550e8400-e29b-41d4-a716-446655440000",
                    "bucket_url": "https://storage.example.com/sds/acetone.pdf",
                }
            ]
        }
    }


class ExtractedData(BaseModel):
    """Structured hazard record extracted from an SDS."""

    model_config = ConfigDict(extra="allow")

    product_name: Optional[str] = None
    manufacturer: Optional[str] = None
    cas_number: Optional[str] = None
    document_type: Optional[str] = None
    signal_word: Optional[str] = None
    h_codes: list[dict[str, Any]] = Field(default_factory=list)
    pictograms: list[dict[str, Any]] = Field(default_factory=list)
    hazard_statements: list[str] = Field(default_factory=list)
    precautionary_statements: list[str] = Field(default_factory=list)
    physical_hazards: list[str] = Field(default_factory=list)
    health_hazards: list[str] = Field(default_factory=list)
    environmental_hazards: list[str] = Field(default_factory=list)
    first_aid: dict[str, str] = Field(default_factory=dict)
    ppe_requirements: dict[str, Any] = Field(default_factory=dict)
    hmis_codes: dict[str, int] = Field(default_factory=dict)
    nfpa_codes: dict[str, int] = Field(default_factory=dict)
    ghs_section2_data: dict[str, Any] = Field(default_factory=dict)
    handling_storage: dict[str, list[str]] = Field(default_factory=dict)
    regulatory_notes: list[str] = Field(default_factory=list)
    extraction_quality_score: int = Field(default=0, ge=0, le=100)
    ai_extraction_confidence: int = Field(default=0, ge=0, le=100)
    extraction_status: str = "pending"
    is_readable: bool = False


class ExtractionResponse(BaseModel):
    """Extraction response.

    ``persisted`` is false when the record was extracted but could not be
    saved; ``persistence_error`` then says why.
    """

    success: bool = True
    document_id: UUID
    persisted: bool
    persistence_error: Optional[str] = None
    text_length: int = 0
    extracted_data: ExtractedData


class ErrorResponse(BaseModel):
    """Error payload carried in ``HTTPException.detail``."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human readable error message")
    detail: Optional[str] = Field(default=None, description="Underlying error detail")
