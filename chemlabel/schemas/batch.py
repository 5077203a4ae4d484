"""Request and response models for batch re-extraction."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class BatchRequest(BaseModel):
    """Batch re-extraction request.

    Explicit ``document_ids`` take precedence over the quality filter;
    ``force_reprocess`` re-extracts documents regardless of their score.
    """

    facility_id: Optional[UUID] = None
    document_ids: Optional[list[UUID]] = None
    quality_threshold: int = Field(default=50, ge=0, le=100)
    force_reprocess: bool = False


class BatchResponse(BaseModel):
    success: bool = True
    message: str
    total_documents: int
    processed: int
    skipped: int
    failed: int
    errors: list[str] = Field(default_factory=list)
    quality_threshold: int
    force_reprocess: bool
