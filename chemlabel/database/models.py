"""SQLAlchemy models for the SDS extraction tables."""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import TIMESTAMP, Boolean, Index, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from chemlabel.core.database import Base


class SDSDocument(Base):
    """Safety Data Sheet and the hazard record extracted from it."""

    __tablename__ = "sds_documents"
    __table_args__ = (
        Index("idx_sds_documents_facility_id", "facility_id"),
        Index("idx_sds_documents_quality_score", "extraction_quality_score"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    facility_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True
    )

    # Descriptive
    product_name: Mapped[str | None] = mapped_column(String, nullable=True)
    manufacturer: Mapped[str | None] = mapped_column(String, nullable=True)
    cas_number: Mapped[str | None] = mapped_column(String, nullable=True)
    file_name: Mapped[str | None] = mapped_column(String, nullable=True)
    document_type: Mapped[str | None] = mapped_column(String, nullable=True)

    # Source location
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    bucket_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    full_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Extracted hazard fields
    signal_word: Mapped[str | None] = mapped_column(String, nullable=True)
    h_codes: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    pictograms: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    hazard_statements: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    precautionary_statements: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    physical_hazards: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    health_hazards: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    environmental_hazards: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    first_aid: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    ppe_requirements: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    hmis_codes: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    nfpa_codes: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    ghs_section2_data: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    handling_storage: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    regulatory_notes: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)

    # Quality metadata
    extraction_quality_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    ai_extraction_confidence: Mapped[int | None] = mapped_column(Integer, nullable=True)
    extraction_status: Mapped[str] = mapped_column(
        String, nullable=False, default="pending"
    )  # pending | completed | osha_compliant | manual_review_required | ai_enhanced
    is_readable: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    last_extracted_at: Mapped[datetime | None] = mapped_column(
        TIMESTAMP(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=text("NOW()")
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=text("NOW()"), onupdate=lambda: datetime.now(timezone.utc)
    )

    @property
    def document_url(self) -> str | None:
        """URL to fetch the PDF from, bucket copy first."""
        return self.bucket_url or self.source_url

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping of the hazard record used by validation and API responses."""
        return {
            "id": str(self.id) if self.id else None,
            "facility_id": str(self.facility_id) if self.facility_id else None,
            "product_name": self.product_name,
            "manufacturer": self.manufacturer,
            "cas_number": self.cas_number,
            "file_name": self.file_name,
            "document_type": self.document_type,
            "source_url": self.source_url,
            "bucket_url": self.bucket_url,
            "signal_word": self.signal_word,
            "h_codes": self.h_codes or [],
            "pictograms": self.pictograms or [],
            "hazard_statements": self.hazard_statements or [],
            "precautionary_statements": self.precautionary_statements or [],
            "physical_hazards": self.physical_hazards or [],
            "health_hazards": self.health_hazards or [],
            "environmental_hazards": self.environmental_hazards or [],
            "first_aid": self.first_aid or {},
            "ppe_requirements": self.ppe_requirements or {},
            "hmis_codes": self.hmis_codes or {},
            "nfpa_codes": self.nfpa_codes or {},
            "ghs_section2_data": self.ghs_section2_data or {},
            "handling_storage": self.handling_storage or {},
            "regulatory_notes": self.regulatory_notes or [],
            "extraction_quality_score": self.extraction_quality_score,
            "ai_extraction_confidence": self.ai_extraction_confidence,
            "extraction_status": self.extraction_status,
            "is_readable": self.is_readable,
        }
