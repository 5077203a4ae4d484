"""End-to-end SDS extraction: fetch, extract, score, classify and persist."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from chemlabel.core.config import ExtractionSettings, settings
from chemlabel.core.exceptions import DocumentNotFoundError, InvalidDocumentError, ValidationError
from chemlabel.repositories.sds_document_repository import SDSDocumentRepository
from chemlabel.services.base_service import BaseService
from chemlabel.services.extraction.extractors import (
    CASExtractor,
    DocumentClassifier,
    FirstAidExtractor,
    GHSSection2Parser,
    HandlingStorageExtractor,
    HazardCategoriesExtractor,
    HazardStatementExtractor,
    IdentificationExtractor,
    PictogramExtractor,
    RatingCodesExtractor,
    Section8PPEParser,
    SignalWordExtractor,
    hazard_section_text,
)
from chemlabel.services.extraction.ghs_hmis_converter import GHSToHMISConverter
from chemlabel.services.extraction.pdf_text_service import PDFTextService
from chemlabel.services.extraction.quality_scorer import calculate_confidence, calculate_quality_score
from chemlabel.services.extraction.status import derive_status
from chemlabel.services.validation.sds_validation_service import validate_record

UNREADABLE_NOTE = "Automatic text extraction pending"

# Only overwritten when the new extraction actually found a value
IDENTITY_FIELDS = ("product_name", "manufacturer", "cas_number")


@dataclass
class ExtractionResult:
    """Outcome of one extraction run."""

    document_id: UUID
    record: dict[str, Any]
    text_length: int
    persisted: bool
    persistence_error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "document_id": str(self.document_id),
            "persisted": self.persisted,
            "persistence_error": self.persistence_error,
            "text_length": self.text_length,
            "extracted_data": self.record,
        }


def extract_fields(text: str) -> dict[str, Any]:
    """Run every field extractor over cleaned document text.

    Args:
        text: Cleaned full text of the SDS

    Returns:
        Hazard record fields, without scores or status
    """
    hazard_text = hazard_section_text(text)
    h_codes = HazardStatementExtractor.extract_h_codes(hazard_text)
    ppe = Section8PPEParser.parse(text)
    section2 = GHSSection2Parser.parse(text)

    record: dict[str, Any] = {
        "product_name": IdentificationExtractor.extract_product_name(text),
        "manufacturer": IdentificationExtractor.extract_manufacturer(text),
        "cas_number": CASExtractor.extract(text),
        "document_type": DocumentClassifier.classify(text).value,
        "signal_word": SignalWordExtractor.extract(hazard_text),
        "h_codes": h_codes,
        "pictograms": PictogramExtractor.extract(hazard_text, h_codes),
        "hazard_statements": HazardStatementExtractor.extract_hazard_statements(hazard_text, h_codes),
        "precautionary_statements": HazardStatementExtractor.extract_precautionary_statements(hazard_text),
        **HazardCategoriesExtractor.extract(text),
        "first_aid": FirstAidExtractor.parse(text),
        "ppe_requirements": ppe.to_dict(),
        "hmis_codes": RatingCodesExtractor.extract_hmis(text),
        "nfpa_codes": RatingCodesExtractor.extract_nfpa(text),
        "ghs_section2_data": section2.to_dict(),
        "handling_storage": HandlingStorageExtractor.parse(text),
        "regulatory_notes": [],
    }

    if not record["signal_word"] and hazard_text is not text:
        record["signal_word"] = SignalWordExtractor.extract(text)

    # Ratings are derived only when the SDS prints none and classifies hazards
    if not record["hmis_codes"] and section2.hazard_classes:
        derived = GHSToHMISConverter.convert(section2)
        record["hmis_codes"] = derived.to_hmis_codes()
        record["regulatory_notes"].append(
            f"HMIS ratings derived from GHS classification (confidence {derived.confidence}%)"
        )

    return record


class SDSExtractionOrchestrator(BaseService):
    """Extracts a hazard record from an SDS document and stores it.

    Input errors (unknown document, no source, failed download) are raised
    before anything is written. Unreadable documents are not errors: they are
    stored with low confidence and ``manual_review_required`` status.
    """

    def __init__(
        self,
        repository: SDSDocumentRepository,
        pdf_service: Optional[PDFTextService] = None,
        extraction_settings: Optional[ExtractionSettings] = None,
    ):
        super().__init__(repository)
        self.pdf_service = pdf_service or PDFTextService()
        self.config = extraction_settings or settings.extraction

    def validate(
        self,
        document_id: UUID,
        bucket_url: Optional[str] = None,
        source_url: Optional[str] = None,
        file_bytes: Optional[bytes] = None,
        file_name: Optional[str] = None,
    ) -> None:
        if document_id is None:
            raise ValidationError("document_id is required")

    async def run(
        self,
        document_id: UUID,
        bucket_url: Optional[str] = None,
        source_url: Optional[str] = None,
        file_bytes: Optional[bytes] = None,
        file_name: Optional[str] = None,
    ) -> ExtractionResult:
        document = await self.repository.get_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(f"SDS document {document_id} not found")

        self.logger.info(
            "Starting SDS extraction",
            extra={"document_id": str(document_id), "has_upload": file_bytes is not None},
        )

        if file_bytes is None:
            document_url = bucket_url or source_url or document.document_url
            if not document_url:
                raise InvalidDocumentError(f"SDS document {document_id} has no bucket_url or source_url")
            file_bytes = await self.pdf_service.download(document_url)

        text = await self.pdf_service.extract_text(file_bytes)
        is_readable = len(text) >= self.config.min_readable_chars

        record = extract_fields(text)
        record["is_readable"] = is_readable
        if not is_readable:
            record["regulatory_notes"].append(UNREADABLE_NOTE)
        record["regulatory_notes"].append(f"Processed: {datetime.now(timezone.utc).isoformat()}")

        self.score(record, len(text), is_readable)

        self.logger.info(
            "SDS extraction completed",
            extra={
                "document_id": str(document_id),
                "text_length": len(text),
                "h_codes": len(record["h_codes"]),
                "pictograms": len(record["pictograms"]),
                "quality_score": record["extraction_quality_score"],
                "confidence": record["ai_extraction_confidence"],
                "status": record["extraction_status"],
            },
        )

        fields = {
            **record,
            "full_text": text[: self.config.full_text_max_chars],
            "last_extracted_at": datetime.now(timezone.utc),
        }
        for name in IDENTITY_FIELDS:
            if not fields[name]:
                fields.pop(name)
        if bucket_url:
            fields["bucket_url"] = bucket_url
        if source_url:
            fields["source_url"] = source_url
        if file_name:
            fields["file_name"] = file_name

        persisted, persistence_error = await self._persist(document_id, fields)

        return ExtractionResult(
            document_id=document_id,
            record=record,
            text_length=len(text),
            persisted=persisted,
            persistence_error=persistence_error,
        )

    def score(self, record: dict[str, Any], text_length: int, is_readable: bool) -> None:
        """Add quality score, confidence and status to ``record`` in place."""
        record["extraction_quality_score"] = calculate_quality_score(record, text_length)
        confidence = calculate_confidence(record, is_readable, self.config.unreadable_confidence_cap)
        record["ai_extraction_confidence"] = confidence

        report = validate_record(record)
        record["extraction_status"] = derive_status(
            confidence,
            is_readable,
            passes_validation=report.osha_compliant,
            osha_compliant_confidence=self.config.osha_compliant_confidence,
            ai_enhanced_confidence=self.config.ai_enhanced_confidence,
            manual_review_confidence=self.config.manual_review_confidence,
        ).value

    async def _persist(self, document_id: UUID, fields: dict[str, Any]) -> tuple[bool, Optional[str]]:
        try:
            updated = await self.repository.save_extraction(document_id, fields)
        except SQLAlchemyError as e:
            self.logger.error(
                "Failed to persist extraction result",
                exc_info=True,
                extra={"document_id": str(document_id), "error": str(e)},
            )
            return False, f"Database update failed: {str(e)}"

        if updated is None:
            self.logger.warning(
                "SDS document disappeared before the extraction was saved",
                extra={"document_id": str(document_id)},
            )
            return False, f"SDS document {document_id} no longer exists"

        return True, None
