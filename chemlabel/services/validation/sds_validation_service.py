"""OSHA / GHS completeness checks for persisted SDS records."""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from uuid import UUID

from chemlabel.core.exceptions import DocumentNotFoundError, ValidationError
from chemlabel.repositories.sds_document_repository import SDSDocumentRepository
from chemlabel.services.base_service import BaseService
from chemlabel.services.extraction.constants import SIGNAL_WORDS

CAS_NUMBER_PATTERN = re.compile(r"^\d{2,7}-\d{2}-\d$")
H_CODE_PATTERN = re.compile(r"^H\d{3}$")

MIN_NAME_LENGTH = 3
LOW_QUALITY_THRESHOLD = 50
MAX_WARNINGS_FOR_WELL_STRUCTURED = 3

HMIS_CATEGORIES = ("health", "flammability", "physical")
NFPA_CATEGORIES = ("health", "flammability", "reactivity")
OSHA_REQUIRED_FIELDS = ("product_name", "manufacturer", "signal_word", "h_codes", "pictograms")


@dataclass
class ValidationReport:
    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    osha_compliant: bool = False
    ghs_compliant: bool = False

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.is_valid = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "suggestions": self.suggestions,
            "oshaCompliant": self.osha_compliant,
            "ghsCompliant": self.ghs_compliant,
        }


def is_valid_rating(value: Any) -> bool:
    """HMIS/NFPA ratings are whole numbers from 0 to 4."""
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        if not value.is_integer():
            return False
    elif not isinstance(value, int):
        return False
    return 0 <= value <= 4


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _h_code_value(entry: Any) -> Optional[str]:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping):
        return entry.get("code")
    return None


def validate_record(record: Mapping[str, Any]) -> ValidationReport:
    """Run every validation rule against a record.

    Rules never short-circuit: each one contributes its error or warning.
    The record is only read, never modified.

    Args:
        record: SDS record fields, as produced by ``SDSDocument.to_dict``

    Returns:
        ValidationReport: Errors, warnings, suggestions and compliance flags
    """
    report = ValidationReport()

    if len(_text(record.get("product_name"))) < MIN_NAME_LENGTH:
        report.add_error("Product name is missing or too short")

    if len(_text(record.get("manufacturer"))) < MIN_NAME_LENGTH:
        report.warnings.append("Manufacturer information is missing or incomplete")

    cas_number = record.get("cas_number")
    if cas_number:
        if not CAS_NUMBER_PATTERN.match(str(cas_number)):
            report.warnings.append("CAS number format appears invalid")
    else:
        report.warnings.append("CAS number is missing")

    signal_word = record.get("signal_word")
    if not signal_word:
        report.warnings.append("Signal word is missing")
    elif str(signal_word).upper() not in SIGNAL_WORDS:
        report.add_error("Signal word must be either DANGER or WARNING")

    h_codes = _as_list(record.get("h_codes"))
    if not h_codes:
        report.add_error("No hazard codes (H-codes) found")
    else:
        for entry in h_codes:
            code = _h_code_value(entry)
            if code and not H_CODE_PATTERN.match(str(code)):
                report.warnings.append(f"Invalid H-code format: {code}")

    pictograms = _as_list(record.get("pictograms"))
    if not pictograms:
        report.warnings.append("No GHS pictograms found")

    hmis_codes = record.get("hmis_codes") or {}
    if hmis_codes:
        _check_ratings(report, "HMIS", hmis_codes, HMIS_CATEGORIES)
    else:
        report.warnings.append("HMIS codes are missing")

    nfpa_codes = record.get("nfpa_codes") or {}
    if nfpa_codes:
        _check_ratings(report, "NFPA", nfpa_codes, NFPA_CATEGORIES)

    if not _as_list(record.get("precautionary_statements")):
        report.warnings.append("No precautionary statements found")

    if not record.get("first_aid"):
        report.warnings.append("No first aid information found")

    quality_score = record.get("extraction_quality_score")
    if quality_score is not None and quality_score < LOW_QUALITY_THRESHOLD:
        report.warnings.append("Low extraction quality score - manual review recommended")

    missing_osha_fields = [name for name in OSHA_REQUIRED_FIELDS if not record.get(name)]
    report.osha_compliant = not missing_osha_fields and not report.errors
    if not report.osha_compliant:
        report.suggestions.append(
            "To meet OSHA compliance, ensure all required fields are populated with accurate data"
        )

    # GHS compliance layers its own checks on top of OSHA compliance
    report.ghs_compliant = bool(
        report.osha_compliant
        and len(h_codes) > 0
        and len(pictograms) > 0
        and signal_word
    )

    if not report.errors and len(report.warnings) <= MAX_WARNINGS_FOR_WELL_STRUCTURED:
        report.suggestions.append("Document appears to be well-structured for label generation")

    if h_codes and not pictograms:
        report.suggestions.append("Consider adding appropriate GHS pictograms to match the hazard codes")

    return report


def _check_ratings(
    report: ValidationReport, scheme: str, ratings: Mapping[str, Any], categories: tuple[str, ...]
) -> None:
    for category in categories:
        value = ratings.get(category)
        if value is not None and not is_valid_rating(value):
            report.add_error(f"Invalid {scheme} {category} rating: {value} (must be 0-4)")


class SDSValidationService(BaseService):
    """Validates a persisted SDS document."""

    def __init__(self, repository: SDSDocumentRepository):
        super().__init__(repository)

    def validate(self, document_id: UUID) -> None:
        if document_id is None:
            raise ValidationError("document_id is required")

    async def run(self, document_id: UUID) -> ValidationReport:
        document = await self.repository.get_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(f"SDS document {document_id} not found")

        self.logger.info(
            "Validating SDS document",
            extra={"document_id": str(document_id), "product_name": document.product_name},
        )

        report = validate_record(document.to_dict())

        self.logger.info(
            "SDS validation completed",
            extra={
                "document_id": str(document_id),
                "is_valid": report.is_valid,
                "osha_compliant": report.osha_compliant,
                "ghs_compliant": report.ghs_compliant,
                "errors": len(report.errors),
                "warnings": len(report.warnings),
            },
        )
        return report
