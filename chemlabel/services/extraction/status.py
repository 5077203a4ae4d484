"""Extraction status lifecycle."""

from enum import Enum


class ExtractionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    OSHA_COMPLIANT = "osha_compliant"
    MANUAL_REVIEW_REQUIRED = "manual_review_required"
    AI_ENHANCED = "ai_enhanced"


def derive_status(
    confidence: int,
    is_readable: bool,
    passes_validation: bool,
    osha_compliant_confidence: int = 98,
    ai_enhanced_confidence: int = 80,
    manual_review_confidence: int = 50,
) -> ExtractionStatus:
    """Pick the status for a freshly extracted record.

    Rules are checked in order and the first that holds wins. A confident
    record that fails validation drops through to ``AI_ENHANCED``.
    """
    if not is_readable:
        return ExtractionStatus.MANUAL_REVIEW_REQUIRED
    if confidence >= osha_compliant_confidence and passes_validation:
        return ExtractionStatus.OSHA_COMPLIANT
    if confidence >= ai_enhanced_confidence:
        return ExtractionStatus.AI_ENHANCED
    if confidence < manual_review_confidence:
        return ExtractionStatus.MANUAL_REVIEW_REQUIRED
    return ExtractionStatus.COMPLETED
