"""Extraction quality score and label-field confidence for an extracted SDS record."""

from typing import Any, Mapping

from chemlabel.services.extraction.extractors.hmis_ppe_deriver import UNCLEAR_PPE_CODE

MAX_SCORE = 100

# (minimum exclusive text length, points), longest first
TEXT_LENGTH_POINTS: tuple[tuple[int, int], ...] = (
    (2000, 20),
    (1000, 15),
    (500, 10),
    (200, 5),
)

# Fields that earn points when non-empty
QUALITY_FIELD_POINTS: tuple[tuple[str, int], ...] = (
    ("h_codes", 15),
    ("signal_word", 10),
    ("cas_number", 10),
    ("manufacturer", 5),
    ("pictograms", 10),
    ("hazard_statements", 5),
    ("precautionary_statements", 5),
    ("physical_hazards", 3),
    ("health_hazards", 3),
    ("environmental_hazards", 2),
    ("first_aid", 2),
    ("nfpa_codes", 5),
    ("hmis_codes", 5),
)

# Label-critical fields, weighted by how much a printed label depends on them
CONFIDENCE_FIELD_POINTS: tuple[tuple[str, int], ...] = (
    ("product_name", 15),
    ("manufacturer", 10),
    ("signal_word", 15),
    ("h_codes", 20),
    ("pictograms", 15),
    ("precautionary_statements", 10),
    ("first_aid", 5),
)
PPE_CODE_POINTS = 5
RATING_POINTS = 5


def _present(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def calculate_quality_score(record: Mapping[str, Any], text_length: int) -> int:
    """Score how much of a typical SDS was recovered, 0-100."""
    score = next((points for length, points in TEXT_LENGTH_POINTS if text_length > length), 0)
    score += sum(points for name, points in QUALITY_FIELD_POINTS if _present(record.get(name)))
    return min(score, MAX_SCORE)


def calculate_confidence(record: Mapping[str, Any], is_readable: bool, unreadable_cap: int = 10) -> int:
    """Confidence that the record is complete enough to print a label, 0-100.

    Args:
        record: Extracted field values
        is_readable: Whether the document yielded usable text
        unreadable_cap: Upper bound applied to unreadable documents

    Returns:
        Confidence percentage
    """
    confidence = sum(points for name, points in CONFIDENCE_FIELD_POINTS if _present(record.get(name)))

    ppe_code = (record.get("ppe_requirements") or {}).get("hmis_code")
    if ppe_code and ppe_code != UNCLEAR_PPE_CODE:
        confidence += PPE_CODE_POINTS

    if _present(record.get("hmis_codes")) or _present(record.get("nfpa_codes")):
        confidence += RATING_POINTS

    confidence = min(confidence, MAX_SCORE)
    if not is_readable:
        confidence = min(confidence, unreadable_cap)
    return confidence
