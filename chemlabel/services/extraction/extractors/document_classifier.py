"""Tells safety data sheets apart from regulatory (article) sheets."""

import re
from enum import Enum

from chemlabel.services.extraction.constants import REGULATORY_INDICATORS, SDS_INDICATORS


class DocumentType(str, Enum):
    SAFETY_DATA_SHEET = "safety_data_sheet"
    REGULATORY_SHEET = "regulatory_sheet"
    REGULATORY_SHEET_ARTICLE = "regulatory_sheet_article"
    UNKNOWN = "unknown_document"


def _indicator_patterns(indicators: tuple[str, ...]) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(rf"\b{re.escape(indicator)}\b", re.IGNORECASE) for indicator in indicators)


class DocumentClassifier:
    """Votes SDS indicators against regulatory-sheet indicators."""

    SDS_PATTERNS = _indicator_patterns(SDS_INDICATORS)
    REGULATORY_PATTERNS = _indicator_patterns(REGULATORY_INDICATORS)
    ARTICLE_PATTERN = re.compile(r"\barticle\b", re.IGNORECASE)

    @classmethod
    def classify(cls, text: str) -> DocumentType:
        text = text or ""
        sds_score = sum(1 for pattern in cls.SDS_PATTERNS if pattern.search(text))
        regulatory_score = sum(1 for pattern in cls.REGULATORY_PATTERNS if pattern.search(text))

        if regulatory_score > sds_score:
            if cls.ARTICLE_PATTERN.search(text):
                return DocumentType.REGULATORY_SHEET_ARTICLE
            return DocumentType.REGULATORY_SHEET
        if sds_score > 0:
            return DocumentType.SAFETY_DATA_SHEET
        return DocumentType.UNKNOWN
