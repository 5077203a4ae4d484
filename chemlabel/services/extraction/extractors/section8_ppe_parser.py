"""Section 8 (exposure controls / personal protection) parser."""

import re
from dataclasses import dataclass, field
from typing import Any

from chemlabel.services.extraction.extractors.base import PatternExtractor, keyword_hits
from chemlabel.services.extraction.extractors.hmis_ppe_deriver import HMISPPECodeDeriver, UNCLEAR_PPE_CODE
from chemlabel.services.extraction.section_locator import SectionLocator

_FLAGS = re.IGNORECASE


@dataclass
class PPERequirements:
    """Protective equipment pulled from Section 8."""

    eye_protection: list[str] = field(default_factory=list)
    hand_protection: list[str] = field(default_factory=list)
    respiratory_protection: list[str] = field(default_factory=list)
    skin_protection: list[str] = field(default_factory=list)
    general_ppe: list[str] = field(default_factory=list)
    hmis_code: str = UNCLEAR_PPE_CODE

    def to_dict(self) -> dict[str, Any]:
        return {
            "eye_protection": self.eye_protection,
            "hand_protection": self.hand_protection,
            "respiratory_protection": self.respiratory_protection,
            "skin_protection": self.skin_protection,
            "general_ppe": self.general_ppe,
            "hmis_code": self.hmis_code,
        }


class Section8PPEParser(PatternExtractor):
    """Extracts eye, hand, respiratory and skin protection requirements."""

    SECTION_NUMBER = 8

    EYE_PROTECTION_PATTERNS = (
        re.compile(r"eye[\s\w]*protection[:\s]*([^\n\r.]*)", _FLAGS),
        re.compile(r"safety\s*glasses?[:\s]*([^\n\r.]*)", _FLAGS),
        re.compile(r"goggles?[:\s]*([^\n\r.]*)", _FLAGS),
        re.compile(r"face\s*shield[:\s]*([^\n\r.]*)", _FLAGS),
    )

    HAND_PROTECTION_PATTERNS = (
        re.compile(r"hand[\s\w]*protection[:\s]*([^\n\r.]*)", _FLAGS),
        re.compile(r"gloves?[:\s]*([^\n\r.]*)", _FLAGS),
        re.compile(r"protective\s*gloves?[:\s]*([^\n\r.]*)", _FLAGS),
    )

    RESPIRATORY_PATTERNS = (
        re.compile(r"respiratory[\s\w]*protection[:\s]*([^\n\r.]*)", _FLAGS),
        re.compile(r"respirator[:\s]*([^\n\r.]*)", _FLAGS),
        re.compile(r"breathing[\s\w]*apparatus[:\s]*([^\n\r.]*)", _FLAGS),
        re.compile(r"dust\s*mask[:\s]*([^\n\r.]*)", _FLAGS),
    )

    SKIN_PROTECTION_PATTERNS = (
        re.compile(r"skin[\s\w]*protection[:\s]*([^\n\r.]*)", _FLAGS),
        re.compile(r"protective\s*clothing[:\s]*([^\n\r.]*)", _FLAGS),
        re.compile(r"apron[:\s]*([^\n\r.]*)", _FLAGS),
        re.compile(r"coveralls?[:\s]*([^\n\r.]*)", _FLAGS),
    )

    GENERAL_PPE_KEYWORDS = (
        "safety glasses", "safety goggles", "face shield",
        "protective gloves", "chemical resistant gloves",
        "respirator", "dust mask", "vapor respirator",
        "protective clothing", "apron", "coveralls",
        "safety shoes", "steel toe boots",
    )

    @classmethod
    def parse(cls, text: str) -> PPERequirements:
        """Locate Section 8 in the full document text and extract PPE from it."""
        return cls.extract(SectionLocator.locate(text, cls.SECTION_NUMBER))

    @classmethod
    def extract(cls, section_text: str) -> PPERequirements:
        """Extract PPE from already isolated Section 8 text.

        Empty text yields empty lists and the ``X`` code.
        """
        if not section_text:
            return PPERequirements()

        return PPERequirements(
            eye_protection=cls.collect(cls.EYE_PROTECTION_PATTERNS, section_text),
            hand_protection=cls.collect(cls.HAND_PROTECTION_PATTERNS, section_text),
            respiratory_protection=cls.collect(cls.RESPIRATORY_PATTERNS, section_text),
            skin_protection=cls.collect(cls.SKIN_PROTECTION_PATTERNS, section_text),
            general_ppe=keyword_hits(section_text, cls.GENERAL_PPE_KEYWORDS),
            hmis_code=HMISPPECodeDeriver.derive(section_text),
        )
