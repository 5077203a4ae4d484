"""GHS Section 2 classification data used for HMIS rating derivation."""

import re
from dataclasses import dataclass, field
from typing import Any

from chemlabel.services.extraction.constants import SECTION_2_WINDOW
from chemlabel.services.extraction.extractors.base import keyword_hits
from chemlabel.services.extraction.extractors.physical_properties import PhysicalProperties, PhysicalPropertiesParser
from chemlabel.services.extraction.extractors.toxicology import ToxicityData, ToxicologyParser
from chemlabel.services.extraction.section_locator import SectionLocator

# Used when no Section 2 heading can be found
FALLBACK_PREFIX_CHARS = 2000


@dataclass
class HazardClass:
    code: str
    category: int
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "category": self.category, "description": self.description}


@dataclass
class GHSSection2Data:
    """Hazard classes and chronic flags, plus the Section 9/11 values the converter needs."""

    hazard_classes: list[HazardClass] = field(default_factory=list)
    physical_properties: PhysicalProperties = field(default_factory=PhysicalProperties)
    toxicity_data: ToxicityData = field(default_factory=ToxicityData)
    chronic_hazards: list[str] = field(default_factory=list)
    is_carcinogenic: bool = False
    is_mutagenic: bool = False
    has_reproductive_toxicity: bool = False
    has_respiratory_toxicity: bool = False
    has_skin_sensitizer: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "hazard_classes": [hazard.to_dict() for hazard in self.hazard_classes],
            "physical_properties": self.physical_properties.to_dict(),
            "toxicity_data": self.toxicity_data.to_dict(),
            "chronic_hazards": self.chronic_hazards,
            "is_carcinogenic": self.is_carcinogenic,
            "is_mutagenic": self.is_mutagenic,
            "has_reproductive_toxicity": self.has_reproductive_toxicity,
            "has_respiratory_toxicity": self.has_respiratory_toxicity,
            "has_skin_sensitizer": self.has_skin_sensitizer,
        }


class GHSSection2Parser:
    """Parses hazard classes and chronic hazard indicators from Section 2."""

    SECTION_NUMBER = 2

    HAZARD_CLASS_PATTERN = re.compile(r"\bH(\d{3})\b[:\s]*([^\n\r.]*)", re.IGNORECASE)
    MIN_DESCRIPTION_LENGTH = 5

    CHRONIC_HAZARD_KEYWORDS = (
        "carcinogen", "carcinogenic", "cancer",
        "mutagen", "mutagenic", "genetic",
        "reproductive", "fertility", "teratogen",
        "respiratory sensitizer", "asthma",
        "specific target organ toxicity",
    )

    CARCINOGEN_MARKERS = ("carcinogen", "cancer", "h350", "h351")
    MUTAGEN_MARKERS = ("mutagen", "genetic", "h340", "h341")
    REPRODUCTIVE_MARKERS = ("reproductive", "fertility", "h360", "h361")
    RESPIRATORY_MARKERS = ("respiratory", "lung", "h334", "h372")
    SKIN_SENSITIZER_MARKERS = ("skin sensitizer", "h317")

    @classmethod
    def section_text(cls, text: str) -> str:
        return (
            SectionLocator.locate(text, cls.SECTION_NUMBER, window=SECTION_2_WINDOW)
            or (text or "")[:FALLBACK_PREFIX_CHARS]
        )

    @classmethod
    def parse(cls, text: str) -> GHSSection2Data:
        section = cls.section_text(text)
        return GHSSection2Data(
            hazard_classes=cls.extract_hazard_classes(section),
            physical_properties=PhysicalPropertiesParser.parse(text),
            toxicity_data=ToxicologyParser.parse(text),
            chronic_hazards=keyword_hits(section, cls.CHRONIC_HAZARD_KEYWORDS),
            is_carcinogenic=cls._mentions(section, cls.CARCINOGEN_MARKERS),
            is_mutagenic=cls._mentions(section, cls.MUTAGEN_MARKERS),
            has_reproductive_toxicity=cls._mentions(section, cls.REPRODUCTIVE_MARKERS),
            has_respiratory_toxicity=cls._mentions(section, cls.RESPIRATORY_MARKERS),
            has_skin_sensitizer=cls._mentions(section, cls.SKIN_SENSITIZER_MARKERS),
        )

    @classmethod
    def extract_hazard_classes(cls, section: str) -> list[HazardClass]:
        classes: list[HazardClass] = []
        seen: set[str] = set()
        for match in cls.HAZARD_CLASS_PATTERN.finditer(section or ""):
            code = f"H{match.group(1)}"
            description = match.group(2).strip()
            if code in seen or len(description) <= cls.MIN_DESCRIPTION_LENGTH:
                continue
            seen.add(code)
            classes.append(HazardClass(code=code, category=cls.hazard_category(code), description=description))
        return classes

    @staticmethod
    def hazard_category(code: str) -> int:
        """Coarse GHS category implied by an H-code number."""
        number = int(code[1:])
        if 300 <= number <= 399:
            if number <= 310:
                return 1
            if number <= 320:
                return 2
            if number <= 330:
                return 3
            if number <= 340:
                return 4
        return 1

    @staticmethod
    def _mentions(section: str, markers: tuple[str, ...]) -> bool:
        lower = (section or "").lower()
        return any(marker in lower for marker in markers)
