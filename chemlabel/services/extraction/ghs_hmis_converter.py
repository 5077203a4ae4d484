"""Derives HMIS health, flammability and physical ratings from GHS classification data.

Used when an SDS carries GHS Section 2 hazard classes but prints no explicit
HMIS block. Each rating is the maximum over every rule that fires, and every
fired rule is recorded in ``calculation_details`` so a reviewer can see why a
rating was chosen.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from chemlabel.services.extraction.extractors.section2_parser import GHSSection2Data, HazardClass
from chemlabel.utils.logging import get_logger

LOGGER = get_logger(__name__)

# Oral LD50 bands in mg/kg; 4 is strictly below 5 mg/kg
LD50_HEALTH_BANDS: tuple[tuple[float, int], ...] = (
    (50, 3),
    (300, 2),
    (2000, 1),
)

ACUTE_TOXICITY_RATINGS: dict[int, int] = {
    300: 4, 310: 4, 330: 4,
    301: 2, 311: 2, 331: 2,
    302: 1, 312: 1, 332: 1,
    314: 3, 318: 3,
}
CHRONIC_HEALTH_CODES = frozenset({340, 341, 350, 351, 360, 361, 370, 371, 372, 373})
IRRITANT_CODES = frozenset({315, 319, 320})

FLAMMABILITY_CODE_RATINGS: dict[int, int] = {
    220: 4, 221: 4,
    224: 4, 225: 4,
    226: 3,
    227: 2,
    250: 4, 251: 4, 252: 4,
}

PHYSICAL_CODE_RATINGS: dict[int, int] = {
    # Explosives
    200: 4, 201: 4, 202: 3, 203: 3, 204: 2, 205: 1, 206: 1,
    # Self-reactive substances
    240: 4, 241: 3, 242: 2, 243: 2,
    # Organic peroxides and water-reactives
    260: 4, 261: 3, 262: 2, 263: 2, 264: 1, 265: 1,
    # Oxidizers
    270: 3, 271: 2, 272: 1, 273: 1,
    # Gases under pressure
    280: 4, 281: 1,
}

DEFAULT_HEALTH_RATING = 1


@dataclass
class HMISRatingResult:
    health: int
    flammability: int
    physical: int
    has_chronic_hazard: bool
    confidence: int
    calculation_details: list[str] = field(default_factory=list)

    def to_hmis_codes(self) -> dict[str, int]:
        return {"health": self.health, "flammability": self.flammability, "physical": self.physical}

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.to_hmis_codes(),
            "has_chronic_hazard": self.has_chronic_hazard,
            "confidence": self.confidence,
            "calculation_details": self.calculation_details,
        }


def _code_number(hazard: HazardClass) -> Optional[int]:
    try:
        return int(hazard.code[1:])
    except (ValueError, IndexError):
        return None


class GHSToHMISConverter:
    """Maps GHS hazard classes, Section 9 temperatures and Section 11 toxicity to HMIS ratings."""

    @classmethod
    def convert(cls, data: GHSSection2Data) -> HMISRatingResult:
        details: list[str] = []

        result = HMISRatingResult(
            health=cls.health_rating(data, details),
            flammability=cls.flammability_rating(data, details),
            physical=cls.physical_rating(data, details),
            has_chronic_hazard=cls.has_chronic_hazard(data),
            confidence=cls.confidence(data),
            calculation_details=details,
        )

        LOGGER.debug(
            "Converted GHS data to HMIS ratings",
            extra={**result.to_hmis_codes(), "confidence": result.confidence},
        )
        return result

    @staticmethod
    def health_rating(data: GHSSection2Data, details: list[str]) -> int:
        rating = 0

        ld50 = data.toxicity_data.ld50_oral
        if ld50 is not None:
            if ld50 < 5:
                ld50_rating = 4
            else:
                ld50_rating = next((value for bound, value in LD50_HEALTH_BANDS if ld50 <= bound), 0)
            details.append(f"Health {ld50_rating}: oral LD50 {ld50:g} mg/kg")
            rating = max(rating, ld50_rating)

        for hazard in data.hazard_classes:
            number = _code_number(hazard)
            if number is None:
                continue
            if number in ACUTE_TOXICITY_RATINGS:
                code_rating = ACUTE_TOXICITY_RATINGS[number]
                details.append(f"Health {code_rating}: {hazard.code} - {hazard.description}")
                rating = max(rating, code_rating)
            if number in CHRONIC_HEALTH_CODES:
                details.append(f"Health >=3: {hazard.code} - {hazard.description} (chronic hazard)")
                rating = max(rating, 3)
            if number in IRRITANT_CODES:
                details.append(f"Health >=1: {hazard.code} - {hazard.description} (irritation)")
                rating = max(rating, 1)

        if rating == 0 and ld50 is None and not data.hazard_classes:
            details.append(f"Health {DEFAULT_HEALTH_RATING}: default, no toxicity data found")
            return DEFAULT_HEALTH_RATING

        return rating

    @staticmethod
    def flammability_rating(data: GHSSection2Data, details: list[str]) -> int:
        rating = 0

        flash_point = data.physical_properties.flash_point
        boiling_point = data.physical_properties.boiling_point
        if flash_point is not None:
            if flash_point < 73:
                fp_rating = 4 if boiling_point is not None and boiling_point < 100 else 3
            elif flash_point <= 100:
                fp_rating = 3
            elif flash_point <= 200:
                fp_rating = 2
            else:
                fp_rating = 1
            details.append(f"Flammability {fp_rating}: flash point {flash_point:g}F")
            rating = max(rating, fp_rating)

        for hazard in data.hazard_classes:
            code_rating = FLAMMABILITY_CODE_RATINGS.get(_code_number(hazard))
            if code_rating is not None:
                details.append(f"Flammability {code_rating}: {hazard.code} - {hazard.description}")
                rating = max(rating, code_rating)

        if rating == 0 and data.hazard_classes:
            details.append("Flammability 0: no flammability hazards identified")

        return rating

    @staticmethod
    def physical_rating(data: GHSSection2Data, details: list[str]) -> int:
        rating = 0
        for hazard in data.hazard_classes:
            code_rating = PHYSICAL_CODE_RATINGS.get(_code_number(hazard))
            if code_rating is not None:
                details.append(f"Physical {code_rating}: {hazard.code} - {hazard.description}")
                rating = max(rating, code_rating)

        if rating == 0:
            details.append("Physical 0: no significant physical hazards identified")

        return rating

    @staticmethod
    def has_chronic_hazard(data: GHSSection2Data) -> bool:
        return (
            data.is_carcinogenic
            or data.is_mutagenic
            or data.has_reproductive_toxicity
            or data.has_respiratory_toxicity
            or bool(data.chronic_hazards)
        )

    @staticmethod
    def confidence(data: GHSSection2Data) -> int:
        """Confidence in the derived ratings, from how much source data was available."""
        score = 0
        if data.hazard_classes:
            score += 30
        if data.toxicity_data.ld50_oral is not None:
            score += 25
        if data.physical_properties.flash_point is not None:
            score += 20
        if data.chronic_hazards:
            score += 15
        if data.physical_properties.boiling_point is not None:
            score += 10
        return min(score, 100)
