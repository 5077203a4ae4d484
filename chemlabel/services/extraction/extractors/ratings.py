"""HMIS and NFPA rating blocks printed on the SDS."""

import re
from typing import NamedTuple

_FLAGS = re.IGNORECASE
_GAP = r"[\s\S]{0,80}?"


class RatingPattern(NamedTuple):
    pattern: re.Pattern
    # Rating key for each capture group, in group order
    fields: tuple[str, str, str]


class RatingCodesExtractor:
    """Reads explicit HMIS and NFPA ratings; only digits 0-4 are accepted."""

    HMIS_PATTERNS: tuple[RatingPattern, ...] = (
        RatingPattern(
            re.compile(r"HMIS(?:\s*III)?(?:\s*ratings?)?\s*:?\s*([0-4])\*?\s*[-/]\s*([0-4])\s*[-/]\s*([0-4])\b", _FLAGS),
            ("health", "flammability", "physical"),
        ),
        RatingPattern(
            re.compile(
                rf"Health\s*(?:Hazard)?\s*[:=]?\s*\*?\s*([0-4])\b\*?{_GAP}Flammability\s*[:=]?\s*([0-4])\b"
                rf"{_GAP}Physical\s*(?:Hazards?)?\s*[:=]?\s*([0-4])\b",
                _FLAGS,
            ),
            ("health", "flammability", "physical"),
        ),
    )

    NFPA_PATTERNS: tuple[RatingPattern, ...] = (
        RatingPattern(
            re.compile(r"NFPA(?:\s*704)?(?:\s*ratings?)?\s*:?\s*([0-4])\s*[-/]\s*([0-4])\s*[-/]\s*([0-4])\b", _FLAGS),
            ("health", "flammability", "reactivity"),
        ),
        RatingPattern(
            re.compile(
                rf"NFPA{_GAP}Health\s*[:=]?\s*([0-4])\b{_GAP}(?:Flammability|Fire)\s*[:=]?\s*([0-4])\b"
                rf"{_GAP}(?:Instability|Reactivity)\s*[:=]?\s*([0-4])\b",
                _FLAGS,
            ),
            ("health", "flammability", "reactivity"),
        ),
        RatingPattern(
            re.compile(
                rf"Fire\s*[:=]?\s*([0-4])\b{_GAP}Health\s*[:=]?\s*([0-4])\b{_GAP}(?:Reactivity|Instability)\s*[:=]?\s*([0-4])\b",
                _FLAGS,
            ),
            ("flammability", "health", "reactivity"),
        ),
    )

    @classmethod
    def extract_hmis(cls, text: str) -> dict[str, int]:
        return cls._extract(cls.HMIS_PATTERNS, text)

    @classmethod
    def extract_nfpa(cls, text: str) -> dict[str, int]:
        return cls._extract(cls.NFPA_PATTERNS, text)

    @staticmethod
    def _extract(patterns: tuple[RatingPattern, ...], text: str) -> dict[str, int]:
        for rating in patterns:
            match = rating.pattern.search(text or "")
            if match:
                return {name: int(match.group(index)) for index, name in enumerate(rating.fields, start=1)}
        return {}
