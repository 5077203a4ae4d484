"""Section 11 acute toxicity values (LD50 / LC50)."""

import re
from dataclasses import dataclass
from typing import Any, Optional

from chemlabel.services.extraction.section_locator import SectionLocator

_FLAGS = re.IGNORECASE
_NUMBER = r"[<>≤≥]?\s*(\d[\d,]*(?:\.\d+)?)"


@dataclass
class ToxicityData:
    """Acute toxicity; LD50 values are normalised to mg/kg."""

    ld50_oral: Optional[float] = None
    ld50_dermal: Optional[float] = None
    lc50_inhalation: Optional[float] = None
    lc50_unit: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "ld50_oral": self.ld50_oral,
            "ld50_dermal": self.ld50_dermal,
            "lc50_inhalation": self.lc50_inhalation,
            "lc50_unit": self.lc50_unit,
        }
        if self.ld50_oral is not None or self.ld50_dermal is not None:
            data["ld50_unit"] = "mg/kg"
        return {key: value for key, value in data.items() if value is not None}


class ToxicologyParser:
    """Oral and dermal LD50 and inhalation LC50, from Section 11 or anywhere in the document."""

    SECTION_NUMBER = 11

    ORAL_LD50_PATTERNS = (
        re.compile(r"(?:oral[^\n\d]{0,40}?LD\s*50|LD\s*50[^\n\d]{0,20}?oral)[^\d\n]{0,40}?" + _NUMBER + r"\s*(mg/kg|g/kg)", _FLAGS),
        re.compile(r"LD\s*50[^\d\n]{0,40}?" + _NUMBER + r"\s*(mg/kg|g/kg)", _FLAGS),
    )
    DERMAL_LD50_PATTERNS = (
        re.compile(r"(?:dermal[^\n\d]{0,40}?LD\s*50|LD\s*50[^\n\d]{0,20}?dermal)[^\d\n]{0,40}?" + _NUMBER + r"\s*(mg/kg|g/kg)", _FLAGS),
    )
    LC50_PATTERNS = (
        re.compile(r"LC\s*50[^\d\n]{0,40}?" + _NUMBER + r"\s*(mg/l|ppm|mg/m3|mg/m³)", _FLAGS),
    )

    @classmethod
    def parse(cls, text: str) -> ToxicityData:
        section = SectionLocator.locate(text, cls.SECTION_NUMBER)
        sources = (section, text)

        data = ToxicityData(
            ld50_oral=cls._ld50(cls.ORAL_LD50_PATTERNS, sources),
            ld50_dermal=cls._ld50(cls.DERMAL_LD50_PATTERNS, sources),
        )
        for source in sources:
            for pattern in cls.LC50_PATTERNS:
                match = pattern.search(source or "")
                if match:
                    data.lc50_inhalation = cls._number(match.group(1))
                    data.lc50_unit = match.group(2)
                    return data
        return data

    @classmethod
    def _ld50(cls, patterns, sources) -> Optional[float]:
        for source in sources:
            for pattern in patterns:
                match = pattern.search(source or "")
                if match:
                    value = cls._number(match.group(1))
                    return value * 1000 if match.group(2).lower() == "g/kg" else value
        return None

    @staticmethod
    def _number(raw: str) -> float:
        return float(raw.replace(",", ""))
