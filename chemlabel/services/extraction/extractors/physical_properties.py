"""Section 9 physical and chemical properties."""

import re
from dataclasses import dataclass
from typing import Any, Optional

from chemlabel.services.extraction.section_locator import SectionLocator

_FLAGS = re.IGNORECASE
_VALUE = r"([<>≤≥]?\s*-?\d+(?:[.,]\d+)?)\s*°?\s*([CF])\b"


def celsius_to_fahrenheit(celsius: float) -> float:
    return round(celsius * 9 / 5 + 32, 1)


@dataclass
class PhysicalProperties:
    """Temperatures normalised to degrees Fahrenheit."""

    flash_point: Optional[float] = None
    boiling_point: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        props: dict[str, Any] = {}
        if self.flash_point is not None:
            props["flash_point"] = self.flash_point
            props["flash_point_unit"] = "F"
        if self.boiling_point is not None:
            props["boiling_point"] = self.boiling_point
            props["boiling_point_unit"] = "F"
        return props


class PhysicalPropertiesParser:
    """Flash point and boiling point, from Section 9 or anywhere in the document."""

    SECTION_NUMBER = 9

    FLASH_POINT_PATTERNS = (
        re.compile(r"flash\s*point[^\d\n<>≤≥-]{0,40}" + _VALUE, _FLAGS),
        re.compile(r"\bf\.\s*p\.\s*[:\s]*" + _VALUE, _FLAGS),
    )

    BOILING_POINT_PATTERNS = (
        re.compile(r"(?:initial\s*)?boiling\s*(?:point|range)[^\d\n<>≤≥-]{0,40}" + _VALUE, _FLAGS),
        re.compile(r"\bb\.\s*p\.\s*[:\s]*" + _VALUE, _FLAGS),
    )

    @classmethod
    def parse(cls, text: str) -> PhysicalProperties:
        section = SectionLocator.locate(text, cls.SECTION_NUMBER)
        return PhysicalProperties(
            flash_point=cls._temperature(cls.FLASH_POINT_PATTERNS, section, text),
            boiling_point=cls._temperature(cls.BOILING_POINT_PATTERNS, section, text),
        )

    @classmethod
    def _temperature(cls, patterns, *sources: str) -> Optional[float]:
        for source in sources:
            for pattern in patterns:
                match = pattern.search(source or "")
                if not match:
                    continue
                raw = re.sub(r"[<>≤≥\s]", "", match.group(1)).replace(",", ".")
                try:
                    value = float(raw)
                except ValueError:
                    continue
                return celsius_to_fahrenheit(value) if match.group(2).upper() == "C" else value
        return None
