"""Section 1 identification fields and CAS registry numbers."""

import re
from typing import Optional

from chemlabel.services.extraction.extractors.base import PatternExtractor
from chemlabel.services.extraction.section_locator import SectionLocator

_FLAGS = re.IGNORECASE

CAS_FORMAT = re.compile(r"^\d{2,7}-\d{2}-\d$")


def is_valid_cas_checksum(cas_number: str) -> bool:
    """Check the CAS check digit (weighted sum of the other digits, mod 10)."""
    if not CAS_FORMAT.match(cas_number):
        return False
    digits = cas_number.replace("-", "")
    body, check = digits[:-1], int(digits[-1])
    total = sum(position * int(digit) for position, digit in enumerate(reversed(body), start=1))
    return total % 10 == check


class IdentificationExtractor(PatternExtractor):
    """Product name and manufacturer, read from Section 1 with a whole-document fallback."""

    SECTION_NUMBER = 1
    MIN_PRODUCT_NAME_LENGTH = 3

    PRODUCT_NAME_PATTERNS = (
        re.compile(r"product\s*name\s*[:\-]?\s*([^\n\r]{2,100})", _FLAGS),
        re.compile(r"trade\s*name\s*[:\-]?\s*([^\n\r]{2,100})", _FLAGS),
        re.compile(r"material\s*name\s*[:\-]?\s*([^\n\r]{2,100})", _FLAGS),
        re.compile(r"product\s*identifier\s*[:\-]?\s*([^\n\r]{2,100})", _FLAGS),
    )

    MANUFACTURER_PATTERNS = (
        re.compile(r"(?:manufacturer|company|supplier)(?:\s*name|\s*/\s*\w+)?\s*:\s*([^\n\r]{10,100})", _FLAGS),
        re.compile(r"(?:made\s*by|manufactured\s*by)\s*:?\s*([^\n\r]{10,100})", _FLAGS),
        re.compile(r"(?:distributor|distributed\s*by)\s*:?\s*([^\n\r]{10,100})", _FLAGS),
    )

    MANUFACTURER_SCRUB = re.compile(r"[^\w\s&.,'()-]")

    @classmethod
    def extract_product_name(cls, text: str) -> Optional[str]:
        for source in (SectionLocator.locate(text, cls.SECTION_NUMBER), text):
            match = cls.first(cls.PRODUCT_NAME_PATTERNS, source)
            if match:
                name = match.group(1).strip(" :-\t")
                if len(name) >= cls.MIN_PRODUCT_NAME_LENGTH:
                    return name
        return None

    @classmethod
    def extract_manufacturer(cls, text: str) -> Optional[str]:
        for source in (SectionLocator.locate(text, cls.SECTION_NUMBER), text):
            match = cls.first(cls.MANUFACTURER_PATTERNS, source)
            if match:
                name = cls.MANUFACTURER_SCRUB.sub("", match.group(1)).strip()[:100]
                if len(name) > cls.min_capture_length:
                    return name
        return None


class CASExtractor:
    """CAS registry number: a labelled value first, else the first bare number with a valid check digit."""

    LABELLED_PATTERNS = (
        re.compile(r"CAS\s*(?:No\.?|Number|#|RN)?\s*[:#.]?\s*(\d{2,7}-\d{2}-\d)\b", _FLAGS),
    )
    BARE_PATTERN = re.compile(r"\b(\d{2,7}-\d{2}-\d)\b")

    @classmethod
    def extract(cls, text: str) -> Optional[str]:
        if not text:
            return None

        for pattern in cls.LABELLED_PATTERNS:
            match = pattern.search(text)
            if match:
                return match.group(1)

        for match in cls.BARE_PATTERN.finditer(text):
            if is_valid_cas_checksum(match.group(1)):
                return match.group(1)
        return None
