"""Section 7 handling and storage precautions."""

import re

from chemlabel.services.extraction.constants import MAX_HANDLING_STATEMENTS
from chemlabel.services.extraction.extractors.base import dedupe
from chemlabel.services.extraction.section_locator import SectionLocator

_FLAGS = re.IGNORECASE


class HandlingStorageExtractor:
    """Splits Section 7 into handling precautions and storage conditions."""

    SECTION_NUMBER = 7
    MIN_STATEMENT_LENGTH = 10

    HANDLING_LABEL = re.compile(r"precautions\s+for\s+safe\s+handling(?:[^:\n]{0,60}:)?|^\s*handling\b", _FLAGS | re.MULTILINE)
    STORAGE_LABEL = re.compile(r"conditions\s+for\s+safe\s+storage(?:[^:\n]{0,60}:)?|^\s*storage\b", _FLAGS | re.MULTILINE)
    SENTENCE_SPLIT = re.compile(r"(?<=[.;])\s+|\n+")

    @classmethod
    def parse(cls, text: str) -> dict[str, list[str]]:
        return cls.extract(SectionLocator.locate(text, cls.SECTION_NUMBER))

    @classmethod
    def extract(cls, section_text: str) -> dict[str, list[str]]:
        if not section_text:
            return {"handling": [], "storage": []}

        # The heading itself names both topics
        _, _, body = section_text.partition("\n")

        storage_match = cls.STORAGE_LABEL.search(body)
        handling_match = cls.HANDLING_LABEL.search(body)

        if storage_match:
            handling_start = handling_match.end() if handling_match and handling_match.start() < storage_match.start() else 0
            handling_text = body[handling_start:storage_match.start()]
            storage_text = body[storage_match.end():]
        else:
            handling_text = body[handling_match.end():] if handling_match else body
            storage_text = ""

        return {
            "handling": cls._statements(handling_text),
            "storage": cls._statements(storage_text),
        }

    @classmethod
    def _statements(cls, text: str) -> list[str]:
        parts = (part.strip(" :-\t").rstrip(".") for part in cls.SENTENCE_SPLIT.split(text or ""))
        return dedupe(part for part in parts if len(part) > cls.MIN_STATEMENT_LENGTH)[:MAX_HANDLING_STATEMENTS]
