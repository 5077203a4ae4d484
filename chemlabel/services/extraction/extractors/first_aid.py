"""Section 4 first aid measures keyed by exposure route."""

import re

from chemlabel.services.extraction.constants import MAX_FIRST_AID_CHARS
from chemlabel.services.extraction.extractors.base import PatternExtractor
from chemlabel.services.extraction.section_locator import SectionLocator


def _route_label(labels: str, bare_words: str) -> re.Pattern:
    # Full labels may start a line without a colon; bare words need one
    return re.compile(
        rf"(?:^[ \t]*(?:{labels})\b[ \t]*[:\-]?|\b(?:{labels}|{bare_words})[ \t]*:)",
        re.IGNORECASE | re.MULTILINE,
    )


class FirstAidExtractor(PatternExtractor):
    """Splits Section 4 at its route labels; each route's text runs to the next label."""

    SECTION_NUMBER = 4

    ROUTE_LABELS: tuple[tuple[str, re.Pattern], ...] = (
        ("inhalation", _route_label(r"inhalation|if\s+inhaled", r"inhaled")),
        ("skin_contact", _route_label(r"skin\s+contact|contact\s+with\s+skin|if\s+on\s+skin", r"skin")),
        ("eye_contact", _route_label(r"eye\s+contact|contact\s+with\s+eyes|if\s+in\s+eyes", r"eyes?")),
        ("ingestion", _route_label(r"ingestion|if\s+swallowed", r"swallowed")),
    )

    WHITESPACE = re.compile(r"\s+")

    @classmethod
    def parse(cls, text: str) -> dict[str, str]:
        """Locate Section 4 in the full document text and extract first aid from it."""
        return cls.extract(SectionLocator.locate(text, cls.SECTION_NUMBER))

    @classmethod
    def extract(cls, section_text: str) -> dict[str, str]:
        if not section_text:
            return {}

        labels = sorted(
            (match.start(), match.end(), route)
            for route, pattern in cls.ROUTE_LABELS
            for match in pattern.finditer(section_text)
        )

        first_aid: dict[str, str] = {}
        for index, (_, end, route) in enumerate(labels):
            if route in first_aid:
                continue
            next_start = next((start for start, _, _ in labels[index + 1:] if start >= end), len(section_text))
            body = cls.WHITESPACE.sub(" ", section_text[end:next_start]).strip(" :-")
            body = body[:MAX_FIRST_AID_CHARS]
            if len(body) > cls.min_capture_length:
                first_aid[route] = body

        return first_aid
