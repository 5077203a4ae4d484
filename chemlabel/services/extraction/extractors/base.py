"""Shared helpers for regex-family field extractors."""

import re
from typing import Iterable, Optional, Sequence

from chemlabel.services.extraction.constants import MIN_CAPTURE_LENGTH


def dedupe(values: Iterable[str]) -> list[str]:
    """Drop repeats, keeping the first occurrence and its casing."""
    seen: set[str] = set()
    unique: list[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            unique.append(value)
    return unique


def keyword_hits(text: str, keywords: Sequence[str]) -> list[str]:
    """Keywords present in ``text`` (case-insensitive), in catalog order."""
    lower = text.lower()
    return [keyword for keyword in keywords if keyword in lower]


class PatternExtractor:
    """Base for extractors that apply ordered regex families to section text."""

    min_capture_length: int = MIN_CAPTURE_LENGTH

    @classmethod
    def collect(cls, patterns: Sequence[re.Pattern], text: str) -> list[str]:
        """Run every pattern over ``text`` and gather group 1 captures.

        Patterns are applied in order and matches in text order; captures of
        ``min_capture_length`` characters or fewer are discarded before
        deduplication.
        """
        if not text:
            return []

        captures: list[str] = []
        for pattern in patterns:
            for match in pattern.finditer(text):
                value = (match.group(1) or "").strip()
                if len(value) > cls.min_capture_length:
                    captures.append(value)
        return dedupe(captures)

    @classmethod
    def first(cls, patterns: Sequence[re.Pattern], text: str) -> Optional[re.Match]:
        """Return the first match of the highest-priority pattern that matches."""
        if not text:
            return None
        for pattern in patterns:
            match = pattern.search(text)
            if match:
                return match
        return None
