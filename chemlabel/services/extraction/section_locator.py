"""Locates numbered GHS sections inside extracted SDS text."""

import re
from typing import Optional

from chemlabel.services.extraction.constants import DEFAULT_SECTION_WINDOW

_FLAGS = re.IGNORECASE


def _compile(*patterns: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(pattern, _FLAGS) for pattern in patterns)


class SectionLocator:
    """Finds GHS section N (1-16) by heading and carves out its text span.

    Heading patterns are ordered most specific first. The first pattern in
    that order that matches anywhere in the document wins, even if a later
    pattern would have matched earlier in the text. A fixed window is taken
    from the heading and cut at the heading of section N+1 when it falls
    inside the window.
    """

    SECTION_HEADINGS: dict[int, tuple[re.Pattern, ...]] = {
        1: _compile(
            r"section\s*1[:\s.]*(?:product\s*and\s*company\s*)?identification",
            r"identification\s*of\s*the\s*substance",
            r"product\s*and\s*company\s*identification",
        ),
        2: _compile(
            r"section\s*2[:\s.]*hazards?[\s\w]*identification",
            r"hazards?[\s\w]*identification",
        ),
        3: _compile(
            r"section\s*3[:\s.]*composition",
            r"composition\s*/?\s*information\s*on\s*ingredients",
        ),
        4: _compile(
            r"section\s*4[:\s.]*first[\s-]*aid\s*measures?",
            r"first[\s-]*aid\s*measures?",
            r"description\s*of\s*(?:necessary\s*)?first[\s-]*aid",
        ),
        5: _compile(
            r"section\s*5[:\s.]*fire[\s-]*fighting\s*measures?",
            r"fire[\s-]*fighting\s*measures?",
        ),
        6: _compile(
            r"section\s*6[:\s.]*accidental\s*release\s*measures?",
            r"accidental\s*release\s*measures?",
        ),
        7: _compile(
            r"section\s*7[:\s.]*handling\s*and\s*storage",
            r"handling\s*and\s*storage",
        ),
        8: _compile(
            r"section\s*8[:\s]*exposure[\s\w]*controls?\s*/?\s*personal[\s\w]*protection",
            r"exposure[\s\w]*controls?\s*/?\s*personal[\s\w]*protection",
            r"personal[\s\w]*protective[\s\w]*equipment",
        ),
        9: _compile(
            r"section\s*9[:\s.]*physical\s*and\s*chemical\s*properties",
            r"physical\s*and\s*chemical\s*properties",
        ),
        10: _compile(
            r"section\s*10[:\s.]*stability\s*and\s*reactivity",
            r"stability\s*and\s*reactivity",
        ),
        11: _compile(
            r"section\s*11[:\s.]*toxicological\s*information",
            r"toxicological\s*information",
        ),
        12: _compile(
            r"section\s*12[:\s.]*ecological\s*information",
            r"ecological\s*information",
        ),
        13: _compile(
            r"section\s*13[:\s.]*disposal\s*considerations?",
            r"disposal\s*considerations?",
        ),
        14: _compile(
            r"section\s*14[:\s.]*transport\s*information",
            r"transport\s*information",
        ),
        15: _compile(
            r"section\s*15[:\s.]*regulatory\s*information",
            r"regulatory\s*information",
        ),
        16: _compile(
            r"section\s*16[:\s.]*other\s*information",
            r"other\s*information",
        ),
    }

    @classmethod
    def heading_patterns(cls, section_number: int) -> tuple[re.Pattern, ...]:
        """Ordered heading patterns for a section.

        Raises:
            ValueError: If ``section_number`` is outside 1-16
        """
        if section_number not in cls.SECTION_HEADINGS:
            raise ValueError(f"GHS section number must be between 1 and 16, got {section_number}")
        return cls.SECTION_HEADINGS[section_number]

    @classmethod
    def boundary_patterns(cls, section_number: int) -> tuple[re.Pattern, ...]:
        """Patterns for the headings that end ``section_number``.

        ``section N+1`` anywhere, a line starting ``N+1.`` or ``N+1:``, or a
        line starting with a section N+1 title. Titles only count at line
        start so that prose such as "wear personal protective equipment" in
        Section 7 does not end it. The trailing delimiters keep section 1
        from ending at section 10 and at decimals like ``2.5``.
        """
        following = section_number + 1
        patterns = [
            re.compile(rf"section\s*{following}[:\s.]", _FLAGS),
            re.compile(rf"^[ \t]*{following}[ \t]*[.:](?!\d)", _FLAGS | re.MULTILINE),
        ]
        patterns.extend(
            re.compile(rf"^[ \t]*(?:{title.pattern})", _FLAGS | re.MULTILINE)
            for title in cls.SECTION_HEADINGS.get(following, ())
        )
        return tuple(patterns)

    @classmethod
    def find_heading(cls, text: str, section_number: int) -> Optional[re.Match]:
        """Return the match of the highest-priority heading pattern that occurs in ``text``."""
        for pattern in cls.heading_patterns(section_number):
            match = pattern.search(text)
            if match:
                return match
        return None

    @classmethod
    def locate(cls, text: str, section_number: int, window: int = DEFAULT_SECTION_WINDOW) -> str:
        """Return the text of GHS section ``section_number``.

        Args:
            text: Full extracted document text
            section_number: GHS section, 1-16
            window: Maximum characters taken from the heading onwards

        Returns:
            The section span, or an empty string when no heading is found
        """
        match = cls.find_heading(text or "", section_number)
        if match is None:
            return ""

        start = match.start()
        section = text[start:start + window]

        cuts = [
            boundary.start()
            for boundary in (pattern.search(section, 1) for pattern in cls.boundary_patterns(section_number))
            if boundary
        ]
        if cuts:
            section = section[:min(cuts)]

        return section
