"""Normalisation of raw PDF text before pattern matching."""

import re
import unicodedata


class TextCleaner:
    """Strips extraction artifacts while keeping the line structure section parsing relies on."""

    CONTROL_CHARS = re.compile(r"[\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F]")
    REPLACEMENT_CHARS = re.compile(r"[\uFFFD\uFEFF]")
    INLINE_WHITESPACE = re.compile(r"[ \t\u00A0]+")
    EXCESS_NEWLINES = re.compile(r"\n{3,}")

    @classmethod
    def clean(cls, text: str) -> str:
        """Return ``text`` with control and replacement characters removed.

        Line breaks survive (field captures stop at them); runs of spaces
        collapse to one and blank-line runs collapse to a single blank line.
        """
        if not text:
            return ""

        text = text.replace("\r\n", "\n").replace("\r", "\n")
        text = cls.CONTROL_CHARS.sub("", text)
        text = cls.REPLACEMENT_CHARS.sub("", text)
        text = unicodedata.normalize("NFKC", text)

        lines = [cls.INLINE_WHITESPACE.sub(" ", line).strip() for line in text.split("\n")]
        return cls.EXCESS_NEWLINES.sub("\n\n", "\n".join(lines)).strip()
