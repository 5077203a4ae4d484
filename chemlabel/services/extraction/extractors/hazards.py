"""Section 2 hazard identification: H-codes, statements, signal word and pictograms."""

import re
from typing import Any, Optional

from chemlabel.services.extraction.constants import (
    ENVIRONMENTAL_HAZARD_KEYWORDS,
    H_CODE_TO_PICTOGRAM,
    H_CODES,
    HEALTH_HAZARD_KEYWORDS,
    MAX_HAZARD_STATEMENTS,
    MAX_PRECAUTIONARY_STATEMENTS,
    PHYSICAL_HAZARD_KEYWORDS,
    PICTOGRAM_NAMES,
    PICTOGRAM_SYMBOLS,
    SECTION_2_WINDOW,
)
from chemlabel.services.extraction.extractors.base import dedupe, keyword_hits
from chemlabel.services.extraction.section_locator import SectionLocator

_FLAGS = re.IGNORECASE

# Inline descriptions shorter than this are not trusted for codes missing from the catalog
MIN_INLINE_DESCRIPTION_LENGTH = 10


def hazard_section_text(text: str) -> str:
    """Section 2 span, or the whole document when no Section 2 heading exists."""
    return SectionLocator.locate(text, 2, window=SECTION_2_WINDOW) or text or ""


class HazardStatementExtractor:
    """H-codes with catalog descriptions plus hazard and precautionary statements."""

    H_CODE_PATTERN = re.compile(r"\bH(\d{3})\b(?:\s*[:\-]?\s*([^\n\r]*))?")
    HAZARD_BLOCK_PATTERN = re.compile(
        r"(?:hazard\s*statements?|h-statements?)\s*:?\s*(.*?)(?:\n\s*\n|precautionary|section|$)",
        _FLAGS | re.DOTALL,
    )
    P_CODE_PATTERN = re.compile(r"\bP\d{3}(?:\s*\+\s*P\d{3})*\s*[:\-]?\s*([^\n\r]*)")
    PRECAUTIONARY_BLOCK_PATTERN = re.compile(
        r"(?:precautionary\s*statements?|p-statements?)\s*:?\s*(.*?)(?:\n\s*\n|section|$)",
        _FLAGS | re.DOTALL,
    )
    MIN_STATEMENT_LENGTH = 10

    @classmethod
    def extract_h_codes(cls, text: str) -> list[dict[str, str]]:
        """H-codes in order of first appearance, each with a description.

        Catalog codes always qualify; unknown codes need an inline description
        long enough to rule out part numbers and similar noise.
        """
        codes: list[dict[str, str]] = []
        seen: set[str] = set()
        for match in cls.H_CODE_PATTERN.finditer(text or ""):
            code = f"H{match.group(1)}"
            if code in seen:
                continue

            inline = cls._trim_statement(match.group(2) or "")
            if code in H_CODES:
                description = H_CODES[code]
            elif len(inline) > MIN_INLINE_DESCRIPTION_LENGTH:
                description = inline
            else:
                continue

            seen.add(code)
            codes.append({"code": code, "description": description})
        return codes

    @classmethod
    def extract_hazard_statements(cls, text: str, h_codes: Optional[list[dict[str, str]]] = None) -> list[str]:
        """Lines of a "Hazard statements" block, else the H-code descriptions."""
        match = cls.HAZARD_BLOCK_PATTERN.search(text or "")
        if match:
            lines = [cls._trim_statement(line) for line in match.group(1).split("\n")]
            statements = [line for line in lines if len(line) > cls.MIN_STATEMENT_LENGTH]
            if statements:
                return dedupe(statements)[:MAX_HAZARD_STATEMENTS]

        return [item["description"] for item in (h_codes or [])][:MAX_HAZARD_STATEMENTS]

    @classmethod
    def extract_precautionary_statements(cls, text: str) -> list[str]:
        """P-code statements, falling back to the lines of a "Precautionary statements" block."""
        statements = [
            cls._trim_statement(match.group(1))
            for match in cls.P_CODE_PATTERN.finditer(text or "")
        ]
        statements = [s for s in statements if len(s) > cls.MIN_STATEMENT_LENGTH]

        if not statements:
            match = cls.PRECAUTIONARY_BLOCK_PATTERN.search(text or "")
            if match:
                lines = [cls._trim_statement(line) for line in match.group(1).split("\n")]
                statements = [line for line in lines if len(line) > cls.MIN_STATEMENT_LENGTH]

        return dedupe(statements)[:MAX_PRECAUTIONARY_STATEMENTS]

    @staticmethod
    def _trim_statement(value: str) -> str:
        return value.strip().rstrip(".").strip()


class SignalWordExtractor:
    """GHS signal word, labelled form first, then a standalone upper-case word."""

    PATTERNS = (
        re.compile(r"Signal\s+Word\s*:?\s*(DANGER|WARNING)\b", _FLAGS),
        re.compile(r"\b(DANGER|WARNING)\b"),
    )

    @classmethod
    def extract(cls, text: str) -> Optional[str]:
        for pattern in cls.PATTERNS:
            match = pattern.search(text or "")
            if match:
                return match.group(1).upper()
        return None


class PictogramExtractor:
    """GHS pictograms named explicitly, by symbol, or implied by the H-codes.

    Symbol names are only read from "Pictograms:" / "Symbols:" lines, since
    words like "flame" or "environment" occur throughout ordinary SDS prose.
    """

    GHS_CODE_PATTERN = re.compile(r"\bGHS0([1-9])\b", _FLAGS)
    PICTOGRAM_LINE_PATTERN = re.compile(r"\b(?:pictograms?|symbols?)\b[^\n\r]*(?:\n[^\n\r]*)?", _FLAGS)
    SYMBOL_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
        ("GHS01", re.compile(r"\bexploding\s+bomb\b", _FLAGS)),
        ("GHS03", re.compile(r"\bflame\s+over\s+circle\b", _FLAGS)),
        ("GHS02", re.compile(r"\bflame\b(?!\s+over\s+circle)", _FLAGS)),
        ("GHS04", re.compile(r"\bgas\s+cylinder\b", _FLAGS)),
        ("GHS05", re.compile(r"\bcorrosion\b", _FLAGS)),
        ("GHS06", re.compile(r"\bskull\s+and\s+crossbones\b", _FLAGS)),
        ("GHS07", re.compile(r"\bexclamation\s+mark\b", _FLAGS)),
        ("GHS08", re.compile(r"\bhealth\s+hazard\b", _FLAGS)),
        ("GHS09", re.compile(r"\benvironment\b", _FLAGS)),
    )

    @staticmethod
    def pictogram(ghs_code: str) -> dict[str, Any]:
        return {
            "ghs_code": ghs_code,
            "name": PICTOGRAM_SYMBOLS[ghs_code],
            "description": f"GHS {PICTOGRAM_NAMES[ghs_code]} pictogram",
        }

    @classmethod
    def extract(cls, text: str, h_codes: Optional[list[dict[str, str]]] = None) -> list[dict[str, Any]]:
        codes: list[str] = [f"GHS0{match.group(1)}" for match in cls.GHS_CODE_PATTERN.finditer(text or "")]
        for line in cls.PICTOGRAM_LINE_PATTERN.finditer(text or ""):
            codes.extend(code for code, pattern in cls.SYMBOL_PATTERNS if pattern.search(line.group(0)))
        codes.extend(
            H_CODE_TO_PICTOGRAM[item["code"]]
            for item in (h_codes or [])
            if item["code"] in H_CODE_TO_PICTOGRAM
        )
        return [cls.pictogram(code) for code in dedupe(codes)]


class HazardCategoriesExtractor:
    """Physical, health and environmental hazard keywords."""

    @classmethod
    def extract(cls, text: str) -> dict[str, list[str]]:
        return {
            "physical_hazards": keyword_hits(text or "", PHYSICAL_HAZARD_KEYWORDS),
            "health_hazards": keyword_hits(text or "", HEALTH_HAZARD_KEYWORDS),
            "environmental_hazards": keyword_hits(text or "", ENVIRONMENTAL_HAZARD_KEYWORDS),
        }
