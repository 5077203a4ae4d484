"""Tests for Section 8 PPE parsing and HMIS PPE letter derivation."""

import pytest

from chemlabel.services.extraction.extractors import (
    HMISPPECodeDeriver,
    PPEFlags,
    Section8PPEParser,
)


class TestHMISPPECodeDeriver:
    """Test suite for the HMIS PPE decision table."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Wear safety glasses.", "A"),
            ("Safety glasses and nitrile gloves.", "B"),
            ("Safety glasses and a rubber apron.", "C"),
            ("Face shield, apron and gloves.", "D"),
            ("Safety glasses, gloves and a dust mask.", "E"),
            ("Safety glasses, apron, gloves and dust mask.", "F"),
            ("Safety glasses, gloves, apron and vapor respirator.", "G"),
            ("Goggles, gloves, apron and organic vapor respirator.", "H"),
            ("Full face respirator, gloves and apron.", "I"),
            ("Safety glasses, gloves and supplied air respirator.", "J"),
        ],
    )
    def test_derives_letter(self, text: str, expected: str) -> None:
        """Each equipment combination maps to its HMIS letter."""
        assert HMISPPECodeDeriver.derive(text) == expected

    def test_most_protective_rule_wins(self) -> None:
        """K is reported even though the text also satisfies A through J."""
        text = (
            "Safety glasses, goggles, gloves, apron, dust mask, vapor respirator, "
            "full face mask with supplied air (SCBA)."
        )

        assert HMISPPECodeDeriver.derive(text) == "K"

    def test_unclear_text_yields_x(self) -> None:
        """Nothing recognisable maps to X."""
        assert HMISPPECodeDeriver.derive("Use good industrial hygiene practice.") == "X"
        assert HMISPPECodeDeriver.derive("") == "X"

    def test_gloves_without_eye_protection_is_unclear(self) -> None:
        """Gloves alone satisfy no rule."""
        assert HMISPPECodeDeriver.derive("Wear chemical resistant gloves.") == "X"

    def test_derivation_is_deterministic(self) -> None:
        """The same text always yields the same letter."""
        text = "Eye protection: goggles. Hand protection: gloves. Apron. Respirator."

        assert {HMISPPECodeDeriver.derive(text) for _ in range(5)} == {"H"}

    def test_flags_from_text(self) -> None:
        """Keyword families are detected case-insensitively."""
        flags = PPEFlags.from_text("SAFETY GLASSES and Hand Protection")

        assert flags.glasses
        assert flags.gloves
        assert not flags.apron
        assert not flags.supplied_air


class TestSection8PPEParser:
    """Test suite for Section 8 protective equipment extraction."""

    def test_exact_duplicates_collapse_but_casing_variants_remain(self) -> None:
        """Deduplication is exact: repeats collapse, other casings are kept in order."""
        ppe = Section8PPEParser.extract("gloves: nitrile\ngloves: nitrile\ngloves: Nitrile\n")

        assert ppe.hand_protection == ["nitrile", "Nitrile"]

    def test_single_entry_for_repeated_value(self) -> None:
        """The same glove material mentioned twice is reported once."""
        ppe = Section8PPEParser.extract("gloves: nitrile\nAlways wear gloves: nitrile\n")

        assert ppe.hand_protection == ["nitrile"]

    def test_parses_sample_document(self, sample_sds_text: str) -> None:
        """Section 8 of the sample SDS yields each protection family and letter C."""
        ppe = Section8PPEParser.parse(sample_sds_text)

        assert ppe.eye_protection[0] == "Safety glasses with side shields"
        assert ppe.hand_protection[0] == "Butyl rubber gloves"
        assert ppe.skin_protection[0] == "Protective clothing and apron"
        assert ppe.respiratory_protection == []
        assert "apron" in ppe.general_ppe
        assert ppe.hmis_code == "C"

    def test_value_on_line_after_label(self) -> None:
        """A label ending its line takes the value printed on the next line."""
        ppe = Section8PPEParser.extract(
            "Eye protection:\nChemical splash goggles\nHand protection:\nNitrile rubber gloves\n"
        )

        assert ppe.eye_protection[0] == "Chemical splash goggles"
        assert ppe.hand_protection == ["Nitrile rubber gloves"]

    def test_short_captures_are_discarded(self) -> None:
        """Label artifacts of three characters or fewer are not values."""
        ppe = Section8PPEParser.extract("Respirator: N/A\nGoggles: yes\n")

        assert ppe.respiratory_protection == []
        assert ppe.eye_protection == []

    def test_missing_section_yields_empty_requirements(self) -> None:
        """No Section 8 heading gives empty lists and the X code."""
        ppe = Section8PPEParser.parse("SECTION 1: IDENTIFICATION\nProduct Name: Acetone\n")

        assert ppe.to_dict() == {
            "eye_protection": [],
            "hand_protection": [],
            "respiratory_protection": [],
            "skin_protection": [],
            "general_ppe": [],
            "hmis_code": "X",
        }
