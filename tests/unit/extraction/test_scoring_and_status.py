"""Tests for quality scoring, label confidence and status derivation."""

import pytest

from chemlabel.services.extraction.quality_scorer import calculate_confidence, calculate_quality_score
from chemlabel.services.extraction.status import ExtractionStatus, derive_status


@pytest.fixture
def complete_record() -> dict:
    """Record with every scored field populated."""
    return {
        "product_name": "Acetone",
        "manufacturer": "ACME Chemical Company",
        "cas_number": "67-64-1",
        "signal_word": "DANGER",
        "h_codes": [{"code": "H225", "description": "Highly flammable liquid and vapour"}],
        "pictograms": [{"ghs_code": "GHS02", "name": "flame"}],
        "hazard_statements": ["Highly flammable liquid and vapour"],
        "precautionary_statements": ["Keep away from heat"],
        "physical_hazards": ["flammable"],
        "health_hazards": ["toxic"],
        "environmental_hazards": ["persistent"],
        "first_aid": {"inhalation": "Move to fresh air."},
        "ppe_requirements": {"hmis_code": "B"},
        "hmis_codes": {"health": 2, "flammability": 3, "physical": 0},
        "nfpa_codes": {"health": 1, "flammability": 3, "reactivity": 0},
    }


class TestQualityScore:
    """Test suite for the extraction quality score."""

    def test_empty_record_scores_zero(self) -> None:
        assert calculate_quality_score({}, 0) == 0

    @pytest.mark.parametrize(
        "text_length,expected",
        [(2001, 20), (2000, 15), (1001, 15), (1000, 10), (501, 10), (500, 5), (201, 5), (200, 0)],
    )
    def test_text_length_points(self, text_length: int, expected: int) -> None:
        assert calculate_quality_score({}, text_length) == expected

    def test_complete_record_reaches_maximum(self, complete_record: dict) -> None:
        assert calculate_quality_score(complete_record, 5000) == 100

    def test_score_is_capped(self, complete_record: dict) -> None:
        complete_record["extra_field"] = "ignored"

        assert calculate_quality_score(complete_record, 100000) == 100

    def test_field_weights(self) -> None:
        record = {"h_codes": [{"code": "H225"}], "signal_word": "DANGER", "cas_number": "67-64-1"}

        assert calculate_quality_score(record, 0) == 35


class TestConfidence:
    """Test suite for label-field confidence."""

    def test_complete_record_is_fully_confident(self, complete_record: dict) -> None:
        assert calculate_confidence(complete_record, is_readable=True) == 100

    def test_unclear_ppe_code_earns_nothing(self, complete_record: dict) -> None:
        complete_record["ppe_requirements"] = {"hmis_code": "X"}

        assert calculate_confidence(complete_record, is_readable=True) == 95

    def test_blank_strings_do_not_count(self) -> None:
        assert calculate_confidence({"product_name": "   ", "signal_word": "DANGER"}, is_readable=True) == 15

    def test_either_rating_scheme_counts_once(self) -> None:
        assert calculate_confidence({"nfpa_codes": {"health": 1}}, is_readable=True) == 5
        assert calculate_confidence({"hmis_codes": {"health": 1}, "nfpa_codes": {"health": 1}}, is_readable=True) == 5

    def test_unreadable_documents_are_capped(self, complete_record: dict) -> None:
        assert calculate_confidence(complete_record, is_readable=False) == 10
        assert calculate_confidence(complete_record, is_readable=False, unreadable_cap=25) == 25


class TestDeriveStatus:
    """Test suite for extraction status derivation."""

    @pytest.mark.parametrize(
        "confidence,is_readable,passes_validation,expected",
        [
            (100, True, True, ExtractionStatus.OSHA_COMPLIANT),
            (98, True, True, ExtractionStatus.OSHA_COMPLIANT),
            (100, True, False, ExtractionStatus.AI_ENHANCED),
            (97, True, True, ExtractionStatus.AI_ENHANCED),
            (80, True, False, ExtractionStatus.AI_ENHANCED),
            (79, True, True, ExtractionStatus.COMPLETED),
            (50, True, False, ExtractionStatus.COMPLETED),
            (49, True, True, ExtractionStatus.MANUAL_REVIEW_REQUIRED),
            (100, False, True, ExtractionStatus.MANUAL_REVIEW_REQUIRED),
        ],
    )
    def test_status_rules(
        self, confidence: int, is_readable: bool, passes_validation: bool, expected: ExtractionStatus
    ) -> None:
        assert derive_status(confidence, is_readable, passes_validation) == expected

    def test_thresholds_are_configurable(self) -> None:
        status = derive_status(
            90, True, True, osha_compliant_confidence=90, ai_enhanced_confidence=70, manual_review_confidence=40
        )

        assert status == ExtractionStatus.OSHA_COMPLIANT

    def test_status_values(self) -> None:
        assert ExtractionStatus.MANUAL_REVIEW_REQUIRED.value == "manual_review_required"
        assert ExtractionStatus.OSHA_COMPLIANT == "osha_compliant"
