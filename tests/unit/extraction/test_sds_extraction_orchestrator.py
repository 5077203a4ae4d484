"""Tests for the end-to-end SDS extraction orchestrator."""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from chemlabel.core.config import ExtractionSettings
from chemlabel.core.exceptions import (
    DocumentFetchError,
    DocumentNotFoundError,
    InvalidDocumentError,
    ValidationError,
)
from chemlabel.services.extraction.sds_extraction_orchestrator import (
    UNREADABLE_NOTE,
    SDSExtractionOrchestrator,
    extract_fields,
)


@pytest.fixture
def extraction_settings() -> ExtractionSettings:
    return ExtractionSettings(MIN_READABLE_CHARS=100, FULL_TEXT_MAX_CHARS=50000, UNREADABLE_CONFIDENCE_CAP=10)


@pytest.fixture
def mock_pdf_service(sample_pdf_content: bytes, sample_sds_text: str) -> AsyncMock:
    """PDF service that downloads the sample PDF and returns the sample text."""
    service = AsyncMock()
    service.download.return_value = sample_pdf_content
    service.extract_text.return_value = sample_sds_text
    return service


@pytest.fixture
def orchestrator(
    mock_repository: AsyncMock, mock_pdf_service: AsyncMock, extraction_settings: ExtractionSettings
) -> SDSExtractionOrchestrator:
    return SDSExtractionOrchestrator(
        mock_repository, pdf_service=mock_pdf_service, extraction_settings=extraction_settings
    )


class TestExtractFields:
    """Test suite for building a hazard record from text."""

    def test_sample_document_record(self, sample_sds_text: str) -> None:
        record = extract_fields(sample_sds_text)

        assert record["product_name"] == "Acetone"
        assert record["manufacturer"] == "ACME Chemical Company"
        assert record["cas_number"] == "67-64-1"
        assert record["document_type"] == "safety_data_sheet"
        assert record["signal_word"] == "DANGER"
        assert [item["code"] for item in record["h_codes"]] == ["H225", "H319", "H336"]
        assert [item["ghs_code"] for item in record["pictograms"]] == ["GHS02", "GHS07"]
        assert record["ppe_requirements"]["hmis_code"] == "C"
        assert record["hmis_codes"] == {"health": 2, "flammability": 3, "physical": 0}
        assert record["nfpa_codes"] == {"health": 1, "flammability": 3, "reactivity": 0}
        assert record["ghs_section2_data"]["physical_properties"]["flash_point"] == pytest.approx(-4.0)
        assert record["ghs_section2_data"]["toxicity_data"]["ld50_oral"] == pytest.approx(5800.0)
        assert record["regulatory_notes"] == []

    def test_hmis_ratings_derived_when_not_printed(self) -> None:
        text = (
            "SECTION 2: HAZARDS IDENTIFICATION\n"
            "H225 Highly flammable liquid and vapour\n"
            "H319 Causes serious eye irritation\n"
        )

        record = extract_fields(text)

        assert record["hmis_codes"] == {"health": 1, "flammability": 4, "physical": 0}
        assert record["regulatory_notes"] == ["HMIS ratings derived from GHS classification (confidence 30%)"]

    def test_no_derivation_without_hazard_classes(self) -> None:
        record = extract_fields("Product Name: Plain Water\n")

        assert record["hmis_codes"] == {}
        assert record["regulatory_notes"] == []

    def test_signal_word_outside_section_2(self) -> None:
        """Without a Section 2 heading the whole text is searched."""
        record = extract_fields("Product Name: Widget Cleaner\nSignal Word: WARNING\n")

        assert record["signal_word"] == "WARNING"


class TestSDSExtractionOrchestrator:
    """Test suite for fetching, scoring and persisting extractions."""

    @pytest.mark.asyncio
    async def test_successful_extraction(
        self,
        orchestrator: SDSExtractionOrchestrator,
        mock_repository: AsyncMock,
        mock_pdf_service: AsyncMock,
        make_document,
        sample_sds_text: str,
    ) -> None:
        document = make_document()
        mock_repository.get_by_id.return_value = document
        mock_repository.save_extraction.return_value = document

        result = await orchestrator.execute(document.id)

        mock_pdf_service.download.assert_awaited_once_with(document.bucket_url)
        assert result.persisted is True
        assert result.persistence_error is None
        assert result.text_length == len(sample_sds_text)

        record = result.record
        assert record["is_readable"] is True
        assert record["ai_extraction_confidence"] == 100
        assert record["extraction_status"] == "osha_compliant"
        assert 0 < record["extraction_quality_score"] <= 100
        assert record["regulatory_notes"][-1].startswith("Processed: ")

        document_id, fields = mock_repository.save_extraction.await_args.args
        assert document_id == document.id
        assert fields["product_name"] == "Acetone"
        assert fields["full_text"] == sample_sds_text
        assert fields["last_extracted_at"] is not None
        assert "bucket_url" not in fields

    @pytest.mark.asyncio
    async def test_request_urls_take_precedence(
        self, orchestrator: SDSExtractionOrchestrator, mock_repository: AsyncMock, mock_pdf_service: AsyncMock, make_document
    ) -> None:
        document = make_document(bucket_url=None, source_url="https://vendor.example.com/old.pdf")
        mock_repository.get_by_id.return_value = document

        await orchestrator.execute(
            document.id,
            bucket_url="https://storage.example.com/new.pdf",
            source_url="https://vendor.example.com/new.pdf",
        )

        mock_pdf_service.download.assert_awaited_once_with("https://storage.example.com/new.pdf")
        _, fields = mock_repository.save_extraction.await_args.args
        assert fields["bucket_url"] == "https://storage.example.com/new.pdf"
        assert fields["source_url"] == "https://vendor.example.com/new.pdf"

    @pytest.mark.asyncio
    async def test_falls_back_to_stored_source_url(
        self, orchestrator: SDSExtractionOrchestrator, mock_repository: AsyncMock, mock_pdf_service: AsyncMock, make_document
    ) -> None:
        document = make_document(bucket_url=None, source_url="https://vendor.example.com/acetone.pdf")
        mock_repository.get_by_id.return_value = document

        await orchestrator.execute(document.id)

        mock_pdf_service.download.assert_awaited_once_with("https://vendor.example.com/acetone.pdf")

    @pytest.mark.asyncio
    async def test_uploaded_bytes_skip_download(
        self, orchestrator: SDSExtractionOrchestrator, mock_repository: AsyncMock, mock_pdf_service: AsyncMock, make_document
    ) -> None:
        document = make_document(bucket_url=None)
        mock_repository.get_by_id.return_value = document

        await orchestrator.execute(document.id, file_bytes=b"%PDF-1.4 upload", file_name="acetone.pdf")

        mock_pdf_service.download.assert_not_called()
        mock_pdf_service.extract_text.assert_awaited_once_with(b"%PDF-1.4 upload")
        _, fields = mock_repository.save_extraction.await_args.args
        assert fields["file_name"] == "acetone.pdf"

    @pytest.mark.asyncio
    async def test_unknown_document_writes_nothing(
        self, orchestrator: SDSExtractionOrchestrator, mock_repository: AsyncMock, mock_pdf_service: AsyncMock
    ) -> None:
        mock_repository.get_by_id.return_value = None

        with pytest.raises(DocumentNotFoundError):
            await orchestrator.execute(uuid.uuid4())

        mock_pdf_service.download.assert_not_called()
        mock_repository.save_extraction.assert_not_called()

    @pytest.mark.asyncio
    async def test_document_without_source_writes_nothing(
        self, orchestrator: SDSExtractionOrchestrator, mock_repository: AsyncMock, mock_pdf_service: AsyncMock, make_document
    ) -> None:
        mock_repository.get_by_id.return_value = make_document(bucket_url=None, source_url=None)

        with pytest.raises(InvalidDocumentError):
            await orchestrator.execute(uuid.uuid4())

        mock_pdf_service.download.assert_not_called()
        mock_repository.save_extraction.assert_not_called()

    @pytest.mark.asyncio
    async def test_download_failure_writes_nothing(
        self, orchestrator: SDSExtractionOrchestrator, mock_repository: AsyncMock, mock_pdf_service: AsyncMock, make_document
    ) -> None:
        mock_repository.get_by_id.return_value = make_document()
        mock_pdf_service.download.side_effect = DocumentFetchError("Failed to download PDF: HTTP 404")

        with pytest.raises(DocumentFetchError):
            await orchestrator.execute(uuid.uuid4())

        mock_repository.save_extraction.assert_not_called()

    @pytest.mark.asyncio
    async def test_unreadable_document_is_stored_for_manual_review(
        self, orchestrator: SDSExtractionOrchestrator, mock_repository: AsyncMock, mock_pdf_service: AsyncMock, make_document
    ) -> None:
        document = make_document(product_name="Acetone")
        mock_repository.get_by_id.return_value = document
        mock_pdf_service.extract_text.return_value = "Scanned page"

        result = await orchestrator.execute(document.id)

        assert result.persisted is True
        assert result.record["is_readable"] is False
        assert result.record["ai_extraction_confidence"] <= 10
        assert result.record["extraction_status"] == "manual_review_required"
        assert UNREADABLE_NOTE in result.record["regulatory_notes"]

        _, fields = mock_repository.save_extraction.await_args.args
        assert "product_name" not in fields
        assert "manufacturer" not in fields
        assert "cas_number" not in fields

    @pytest.mark.asyncio
    async def test_full_text_is_truncated(
        self, mock_repository: AsyncMock, mock_pdf_service: AsyncMock, make_document, sample_sds_text: str
    ) -> None:
        orchestrator = SDSExtractionOrchestrator(
            mock_repository,
            pdf_service=mock_pdf_service,
            extraction_settings=ExtractionSettings(FULL_TEXT_MAX_CHARS=200),
        )
        mock_repository.get_by_id.return_value = make_document()

        result = await orchestrator.execute(uuid.uuid4())

        _, fields = mock_repository.save_extraction.await_args.args
        assert fields["full_text"] == sample_sds_text[:200]
        assert result.text_length == len(sample_sds_text)

    @pytest.mark.asyncio
    async def test_database_failure_is_reported_not_raised(
        self, orchestrator: SDSExtractionOrchestrator, mock_repository: AsyncMock, make_document
    ) -> None:
        mock_repository.get_by_id.return_value = make_document()
        mock_repository.save_extraction.side_effect = OperationalError("UPDATE", {}, Exception("connection reset"))

        result = await orchestrator.execute(uuid.uuid4())

        assert result.persisted is False
        assert result.persistence_error.startswith("Database update failed: ")
        assert result.record["product_name"] == "Acetone"

    @pytest.mark.asyncio
    async def test_document_deleted_before_save(
        self, orchestrator: SDSExtractionOrchestrator, mock_repository: AsyncMock, make_document
    ) -> None:
        document_id = uuid.uuid4()
        mock_repository.get_by_id.return_value = make_document(id=document_id)
        mock_repository.save_extraction.return_value = None

        result = await orchestrator.execute(document_id)

        assert result.persisted is False
        assert result.persistence_error == f"SDS document {document_id} no longer exists"

    @pytest.mark.asyncio
    async def test_document_id_is_required(
        self, orchestrator: SDSExtractionOrchestrator, mock_repository: AsyncMock
    ) -> None:
        with pytest.raises(ValidationError):
            await orchestrator.execute(None)

        mock_repository.get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_to_dict(
        self, orchestrator: SDSExtractionOrchestrator, mock_repository: AsyncMock, make_document
    ) -> None:
        document = make_document()
        mock_repository.get_by_id.return_value = document

        data = (await orchestrator.execute(document.id)).to_dict()

        assert data["document_id"] == str(document.id)
        assert data["persisted"] is True
        assert data["extracted_data"]["signal_word"] == "DANGER"
