"""Tests for the SDS API endpoints."""

import uuid
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from chemlabel.core.database import db_client
from chemlabel.core.exceptions import (
    AppError,
    DocumentFetchError,
    DocumentNotFoundError,
    InvalidDocumentError,
    TextExtractionError,
)
from chemlabel.dependencies import (
    get_batch_processor,
    get_extraction_orchestrator,
    get_validation_service,
)
from chemlabel.main import app
from chemlabel.services.batch.sds_batch_processor import BatchResult
from chemlabel.services.extraction.sds_extraction_orchestrator import ExtractionResult
from chemlabel.services.validation.sds_validation_service import ValidationReport


def _extraction_result(document_id: uuid.UUID, persisted: bool = True, error: str = None) -> ExtractionResult:
    return ExtractionResult(
        document_id=document_id,
        record={
            "product_name": "Acetone",
            "signal_word": "DANGER",
            "h_codes": [{"code": "H225", "description": "Highly flammable liquid and vapour"}],
            "hmis_codes": {"health": 2, "flammability": 3, "physical": 0},
            "extraction_quality_score": 85,
            "ai_extraction_confidence": 100,
            "extraction_status": "osha_compliant",
            "is_readable": True,
            "regulatory_notes": ["Processed: 2024-01-01T00:00:00+00:00"],
        },
        text_length=2400,
        persisted=persisted,
        persistence_error=error,
    )


class TestExtractionEndpoints:
    """Test suite for the extraction endpoints.

    Tests the public API interface, focusing on request/response behavior
    and error mapping.
    """

    def test_extract_success(self, test_client: TestClient) -> None:
        """Test successful extraction via API.

        Args:
            test_client: FastAPI test client fixture
        """
        document_id = uuid.uuid4()
        mock_orchestrator = AsyncMock()
        mock_orchestrator.execute.return_value = _extraction_result(document_id)
        app.dependency_overrides[get_extraction_orchestrator] = lambda: mock_orchestrator

        response = test_client.post(
            "/api/v1/sds/extract",
            json={"document_id": str(document_id), "bucket_url": "https://storage.example.com/a.pdf"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["document_id"] == str(document_id)
        assert data["persisted"] is True
        assert data["extracted_data"]["product_name"] == "Acetone"
        assert data["extracted_data"]["extraction_status"] == "osha_compliant"
        mock_orchestrator.execute.assert_awaited_once_with(
            document_id,
            bucket_url="https://storage.example.com/a.pdf",
            source_url=None,
        )

    def test_extract_reports_persistence_failure(self, test_client: TestClient) -> None:
        """Extraction that could not be saved still returns the record."""
        document_id = uuid.uuid4()
        mock_orchestrator = AsyncMock()
        mock_orchestrator.execute.return_value = _extraction_result(
            document_id, persisted=False, error="Database update failed: timeout"
        )
        app.dependency_overrides[get_extraction_orchestrator] = lambda: mock_orchestrator

        response = test_client.post("/api/v1/sds/extract", json={"document_id": str(document_id)})

        assert response.status_code == 200
        assert response.json()["persisted"] is False
        assert response.json()["persistence_error"] == "Database update failed: timeout"

    def test_extract_unknown_document(self, test_client: TestClient) -> None:
        mock_orchestrator = AsyncMock()
        mock_orchestrator.execute.side_effect = DocumentNotFoundError("SDS document not found")
        app.dependency_overrides[get_extraction_orchestrator] = lambda: mock_orchestrator

        response = test_client.post("/api/v1/sds/extract", json={"document_id": str(uuid.uuid4())})

        assert response.status_code == 404
        detail = response.json()["detail"]
        assert detail["error"] == "DocumentNotFoundError"
        assert detail["message"] == "SDS text extraction failed"

    def test_extract_without_source(self, test_client: TestClient) -> None:
        mock_orchestrator = AsyncMock()
        mock_orchestrator.execute.side_effect = InvalidDocumentError("no bucket_url or source_url")
        app.dependency_overrides[get_extraction_orchestrator] = lambda: mock_orchestrator

        response = test_client.post("/api/v1/sds/extract", json={"document_id": str(uuid.uuid4())})

        assert response.status_code == 400

    def test_extract_download_failure(self, test_client: TestClient) -> None:
        mock_orchestrator = AsyncMock()
        mock_orchestrator.execute.side_effect = DocumentFetchError("Failed to download PDF: HTTP 403")
        app.dependency_overrides[get_extraction_orchestrator] = lambda: mock_orchestrator

        response = test_client.post("/api/v1/sds/extract", json={"document_id": str(uuid.uuid4())})

        assert response.status_code == 400
        assert response.json()["detail"]["detail"] == "Failed to download PDF: HTTP 403"

    def test_extract_unexpected_error(self, test_client: TestClient) -> None:
        mock_orchestrator = AsyncMock()
        mock_orchestrator.execute.side_effect = AppError("Service execution failed: boom")
        app.dependency_overrides[get_extraction_orchestrator] = lambda: mock_orchestrator

        response = test_client.post("/api/v1/sds/extract", json={"document_id": str(uuid.uuid4())})

        assert response.status_code == 500

    def test_extract_missing_document_id(self, test_client: TestClient) -> None:
        """Test extraction with missing document ID.

        Args:
            test_client: FastAPI test client fixture
        """
        response = test_client.post("/api/v1/sds/extract", json={})

        # Assert - should fail validation
        assert response.status_code == 422

    def test_extract_invalid_document_id(self, test_client: TestClient) -> None:
        response = test_client.post("/api/v1/sds/extract", json={"document_id": "not-a-uuid"})

        assert response.status_code == 422

    def test_extract_upload(self, test_client: TestClient) -> None:
        document_id = uuid.uuid4()
        mock_orchestrator = AsyncMock()
        mock_orchestrator.execute.return_value = _extraction_result(document_id)
        app.dependency_overrides[get_extraction_orchestrator] = lambda: mock_orchestrator

        response = test_client.post(
            "/api/v1/sds/extract/upload",
            data={"document_id": str(document_id)},
            files={"file": ("acetone.pdf", b"%PDF-1.4 body", "application/pdf")},
        )

        assert response.status_code == 200
        mock_orchestrator.execute.assert_awaited_once_with(
            document_id,
            file_bytes=b"%PDF-1.4 body",
            file_name="acetone.pdf",
        )

    def test_extract_empty_upload(self, test_client: TestClient) -> None:
        mock_orchestrator = AsyncMock()
        mock_orchestrator.execute.side_effect = TextExtractionError("Document content is empty")
        app.dependency_overrides[get_extraction_orchestrator] = lambda: mock_orchestrator

        response = test_client.post(
            "/api/v1/sds/extract/upload",
            data={"document_id": str(uuid.uuid4())},
            files={"file": ("empty.pdf", b"", "application/pdf")},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "TextExtractionError"


class TestValidationEndpoint:
    """Test suite for the validation endpoint."""

    def test_validate_returns_camel_case_report(self, test_client: TestClient) -> None:
        mock_service = AsyncMock()
        mock_service.execute.return_value = ValidationReport(
            is_valid=True,
            warnings=["CAS number is missing"],
            osha_compliant=True,
            ghs_compliant=True,
        )
        app.dependency_overrides[get_validation_service] = lambda: mock_service

        response = test_client.post("/api/v1/sds/validate", json={"document_id": str(uuid.uuid4())})

        assert response.status_code == 200
        assert response.json() == {
            "isValid": True,
            "errors": [],
            "warnings": ["CAS number is missing"],
            "suggestions": [],
            "oshaCompliant": True,
            "ghsCompliant": True,
        }

    def test_validate_unknown_document(self, test_client: TestClient) -> None:
        mock_service = AsyncMock()
        mock_service.execute.side_effect = DocumentNotFoundError("SDS document not found")
        app.dependency_overrides[get_validation_service] = lambda: mock_service

        response = test_client.post("/api/v1/sds/validate", json={"document_id": str(uuid.uuid4())})

        assert response.status_code == 404


class TestBatchEndpoint:
    """Test suite for the batch re-extraction endpoint."""

    def test_batch_success(self, test_client: TestClient) -> None:
        mock_processor = AsyncMock()
        mock_processor.execute.return_value = BatchResult(
            total_documents=12,
            processed=8,
            skipped=3,
            failed=1,
            errors=["Acetone: Failed to download PDF: HTTP 404"],
            quality_threshold=60,
        )
        app.dependency_overrides[get_batch_processor] = lambda: mock_processor

        response = test_client.post("/api/v1/sds/batch", json={"quality_threshold": 60})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Batch processing completed: 8 processed, 3 skipped, 1 failed"
        assert data["failed"] == 1
        assert data["errors"] == ["Acetone: Failed to download PDF: HTTP 404"]
        mock_processor.execute.assert_awaited_once_with(
            facility_id=None,
            document_ids=None,
            quality_threshold=60,
            force_reprocess=False,
        )

    def test_batch_threshold_out_of_range(self, test_client: TestClient) -> None:
        response = test_client.post("/api/v1/sds/batch", json={"quality_threshold": 150})

        assert response.status_code == 422

    def test_batch_candidate_failure(self, test_client: TestClient) -> None:
        mock_processor = AsyncMock()
        mock_processor.execute.side_effect = AppError("Service execution failed: database unavailable")
        app.dependency_overrides[get_batch_processor] = lambda: mock_processor

        response = test_client.post("/api/v1/sds/batch", json={})

        assert response.status_code == 500
        assert response.json()["detail"]["message"] == "Batch processing failed"


class TestServiceEndpoints:
    """Test suite for root and health endpoints."""

    def test_root(self, test_client: TestClient) -> None:
        response = test_client.get("/")

        assert response.status_code == 200
        assert response.json()["health"] == "/api/v1/sds/health"

    def test_health_reports_degraded_database(self, test_client: TestClient) -> None:
        with patch.object(db_client, "health_check", AsyncMock(return_value={"status": "unhealthy"})):
            response = test_client.get("/api/v1/sds/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"

    def test_health_reports_healthy_database(self, test_client: TestClient) -> None:
        with patch.object(db_client, "health_check", AsyncMock(return_value={"status": "healthy"})):
            response = test_client.get("/api/v1/sds/health")

        assert response.json()["status"] == "healthy"
