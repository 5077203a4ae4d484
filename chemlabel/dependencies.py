"""Dependency factories for the FastAPI routes."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from chemlabel.core.database import get_async_session
from chemlabel.repositories.sds_document_repository import SDSDocumentRepository
from chemlabel.services.batch.sds_batch_processor import SDSBatchProcessor
from chemlabel.services.extraction.pdf_text_service import PDFTextService
from chemlabel.services.extraction.sds_extraction_orchestrator import SDSExtractionOrchestrator
from chemlabel.services.validation.sds_validation_service import SDSValidationService


async def get_sds_document_repository(
    db_session: Annotated[AsyncSession, Depends(get_async_session)]
) -> SDSDocumentRepository:
    """Get SDS document repository instance.

    Args:
        db_session: Database session from dependency injection

    Returns:
        SDSDocumentRepository: Repository for SDS document records
    """
    return SDSDocumentRepository(db_session)


def get_pdf_text_service() -> PDFTextService:
    return PDFTextService()


async def get_extraction_orchestrator(
    repository: Annotated[SDSDocumentRepository, Depends(get_sds_document_repository)],
    pdf_service: Annotated[PDFTextService, Depends(get_pdf_text_service)],
) -> SDSExtractionOrchestrator:
    """Get extraction orchestrator bound to the request's session."""
    return SDSExtractionOrchestrator(repository, pdf_service=pdf_service)


async def get_validation_service(
    repository: Annotated[SDSDocumentRepository, Depends(get_sds_document_repository)],
) -> SDSValidationService:
    return SDSValidationService(repository)


async def get_batch_processor(
    repository: Annotated[SDSDocumentRepository, Depends(get_sds_document_repository)],
) -> SDSBatchProcessor:
    """Get batch processor.

    The request session is only used to select candidates; each document is
    re-extracted in a session of its own.
    """
    return SDSBatchProcessor(repository)
