"""SDS text extraction API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from chemlabel.api.errors import to_http_exception
from chemlabel.core.exceptions import AppError
from chemlabel.dependencies import get_extraction_orchestrator
from chemlabel.schemas.extraction import ErrorResponse, ExtractedData, ExtractionRequest, ExtractionResponse
from chemlabel.services.extraction.sds_extraction_orchestrator import ExtractionResult, SDSExtractionOrchestrator
from chemlabel.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"description": "Document has no usable source or could not be downloaded", "model": ErrorResponse},
    404: {"description": "SDS document not found", "model": ErrorResponse},
    500: {"description": "Internal server error", "model": ErrorResponse},
}


def _to_response(result: ExtractionResult) -> ExtractionResponse:
    return ExtractionResponse(
        document_id=result.document_id,
        persisted=result.persisted,
        persistence_error=result.persistence_error,
        text_length=result.text_length,
        extracted_data=ExtractedData(**result.record),
    )


@router.post(
    "/extract",
    response_model=ExtractionResponse,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
    summary="Extract hazard data from an SDS PDF",
    description="Download the SDS PDF from bucket_url or source_url (falling back to the stored URLs), "
    "extract its hazard record, score it and save it on the document.",
    operation_id="extract_sds_document",
)
async def extract_sds(
    request: ExtractionRequest,
    orchestrator: Annotated[SDSExtractionOrchestrator, Depends(get_extraction_orchestrator)],
) -> ExtractionResponse:
    """Extract and persist the hazard record of an SDS document.

    Args:
        request: Document ID and optional PDF URLs
        orchestrator: Injected extraction orchestrator

    Returns:
        ExtractionResponse: Extracted record and persistence outcome

    Raises:
        HTTPException: 404 for unknown documents, 400 for unusable sources
    """
    LOGGER.info("Received SDS extraction request", extra={"document_id": str(request.document_id)})

    try:
        result = await orchestrator.execute(
            request.document_id,
            bucket_url=request.bucket_url,
            source_url=request.source_url,
        )
    except AppError as e:
        LOGGER.error(
            "SDS extraction failed",
            exc_info=True,
            extra={"document_id": str(request.document_id), "error": str(e)},
        )
        raise to_http_exception(e, "SDS text extraction failed") from e

    return _to_response(result)


@router.post(
    "/extract/upload",
    response_model=ExtractionResponse,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
    summary="Extract hazard data from an uploaded SDS file",
    operation_id="extract_uploaded_sds_document",
)
async def extract_uploaded_sds(
    document_id: Annotated[UUID, Form(...)],
    file: Annotated[UploadFile, File(...)],
    orchestrator: Annotated[SDSExtractionOrchestrator, Depends(get_extraction_orchestrator)],
) -> ExtractionResponse:
    """Extract the hazard record from raw uploaded bytes."""
    file_bytes = await file.read()

    LOGGER.info(
        "Received SDS upload extraction request",
        extra={"document_id": str(document_id), "size_bytes": len(file_bytes), "upload_name": file.filename},
    )

    try:
        result = await orchestrator.execute(
            document_id,
            file_bytes=file_bytes,
            file_name=file.filename,
        )
    except AppError as e:
        LOGGER.error(
            "SDS upload extraction failed",
            exc_info=True,
            extra={"document_id": str(document_id), "error": str(e)},
        )
        raise to_http_exception(e, "SDS text extraction failed") from e

    return _to_response(result)
