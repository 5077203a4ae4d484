"""Batch re-extraction API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from chemlabel.api.errors import to_http_exception
from chemlabel.core.exceptions import AppError
from chemlabel.dependencies import get_batch_processor
from chemlabel.schemas.batch import BatchRequest, BatchResponse
from chemlabel.schemas.extraction import ErrorResponse
from chemlabel.services.batch.sds_batch_processor import SDSBatchProcessor
from chemlabel.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()


@router.post(
    "/batch",
    response_model=BatchResponse,
    status_code=status.HTTP_200_OK,
    responses={500: {"description": "Candidate documents could not be loaded", "model": ErrorResponse}},
    summary="Re-extract low quality SDS documents",
    description="Re-run extraction for documents below the quality threshold, five at a time, "
    "at most fifty per call.",
    operation_id="batch_reprocess_sds_documents",
)
async def batch_reprocess(
    request: BatchRequest,
    processor: Annotated[SDSBatchProcessor, Depends(get_batch_processor)],
) -> BatchResponse:
    """Re-extract a batch of SDS documents.

    Args:
        request: Facility / document filters, quality threshold and force flag
        processor: Injected batch processor

    Returns:
        BatchResponse: Aggregate counts and up to ten error messages
    """
    LOGGER.info(
        "Received SDS batch request",
        extra={
            "facility_id": str(request.facility_id) if request.facility_id else None,
            "document_count": len(request.document_ids or []),
            "quality_threshold": request.quality_threshold,
            "force_reprocess": request.force_reprocess,
        },
    )

    try:
        result = await processor.execute(
            facility_id=request.facility_id,
            document_ids=request.document_ids,
            quality_threshold=request.quality_threshold,
            force_reprocess=request.force_reprocess,
        )
    except AppError as e:
        LOGGER.error("SDS batch processing failed", exc_info=True, extra={"error": str(e)})
        raise to_http_exception(e, "Batch processing failed") from e

    return BatchResponse(**result.to_dict())
