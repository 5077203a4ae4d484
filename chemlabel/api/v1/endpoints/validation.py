"""SDS compliance validation API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from chemlabel.api.errors import to_http_exception
from chemlabel.core.exceptions import AppError
from chemlabel.dependencies import get_validation_service
from chemlabel.schemas.extraction import ErrorResponse
from chemlabel.schemas.validation import ValidationRequest, ValidationResponse
from chemlabel.services.validation.sds_validation_service import SDSValidationService
from chemlabel.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()


@router.post(
    "/validate",
    response_model=ValidationResponse,
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "SDS document not found", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse},
    },
    summary="Validate a persisted SDS record",
    description="Check a stored SDS record against OSHA and GHS labelling requirements. "
    "Problems are reported in the response, the record itself is never modified.",
    operation_id="validate_sds_document",
)
async def validate_sds(
    request: ValidationRequest,
    service: Annotated[SDSValidationService, Depends(get_validation_service)],
) -> ValidationResponse:
    try:
        report = await service.execute(request.document_id)
    except AppError as e:
        LOGGER.error(
            "SDS validation failed",
            exc_info=True,
            extra={"document_id": str(request.document_id), "error": str(e)},
        )
        raise to_http_exception(e, "SDS validation failed") from e

    return ValidationResponse(
        is_valid=report.is_valid,
        errors=report.errors,
        warnings=report.warnings,
        suggestions=report.suggestions,
        osha_compliant=report.osha_compliant,
        ghs_compliant=report.ghs_compliant,
    )
