"""Mapping of application errors to HTTP responses."""

from fastapi import HTTPException, status

from chemlabel.core.exceptions import (
    AppError,
    DocumentFetchError,
    DocumentNotFoundError,
    InvalidDocumentError,
    TextExtractionError,
    ValidationError,
)

CLIENT_ERRORS = (InvalidDocumentError, DocumentFetchError, TextExtractionError, ValidationError)


def to_http_exception(error: AppError, message: str) -> HTTPException:
    """Build the HTTPException for an application error.

    Args:
        error: Raised application error
        message: Human readable summary of the failed operation

    Returns:
        HTTPException with an ``{error, message, detail}`` payload
    """
    if isinstance(error, DocumentNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, CLIENT_ERRORS):
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return HTTPException(
        status_code=status_code,
        detail={
            "error": type(error).__name__,
            "message": message,
            "detail": str(error),
        },
    )
