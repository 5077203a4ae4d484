"""Custom exception hierarchy."""

class AppError(Exception):
    """Base exception for application errors."""
    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error


class DatabaseError(AppError):
    """Raised when a database operation fails."""
    pass


class ValidationError(AppError):
    """Raised when service input is malformed."""
    pass


class DocumentNotFoundError(AppError):
    """Raised when an SDS document is not found."""
    pass


class PipelineError(AppError):
    """Base exception for extraction pipeline errors."""
    pass


class InvalidDocumentError(PipelineError):
    """Raised when a document has no usable source to extract from."""
    pass


class DocumentFetchError(PipelineError):
    """Raised when the PDF cannot be downloaded or is empty."""
    pass


class TextExtractionError(PipelineError):
    """Raised when the document bytes are empty."""
    pass
