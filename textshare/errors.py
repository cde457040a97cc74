# textshare/errors.py
# Application error taxonomy shared by the core and the HTTP layer


class AppError(Exception):
    """Base application error with structured response."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: dict = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}


class ValidationError(AppError):
    """Request validation failed."""
    def __init__(self, message: str = "Validation failed", details: dict = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
            details=details
        )


class EncodeFailure(AppError):
    """Text cannot be represented as a link token."""
    def __init__(self, message: str = "Text cannot be encoded", details: dict = None):
        super().__init__(
            message=message,
            error_code="ENCODE_FAILURE",
            status_code=422,
            details=details
        )


class DecodeFailure(AppError):
    """Token is not something the codec produced."""
    def __init__(self, message: str = "Invalid or corrupted link", details: dict = None):
        super().__init__(
            message=message,
            error_code="DECODE_FAILURE",
            status_code=400,
            details=details
        )


class PersistenceFailure(AppError):
    """Local storage unavailable or corrupted."""
    def __init__(self, message: str = "Local storage operation failed", details: dict = None):
        super().__init__(
            message=message,
            error_code="PERSISTENCE_FAILURE",
            status_code=503,
            details=details
        )
