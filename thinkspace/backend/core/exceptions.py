"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Each exception carries a stable error code; exception_handlers.py maps
the exception type to an HTTP status.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class InvalidIdError(ApplicationError):
    """Raised when an identifier is not in the expected shape."""

    def __init__(self, message: str = "Invalid identifier") -> None:
        super().__init__(message, code="VAL_INVALID_ID")


class StoreError(ApplicationError):
    """Raised when the note store fails unexpectedly."""

    def __init__(self, message: str = "Store error", code: str = "SYS_STORE_ERROR") -> None:
        super().__init__(message, code=code)


class StoreRequestError(StoreError):
    """Raised when a store operation on a client-supplied record fails."""

    def __init__(self, message: str = "Store request failed") -> None:
        super().__init__(message, code="STORE_REQUEST_FAILED")
