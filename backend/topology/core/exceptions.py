"""
Application exceptions for region operations.
Each carries a status code and structured details so an outer layer can serialize it.
"""

from typing import Any


class AppException(Exception):
    """Base application exception."""
    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class InvalidArgumentError(AppException, ValueError):
    """Input rejected by validation before any mutation happened."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status_code=400, details=details)


class NotFoundError(AppException):
    """Requested record does not exist or is not owned by the caller."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status_code=404, details=details)


class DataIntegrityError(AppException):
    """Stored data violates a uniqueness assumption."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status_code=409, details=details)


class OperationalFailure(AppException):
    """A transactional operation failed and was rolled back."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status_code=500, details=details)
