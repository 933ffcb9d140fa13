"""Errors raised by service log operations."""


class ServiceLogError(Exception):
    """Base class for all service log errors."""


class ValidationFailedError(ServiceLogError):
    """Raised when input is malformed, out of range, or missing cross-field data."""

    def __init__(self, reason: str, field: str = None):
        super().__init__(reason)
        self.reason = reason
        self.field = field


class NotFoundError(ServiceLogError):
    """Raised when a row does not exist or does not belong to the caller."""


class SaveFailedError(ServiceLogError):
    """Raised when a transactional write fails and was rolled back."""

    def __init__(self, message: str = "Failed to save service record"):
        super().__init__(message)
