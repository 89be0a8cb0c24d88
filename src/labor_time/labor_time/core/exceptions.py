class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDateRangeError(ValidationError):
    """Raised when a caller asks for a range whose start is after its end."""


class NotFoundError(DomainError):
    """Raised when a referenced employee (or other entity) does not exist."""
