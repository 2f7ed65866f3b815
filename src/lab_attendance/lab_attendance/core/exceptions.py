class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an operation references an id that does not exist."""


class TransportFailure(DomainError):
    """Raised by the remote store client on a failed or non-success call."""


class ImportRowError(DomainError):
    """Raised for a single spreadsheet row that cannot be imported."""
