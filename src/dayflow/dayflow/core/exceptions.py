class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class PersistenceWarning(DomainError):
    """Raised by repositories when the backing store cannot be read or written.

    Services catch and log it; the in-memory state stays authoritative.
    """
