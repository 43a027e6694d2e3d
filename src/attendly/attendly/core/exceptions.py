class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class BackupFormatError(ValidationError):
    """Raised when a backup file does not have the expected shape or version."""


class ExtractionError(DomainError):
    """Raised when an AI collaborator returns unusable output."""
