"""Custom exception hierarchy for loan-chronology."""


class ChronologyError(Exception):
    """Base exception for all loan-chronology errors."""


class EntityNotFoundError(ChronologyError):
    """Raised when a referenced loan or task does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a payment references a loan that is not registered."""


class InvalidEntityStateError(ChronologyError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(ChronologyError):
    """Raised when configuration is invalid or missing."""


class SinkError(ChronologyError):
    """Raised when a sink operation fails."""
