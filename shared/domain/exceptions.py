"""
Domain Exceptions

Error taxonomy shared by the booking and swap engines. The request layer
maps each class to a transport-level response; the engines never retry.
"""


class DomainError(Exception):
    """Base class for rule violations raised by the domain layer."""

    def __init__(self, message: str = ''):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ValidationError(DomainError):
    """Malformed or out-of-range input."""


class NotFoundError(DomainError):
    """Referenced item, user, booking or swap does not exist."""


class ForbiddenError(DomainError):
    """Actor lacks permission for the requested action in the record's current state."""


class ConflictError(DomainError):
    """Requested dates overlap a blocking booking, or the record changed underneath us."""
