class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when submitted data is missing, malformed or contradictory."""


class NotFoundError(DomainError):
    """Raised when a request id does not exist."""


class ForbiddenTransitionError(DomainError):
    """Raised when the actor may not act on the request in its current state."""

    ALREADY_PROCESSED = "already_processed"
    AWAITING_MENTOR = "awaiting_mentor"
    ROLE_NOT_PERMITTED = "role_not_permitted"

    def __init__(self, message: str, *, reason: str = ROLE_NOT_PERMITTED):
        super().__init__(message)
        self.reason = reason


class AuthorizationError(DomainError):
    """Raised when a role may not use a view."""


class InternalFault(DomainError):
    """Raised for storage failures and other unexpected faults."""
