"""Domain layer errors.

Invitation and authorization failures form a closed set: every error carries
a ``FailureReason`` tag so callers switch on ``error.reason`` rather than
inspecting message text.
"""

from ozza.domain.value import FailureReason


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvitationError(DomainError):
    """Terminal invitation failure.

    Never retried: a stale or reused token must not become valid on retry.
    """

    reason: FailureReason

    def __init__(self, message: str | None = None):
        super().__init__(message or self.reason.value)


class InvitationNotFoundError(InvitationError):
    reason = FailureReason.NOT_FOUND


class InvitationExpiredError(InvitationError):
    reason = FailureReason.EXPIRED


class EmailMismatchError(InvitationError):
    reason = FailureReason.EMAIL_MISMATCH


class AlreadyUsedError(InvitationError):
    reason = FailureReason.ALREADY_USED


class RoleConflictError(InvitationError):
    """An existing membership holds a different role."""

    reason = FailureReason.ROLE_CONFLICT


class UnauthorizedError(DomainError):
    """Caller lacks authority.

    The message never says which check failed.
    """

    reason = FailureReason.UNAUTHORIZED

    def __init__(self) -> None:
        super().__init__("Unauthorized")


class StoreUnavailableError(DomainError):
    """Durable store I/O failure. The only retryable failure."""

    reason = FailureReason.STORE_UNAVAILABLE

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Store unavailable during {operation}")


INVITATION_ERRORS: dict[FailureReason, type[InvitationError]] = {
    FailureReason.NOT_FOUND: InvitationNotFoundError,
    FailureReason.EXPIRED: InvitationExpiredError,
    FailureReason.EMAIL_MISMATCH: EmailMismatchError,
    FailureReason.ALREADY_USED: AlreadyUsedError,
    FailureReason.ROLE_CONFLICT: RoleConflictError,
}


def invitation_error(reason: FailureReason) -> InvitationError:
    """Build the error variant for an invitation failure tag."""
    return INVITATION_ERRORS[reason]()
