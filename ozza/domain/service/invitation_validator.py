"""Invitation validation.

A pure decision function: it reads the invitation and the clock and never
writes. UI pre-checks can call it freely without consuming anything.
"""

import logfire

from ozza.domain.model.common import DomainModel
from ozza.domain.model.invitation import Invitation
from ozza.domain.repository import InvitationRepository
from ozza.domain.value import (
    AccountId,
    FailureReason,
    InvitationStatus,
    InvitationToken,
    MemberRole,
)
from ozza.util.clock import Clock
from ozza.util.redaction import redact

from .base import Service


class ValidationResult(DomainModel):
    """Outcome of validating a token against a claimed email.

    ``invitation`` is set whenever the token exists, even on failure, so
    callers can recognise replays of their own acceptance.
    """

    valid: bool
    reason: FailureReason | None = None
    role: MemberRole | None = None
    account_id: AccountId | None = None
    invitation: Invitation | None = None

    @classmethod
    def success(cls, invitation: Invitation) -> "ValidationResult":
        return cls(
            valid=True,
            role=invitation.role,
            account_id=invitation.account_id,
            invitation=invitation,
        )

    @classmethod
    def failure(
        cls, reason: FailureReason, invitation: Invitation | None = None
    ) -> "ValidationResult":
        return cls(valid=False, reason=reason, invitation=invitation)


class InvitationValidator(Service):
    """Decides whether an invitation token is usable."""

    def __init__(self, invitation_repository: InvitationRepository, clock: Clock) -> None:
        """Initialize invitation validator.

        Args:
            invitation_repository: Invitation repository
            clock: Clock source for expiry checks
        """
        self.invitation_repository = invitation_repository
        self.clock = clock

    async def validate(
        self, token: InvitationToken, claimed_email: str
    ) -> ValidationResult:
        """Validate a token for a claimed email.

        Checks run in a fixed order: existence, email match (case-insensitive),
        expiry, then status.

        Args:
            token: Invitation token presented by the invitee
            claimed_email: Email the invitee claims

        Returns:
            Validation result with bound role and account on success
        """
        with logfire.span(
            "invitation_validator.validate",
            token=redact(token),
            email=redact(claimed_email),
        ):
            invitation = await self.invitation_repository.find_by_token(token)
            result = self._decide(invitation, claimed_email)
            if result.valid:
                logfire.info(
                    "Invitation valid",
                    invitation_id=str(invitation.id),
                    role=result.role.value,
                )
            else:
                logfire.info(
                    "Invitation rejected",
                    token=redact(token),
                    reason=result.reason.value,
                )
            return result

    def _decide(
        self, invitation: Invitation | None, claimed_email: str
    ) -> ValidationResult:
        if invitation is None:
            return ValidationResult.failure(FailureReason.NOT_FOUND)
        if not invitation.email.matches(claimed_email):
            return ValidationResult.failure(FailureReason.EMAIL_MISMATCH, invitation)
        if invitation.is_expired(self.clock.now()):
            return ValidationResult.failure(FailureReason.EXPIRED, invitation)
        if invitation.status != InvitationStatus.PENDING:
            return ValidationResult.failure(FailureReason.ALREADY_USED, invitation)
        return ValidationResult.success(invitation)
