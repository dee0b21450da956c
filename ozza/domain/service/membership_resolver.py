"""Conversion of accepted invitations into account memberships."""

import logfire

from ozza.domain.error import (
    AlreadyUsedError,
    EmailMismatchError,
    NotFoundError,
    RoleConflictError,
    invitation_error,
)
from ozza.domain.model.account import AccountMember
from ozza.domain.model.common import DomainModel
from ozza.domain.model.invitation import Invitation
from ozza.domain.repository import (
    InvitationRepository,
    MembershipRepository,
    UnitOfWork,
    UserRepository,
)
from ozza.domain.value import (
    AccountId,
    FailureReason,
    InvitationStatus,
    InvitationToken,
    MemberRole,
    UserId,
)
from ozza.util.clock import Clock
from ozza.util.redaction import redact

from .base import Service
from .invitation_validator import InvitationValidator


class AcceptanceResult(DomainModel):
    """Membership granted by an accepted invitation."""

    account_id: AccountId
    role: MemberRole
    created: bool


class MembershipResolver(Service):
    """Accepts invitations on behalf of users.

    Business rules:
    - The invitation email must be the accepting user's own email
    - The role bound to the invitation is the only role ever granted
    - An existing membership is never overwritten
    - The invitation claim and the membership insert commit together
    """

    def __init__(
        self,
        validator: InvitationValidator,
        invitation_repository: InvitationRepository,
        membership_repository: MembershipRepository,
        user_repository: UserRepository,
        unit_of_work: UnitOfWork,
        clock: Clock,
    ) -> None:
        """Initialize membership resolver.

        Args:
            validator: Invitation validator
            invitation_repository: Invitation repository
            membership_repository: Membership repository
            user_repository: User directory (acceptor email)
            unit_of_work: Transaction boundary for claim + insert
            clock: Clock source
        """
        self.validator = validator
        self.invitation_repository = invitation_repository
        self.membership_repository = membership_repository
        self.user_repository = user_repository
        self.unit_of_work = unit_of_work
        self.clock = clock

    async def accept(
        self, token: InvitationToken, user_id: UserId, claimed_email: str
    ) -> AcceptanceResult:
        """Accept an invitation for a user.

        Retrying with the same token, user and email after a successful
        acceptance returns the same result without touching the store.

        Args:
            token: Invitation token
            user_id: User accepting the invitation
            claimed_email: Email the user claims the invitation was sent to

        Returns:
            Account and role granted

        Raises:
            InvitationError: Tagged failure (not-found, email-mismatch,
                expired, already-used, role-conflict)
            NotFoundError: If the user does not exist
            StoreUnavailableError: If the store failed; safe to retry
        """
        with logfire.span(
            "membership_resolver.accept",
            token=redact(token),
            user_id=str(user_id),
        ):
            result = await self.validator.validate(token, claimed_email)

            if not result.valid:
                if result.reason == FailureReason.ALREADY_USED:
                    replay = await self._replayed_acceptance(result.invitation, user_id)
                    if replay is not None:
                        logfire.info(
                            "Invitation acceptance replayed",
                            invitation_id=str(result.invitation.id),
                            user_id=str(user_id),
                        )
                        return replay
                logfire.warn(
                    "Invitation acceptance rejected",
                    token=redact(token),
                    user_id=str(user_id),
                    reason=result.reason.value,
                )
                raise invitation_error(result.reason)

            invitation = result.invitation
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                raise NotFoundError("User", str(user_id))
            if not invitation.email.matches(user.email):
                logfire.warn(
                    "Invitation email does not match user",
                    invitation_id=str(invitation.id),
                    user_id=str(user_id),
                )
                raise EmailMismatchError()

            existing = await self.membership_repository.find(
                invitation.account_id, user_id
            )
            if existing is not None and existing.role != invitation.role:
                logfire.warn(
                    "Membership role conflict",
                    account_id=str(invitation.account_id),
                    user_id=str(user_id),
                    existing_role=existing.role.value,
                    invited_role=invitation.role.value,
                )
                raise RoleConflictError()

            now = self.clock.now()
            async with self.unit_of_work.transaction():
                claimed = await self.invitation_repository.mark_accepted(
                    invitation.id, user_id, now
                )
                if not claimed:
                    # Another acceptance committed between validation and claim
                    logfire.warn(
                        "Invitation claimed concurrently",
                        invitation_id=str(invitation.id),
                        user_id=str(user_id),
                    )
                    raise AlreadyUsedError()

                created = False
                if existing is None:
                    created = await self.membership_repository.add(
                        AccountMember(
                            account_id=invitation.account_id,
                            user_id=user_id,
                            role=invitation.role,
                            created_at=now,
                            updated_at=now,
                        )
                    )
                    if not created:
                        current = await self.membership_repository.find(
                            invitation.account_id, user_id
                        )
                        if current is None or current.role != invitation.role:
                            raise RoleConflictError()

            logfire.info(
                "Invitation accepted",
                invitation_id=str(invitation.id),
                account_id=str(invitation.account_id),
                user_id=str(user_id),
                role=invitation.role.value,
                membership_created=created,
            )
            return AcceptanceResult(
                account_id=invitation.account_id,
                role=invitation.role,
                created=created,
            )

    async def _replayed_acceptance(
        self, invitation: Invitation | None, user_id: UserId
    ) -> AcceptanceResult | None:
        if (
            invitation is None
            or invitation.status != InvitationStatus.ACCEPTED
            or invitation.accepted_by_user_id != user_id
        ):
            return None
        member = await self.membership_repository.find(invitation.account_id, user_id)
        if member is None or member.role != invitation.role:
            return None
        return AcceptanceResult(
            account_id=invitation.account_id, role=invitation.role, created=False
        )
