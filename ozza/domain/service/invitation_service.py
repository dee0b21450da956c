"""Invitation issuance and lifecycle service."""

from datetime import timedelta
from uuid import uuid4

import logfire

from ozza.domain.error import BusinessRuleViolationError, UnauthorizedError
from ozza.domain.model.invitation import Invitation
from ozza.domain.repository import InvitationRepository
from ozza.domain.value import (
    AccessRole,
    AccountId,
    Email,
    InvitationId,
    InvitationKind,
    InvitationStatus,
    InvitationToken,
    MemberRole,
    UserId,
)
from ozza.util.clock import Clock
from ozza.util.redaction import redact

from .base import Service
from .role_gate import RoleGate

# Minimum role an issuer needs in the account to hand out each invited role
ISSUER_THRESHOLD: dict[MemberRole, AccessRole] = {
    MemberRole.AGENCY: AccessRole.OWNER,
    MemberRole.CLIENT: AccessRole.AGENCY,
}


class InvitationService(Service):
    """Domain service for durable agency and client invitations."""

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        role_gate: RoleGate,
        clock: Clock,
        ttl: timedelta,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            role_gate: Authorization gate for issuers
            clock: Clock source
            ttl: Lifetime of a new invitation
        """
        self.invitation_repository = invitation_repository
        self.role_gate = role_gate
        self.clock = clock
        self.ttl = ttl

    async def issue(
        self,
        issuer_id: UserId,
        account_id: AccountId,
        email: Email,
        role: MemberRole,
        invitee_name: str | None = None,
    ) -> Invitation:
        """Issue an invitation on behalf of a user.

        Account owners (coaches) may invite agencies and clients; agency
        members may invite clients only. Ownership is never granted by
        invitation.

        Raises:
            UnauthorizedError: If the issuer lacks authority for the role
            BusinessRuleViolationError: If a pending invitation already exists
        """
        with logfire.span(
            "invitation_service.issue",
            issuer_id=str(issuer_id),
            account_id=str(account_id),
            role=role.value,
        ):
            threshold = ISSUER_THRESHOLD.get(role)
            if threshold is None:
                logfire.warn(
                    "Ungrantable invitation role requested",
                    issuer_id=str(issuer_id),
                    role=role.value,
                )
                raise UnauthorizedError()

            await self.role_gate.require(issuer_id, account_id, threshold)
            return await self.create(
                email,
                role,
                account_id,
                self.ttl,
                invited_by=issuer_id,
                invitee_name=invitee_name,
            )

    async def create(
        self,
        email: Email,
        role: MemberRole,
        account_id: AccountId,
        ttl: timedelta,
        invited_by: UserId | None = None,
        invitee_name: str | None = None,
    ) -> Invitation:
        """Persist a pending invitation without authority checks.

        Args:
            email: Target email
            role: Role bound to the invitation
            account_id: Account the invitee joins
            ttl: Time until expiry
            invited_by: Issuing user, if any
            invitee_name: Display name hint for the invitee

        Returns:
            Created invitation

        Raises:
            BusinessRuleViolationError: If a pending invitation already exists
                for this email in this account
        """
        now = self.clock.now()
        if await self.invitation_repository.exists_pending(email, account_id, now):
            logfire.warn(
                "Invitation already pending",
                account_id=str(account_id),
                email=redact(email),
            )
            raise BusinessRuleViolationError(
                f"Invitation already pending for {redact(email)}"
            )

        invitation = Invitation(
            id=InvitationId(uuid4()),
            kind=InvitationKind.for_role(role),
            token=InvitationToken.generate(),
            email=email,
            role=role,
            account_id=account_id,
            invited_by=invited_by,
            invitee_name=invitee_name,
            status=InvitationStatus.PENDING,
            expires_at=now + ttl,
            created_at=now,
            updated_at=now,
        )
        saved = await self.invitation_repository.create(invitation)
        logfire.info(
            "Invitation created",
            invitation_id=str(saved.id),
            account_id=str(account_id),
            role=role.value,
            email=redact(email),
            expires_at=saved.expires_at.isoformat(),
        )
        return saved

    async def get_by_token(self, token: InvitationToken) -> Invitation | None:
        """Get invitation by token."""
        with logfire.span("invitation_service.get_by_token", token=redact(token)):
            invitation = await self.invitation_repository.find_by_token(token)
            if invitation is None:
                logfire.warn("Invitation not found", token=redact(token))
            return invitation

    async def mark_used(self, token: InvitationToken) -> bool:
        """Mark an invitation used outside the accept flow.

        Idempotent: unknown or already-terminal tokens are a no-op.

        Returns:
            Whether this call changed the status
        """
        with logfire.span("invitation_service.mark_used", token=redact(token)):
            changed = await self.invitation_repository.mark_used(
                token, self.clock.now()
            )
            logfire.info(
                "Invitation mark-used processed",
                token=redact(token),
                changed=changed,
            )
            return changed

    async def list_for_account(
        self,
        account_id: AccountId,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """List invitations of an account, newest first."""
        with logfire.span(
            "invitation_service.list_for_account",
            account_id=str(account_id),
            status=status.value if status else None,
            limit=limit,
            offset=offset,
        ):
            invitations = await self.invitation_repository.find_by_account(
                account_id, status, limit, offset
            )
            logfire.info(
                "Invitations listed",
                account_id=str(account_id),
                count=len(invitations),
            )
            return invitations

    async def expire_stale(self) -> int:
        """Mark pending invitations past expiry as expired."""
        with logfire.span("invitation_service.expire_stale"):
            count = await self.invitation_repository.expire_stale(self.clock.now())
            logfire.info("Stale invitations expired", count=count)
            return count
