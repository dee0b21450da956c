"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from ozza.domain.error import BusinessRuleViolationError
from ozza.domain.model.invitation import Invitation
from ozza.domain.repository.invitation import InvitationRepository
from ozza.domain.value import (
    AccountId,
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    UserId,
)

from .database import InMemoryDatabase


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def create(self, invitation: Invitation) -> Invitation:
        """Store a new invitation.

        Raises:
            BusinessRuleViolationError: If the token is already taken
        """
        if await self.find_by_token(invitation.token) is not None:
            raise BusinessRuleViolationError("Invitation token collision")
        self._db.invitations[invitation.id] = invitation
        return invitation

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        return self._db.invitations.get(invitation_id)

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token."""
        for invitation in self._db.invitations.values():
            if invitation.token == token:
                return invitation
        return None

    async def exists_pending(
        self, email: Email, account_id: AccountId, now: datetime
    ) -> bool:
        """Check for an unexpired pending invitation for email in account."""
        for invitation in self._db.invitations.values():
            if (
                invitation.account_id == account_id
                and invitation.status == InvitationStatus.PENDING
                and invitation.email.matches(email)
                and not invitation.is_expired(now)
            ):
                return True
        return False

    async def mark_accepted(
        self, invitation_id: InvitationId, user_id: UserId, at: datetime
    ) -> bool:
        """Conditionally transition pending -> accepted."""
        invitation = self._db.invitations.get(invitation_id)
        if invitation is None or invitation.status != InvitationStatus.PENDING:
            return False
        self._db.invitations[invitation_id] = invitation.model_copy(
            update={
                "status": InvitationStatus.ACCEPTED,
                "accepted_at": at,
                "accepted_by_user_id": user_id,
                "updated_at": at,
            }
        )
        return True

    async def mark_used(self, token: InvitationToken, at: datetime) -> bool:
        """Conditionally transition pending -> used."""
        invitation = await self.find_by_token(token)
        if invitation is None or invitation.status != InvitationStatus.PENDING:
            return False
        self._db.invitations[invitation.id] = invitation.model_copy(
            update={"status": InvitationStatus.USED, "updated_at": at}
        )
        return True

    async def find_by_account(
        self,
        account_id: AccountId,
        status: Optional[InvitationStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """Find invitations of an account with pagination."""
        matches = [
            invitation
            for invitation in self._db.invitations.values()
            if invitation.account_id == account_id
            and (status is None or invitation.status == status)
        ]

        # Sort by created_at descending
        matches.sort(key=lambda inv: inv.created_at, reverse=True)

        return matches[offset : offset + limit]

    async def expire_stale(self, now: datetime) -> int:
        """Mark pending rows past expiry as expired."""
        count = 0
        for invitation_id, invitation in list(self._db.invitations.items()):
            if invitation.status == InvitationStatus.PENDING and invitation.is_expired(
                now
            ):
                self._db.invitations[invitation_id] = invitation.model_copy(
                    update={"status": InvitationStatus.EXPIRED, "updated_at": now}
                )
                count += 1
        return count
