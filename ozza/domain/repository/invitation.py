"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from ozza.domain.model.invitation import Invitation
from ozza.domain.value import (
    AccountId,
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    UserId,
)


class InvitationRepository(ABC):
    """Durable store for agency and client invitations.

    Defines the contract for invitation persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Persist a new pending invitation.

        Raises:
            BusinessRuleViolationError: If the token is already taken
        """
        pass

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID."""
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find an invitation by token.

        Used when an invitee opens the invite link.
        """
        pass

    @abstractmethod
    async def exists_pending(
        self, email: Email, account_id: AccountId, now: datetime
    ) -> bool:
        """Check for an unexpired pending invitation for email in account.

        Used during issuance to prevent duplicates.
        """
        pass

    @abstractmethod
    async def mark_accepted(
        self, invitation_id: InvitationId, user_id: UserId, at: datetime
    ) -> bool:
        """Transition a pending invitation to ``accepted``.

        Conditional on the row still being pending: this is the guard that
        serializes concurrent acceptances of the same token.

        Returns:
            True if this call performed the transition, False if the row was
            already terminal (no-op)
        """
        pass

    @abstractmethod
    async def mark_used(self, token: InvitationToken, at: datetime) -> bool:
        """Transition a pending invitation to ``used``.

        Returns:
            True if this call performed the transition, False otherwise
        """
        pass

    @abstractmethod
    async def find_by_account(
        self,
        account_id: AccountId,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """Find invitations of an account, newest first."""
        pass

    @abstractmethod
    async def expire_stale(self, now: datetime) -> int:
        """Mark pending invitations past their expiry as ``expired``.

        Returns:
            Number of rows transitioned
        """
        pass
