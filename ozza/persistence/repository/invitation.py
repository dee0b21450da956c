"""PostgreSQL implementation of the invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ozza.domain.error import BusinessRuleViolationError
from ozza.domain.model import Invitation
from ozza.domain.repository import InvitationRepository
from ozza.domain.value import (
    AccountId,
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    UserId,
)
from ozza.persistence.database import store_errors
from ozza.persistence.mappers import invitation_to_dict, row_to_invitation
from ozza.persistence.tables import invitations_table

PENDING = InvitationStatus.PENDING.value


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository.

    Status transitions are conditional updates on ``status = 'pending'``; the
    row lock taken by the update serializes concurrent transitions across
    processes.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Runs in a savepoint so a token collision leaves the request
        transaction usable.
        """
        stmt = insert(invitations_table).values(**invitation_to_dict(invitation))
        async with store_errors("invitations.create"):
            try:
                async with self.session.begin_nested():
                    await self.session.execute(stmt)
            except IntegrityError as e:
                raise BusinessRuleViolationError("Invitation token collision") from e
        return invitation

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        async with store_errors("invitations.find_by_id"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token."""
        stmt = select(invitations_table).where(invitations_table.c.token == token.root)
        async with store_errors("invitations.find_by_token"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def exists_pending(
        self, email: Email, account_id: AccountId, now: datetime
    ) -> bool:
        """Check for an unexpired pending invitation for email in account."""
        stmt = select(invitations_table.c.id).where(
            and_(
                func.lower(invitations_table.c.email) == email.normalized,
                invitations_table.c.status == PENDING,
                invitations_table.c.account_id == account_id,
                invitations_table.c.expires_at > now,
            )
        )
        async with store_errors("invitations.exists_pending"):
            result = await self.session.execute(stmt)
        return result.first() is not None

    async def mark_accepted(
        self, invitation_id: InvitationId, user_id: UserId, at: datetime
    ) -> bool:
        """Conditionally transition pending -> accepted."""
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.id == invitation_id,
                    invitations_table.c.status == PENDING,
                )
            )
            .values(
                status=InvitationStatus.ACCEPTED.value,
                accepted_at=at,
                accepted_by_user_id=user_id,
                updated_at=at,
            )
            .returning(invitations_table.c.id)
        )
        async with store_errors("invitations.mark_accepted"):
            result = await self.session.execute(stmt)
        return result.first() is not None

    async def mark_used(self, token: InvitationToken, at: datetime) -> bool:
        """Conditionally transition pending -> used."""
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.token == token.root,
                    invitations_table.c.status == PENDING,
                )
            )
            .values(status=InvitationStatus.USED.value, updated_at=at)
            .returning(invitations_table.c.id)
        )
        async with store_errors("invitations.mark_used"):
            result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_by_account(
        self,
        account_id: AccountId,
        status: Optional[InvitationStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """Find invitations of an account with pagination."""
        stmt = (
            select(invitations_table)
            .where(invitations_table.c.account_id == account_id)
            .order_by(invitations_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )

        if status:
            stmt = stmt.where(invitations_table.c.status == status.value)

        async with store_errors("invitations.find_by_account"):
            result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def expire_stale(self, now: datetime) -> int:
        """Mark pending rows past expiry as expired."""
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.status == PENDING,
                    invitations_table.c.expires_at <= now,
                )
            )
            .values(status=InvitationStatus.EXPIRED.value, updated_at=now)
            .returning(invitations_table.c.id)
        )
        async with store_errors("invitations.expire_stale"):
            result = await self.session.execute(stmt)
        return len(result.all())
