"""PostgreSQL-backed ephemeral invite token store.

Used whenever more than one server process shares the deployment: a
process-local map cannot guarantee single use across instances.
"""

from datetime import timedelta
from typing import Optional

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from ozza.domain.model import InviteToken
from ozza.domain.repository import InviteTokenStore
from ozza.domain.value import Email, InvitationToken, UserRole
from ozza.persistence.database import store_errors
from ozza.persistence.mappers import invite_token_to_dict, row_to_invite_token
from ozza.persistence.tables import invite_tokens_table
from ozza.util.clock import Clock


class PostgresInviteTokenStore(InviteTokenStore):
    """InviteTokenStore over the ``invite_tokens`` table."""

    def __init__(self, session: AsyncSession, clock: Clock, ttl: timedelta) -> None:
        super().__init__(clock, ttl)
        self.session = session

    async def issue(self, email: Email, role: UserRole) -> InviteToken:
        """Insert a fresh token row."""
        now = self.clock.now()
        record = InviteToken(
            token=InvitationToken.generate(),
            email=email,
            role=role,
            expires_at=now + self.ttl,
            created_at=now,
        )
        stmt = insert(invite_tokens_table).values(**invite_token_to_dict(record))
        async with store_errors("invite_tokens.issue"):
            await self.session.execute(stmt)
        return record

    async def lookup(self, token: InvitationToken) -> Optional[InviteToken]:
        """Drop the row if expired, otherwise return it."""
        now = self.clock.now()
        expire_stmt = delete(invite_tokens_table).where(
            and_(
                invite_tokens_table.c.token == token.root,
                invite_tokens_table.c.expires_at <= now,
            )
        )
        select_stmt = select(invite_tokens_table).where(
            and_(
                invite_tokens_table.c.token == token.root,
                invite_tokens_table.c.expires_at > now,
            )
        )
        async with store_errors("invite_tokens.lookup"):
            await self.session.execute(expire_stmt)
            result = await self.session.execute(select_stmt)
        row = result.mappings().first()
        return row_to_invite_token(dict(row)) if row else None

    async def consume(self, token: InvitationToken) -> bool:
        """Delete the row; only the deleting transaction sees it returned."""
        stmt = (
            delete(invite_tokens_table)
            .where(invite_tokens_table.c.token == token.root)
            .returning(invite_tokens_table.c.expires_at)
        )
        async with store_errors("invite_tokens.consume"):
            result = await self.session.execute(stmt)
        row = result.first()
        return row is not None and row.expires_at > self.clock.now()

    async def sweep_expired(self) -> int:
        """Delete every expired row."""
        stmt = (
            delete(invite_tokens_table)
            .where(invite_tokens_table.c.expires_at <= self.clock.now())
            .returning(invite_tokens_table.c.token)
        )
        async with store_errors("invite_tokens.sweep_expired"):
            result = await self.session.execute(stmt)
        return len(result.all())
