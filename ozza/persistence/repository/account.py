"""PostgreSQL implementations of the account and membership repositories."""

from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from ozza.domain.model import Account, AccountMember, MembershipView
from ozza.domain.repository import AccountRepository, MembershipRepository
from ozza.domain.value import AccountId, UserId
from ozza.persistence.database import store_errors
from ozza.persistence.mappers import (
    account_to_dict,
    member_to_dict,
    row_to_account,
    row_to_member,
    row_to_membership_view,
)
from ozza.persistence.tables import account_members_table, accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        async with store_errors("accounts.find_by_id"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def save(self, account: Account) -> Account:
        """Save an account (create or update)."""
        account_dict = account_to_dict(account)
        async with store_errors("accounts.save"):
            existing = await self.find_by_id(account.id)
            if existing:
                stmt = (
                    update(accounts_table)
                    .where(accounts_table.c.id == account.id)
                    .values(**account_dict)
                )
            else:
                stmt = insert(accounts_table).values(**account_dict)
            await self.session.execute(stmt)
            await self.session.flush()
        return account


class PostgresMembershipRepository(MembershipRepository):
    """PostgreSQL implementation of MembershipRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find(
        self, account_id: AccountId, user_id: UserId
    ) -> Optional[AccountMember]:
        """Find the membership of a user in an account."""
        stmt = select(account_members_table).where(
            and_(
                account_members_table.c.account_id == account_id,
                account_members_table.c.user_id == user_id,
            )
        )
        async with store_errors("account_members.find"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_member(dict(row)) if row else None

    async def add(self, member: AccountMember) -> bool:
        """Insert a membership; the primary key turns duplicates into a no-op."""
        stmt = (
            pg_insert(account_members_table)
            .values(**member_to_dict(member))
            .on_conflict_do_nothing(index_elements=["account_id", "user_id"])
            .returning(account_members_table.c.user_id)
        )
        async with store_errors("account_members.add"):
            result = await self.session.execute(stmt)
        return result.first() is not None

    async def list_for_user(self, user_id: UserId) -> list[MembershipView]:
        """List a user's memberships with account names."""
        stmt = (
            select(
                account_members_table.c.account_id,
                account_members_table.c.role,
                accounts_table.c.name.label("account_name"),
            )
            .select_from(
                account_members_table.outerjoin(
                    accounts_table,
                    account_members_table.c.account_id == accounts_table.c.id,
                )
            )
            .where(account_members_table.c.user_id == user_id)
            .order_by(account_members_table.c.created_at)
        )
        async with store_errors("account_members.list_for_user"):
            result = await self.session.execute(stmt)
        return [row_to_membership_view(dict(row)) for row in result.mappings().all()]

    async def list_for_account(self, account_id: AccountId) -> list[AccountMember]:
        """List members of an account, oldest first."""
        stmt = (
            select(account_members_table)
            .where(account_members_table.c.account_id == account_id)
            .order_by(account_members_table.c.created_at)
        )
        async with store_errors("account_members.list_for_account"):
            result = await self.session.execute(stmt)
        return [row_to_member(dict(row)) for row in result.mappings().all()]
