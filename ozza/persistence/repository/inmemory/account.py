"""In-memory account and membership repositories for testing."""

from typing import Optional

from ozza.domain.model.account import Account, AccountMember, MembershipView
from ozza.domain.repository.account import AccountRepository, MembershipRepository
from ozza.domain.value import AccountId, UserId

from .database import InMemoryDatabase


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        return self._db.accounts.get(account_id)

    async def save(self, account: Account) -> Account:
        """Save or update an account."""
        self._db.accounts[account.id] = account
        return account


class InMemoryMembershipRepository(MembershipRepository):
    """In-memory implementation of MembershipRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def find(
        self, account_id: AccountId, user_id: UserId
    ) -> Optional[AccountMember]:
        """Find the membership of a user in an account."""
        return self._db.members.get((account_id, user_id))

    async def add(self, member: AccountMember) -> bool:
        """Insert unless the pair already exists."""
        key = (member.account_id, member.user_id)
        if key in self._db.members:
            return False
        self._db.members[key] = member
        return True

    async def list_for_user(self, user_id: UserId) -> list[MembershipView]:
        """List a user's memberships with account names."""
        views = []
        for (account_id, member_user_id), member in self._db.members.items():
            if member_user_id != user_id:
                continue
            account = self._db.accounts.get(account_id)
            views.append(
                MembershipView(
                    account_id=account_id,
                    account_name=account.name if account else None,
                    role=member.role,
                )
            )
        return views

    async def list_for_account(self, account_id: AccountId) -> list[AccountMember]:
        """List members of an account, oldest first."""
        members = [m for m in self._db.members.values() if m.account_id == account_id]
        members.sort(key=lambda m: m.created_at)
        return members
