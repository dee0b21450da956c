"""Account and membership repository interfaces."""

from abc import ABC, abstractmethod

from ozza.domain.model.account import Account, AccountMember, MembershipView
from ozza.domain.value import AccountId, UserId


class AccountRepository(ABC):
    """Repository for Account entity."""

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Account | None:
        """Find an account by ID."""
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Save an account (create or update)."""
        pass


class MembershipRepository(ABC):
    """Repository for AccountMember rows.

    ``(account_id, user_id)`` is unique at the store level.
    """

    @abstractmethod
    async def find(self, account_id: AccountId, user_id: UserId) -> AccountMember | None:
        """Find the membership of a user in an account."""
        pass

    @abstractmethod
    async def add(self, member: AccountMember) -> bool:
        """Insert a membership unless one already exists for the pair.

        Never overwrites an existing row.

        Returns:
            True if a row was inserted, False if the pair already existed
        """
        pass

    @abstractmethod
    async def list_for_user(self, user_id: UserId) -> list[MembershipView]:
        """List a user's memberships with account names."""
        pass

    @abstractmethod
    async def list_for_account(self, account_id: AccountId) -> list[AccountMember]:
        """List members of an account, oldest first."""
        pass
