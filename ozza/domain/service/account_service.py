"""Account domain service."""

from uuid import uuid4

import logfire

from ozza.domain.error import NotFoundError, UnauthorizedError
from ozza.domain.model.account import Account, AccountMember, MembershipView
from ozza.domain.repository import (
    AccountRepository,
    MembershipRepository,
    UnitOfWork,
    UserRepository,
)
from ozza.domain.value import AccountId, MemberRole, UserId, UserRole
from ozza.util.clock import Clock

from .base import Service

ACCOUNT_CREATORS = {UserRole.COACH, UserRole.ADMIN}


class AccountService(Service):
    """Domain service for accounts and their member lists."""

    def __init__(
        self,
        account_repository: AccountRepository,
        membership_repository: MembershipRepository,
        user_repository: UserRepository,
        unit_of_work: UnitOfWork,
        clock: Clock,
    ) -> None:
        self.account_repository = account_repository
        self.membership_repository = membership_repository
        self.user_repository = user_repository
        self.unit_of_work = unit_of_work
        self.clock = clock

    async def create_account(self, owner_id: UserId, name: str) -> Account:
        """Create an account owned by a coach.

        The owner is also recorded as an ``owner`` member.

        Raises:
            NotFoundError: If the owner does not exist
            UnauthorizedError: If the owner is not a coach
        """
        with logfire.span(
            "account_service.create_account", owner_id=str(owner_id), name=name
        ):
            owner = await self.user_repository.find_by_id(owner_id)
            if owner is None:
                raise NotFoundError("User", str(owner_id))
            if owner.role not in ACCOUNT_CREATORS:
                logfire.warn(
                    "Account creation denied",
                    owner_id=str(owner_id),
                    role=owner.role.value if owner.role else None,
                )
                raise UnauthorizedError()

            now = self.clock.now()
            account = Account(
                id=AccountId(uuid4()),
                name=name,
                owner_id=owner_id,
                created_at=now,
                updated_at=now,
            )
            async with self.unit_of_work.transaction():
                saved = await self.account_repository.save(account)
                await self.membership_repository.add(
                    AccountMember(
                        account_id=saved.id,
                        user_id=owner_id,
                        role=MemberRole.OWNER,
                        created_at=now,
                        updated_at=now,
                    )
                )

            logfire.info(
                "Account created", account_id=str(saved.id), owner_id=str(owner_id)
            )
            return saved

    async def get_account(self, account_id: AccountId) -> Account:
        """Get account by ID.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = await self.account_repository.find_by_id(account_id)
        if account is None:
            raise NotFoundError("Account", str(account_id))
        return account

    async def list_memberships(self, user_id: UserId) -> list[MembershipView]:
        """List a user's memberships across accounts."""
        with logfire.span("account_service.list_memberships", user_id=str(user_id)):
            memberships = await self.membership_repository.list_for_user(user_id)
            logfire.info(
                "Memberships listed", user_id=str(user_id), count=len(memberships)
            )
            return memberships

    async def list_members(self, account_id: AccountId) -> list[AccountMember]:
        """List members of an account."""
        with logfire.span("account_service.list_members", account_id=str(account_id)):
            return await self.membership_repository.list_for_account(account_id)
