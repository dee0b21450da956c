"""Authorization gate for account-scoped and platform operations."""

import logfire

from ozza.domain.error import UnauthorizedError
from ozza.domain.model.common import DomainModel
from ozza.domain.repository import (
    AccountRepository,
    MembershipRepository,
    UserRepository,
)
from ozza.domain.value import AccessRole, AccountId, MemberRole, UserId, UserRole

from .base import Service


class AuthorizationDecision(DomainModel):
    """Result of an authorization check.

    ``admin_override`` is set when the pass came from the global admin
    role rather than from a membership in the requested account.
    """

    allowed: bool
    admin_override: bool = False
    effective_role: AccessRole | None = None


class RoleGate(Service):
    """Compares a caller's resolved role against a required threshold.

    Roles are ordered ``admin > owner > agency > client``. A global admin
    passes every check. Everyone else is judged only by their role in the
    requested account: there is no cross-account authority.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        account_repository: AccountRepository,
        membership_repository: MembershipRepository,
    ) -> None:
        """Initialize role gate.

        Args:
            user_repository: User directory
            account_repository: Account repository (owner lookup)
            membership_repository: Membership repository
        """
        self.user_repository = user_repository
        self.account_repository = account_repository
        self.membership_repository = membership_repository

    async def evaluate(
        self,
        user_id: UserId,
        account_id: AccountId | None,
        required_role: AccessRole,
    ) -> AuthorizationDecision:
        """Resolve the caller's role and compare it to ``required_role``.

        Args:
            user_id: Caller
            account_id: Account the operation targets, None for platform-level
                operations (only admins pass those)
            required_role: Minimum role needed

        Returns:
            Authorization decision
        """
        with logfire.span(
            "role_gate.evaluate",
            user_id=str(user_id),
            account_id=str(account_id) if account_id else None,
            required_role=required_role.value,
        ):
            user = await self.user_repository.find_by_id(user_id)

            if user is not None and user.role == UserRole.ADMIN:
                # Platform-level override, logged apart from ordinary passes
                logfire.warn(
                    "Platform admin override",
                    user_id=str(user_id),
                    account_id=str(account_id) if account_id else None,
                    required_role=required_role.value,
                    override=True,
                )
                return AuthorizationDecision(
                    allowed=True,
                    admin_override=True,
                    effective_role=AccessRole.ADMIN,
                )

            effective_role = None
            if user is not None and account_id is not None:
                effective_role = await self.effective_role(user_id, account_id)

            allowed = effective_role is not None and effective_role.covers(
                required_role
            )
            if allowed:
                logfire.info(
                    "Authorization granted",
                    user_id=str(user_id),
                    account_id=str(account_id),
                    required_role=required_role.value,
                    effective_role=effective_role.value,
                )
            else:
                logfire.info(
                    "Authorization denied",
                    user_id=str(user_id),
                    account_id=str(account_id) if account_id else None,
                    required_role=required_role.value,
                )
            return AuthorizationDecision(allowed=allowed, effective_role=effective_role)

    async def authorize(
        self,
        user_id: UserId,
        account_id: AccountId | None,
        required_role: AccessRole,
    ) -> bool:
        """Whether the caller may act at ``required_role`` on the account."""
        decision = await self.evaluate(user_id, account_id, required_role)
        return decision.allowed

    async def require(
        self,
        user_id: UserId,
        account_id: AccountId | None,
        required_role: AccessRole,
    ) -> AuthorizationDecision:
        """Like ``evaluate`` but raises on denial.

        Raises:
            UnauthorizedError: If the caller lacks the required role
        """
        decision = await self.evaluate(user_id, account_id, required_role)
        if not decision.allowed:
            raise UnauthorizedError()
        return decision

    async def effective_role(
        self, user_id: UserId, account_id: AccountId
    ) -> AccessRole | None:
        """Role the user holds in one account, ignoring the admin override.

        The account owner counts as ``owner`` even without a member row.
        """
        member = await self.membership_repository.find(account_id, user_id)
        if member is not None and member.role == MemberRole.OWNER:
            return AccessRole.OWNER

        account = await self.account_repository.find_by_id(account_id)
        if account is not None and account.owner_id == user_id:
            return AccessRole.OWNER

        if member is not None:
            return AccessRole.from_member_role(member.role)
        return None
