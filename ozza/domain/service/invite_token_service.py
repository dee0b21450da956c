"""Ephemeral invite token service.

Lightweight signup invitations (for example a platform admin inviting a new
coach) that assign a global role instead of an account membership. They
share the durable invitations' lifetime and failure reasons.
"""

import logfire

from ozza.domain.error import (
    AlreadyUsedError,
    BusinessRuleViolationError,
    EmailMismatchError,
    InvitationNotFoundError,
    NotFoundError,
    RoleConflictError,
)
from ozza.domain.model.common import DomainModel
from ozza.domain.model.invitation import InviteToken
from ozza.domain.model.user import User
from ozza.domain.repository import InviteTokenStore, UnitOfWork, UserRepository
from ozza.domain.value import (
    AccessRole,
    Email,
    FailureReason,
    InvitationToken,
    UserId,
    UserRole,
)
from ozza.util.redaction import redact

from .base import Service
from .role_gate import RoleGate


class TokenCheck(DomainModel):
    """Outcome of checking an ephemeral token against a claimed email."""

    valid: bool
    reason: FailureReason | None = None
    role: UserRole | None = None
    record: InviteToken | None = None


class InviteTokenService(Service):
    """Issues, verifies and redeems ephemeral invite tokens."""

    def __init__(
        self,
        token_store: InviteTokenStore,
        user_repository: UserRepository,
        role_gate: RoleGate,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize invite token service.

        Args:
            token_store: Ephemeral token store
            user_repository: User directory
            role_gate: Authorization gate
            unit_of_work: Transaction boundary for consume + role update
        """
        self.token_store = token_store
        self.user_repository = user_repository
        self.role_gate = role_gate
        self.unit_of_work = unit_of_work

    async def issue(self, issuer_id: UserId, email: Email, role: UserRole) -> InviteToken:
        """Issue a token. Platform-level, so only admins pass.

        Raises:
            UnauthorizedError: If the issuer is not a platform admin
            BusinessRuleViolationError: If the email already has an account
        """
        with logfire.span(
            "invite_token_service.issue", issuer_id=str(issuer_id), role=role.value
        ):
            await self.role_gate.require(issuer_id, None, AccessRole.ADMIN)
            if await self.user_repository.find_by_email(email) is not None:
                logfire.warn("Invite token for existing user", email=redact(email))
                raise BusinessRuleViolationError("A user with this email already exists")
            record = await self.token_store.issue(email, role)
            logfire.info(
                "Invite token issued",
                token=redact(record.token),
                email=redact(email),
                role=role.value,
                expires_at=record.expires_at.isoformat(),
            )
            return record

    async def verify(self, token: InvitationToken, claimed_email: str) -> TokenCheck:
        """Check a token without consuming it.

        An expired token has already been dropped by the store's lookup and
        is reported as not-found.
        """
        with logfire.span(
            "invite_token_service.verify",
            token=redact(token),
            email=redact(claimed_email),
        ):
            record = await self.token_store.lookup(token)
            if record is None:
                check = TokenCheck(valid=False, reason=FailureReason.NOT_FOUND)
            elif not record.email.matches(claimed_email):
                check = TokenCheck(valid=False, reason=FailureReason.EMAIL_MISMATCH)
            else:
                check = TokenCheck(valid=True, role=record.role, record=record)
            logfire.info(
                "Invite token verified",
                token=redact(token),
                valid=check.valid,
                reason=check.reason.value if check.reason else None,
            )
            return check

    async def redeem(
        self, token: InvitationToken, user_id: UserId, claimed_email: str
    ) -> User:
        """Consume a token and assign its role to the user.

        Raises:
            InvitationError: not-found, email-mismatch, already-used, or
                role-conflict when the user already holds another role
            NotFoundError: If the user does not exist
        """
        with logfire.span(
            "invite_token_service.redeem", token=redact(token), user_id=str(user_id)
        ):
            check = await self.verify(token, claimed_email)
            if not check.valid:
                if check.reason == FailureReason.EMAIL_MISMATCH:
                    raise EmailMismatchError()
                raise InvitationNotFoundError()

            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                raise NotFoundError("User", str(user_id))
            if not user.email.matches(check.record.email):
                logfire.warn(
                    "Invite token email does not match user",
                    user_id=str(user_id),
                    token=redact(token),
                )
                raise EmailMismatchError()
            if user.role is not None and user.role != check.role:
                logfire.warn(
                    "User already holds a different role",
                    user_id=str(user_id),
                    current_role=user.role.value,
                    token_role=check.role.value,
                )
                raise RoleConflictError()

            async with self.unit_of_work.transaction():
                if not await self.token_store.consume(token):
                    raise AlreadyUsedError()
                updated = await self.user_repository.update_role(user_id, check.role)

            logfire.info(
                "Invite token redeemed",
                token=redact(token),
                user_id=str(user_id),
                role=check.role.value,
            )
            return updated

    async def sweep_expired(self) -> int:
        """Drop every expired token."""
        with logfire.span("invite_token_service.sweep_expired"):
            count = await self.token_store.sweep_expired()
            logfire.info("Expired invite tokens swept", count=count)
            return count
