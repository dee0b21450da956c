"""Invitation entities.

Durable invitations (agency and client) are auditable rows with a status
lifecycle. Ephemeral invite tokens carry the same fields minus the status:
they simply disappear once consumed or expired.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from ozza.domain.model.common import DomainModel
from ozza.domain.value import (
    AccountId,
    Email,
    InvitationId,
    InvitationKind,
    InvitationStatus,
    InvitationToken,
    MemberRole,
    UserId,
    UserRole,
)
from ozza.util.clock import utcnow


class Invitation(DomainModel):
    """Durable offer to join an account with a fixed role.

    Business rules:
    - The bound role is fixed at issuance and never changes
    - ``pending`` is the only non-terminal status
    - Once accepted, the row is never rewritten back to pending
    """

    id: InvitationId
    kind: InvitationKind
    token: InvitationToken
    email: Email
    role: MemberRole
    account_id: AccountId
    invited_by: Optional[UserId] = None
    invitee_name: Optional[str] = None
    status: InvitationStatus = InvitationStatus.PENDING
    expires_at: datetime
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    accepted_at: Optional[datetime] = None
    accepted_by_user_id: Optional[UserId] = None

    @model_validator(mode="after")
    def check_role_matches_kind(self) -> "Invitation":
        if self.kind.role != self.role:
            raise ValueError(
                f"{self.kind.value} invitation cannot bind role {self.role.value}"
            )
        return self

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


class InviteToken(DomainModel):
    """Ephemeral, non-audited invitation used by lightweight signup flows."""

    token: InvitationToken
    email: Email
    role: UserRole
    expires_at: datetime
    created_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def check_role_is_grantable(self) -> "InviteToken":
        if self.role is UserRole.ADMIN:
            raise ValueError("Admin role cannot be granted by invite token")
        return self

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
