"""Account and membership entities.

An account is the tenant boundary of an agency. It is created by a coach,
who becomes its owner, and is never deleted by the membership core.
"""

from datetime import datetime

from pydantic import Field

from ozza.domain.model.common import DomainModel
from ozza.domain.value import AccountId, MemberRole, UserId
from ozza.util.clock import utcnow


class Account(DomainModel):
    """Tenant boundary owned by a coach."""

    id: AccountId
    name: str = Field(min_length=1, max_length=255)
    owner_id: UserId
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class AccountMember(DomainModel):
    """Role binding of one user inside one account.

    ``(account_id, user_id)`` is unique: a user holds at most one role per
    account but may belong to several accounts.
    """

    account_id: AccountId
    user_id: UserId
    role: MemberRole
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class MembershipView(DomainModel):
    """Membership joined with its account name, for listings."""

    account_id: AccountId
    account_name: str | None
    role: MemberRole
