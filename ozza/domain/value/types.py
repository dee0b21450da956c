"""Domain value objects for Ozza.

Roles, statuses and the opaque token/email wrappers used across the
invitation lifecycle.
"""

import secrets
from enum import Enum

from pydantic import field_validator

from ozza.domain.value.common import RootValueObject

# 32 random bytes -> 43 URL-safe characters, 256 bits of entropy
TOKEN_BYTES = 32


class UserRole(str, Enum):
    """Global platform role. Exactly one per user."""

    ADMIN = "admin"
    COACH = "coach"
    AGENCY = "agency"
    CLIENT = "client"


class MemberRole(str, Enum):
    """Role a user holds inside one account."""

    OWNER = "owner"
    AGENCY = "agency"
    CLIENT = "client"


class AccessRole(str, Enum):
    """Threshold roles compared by RoleGate.

    Ordered ``admin > owner > agency > client``.
    """

    ADMIN = "admin"
    OWNER = "owner"
    AGENCY = "agency"
    CLIENT = "client"

    @property
    def rank(self) -> int:
        return _ACCESS_RANK[self]

    def covers(self, required: "AccessRole") -> bool:
        """Whether this role is at or above ``required``."""
        return self.rank >= required.rank

    @classmethod
    def from_member_role(cls, role: MemberRole) -> "AccessRole":
        return cls(role.value)


_ACCESS_RANK = {
    AccessRole.CLIENT: 1,
    AccessRole.AGENCY: 2,
    AccessRole.OWNER: 3,
    AccessRole.ADMIN: 4,
}


class InvitationStatus(str, Enum):
    """Status of a durable invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    USED = "used"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not InvitationStatus.PENDING


class InvitationKind(str, Enum):
    """Durable invitation family, named after the role it grants."""

    AGENCY = "agency"
    CLIENT = "client"

    @property
    def role(self) -> MemberRole:
        return MemberRole(self.value)

    @classmethod
    def for_role(cls, role: MemberRole) -> "InvitationKind":
        if role is MemberRole.OWNER:
            raise ValueError("Ownership cannot be granted by invitation")
        return cls(role.value)


class FailureReason(str, Enum):
    """Closed set of failure tags reported to callers."""

    NOT_FOUND = "not-found"
    EXPIRED = "expired"
    EMAIL_MISMATCH = "email-mismatch"
    ALREADY_USED = "already-used"
    ROLE_CONFLICT = "role-conflict"
    UNAUTHORIZED = "unauthorized"
    STORE_UNAVAILABLE = "store-unavailable"


class InvitationToken(RootValueObject[str]):
    """Opaque URL-safe invitation token."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    @classmethod
    def generate(cls) -> "InvitationToken":
        """Create a fresh unguessable token."""
        return cls(secrets.token_urlsafe(TOKEN_BYTES))


class Email(RootValueObject[str]):
    """Email address as entered by the inviter.

    The original casing is kept; comparisons are case-insensitive.
    """

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("Valid email required")
        if len(v) > 255:
            raise ValueError("Email must be at most 255 characters")
        return v

    @property
    def normalized(self) -> str:
        return self.root.casefold()

    def matches(self, other: "Email | str") -> bool:
        other_value = other.root if isinstance(other, Email) else other.strip()
        return self.normalized == other_value.casefold()
