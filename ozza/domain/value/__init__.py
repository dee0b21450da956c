"""Domain value objects for Ozza."""

from ozza.domain.value.identifiers import AccountId, InvitationId, UserId
from ozza.domain.value.types import (
    AccessRole,
    Email,
    FailureReason,
    InvitationKind,
    InvitationStatus,
    InvitationToken,
    MemberRole,
    UserRole,
)

__all__ = [
    # Identifiers
    "UserId",
    "AccountId",
    "InvitationId",
    # Types
    "AccessRole",
    "Email",
    "FailureReason",
    "InvitationKind",
    "InvitationStatus",
    "InvitationToken",
    "MemberRole",
    "UserRole",
]
