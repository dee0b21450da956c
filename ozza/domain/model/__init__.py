"""Domain model entities for Ozza."""

from ozza.domain.model.account import Account, AccountMember, MembershipView
from ozza.domain.model.invitation import Invitation, InviteToken
from ozza.domain.model.user import User

__all__ = [
    "Account",
    "AccountMember",
    "Invitation",
    "InviteToken",
    "MembershipView",
    "User",
]
