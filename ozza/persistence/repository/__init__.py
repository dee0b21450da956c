"""PostgreSQL repository implementations."""

from ozza.persistence.repository.account import (
    PostgresAccountRepository,
    PostgresMembershipRepository,
)
from ozza.persistence.repository.invitation import PostgresInvitationRepository
from ozza.persistence.repository.invite_token import PostgresInviteTokenStore
from ozza.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresAccountRepository",
    "PostgresInvitationRepository",
    "PostgresInviteTokenStore",
    "PostgresMembershipRepository",
    "PostgresUserRepository",
]
