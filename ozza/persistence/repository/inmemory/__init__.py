"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository, InMemoryMembershipRepository
from .database import InMemoryDatabase, InMemoryUnitOfWork
from .invitation import InMemoryInvitationRepository
from .invite_token import InMemoryInviteTokenStore
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryDatabase",
    "InMemoryInvitationRepository",
    "InMemoryInviteTokenStore",
    "InMemoryMembershipRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
]
