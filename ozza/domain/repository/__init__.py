"""Repository interfaces for the Ozza domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from ozza.domain.repository.account import AccountRepository, MembershipRepository
from ozza.domain.repository.invitation import InvitationRepository
from ozza.domain.repository.invite_token import InviteTokenStore
from ozza.domain.repository.unit_of_work import UnitOfWork
from ozza.domain.repository.user import UserRepository

__all__ = [
    "AccountRepository",
    "InvitationRepository",
    "InviteTokenStore",
    "MembershipRepository",
    "UnitOfWork",
    "UserRepository",
]
