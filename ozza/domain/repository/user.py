"""User directory interface."""

from abc import ABC, abstractmethod

from ozza.domain.model.user import User
from ozza.domain.value import Email, UserId, UserRole


class UserRepository(ABC):
    """User directory keyed by user id.

    The membership core reads users and only ever updates their role.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> User | None:
        """Find a user by ID."""
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> User | None:
        """Find a user by email (case-insensitive)."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        pass

    @abstractmethod
    async def update_role(self, user_id: UserId, role: UserRole) -> User | None:
        """Set a user's global role.

        Returns:
            The updated user, or None if the user does not exist
        """
        pass
