"""In-memory user repository for testing."""

from typing import Optional

from ozza.domain.model.user import User
from ozza.domain.repository.user import UserRepository
from ozza.domain.value import Email, UserId, UserRole
from ozza.util.clock import utcnow

from .database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._db.users.get(user_id)

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their email, ignoring case."""
        for user in self._db.users.values():
            if user.email.matches(email):
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._db.users[user.id] = user
        return user

    async def update_role(self, user_id: UserId, role: UserRole) -> Optional[User]:
        """Set a user's global role."""
        user = self._db.users.get(user_id)
        if user is None:
            return None
        updated = user.model_copy(update={"role": role, "updated_at": utcnow()})
        self._db.users[user_id] = updated
        return updated
