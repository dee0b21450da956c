"""PostgreSQL implementation of the user directory."""

from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ozza.domain.model import User
from ozza.domain.repository import UserRepository
from ozza.domain.value import Email, UserId, UserRole
from ozza.persistence.database import store_errors
from ozza.persistence.mappers import row_to_user, user_to_dict
from ozza.persistence.tables import users_table
from ozza.util.clock import utcnow


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        async with store_errors("users.find_by_id"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by email, ignoring case."""
        stmt = select(users_table).where(
            func.lower(users_table.c.email) == email.root.lower()
        )
        async with store_errors("users.find_by_email"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        user_dict = user_to_dict(user)
        async with store_errors("users.save"):
            existing = await self.find_by_id(user.id)
            if existing:
                stmt = (
                    update(users_table)
                    .where(users_table.c.id == user.id)
                    .values(**user_dict)
                )
            else:
                stmt = insert(users_table).values(**user_dict)
            await self.session.execute(stmt)
            await self.session.flush()
        return user

    async def update_role(self, user_id: UserId, role: UserRole) -> Optional[User]:
        """Set a user's global role."""
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(role=role.value, updated_at=utcnow())
            .returning(*users_table.c)
        )
        async with store_errors("users.update_role"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None
