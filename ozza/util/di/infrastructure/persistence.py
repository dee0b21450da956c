"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ozza.config import InvitationSettings, Settings
from ozza.domain.repository import (
    AccountRepository,
    InvitationRepository,
    InviteTokenStore,
    MembershipRepository,
    UnitOfWork,
    UserRepository,
)
from ozza.persistence.database import (
    SqlAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)
from ozza.persistence.repository import (
    PostgresAccountRepository,
    PostgresInvitationRepository,
    PostgresInviteTokenStore,
    PostgresMembershipRepository,
    PostgresUserRepository,
)
from ozza.util.clock import Clock
from ozza.util.di.base import ProviderBase
from ozza.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        A cancelled request never reaches the commit.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except BaseException as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        """Provide unit of work over the request session."""
        return SqlAlchemyUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self, session: AsyncSession) -> AccountRepository:
        """Provide Account repository."""
        return PostgresAccountRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_membership_repository(
        self, session: AsyncSession
    ) -> MembershipRepository:
        """Provide Membership repository."""
        return PostgresMembershipRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(
        self, session: AsyncSession
    ) -> InvitationRepository:
        """Provide Invitation repository."""
        return PostgresInvitationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invite_token_store(
        self,
        session: AsyncSession,
        clock: Clock,
        invitation_settings: InvitationSettings,
    ) -> InviteTokenStore:
        """Provide the shared, database-backed invite token store."""
        return PostgresInviteTokenStore(session, clock, invitation_settings.ttl)
