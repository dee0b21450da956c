"""Mock persistence providers for testing."""

from dishka import Scope, provide

from ozza.config import InvitationSettings
from ozza.domain.repository import (
    AccountRepository,
    InvitationRepository,
    InviteTokenStore,
    MembershipRepository,
    UnitOfWork,
    UserRepository,
)
from ozza.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryDatabase,
    InMemoryInvitationRepository,
    InMemoryInviteTokenStore,
    InMemoryMembershipRepository,
    InMemoryUnitOfWork,
    InMemoryUserRepository,
)
from ozza.util.clock import Clock
from ozza.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The in-memory database lives as long as the container, so every request
    scope opened on one container sees the same rows while separate tests
    stay isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_database(self) -> InMemoryDatabase:
        """Provide the shared in-memory database."""
        return InMemoryDatabase()

    @provide(scope=Scope.APP)
    def get_invite_token_store(
        self, clock: Clock, invitation_settings: InvitationSettings
    ) -> InviteTokenStore:
        """Provide process-local invite token store."""
        return InMemoryInviteTokenStore(clock, invitation_settings.ttl)

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, database: InMemoryDatabase) -> UnitOfWork:
        """Provide in-memory unit of work."""
        return InMemoryUnitOfWork(database)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, database: InMemoryDatabase) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self, database: InMemoryDatabase) -> AccountRepository:
        """Provide in-memory account repository."""
        return InMemoryAccountRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_membership_repository(
        self, database: InMemoryDatabase
    ) -> MembershipRepository:
        """Provide in-memory membership repository."""
        return InMemoryMembershipRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(
        self, database: InMemoryDatabase
    ) -> InvitationRepository:
        """Provide in-memory invitation repository."""
        return InMemoryInvitationRepository(database)
