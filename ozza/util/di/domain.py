"""Domain layer DI providers."""

from dishka import Scope, provide

from ozza.config import AuthSettings, InvitationSettings
from ozza.domain.repository import (
    AccountRepository,
    InvitationRepository,
    InviteTokenStore,
    MembershipRepository,
    UnitOfWork,
    UserRepository,
)
from ozza.domain.service import (
    AccountService,
    InvitationService,
    InvitationValidator,
    InviteTokenService,
    JWTService,
    MembershipResolver,
    RoleGate,
)
from ozza.util.clock import Clock
from ozza.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_role_gate(
        self,
        user_repository: UserRepository,
        account_repository: AccountRepository,
        membership_repository: MembershipRepository,
    ) -> RoleGate:
        """Provide authorization gate."""
        return RoleGate(
            user_repository=user_repository,
            account_repository=account_repository,
            membership_repository=membership_repository,
        )

    @provide
    def get_invitation_validator(
        self, invitation_repository: InvitationRepository, clock: Clock
    ) -> InvitationValidator:
        """Provide invitation validator."""
        return InvitationValidator(
            invitation_repository=invitation_repository, clock=clock
        )

    @provide
    def get_membership_resolver(
        self,
        validator: InvitationValidator,
        invitation_repository: InvitationRepository,
        membership_repository: MembershipRepository,
        user_repository: UserRepository,
        unit_of_work: UnitOfWork,
        clock: Clock,
    ) -> MembershipResolver:
        """Provide membership resolver."""
        return MembershipResolver(
            validator=validator,
            invitation_repository=invitation_repository,
            membership_repository=membership_repository,
            user_repository=user_repository,
            unit_of_work=unit_of_work,
            clock=clock,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        role_gate: RoleGate,
        clock: Clock,
        invitation_settings: InvitationSettings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            role_gate=role_gate,
            clock=clock,
            ttl=invitation_settings.ttl,
        )

    @provide
    def get_invite_token_service(
        self,
        token_store: InviteTokenStore,
        user_repository: UserRepository,
        role_gate: RoleGate,
        unit_of_work: UnitOfWork,
    ) -> InviteTokenService:
        """Provide invite token domain service."""
        return InviteTokenService(
            token_store=token_store,
            user_repository=user_repository,
            role_gate=role_gate,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_account_service(
        self,
        account_repository: AccountRepository,
        membership_repository: MembershipRepository,
        user_repository: UserRepository,
        unit_of_work: UnitOfWork,
        clock: Clock,
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(
            account_repository=account_repository,
            membership_repository=membership_repository,
            user_repository=user_repository,
            unit_of_work=unit_of_work,
            clock=clock,
        )

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)
