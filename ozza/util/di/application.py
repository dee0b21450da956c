"""Application layer DI providers."""

from dishka import Scope, provide

from ozza.application.usecase.account import (
    CreateAccountUseCase,
    GetMembershipsUseCase,
    ListMembersUseCase,
)
from ozza.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CreateInvitationUseCase,
    ListInvitationsUseCase,
    MarkInvitationUsedUseCase,
    VerifyInvitationUseCase,
)
from ozza.application.usecase.invite_token import (
    CreateInviteTokenUseCase,
    RedeemInviteTokenUseCase,
    VerifyInviteTokenUseCase,
)
from ozza.application.usecase.maintenance import SweepExpiredUseCase
from ozza.config import Settings
from ozza.domain.repository import UserRepository
from ozza.domain.service import (
    AccountService,
    InvitationService,
    InvitationValidator,
    InviteTokenService,
    MembershipResolver,
    RoleGate,
)
from ozza.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Invitation use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invitation_use_case(
        self, invitation_service: InvitationService, settings: Settings
    ) -> CreateInvitationUseCase:
        """Provide create invitation use case."""
        return CreateInvitationUseCase(
            invitation_service=invitation_service, settings=settings
        )

    @provide(scope=Scope.REQUEST)
    def get_verify_invitation_use_case(
        self, validator: InvitationValidator
    ) -> VerifyInvitationUseCase:
        """Provide verify invitation use case."""
        return VerifyInvitationUseCase(validator=validator)

    @provide(scope=Scope.REQUEST)
    def get_accept_invitation_use_case(
        self,
        membership_resolver: MembershipResolver,
        user_repository: UserRepository,
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(
            membership_resolver=membership_resolver,
            user_repository=user_repository,
        )

    @provide(scope=Scope.REQUEST)
    def get_mark_invitation_used_use_case(
        self, invitation_service: InvitationService
    ) -> MarkInvitationUsedUseCase:
        """Provide mark invitation used use case."""
        return MarkInvitationUsedUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_list_invitations_use_case(
        self,
        invitation_service: InvitationService,
        role_gate: RoleGate,
        settings: Settings,
    ) -> ListInvitationsUseCase:
        """Provide list invitations use case."""
        return ListInvitationsUseCase(
            invitation_service=invitation_service,
            role_gate=role_gate,
            settings=settings,
        )

    # Invite token use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invite_token_use_case(
        self, invite_token_service: InviteTokenService, settings: Settings
    ) -> CreateInviteTokenUseCase:
        """Provide create invite token use case."""
        return CreateInviteTokenUseCase(
            invite_token_service=invite_token_service, settings=settings
        )

    @provide(scope=Scope.REQUEST)
    def get_verify_invite_token_use_case(
        self, invite_token_service: InviteTokenService
    ) -> VerifyInviteTokenUseCase:
        """Provide verify invite token use case."""
        return VerifyInviteTokenUseCase(invite_token_service=invite_token_service)

    @provide(scope=Scope.REQUEST)
    def get_redeem_invite_token_use_case(
        self, invite_token_service: InviteTokenService
    ) -> RedeemInviteTokenUseCase:
        """Provide redeem invite token use case."""
        return RedeemInviteTokenUseCase(invite_token_service=invite_token_service)

    # Account use cases
    @provide(scope=Scope.REQUEST)
    def get_create_account_use_case(
        self, account_service: AccountService
    ) -> CreateAccountUseCase:
        """Provide create account use case."""
        return CreateAccountUseCase(account_service=account_service)

    @provide(scope=Scope.REQUEST)
    def get_get_memberships_use_case(
        self, account_service: AccountService, role_gate: RoleGate
    ) -> GetMembershipsUseCase:
        """Provide get memberships use case."""
        return GetMembershipsUseCase(
            account_service=account_service, role_gate=role_gate
        )

    @provide(scope=Scope.REQUEST)
    def get_list_members_use_case(
        self, account_service: AccountService, role_gate: RoleGate
    ) -> ListMembersUseCase:
        """Provide list members use case."""
        return ListMembersUseCase(account_service=account_service, role_gate=role_gate)

    # Maintenance
    @provide(scope=Scope.REQUEST)
    def get_sweep_expired_use_case(
        self,
        invitation_service: InvitationService,
        invite_token_service: InviteTokenService,
    ) -> SweepExpiredUseCase:
        """Provide sweep expired use case."""
        return SweepExpiredUseCase(
            invitation_service=invitation_service,
            invite_token_service=invite_token_service,
        )
