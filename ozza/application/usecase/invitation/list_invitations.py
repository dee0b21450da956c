"""List invitations use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ozza.config import Settings
from ozza.domain.service import InvitationService, RoleGate
from ozza.domain.value import (
    AccessRole,
    AccountId,
    InvitationKind,
    InvitationStatus,
    MemberRole,
    UserId,
)


class InvitationItem(BaseModel):
    """Invitation item in response."""

    invitation_id: str
    kind: InvitationKind
    email: str
    role: MemberRole
    invitee_name: str | None = None
    invite_url: str
    status: InvitationStatus
    created_at: datetime
    expires_at: datetime
    accepted_at: datetime | None = None


class ListInvitationsRequest(BaseModel):
    """List invitations request."""

    requester_id: str  # User ID from auth
    account_id: str
    status: InvitationStatus | None = None
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListInvitationsResponse(BaseModel):
    """List invitations response."""

    invitations: list[InvitationItem]
    total: int


class ListInvitationsUseCase:
    """Use case for listing the invitations of an account (owners only)."""

    def __init__(
        self,
        invitation_service: InvitationService,
        role_gate: RoleGate,
        settings: Settings,
    ) -> None:
        """Initialize list invitations use case.

        Args:
            invitation_service: Invitation service
            role_gate: Authorization gate
            settings: Application settings
        """
        self.invitation_service = invitation_service
        self.role_gate = role_gate
        self.settings = settings

    async def execute(self, request: ListInvitationsRequest) -> ListInvitationsResponse:
        """Execute list invitations flow.

        Raises:
            UnauthorizedError: If the requester does not own the account
        """
        account_id = AccountId(UUID(request.account_id))
        await self.role_gate.require(
            UserId(UUID(request.requester_id)), account_id, AccessRole.OWNER
        )

        invitations = await self.invitation_service.list_for_account(
            account_id,
            status=request.status,
            limit=request.limit,
            offset=request.offset,
        )

        items = [
            InvitationItem(
                invitation_id=str(invitation.id),
                kind=invitation.kind,
                email=invitation.email.root,
                role=invitation.role,
                invitee_name=invitation.invitee_name,
                invite_url=self.settings.invite_link(invitation.token.root),
                status=invitation.status,
                created_at=invitation.created_at,
                expires_at=invitation.expires_at,
                accepted_at=invitation.accepted_at,
            )
            for invitation in invitations
        ]

        return ListInvitationsResponse(invitations=items, total=len(items))
