"""Create invitation use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from ozza.application.usecase.base import BaseUseCase
from ozza.config import Settings
from ozza.domain.service import InvitationService
from ozza.domain.value import (
    AccountId,
    Email,
    InvitationKind,
    InvitationStatus,
    MemberRole,
    UserId,
)
from ozza.util.redaction import redact


class CreateInvitationRequest(BaseModel):
    """Request to invite someone into an account.

    The role is chosen by the endpoint, never by the caller.
    """

    issuer_id: str  # User ID from auth
    account_id: str
    email: str
    role: MemberRole
    invitee_name: str | None = Field(default=None, max_length=255)


class CreateInvitationResponse(BaseModel):
    """Created invitation with its link."""

    invitation_id: str
    kind: InvitationKind
    invite_url: str
    token: str
    email: str
    role: MemberRole
    account_id: str
    status: InvitationStatus
    expires_at: datetime


class CreateInvitationUseCase(BaseUseCase):
    """Use case for issuing agency and client invitations."""

    def __init__(
        self, invitation_service: InvitationService, settings: Settings
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
            settings: Application settings (invite link base)
        """
        self.invitation_service = invitation_service
        self.settings = settings

    async def execute(
        self, request: CreateInvitationRequest
    ) -> CreateInvitationResponse:
        """Issue the invitation.

        Raises:
            UnauthorizedError: If the issuer may not grant the role here
            BusinessRuleViolationError: If one is already pending
        """
        email = Email(request.email)
        with logfire.span(
            "create_invitation.execute",
            issuer_id=request.issuer_id,
            account_id=request.account_id,
            role=request.role.value,
            email=redact(email),
        ):
            invitation = await self.invitation_service.issue(
                issuer_id=UserId(UUID(request.issuer_id)),
                account_id=AccountId(UUID(request.account_id)),
                email=email,
                role=request.role,
                invitee_name=request.invitee_name,
            )

            return CreateInvitationResponse(
                invitation_id=str(invitation.id),
                kind=invitation.kind,
                invite_url=self.settings.invite_link(invitation.token.root),
                token=invitation.token.root,
                email=invitation.email.root,
                role=invitation.role,
                account_id=str(invitation.account_id),
                status=invitation.status,
                expires_at=invitation.expires_at,
            )
