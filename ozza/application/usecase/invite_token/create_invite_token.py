"""Create invite token use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ozza.application.usecase.base import BaseUseCase
from ozza.config import Settings
from ozza.domain.service import InviteTokenService
from ozza.domain.value import Email, UserId, UserRole


class CreateInviteTokenRequest(BaseModel):
    """Request for an ephemeral signup invitation."""

    issuer_id: str  # User ID from auth
    email: str
    role: UserRole = UserRole.COACH


class CreateInviteTokenResponse(BaseModel):
    """Issued token with its link."""

    invite_url: str
    token: str
    email: str
    role: UserRole
    expires_at: datetime


class CreateInviteTokenUseCase(BaseUseCase):
    """Use case for platform admins inviting coaches."""

    def __init__(
        self, invite_token_service: InviteTokenService, settings: Settings
    ) -> None:
        """Initialize use case.

        Args:
            invite_token_service: Invite token service
            settings: Application settings (invite link base)
        """
        self.invite_token_service = invite_token_service
        self.settings = settings

    async def execute(
        self, request: CreateInviteTokenRequest
    ) -> CreateInviteTokenResponse:
        """Issue the token.

        Raises:
            UnauthorizedError: If the issuer is not a platform admin
        """
        record = await self.invite_token_service.issue(
            UserId(UUID(request.issuer_id)), Email(request.email), request.role
        )
        return CreateInviteTokenResponse(
            invite_url=self.settings.invite_link(record.token.root),
            token=record.token.root,
            email=record.email.root,
            role=record.role,
            expires_at=record.expires_at,
        )
