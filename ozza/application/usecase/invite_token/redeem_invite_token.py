"""Redeem invite token use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from ozza.application.usecase.base import BaseUseCase
from ozza.domain.service import InviteTokenService
from ozza.domain.value import InvitationToken, UserId, UserRole


class RedeemInviteTokenRequest(BaseModel):
    """Signup-with-role request."""

    token: str
    email: str
    user_id: str


class RedeemInviteTokenResponse(BaseModel):
    valid: bool = True
    user_id: str
    role: UserRole


class RedeemInviteTokenUseCase(BaseUseCase):
    """Use case for assigning a freshly registered user the invited role."""

    def __init__(self, invite_token_service: InviteTokenService) -> None:
        """Initialize use case.

        Args:
            invite_token_service: Invite token service
        """
        self.invite_token_service = invite_token_service

    async def execute(
        self, request: RedeemInviteTokenRequest
    ) -> RedeemInviteTokenResponse:
        """Consume the token and set the user's role.

        Raises:
            InvitationError: Tagged token failure
            NotFoundError: If the user does not exist
        """
        with logfire.span("redeem_invite_token.execute", user_id=request.user_id):
            user = await self.invite_token_service.redeem(
                InvitationToken(root=request.token),
                UserId(UUID(request.user_id)),
                request.email,
            )
            return RedeemInviteTokenResponse(user_id=str(user.id), role=user.role)
