"""Verify invite token use case."""

from datetime import datetime

from pydantic import BaseModel

from ozza.domain.service import InviteTokenService
from ozza.domain.value import FailureReason, InvitationToken, UserRole


class VerifyInviteTokenRequest(BaseModel):
    token: str
    email: str


class VerifyInviteTokenResponse(BaseModel):
    valid: bool
    role: UserRole | None = None
    expires_at: datetime | None = None
    error: FailureReason | None = None


class VerifyInviteTokenUseCase:
    """Use case for checking an ephemeral token without consuming it."""

    def __init__(self, invite_token_service: InviteTokenService) -> None:
        self.invite_token_service = invite_token_service

    async def execute(
        self, request: VerifyInviteTokenRequest
    ) -> VerifyInviteTokenResponse:
        check = await self.invite_token_service.verify(
            InvitationToken(root=request.token), request.email
        )
        if not check.valid:
            return VerifyInviteTokenResponse(valid=False, error=check.reason)
        return VerifyInviteTokenResponse(
            valid=True, role=check.role, expires_at=check.record.expires_at
        )
