"""Mark invitation used use case."""

from pydantic import BaseModel

from ozza.domain.service import InvitationService
from ozza.domain.value import InvitationToken


class MarkInvitationUsedRequest(BaseModel):
    token: str


class MarkInvitationUsedResponse(BaseModel):
    """Always successful; ``changed`` tells whether the row moved."""

    success: bool = True
    changed: bool


class MarkInvitationUsedUseCase:
    """Use case for closing an invitation outside the accept flow."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: MarkInvitationUsedRequest
    ) -> MarkInvitationUsedResponse:
        changed = await self.invitation_service.mark_used(
            InvitationToken(root=request.token)
        )
        return MarkInvitationUsedResponse(changed=changed)
