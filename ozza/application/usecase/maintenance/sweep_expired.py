"""Sweep expired invitations use case."""

import logfire
from pydantic import BaseModel

from ozza.domain.service import InvitationService, InviteTokenService


class SweepExpiredResponse(BaseModel):
    invitations_expired: int
    tokens_removed: int


class SweepExpiredUseCase:
    """Periodic cleanup of stale invitations.

    Durable invitations are marked ``expired`` and kept for audit; ephemeral
    tokens are deleted. Validation never depends on this having run.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        invite_token_service: InviteTokenService,
    ) -> None:
        self.invitation_service = invitation_service
        self.invite_token_service = invite_token_service

    async def execute(self) -> SweepExpiredResponse:
        with logfire.span("sweep_expired.execute"):
            expired = await self.invitation_service.expire_stale()
            removed = await self.invite_token_service.sweep_expired()
            return SweepExpiredResponse(
                invitations_expired=expired, tokens_removed=removed
            )
