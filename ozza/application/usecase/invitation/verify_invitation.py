"""Verify invitation use case."""

from pydantic import BaseModel

from ozza.domain.service import InvitationValidator
from ozza.domain.value import FailureReason, InvitationToken, MemberRole


class VerifyInvitationRequest(BaseModel):
    """Token and the email the visitor claims."""

    token: str
    email: str


class VerifyInvitationResponse(BaseModel):
    """Verification outcome."""

    valid: bool
    role: MemberRole | None = None
    account_ref: str | None = None
    error: FailureReason | None = None


class VerifyInvitationUseCase:
    """Use case for checking an invitation link before signup.

    Lets the frontend tell a visitor whether their link still works without
    consuming it.
    """

    def __init__(self, validator: InvitationValidator) -> None:
        """Initialize verify invitation use case.

        Args:
            validator: Invitation validator
        """
        self.validator = validator

    async def execute(
        self, request: VerifyInvitationRequest
    ) -> VerifyInvitationResponse:
        result = await self.validator.validate(
            InvitationToken(root=request.token), request.email
        )
        if not result.valid:
            return VerifyInvitationResponse(valid=False, error=result.reason)
        return VerifyInvitationResponse(
            valid=True,
            role=result.role,
            account_ref=str(result.account_id),
        )
