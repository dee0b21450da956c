"""Invitation routes: verify, accept and mark used."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query
from pydantic import BaseModel

from ozza.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    MarkInvitationUsedRequest,
    MarkInvitationUsedResponse,
    MarkInvitationUsedUseCase,
    VerifyInvitationRequest,
    VerifyInvitationResponse,
    VerifyInvitationUseCase,
)
from ozza.domain.service import JWTService
from ozza.interface.api.session import authenticate

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class AcceptInvitationAPIRequest(BaseModel):
    """API request for accepting an invitation.

    ``user_id`` is sent by registration flows; otherwise the session user
    accepts.
    """

    token: str
    email: str
    user_id: UUID | None = None


@router.get("/verify", response_model=VerifyInvitationResponse)
async def verify_invitation(
    verify_invitation_use_case: FromDishka[VerifyInvitationUseCase],
    token: str = Query(min_length=1, max_length=255),
    email: str = Query(min_length=1),
) -> VerifyInvitationResponse:
    """Check an invitation link without consuming it.

    Failures are reported in the body with status 200.
    """
    return await verify_invitation_use_case.execute(
        VerifyInvitationRequest(token=token, email=email)
    )


@router.post("/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    request: AcceptInvitationAPIRequest,
    accept_invitation_use_case: FromDishka[AcceptInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AcceptInvitationResponse:
    """Accept an invitation and join the account with its bound role.

    Returns:
        ``{valid: true, role, account_ref}``; failures come back as
        ``{valid: false, error}`` with a 4xx status

    Raises:
        HTTPException: 401 if no user id is given and there is no session
    """
    if request.user_id is not None:
        user_id = str(request.user_id)
    else:
        user_id = authenticate(auth_token, jwt_service).user_id

    return await accept_invitation_use_case.execute(
        AcceptInvitationRequest(token=request.token, email=request.email, user_id=user_id)
    )


@router.post("/mark-used", response_model=MarkInvitationUsedResponse)
async def mark_invitation_used(
    request: MarkInvitationUsedRequest,
    mark_invitation_used_use_case: FromDishka[MarkInvitationUsedUseCase],
) -> MarkInvitationUsedResponse:
    """Close an invitation. Succeeds whatever its prior state."""
    return await mark_invitation_used_use_case.execute(request)
