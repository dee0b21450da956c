"""Invitation issuance routes.

Each endpoint fixes the role it hands out; callers only choose who to invite.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from ozza.application.usecase.invitation import (
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
)
from ozza.application.usecase.invite_token import (
    CreateInviteTokenRequest,
    CreateInviteTokenResponse,
    CreateInviteTokenUseCase,
)
from ozza.domain.service import JWTService
from ozza.domain.value import MemberRole, UserRole
from ozza.interface.api.session import authenticate

router = APIRouter(tags=["issuance"], route_class=DishkaRoute)


class InviteCoachAPIRequest(BaseModel):
    email: str


class InviteMemberAPIRequest(BaseModel):
    """API request for inviting someone into an account."""

    account_id: UUID
    email: str
    name: str | None = Field(default=None, max_length=255)


@router.post(
    "/admin/invite-coach",
    response_model=CreateInviteTokenResponse,
    status_code=status.HTTP_201_CREATED,
)
async def invite_coach(
    request: InviteCoachAPIRequest,
    create_invite_token_use_case: FromDishka[CreateInviteTokenUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateInviteTokenResponse:
    """Platform admin invites a new coach with an ephemeral token."""
    payload = authenticate(auth_token, jwt_service)
    return await create_invite_token_use_case.execute(
        CreateInviteTokenRequest(
            issuer_id=payload.user_id, email=request.email, role=UserRole.COACH
        )
    )


@router.post(
    "/coach/invite-agency",
    response_model=CreateInvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def invite_agency(
    request: InviteMemberAPIRequest,
    create_invitation_use_case: FromDishka[CreateInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateInvitationResponse:
    """Account owner invites an agency member."""
    payload = authenticate(auth_token, jwt_service)
    return await create_invitation_use_case.execute(
        CreateInvitationRequest(
            issuer_id=payload.user_id,
            account_id=str(request.account_id),
            email=request.email,
            role=MemberRole.AGENCY,
            invitee_name=request.name,
        )
    )


@router.post(
    "/agency/invite-client",
    response_model=CreateInvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def invite_client(
    request: InviteMemberAPIRequest,
    create_invitation_use_case: FromDishka[CreateInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateInvitationResponse:
    """Agency member (or owner) invites a client."""
    payload = authenticate(auth_token, jwt_service)
    return await create_invitation_use_case.execute(
        CreateInvitationRequest(
            issuer_id=payload.user_id,
            account_id=str(request.account_id),
            email=request.email,
            role=MemberRole.CLIENT,
            invitee_name=request.name,
        )
    )
