"""Account routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from ozza.application.usecase.account import (
    CreateAccountRequest,
    CreateAccountResponse,
    CreateAccountUseCase,
    ListMembersRequest,
    ListMembersResponse,
    ListMembersUseCase,
)
from ozza.application.usecase.invitation import (
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
)
from ozza.domain.service import JWTService
from ozza.domain.value import InvitationStatus
from ozza.interface.api.session import authenticate

router = APIRouter(prefix="/accounts", tags=["accounts"], route_class=DishkaRoute)


class CreateAccountAPIRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)


@router.post(
    "", response_model=CreateAccountResponse, status_code=status.HTTP_201_CREATED
)
async def create_account(
    request: CreateAccountAPIRequest,
    create_account_use_case: FromDishka[CreateAccountUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateAccountResponse:
    """Coach opens a new agency account and becomes its owner."""
    payload = authenticate(auth_token, jwt_service)
    return await create_account_use_case.execute(
        CreateAccountRequest(owner_id=payload.user_id, name=request.name)
    )


@router.get("/{account_id}/members", response_model=ListMembersResponse)
async def list_members(
    account_id: UUID,
    list_members_use_case: FromDishka[ListMembersUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListMembersResponse:
    """List members of an account. Requires agency or above."""
    payload = authenticate(auth_token, jwt_service)
    return await list_members_use_case.execute(
        ListMembersRequest(requester_id=payload.user_id, account_id=str(account_id))
    )


@router.get("/{account_id}/invitations", response_model=ListInvitationsResponse)
async def list_invitations(
    account_id: UUID,
    list_invitations_use_case: FromDishka[ListInvitationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    status_filter: InvitationStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListInvitationsResponse:
    """List invitations of an account. Owners only.

    Args:
        account_id: Account to list
        status_filter: Optional status filter
        limit: Maximum number of results (1-100)
        offset: Number of results to skip
    """
    payload = authenticate(auth_token, jwt_service)
    return await list_invitations_use_case.execute(
        ListInvitationsRequest(
            requester_id=payload.user_id,
            account_id=str(account_id),
            status=status_filter,
            limit=limit,
            offset=offset,
        )
    )
