"""User routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from ozza.application.usecase.account import (
    GetMembershipsRequest,
    GetMembershipsResponse,
    GetMembershipsUseCase,
)
from ozza.domain.service import JWTService
from ozza.interface.api.session import authenticate

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/{user_id}/memberships", response_model=GetMembershipsResponse)
async def get_memberships(
    user_id: UUID,
    get_memberships_use_case: FromDishka[GetMembershipsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetMembershipsResponse:
    """List the accounts a user belongs to, with account names.

    Example:
        GET /users/123e4567-e89b-12d3-a456-426614174000/memberships

        Response:
        {
            "user_id": "123e4567-e89b-12d3-a456-426614174000",
            "memberships": [
                {"account_id": "...", "account_name": "Acme", "role": "client"}
            ]
        }
    """
    payload = authenticate(auth_token, jwt_service)
    return await get_memberships_use_case.execute(
        GetMembershipsRequest(requester_id=payload.user_id, user_id=str(user_id))
    )
