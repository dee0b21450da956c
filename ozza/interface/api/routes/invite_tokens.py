"""Ephemeral invite token routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from ozza.application.usecase.invite_token import (
    RedeemInviteTokenRequest,
    RedeemInviteTokenResponse,
    RedeemInviteTokenUseCase,
    VerifyInviteTokenRequest,
    VerifyInviteTokenResponse,
    VerifyInviteTokenUseCase,
)

router = APIRouter(
    prefix="/invite-tokens", tags=["invite-tokens"], route_class=DishkaRoute
)


@router.get("/verify", response_model=VerifyInviteTokenResponse)
async def verify_invite_token(
    verify_invite_token_use_case: FromDishka[VerifyInviteTokenUseCase],
    token: str = Query(min_length=1, max_length=255),
    email: str = Query(min_length=1),
) -> VerifyInviteTokenResponse:
    """Check an ephemeral token without consuming it."""
    return await verify_invite_token_use_case.execute(
        VerifyInviteTokenRequest(token=token, email=email)
    )


@router.post("/redeem", response_model=RedeemInviteTokenResponse)
async def redeem_invite_token(
    request: RedeemInviteTokenRequest,
    redeem_invite_token_use_case: FromDishka[RedeemInviteTokenUseCase],
) -> RedeemInviteTokenResponse:
    """Consume a token right after signup and assign its role."""
    return await redeem_invite_token_use_case.execute(request)
