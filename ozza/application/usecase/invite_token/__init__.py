"""Invite token use cases."""

from ozza.application.usecase.invite_token.create_invite_token import (
    CreateInviteTokenRequest,
    CreateInviteTokenResponse,
    CreateInviteTokenUseCase,
)
from ozza.application.usecase.invite_token.redeem_invite_token import (
    RedeemInviteTokenRequest,
    RedeemInviteTokenResponse,
    RedeemInviteTokenUseCase,
)
from ozza.application.usecase.invite_token.verify_invite_token import (
    VerifyInviteTokenRequest,
    VerifyInviteTokenResponse,
    VerifyInviteTokenUseCase,
)

__all__ = [
    "CreateInviteTokenRequest",
    "CreateInviteTokenResponse",
    "CreateInviteTokenUseCase",
    "RedeemInviteTokenRequest",
    "RedeemInviteTokenResponse",
    "RedeemInviteTokenUseCase",
    "VerifyInviteTokenRequest",
    "VerifyInviteTokenResponse",
    "VerifyInviteTokenUseCase",
]
