"""Tests for the invite token use cases."""

import pytest

from ozza.application.usecase.invite_token import (
    CreateInviteTokenRequest,
    CreateInviteTokenUseCase,
    RedeemInviteTokenRequest,
    RedeemInviteTokenUseCase,
    VerifyInviteTokenRequest,
    VerifyInviteTokenUseCase,
)
from ozza.domain.error import InvitationNotFoundError
from ozza.domain.value import FailureReason, UserRole
from tests.factories import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestInviteTokenUseCases:
    """Tests for issue, verify and redeem."""

    @pytest.mark.asyncio
    async def test_coach_invite_round(self, unit_env):
        # Arrange
        admin = await make_user(unit_env, role=UserRole.ADMIN)
        create = await unit_env.get(CreateInviteTokenUseCase)
        verify = await unit_env.get(VerifyInviteTokenUseCase)
        redeem = await unit_env.get(RedeemInviteTokenUseCase)

        # Act
        issued = await create.execute(
            CreateInviteTokenRequest(issuer_id=str(admin.id), email="coach@example.com")
        )
        checked = await verify.execute(
            VerifyInviteTokenRequest(token=issued.token, email="coach@example.com")
        )
        coach = await make_user(unit_env, "coach@example.com")
        redeemed = await redeem.execute(
            RedeemInviteTokenRequest(
                token=issued.token, email="coach@example.com", user_id=str(coach.id)
            )
        )

        # Assert
        assert issued.role == UserRole.COACH
        assert issued.invite_url.endswith(f"?token={issued.token}")
        assert checked.valid is True
        assert checked.role == UserRole.COACH
        assert checked.expires_at == issued.expires_at
        assert redeemed.role == UserRole.COACH
        assert redeemed.user_id == str(coach.id)

        with pytest.raises(InvitationNotFoundError):
            await redeem.execute(
                RedeemInviteTokenRequest(
                    token=issued.token, email="coach@example.com", user_id=str(coach.id)
                )
            )

    @pytest.mark.asyncio
    async def test_verify_unknown(self, unit_env):
        verify = await unit_env.get(VerifyInviteTokenUseCase)

        response = await verify.execute(
            VerifyInviteTokenRequest(token="missing", email="a@example.com")
        )

        assert response.valid is False
        assert response.error == FailureReason.NOT_FOUND
