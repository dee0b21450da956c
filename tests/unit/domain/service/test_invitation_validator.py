"""Tests for InvitationValidator."""

from datetime import timedelta
from uuid import uuid4

import pytest

from ozza.domain.repository import InvitationRepository
from ozza.domain.service import InvitationService, InvitationValidator
from ozza.domain.value import (
    AccountId,
    Email,
    FailureReason,
    InvitationStatus,
    InvitationToken,
    MemberRole,
)
from ozza.util.clock import Clock
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

TTL = timedelta(days=7)


async def _pending(env, email: str = "Client@Example.com", role=MemberRole.CLIENT):
    service = await env.get(InvitationService)
    return await service.create(Email(email), role, AccountId(uuid4()), TTL)


class TestInvitationValidator:
    """Tests for validation order and outcomes."""

    @pytest.mark.asyncio
    async def test_valid_pending_invitation(self, unit_env):
        """A pending invitation validates and returns its bound role."""
        validator = await unit_env.get(InvitationValidator)
        invitation = await _pending(unit_env)

        result = await validator.validate(invitation.token, "client@example.com")

        assert result.valid is True
        assert result.reason is None
        assert result.role == MemberRole.CLIENT
        assert result.account_id == invitation.account_id

    @pytest.mark.asyncio
    async def test_unknown_token_is_not_found(self, unit_env):
        validator = await unit_env.get(InvitationValidator)

        result = await validator.validate(
            InvitationToken(root="no-such-token"), "anyone@example.com"
        )

        assert result.valid is False
        assert result.reason == FailureReason.NOT_FOUND
        assert result.invitation is None

    @pytest.mark.asyncio
    async def test_email_comparison_ignores_case_and_whitespace(self, unit_env):
        validator = await unit_env.get(InvitationValidator)
        invitation = await _pending(unit_env)

        result = await validator.validate(invitation.token, "  CLIENT@example.COM ")

        assert result.valid is True

    @pytest.mark.asyncio
    async def test_wrong_email_is_mismatch(self, unit_env):
        validator = await unit_env.get(InvitationValidator)
        invitation = await _pending(unit_env)

        result = await validator.validate(invitation.token, "other@example.com")

        assert result.valid is False
        assert result.reason == FailureReason.EMAIL_MISMATCH

    @pytest.mark.asyncio
    async def test_expires_exactly_at_expiry(self, unit_env):
        """``expires_at <= now`` counts as expired."""
        validator = await unit_env.get(InvitationValidator)
        clock = await unit_env.get(Clock)
        invitation = await _pending(unit_env)

        clock.advance(TTL - timedelta(seconds=1))
        assert (await validator.validate(invitation.token, "client@example.com")).valid

        clock.advance(timedelta(seconds=1))
        result = await validator.validate(invitation.token, "client@example.com")

        assert result.valid is False
        assert result.reason == FailureReason.EXPIRED

    @pytest.mark.asyncio
    async def test_email_mismatch_reported_before_expiry(self, unit_env):
        validator = await unit_env.get(InvitationValidator)
        clock = await unit_env.get(Clock)
        invitation = await _pending(unit_env)
        clock.advance(timedelta(days=8))

        result = await validator.validate(invitation.token, "other@example.com")

        assert result.reason == FailureReason.EMAIL_MISMATCH

    @pytest.mark.asyncio
    async def test_expiry_reported_before_status(self, unit_env):
        """A used invitation past expiry reports expired."""
        validator = await unit_env.get(InvitationValidator)
        service = await unit_env.get(InvitationService)
        clock = await unit_env.get(Clock)
        invitation = await _pending(unit_env)
        await service.mark_used(invitation.token)
        clock.advance(timedelta(days=8))

        result = await validator.validate(invitation.token, "client@example.com")

        assert result.reason == FailureReason.EXPIRED

    @pytest.mark.asyncio
    async def test_used_invitation_is_already_used(self, unit_env):
        validator = await unit_env.get(InvitationValidator)
        service = await unit_env.get(InvitationService)
        invitation = await _pending(unit_env)
        await service.mark_used(invitation.token)

        result = await validator.validate(invitation.token, "client@example.com")

        assert result.valid is False
        assert result.reason == FailureReason.ALREADY_USED
        assert result.invitation.status == InvitationStatus.USED

    @pytest.mark.asyncio
    async def test_validation_never_mutates(self, unit_env):
        validator = await unit_env.get(InvitationValidator)
        repository = await unit_env.get(InvitationRepository)
        invitation = await _pending(unit_env)

        for email in ("client@example.com", "other@example.com"):
            await validator.validate(invitation.token, email)

        stored = await repository.find_by_token(invitation.token)
        assert stored == invitation
