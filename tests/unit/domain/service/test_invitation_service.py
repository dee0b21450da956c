"""Tests for InvitationService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from ozza.domain.error import BusinessRuleViolationError, UnauthorizedError
from ozza.domain.service import InvitationService
from ozza.domain.value import (
    AccountId,
    Email,
    InvitationKind,
    InvitationStatus,
    InvitationToken,
    MemberRole,
)
from ozza.util.clock import Clock
from tests.factories import add_member, make_account, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestIssueInvitation:
    """Tests for issuer authority."""

    @pytest.mark.asyncio
    async def test_owner_invites_agency(self, unit_env):
        # Arrange
        service = await unit_env.get(InvitationService)
        clock = await unit_env.get(Clock)
        coach = await make_user(unit_env)
        account = await make_account(unit_env, coach)

        # Act
        invitation = await service.issue(
            coach.id, account.id, Email("Agency@Example.com"), MemberRole.AGENCY
        )

        # Assert
        assert invitation.kind == InvitationKind.AGENCY
        assert invitation.role == MemberRole.AGENCY
        assert invitation.status == InvitationStatus.PENDING
        assert invitation.invited_by == coach.id
        assert invitation.email.root == "Agency@Example.com"
        assert invitation.expires_at == clock.now() + timedelta(days=7)
        assert len(invitation.token.root) >= 43

    @pytest.mark.asyncio
    async def test_agency_member_invites_client(self, unit_env):
        service = await unit_env.get(InvitationService)
        coach = await make_user(unit_env)
        account = await make_account(unit_env, coach)
        agency = await make_user(unit_env)
        await add_member(unit_env, account, agency, MemberRole.AGENCY)

        invitation = await service.issue(
            agency.id, account.id, Email("client@example.com"), MemberRole.CLIENT
        )

        assert invitation.kind == InvitationKind.CLIENT

    @pytest.mark.asyncio
    async def test_agency_member_cannot_invite_agency(self, unit_env):
        service = await unit_env.get(InvitationService)
        coach = await make_user(unit_env)
        account = await make_account(unit_env, coach)
        agency = await make_user(unit_env)
        await add_member(unit_env, account, agency, MemberRole.AGENCY)

        with pytest.raises(UnauthorizedError):
            await service.issue(
                agency.id, account.id, Email("a@example.com"), MemberRole.AGENCY
            )

    @pytest.mark.asyncio
    async def test_client_cannot_invite(self, unit_env):
        service = await unit_env.get(InvitationService)
        coach = await make_user(unit_env)
        account = await make_account(unit_env, coach)
        client = await make_user(unit_env)
        await add_member(unit_env, account, client, MemberRole.CLIENT)

        with pytest.raises(UnauthorizedError):
            await service.issue(
                client.id, account.id, Email("c@example.com"), MemberRole.CLIENT
            )

    @pytest.mark.asyncio
    async def test_ownership_is_never_granted(self, unit_env):
        service = await unit_env.get(InvitationService)
        coach = await make_user(unit_env)
        account = await make_account(unit_env, coach)

        with pytest.raises(UnauthorizedError):
            await service.issue(
                coach.id, account.id, Email("o@example.com"), MemberRole.OWNER
            )

    @pytest.mark.asyncio
    async def test_outsider_cannot_invite(self, unit_env):
        service = await unit_env.get(InvitationService)
        coach = await make_user(unit_env)
        account = await make_account(unit_env, coach)
        outsider = await make_user(unit_env)

        with pytest.raises(UnauthorizedError):
            await service.issue(
                outsider.id, account.id, Email("c@example.com"), MemberRole.CLIENT
            )

    @pytest.mark.asyncio
    async def test_duplicate_pending_invitation_rejected(self, unit_env):
        """Email comparison for duplicates ignores case."""
        service = await unit_env.get(InvitationService)
        coach = await make_user(unit_env)
        account = await make_account(unit_env, coach)
        await service.issue(
            coach.id, account.id, Email("client@example.com"), MemberRole.CLIENT
        )

        with pytest.raises(BusinessRuleViolationError):
            await service.issue(
                coach.id, account.id, Email("CLIENT@example.com"), MemberRole.CLIENT
            )

    @pytest.mark.asyncio
    async def test_reinvite_after_expiry_allowed(self, unit_env):
        service = await unit_env.get(InvitationService)
        clock = await unit_env.get(Clock)
        coach = await make_user(unit_env)
        account = await make_account(unit_env, coach)
        first = await service.issue(
            coach.id, account.id, Email("client@example.com"), MemberRole.CLIENT
        )
        clock.advance(timedelta(days=8))

        second = await service.issue(
            coach.id, account.id, Email("client@example.com"), MemberRole.CLIENT
        )

        assert second.token != first.token


class TestInvitationLifecycle:
    """Tests for mark-used, expiry sweep and listing."""

    @pytest.mark.asyncio
    async def test_mark_used_is_idempotent(self, unit_env):
        service = await unit_env.get(InvitationService)
        invitation = await service.create(
            Email("c@example.com"),
            MemberRole.CLIENT,
            AccountId(uuid4()),
            timedelta(days=7),
        )

        assert await service.mark_used(invitation.token) is True
        assert await service.mark_used(invitation.token) is False

        stored = await service.get_by_token(invitation.token)
        assert stored.status == InvitationStatus.USED

    @pytest.mark.asyncio
    async def test_mark_used_unknown_token_is_noop(self, unit_env):
        service = await unit_env.get(InvitationService)

        assert await service.mark_used(InvitationToken(root="unknown")) is False

    @pytest.mark.asyncio
    async def test_expire_stale_only_touches_pending_past_expiry(self, unit_env):
        service = await unit_env.get(InvitationService)
        clock = await unit_env.get(Clock)
        account_id = AccountId(uuid4())
        short = await service.create(
            Email("a@example.com"), MemberRole.CLIENT, account_id, timedelta(days=1)
        )
        used = await service.create(
            Email("b@example.com"), MemberRole.CLIENT, account_id, timedelta(days=1)
        )
        await service.create(
            Email("c@example.com"), MemberRole.CLIENT, account_id, timedelta(days=7)
        )
        await service.mark_used(used.token)
        clock.advance(timedelta(days=2))

        count = await service.expire_stale()

        assert count == 1
        assert (await service.get_by_token(short.token)).status == InvitationStatus.EXPIRED
        assert (await service.get_by_token(used.token)).status == InvitationStatus.USED

    @pytest.mark.asyncio
    async def test_list_for_account_newest_first_with_filter(self, unit_env):
        service = await unit_env.get(InvitationService)
        clock = await unit_env.get(Clock)
        account_id = AccountId(uuid4())
        older = await service.create(
            Email("a@example.com"), MemberRole.CLIENT, account_id, timedelta(days=7)
        )
        clock.advance(timedelta(minutes=1))
        newer = await service.create(
            Email("b@example.com"), MemberRole.AGENCY, account_id, timedelta(days=7)
        )
        await service.create(
            Email("c@example.com"),
            MemberRole.CLIENT,
            AccountId(uuid4()),
            timedelta(days=7),
        )
        await service.mark_used(older.token)

        everything = await service.list_for_account(account_id)
        pending = await service.list_for_account(
            account_id, status=InvitationStatus.PENDING
        )
        paged = await service.list_for_account(account_id, limit=1, offset=1)

        assert [i.id for i in everything] == [newer.id, older.id]
        assert [i.id for i in pending] == [newer.id]
        assert [i.id for i in paged] == [older.id]
