"""Integration tests for the Postgres invitation repository and token store.

Requires Postgres at DATABASE__URL with migrations applied.
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from ozza.domain.model import Invitation
from ozza.domain.repository import (
    InvitationRepository,
    InviteTokenStore,
    MembershipRepository,
)
from ozza.domain.service import MembershipResolver
from ozza.domain.value import (
    Email,
    InvitationId,
    InvitationKind,
    InvitationStatus,
    InvitationToken,
    MemberRole,
    UserRole,
)
from ozza.util.clock import Clock
from tests.factories import make_account, make_user
from tests.harness import create_env_fixture

# Integration test fixture - real persistence, frozen clock
integration_env = create_env_fixture(unmock={"persistence"})


async def _invitation(env, email: str) -> Invitation:
    clock = await env.get(Clock)
    coach = await make_user(env, f"coach-{uuid4().hex[:8]}@example.com", UserRole.COACH)
    account = await make_account(env, coach)
    now = clock.now()
    return Invitation(
        id=InvitationId(uuid4()),
        kind=InvitationKind.CLIENT,
        token=InvitationToken.generate(),
        email=Email(email),
        role=MemberRole.CLIENT,
        account_id=account.id,
        invited_by=coach.id,
        expires_at=now + timedelta(days=7),
        created_at=now,
        updated_at=now,
    )


@pytest.mark.integration
class TestPostgresInvitationRepository:
    @pytest.mark.asyncio
    async def test_create_and_find(self, integration_env):
        repository = await integration_env.get(InvitationRepository)
        invitation = await _invitation(integration_env, "Client@Example.com")

        await repository.create(invitation)

        found = await repository.find_by_token(invitation.token)
        assert found.id == invitation.id
        assert found.email.root == "Client@Example.com"
        assert found.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_exists_pending_ignores_case(self, integration_env):
        repository = await integration_env.get(InvitationRepository)
        clock = await integration_env.get(Clock)
        invitation = await _invitation(integration_env, "Client@Example.com")
        await repository.create(invitation)

        assert await repository.exists_pending(
            Email("client@example.com"), invitation.account_id, clock.now()
        )
        assert not await repository.exists_pending(
            Email("client@example.com"),
            invitation.account_id,
            invitation.expires_at,
        )

    @pytest.mark.asyncio
    async def test_mark_accepted_is_conditional(self, integration_env):
        repository = await integration_env.get(InvitationRepository)
        clock = await integration_env.get(Clock)
        invitation = await _invitation(integration_env, "c@example.com")
        await repository.create(invitation)
        user = await make_user(integration_env, "c@example.com")

        first = await repository.mark_accepted(invitation.id, user.id, clock.now())
        second = await repository.mark_accepted(invitation.id, user.id, clock.now())

        assert (first, second) == (True, False)
        stored = await repository.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.ACCEPTED
        assert stored.accepted_by_user_id == user.id

    @pytest.mark.asyncio
    async def test_accept_commits_claim_and_membership(self, integration_env):
        resolver = await integration_env.get(MembershipResolver)
        repository = await integration_env.get(InvitationRepository)
        memberships = await integration_env.get(MembershipRepository)
        invitation = await _invitation(integration_env, "c@example.com")
        await repository.create(invitation)
        user = await make_user(integration_env, "c@example.com")

        result = await resolver.accept(invitation.token, user.id, "c@example.com")

        assert result.created is True
        member = await memberships.find(invitation.account_id, user.id)
        assert member.role == MemberRole.CLIENT


@pytest.mark.integration
class TestPostgresInviteTokenStore:
    @pytest.mark.asyncio
    async def test_consume_once(self, integration_env):
        store = await integration_env.get(InviteTokenStore)
        record = await store.issue(Email("coach@example.com"), UserRole.COACH)

        assert await store.consume(record.token) is True
        assert await store.consume(record.token) is False

    @pytest.mark.asyncio
    async def test_lookup_drops_expired(self, integration_env):
        store = await integration_env.get(InviteTokenStore)
        clock = await integration_env.get(Clock)
        record = await store.issue(Email("coach@example.com"), UserRole.COACH)
        clock.advance(timedelta(days=7))

        assert await store.lookup(record.token) is None
        assert await store.consume(record.token) is False
