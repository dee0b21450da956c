"""Tests for the in-memory unit of work."""

from uuid import uuid4

import pytest

from ozza.domain.model import AccountMember
from ozza.domain.repository import MembershipRepository, UnitOfWork
from ozza.domain.value import AccountId, MemberRole, UserId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def _member() -> AccountMember:
    return AccountMember(
        account_id=AccountId(uuid4()), user_id=UserId(uuid4()), role=MemberRole.CLIENT
    )


class TestInMemoryUnitOfWork:
    @pytest.mark.asyncio
    async def test_commit_keeps_writes(self, unit_env):
        uow = await unit_env.get(UnitOfWork)
        memberships = await unit_env.get(MembershipRepository)
        member = _member()

        async with uow.transaction():
            await memberships.add(member)

        assert await memberships.find(member.account_id, member.user_id) == member

    @pytest.mark.asyncio
    async def test_failure_rolls_back_every_write(self, unit_env):
        uow = await unit_env.get(UnitOfWork)
        memberships = await unit_env.get(MembershipRepository)
        member = _member()

        with pytest.raises(RuntimeError):
            async with uow.transaction():
                await memberships.add(member)
                raise RuntimeError("boom")

        assert await memberships.find(member.account_id, member.user_id) is None

    @pytest.mark.asyncio
    async def test_nested_failure_only_rolls_back_inner_block(self, unit_env):
        uow = await unit_env.get(UnitOfWork)
        memberships = await unit_env.get(MembershipRepository)
        outer, inner = _member(), _member()

        async with uow.transaction():
            await memberships.add(outer)
            with pytest.raises(RuntimeError):
                async with uow.transaction():
                    await memberships.add(inner)
                    raise RuntimeError("boom")

        assert await memberships.find(outer.account_id, outer.user_id) is not None
        assert await memberships.find(inner.account_id, inner.user_id) is None
