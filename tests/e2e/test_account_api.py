"""End-to-end tests for account, membership and invite token endpoints."""

import pytest

from ozza.domain.value import MemberRole, UserRole
from tests.e2e.helpers import session_headers
from tests.factories import add_member, make_account, make_user


class TestAccountEndpoints:
    """Tests for account endpoints."""

    @pytest.mark.asyncio
    async def test_coach_creates_account(self, client, container):
        async with container() as env:
            coach = await make_user(env, role=UserRole.COACH)
            headers = await session_headers(env, coach)

        response = await client.post(
            "/accounts", json={"name": "Northwind"}, headers=headers
        )

        assert response.status_code == 201
        assert response.json()["owner_id"] == str(coach.id)

    @pytest.mark.asyncio
    async def test_client_cannot_create_account(self, client, container):
        async with container() as env:
            user = await make_user(env, role=UserRole.CLIENT)
            headers = await session_headers(env, user)

        response = await client.post("/accounts", json={"name": "X"}, headers=headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_members_and_invitations_listing(self, client, container):
        async with container() as env:
            coach = await make_user(env, role=UserRole.COACH)
            account = await make_account(env, coach)
            client_user = await make_user(env)
            await add_member(env, account, client_user, MemberRole.CLIENT)
            coach_headers = await session_headers(env, coach)
            client_headers = await session_headers(env, client_user)

        members = await client.get(
            f"/accounts/{account.id}/members", headers=coach_headers
        )
        denied = await client.get(
            f"/accounts/{account.id}/members", headers=client_headers
        )
        invitations = await client.get(
            f"/accounts/{account.id}/invitations",
            params={"status": "pending"},
            headers=coach_headers,
        )

        assert members.status_code == 200
        assert len(members.json()["members"]) == 2
        assert denied.status_code == 403
        assert invitations.status_code == 200
        assert invitations.json() == {"invitations": [], "total": 0}

    @pytest.mark.asyncio
    async def test_own_memberships(self, client, container):
        async with container() as env:
            coach = await make_user(env, role=UserRole.COACH)
            account = await make_account(env, coach, name="Northwind")
            headers = await session_headers(env, coach)

        response = await client.get(f"/users/{coach.id}/memberships", headers=headers)

        assert response.status_code == 200
        assert response.json()["memberships"] == [
            {"account_id": str(account.id), "account_name": "Northwind", "role": "owner"}
        ]


class TestInviteTokenEndpoints:
    """Tests for the coach signup token flow."""

    @pytest.mark.asyncio
    async def test_invite_coach_and_redeem(self, client, container):
        # Arrange
        async with container() as env:
            admin = await make_user(env, role=UserRole.ADMIN)
            admin_headers = await session_headers(env, admin)

        # Act
        issued = await client.post(
            "/admin/invite-coach",
            json={"email": "coach@example.com"},
            headers=admin_headers,
        )
        token = issued.json()["token"]
        verified = await client.get(
            "/invite-tokens/verify",
            params={"token": token, "email": "coach@example.com"},
        )
        async with container() as env:
            coach = await make_user(env, "coach@example.com")
        redeemed = await client.post(
            "/invite-tokens/redeem",
            json={"token": token, "email": "coach@example.com", "user_id": str(coach.id)},
        )
        again = await client.post(
            "/invite-tokens/redeem",
            json={"token": token, "email": "coach@example.com", "user_id": str(coach.id)},
        )

        # Assert
        assert issued.status_code == 201
        assert verified.json()["valid"] is True
        assert verified.json()["role"] == "coach"
        assert redeemed.status_code == 200
        assert redeemed.json()["role"] == "coach"
        assert again.status_code == 404
        assert again.json() == {"valid": False, "error": "not-found"}

    @pytest.mark.asyncio
    async def test_non_admin_cannot_invite_coach(self, client, container):
        async with container() as env:
            coach = await make_user(env, role=UserRole.COACH)
            headers = await session_headers(env, coach)

        response = await client.post(
            "/admin/invite-coach", json={"email": "x@example.com"}, headers=headers
        )

        assert response.status_code == 403


class TestHealthEndpoint:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
