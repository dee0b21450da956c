"""Tests for the invitation use cases, issuance through acceptance."""

from datetime import timedelta

import pytest

from ozza.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationUseCase,
    CreateInvitationRequest,
    CreateInvitationUseCase,
    ListInvitationsRequest,
    ListInvitationsUseCase,
    MarkInvitationUsedRequest,
    MarkInvitationUsedUseCase,
    VerifyInvitationRequest,
    VerifyInvitationUseCase,
)
from ozza.domain.error import (
    EmailMismatchError,
    InvitationExpiredError,
    NotFoundError,
    UnauthorizedError,
)
from ozza.domain.repository import UserRepository
from ozza.domain.value import FailureReason, InvitationStatus, MemberRole, UserRole
from ozza.util.clock import Clock
from tests.factories import add_member, make_account, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _issue(env, issuer, account, email, role=MemberRole.CLIENT):
    use_case = await env.get(CreateInvitationUseCase)
    return await use_case.execute(
        CreateInvitationRequest(
            issuer_id=str(issuer.id),
            account_id=str(account.id),
            email=email,
            role=role,
            invitee_name="Jamie",
        )
    )


class TestCreateInvitationUseCase:
    """Tests for CreateInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_response_carries_invite_link(self, unit_env):
        coach = await make_user(unit_env, role=UserRole.COACH)
        account = await make_account(unit_env, coach)

        response = await _issue(unit_env, coach, account, "client@example.com")

        assert response.invite_url == (
            f"http://localhost:3000/signup?token={response.token}"
        )
        assert response.status == InvitationStatus.PENDING
        assert response.account_id == str(account.id)


class TestVerifyInvitationUseCase:
    """Tests for VerifyInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_valid(self, unit_env):
        coach = await make_user(unit_env, role=UserRole.COACH)
        account = await make_account(unit_env, coach)
        issued = await _issue(unit_env, coach, account, "client@example.com")
        use_case = await unit_env.get(VerifyInvitationUseCase)

        response = await use_case.execute(
            VerifyInvitationRequest(token=issued.token, email="Client@Example.com")
        )

        assert response.valid is True
        assert response.role == MemberRole.CLIENT
        assert response.account_ref == str(account.id)
        assert response.error is None

    @pytest.mark.asyncio
    async def test_failure_is_returned_not_raised(self, unit_env):
        use_case = await unit_env.get(VerifyInvitationUseCase)

        response = await use_case.execute(
            VerifyInvitationRequest(token="missing", email="a@example.com")
        )

        assert response.valid is False
        assert response.error == FailureReason.NOT_FOUND
        assert response.role is None


class TestAcceptInvitationUseCase:
    """Tests for AcceptInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_accept_promotes_roleless_user(self, unit_env):
        # Arrange
        coach = await make_user(unit_env, role=UserRole.COACH)
        account = await make_account(unit_env, coach)
        invitee = await make_user(unit_env, "client@example.com")
        issued = await _issue(unit_env, coach, account, "client@example.com")
        use_case = await unit_env.get(AcceptInvitationUseCase)
        users = await unit_env.get(UserRepository)

        # Act
        response = await use_case.execute(
            AcceptInvitationRequest(
                token=issued.token, email="client@example.com", user_id=str(invitee.id)
            )
        )

        # Assert
        assert response.valid is True
        assert response.role == MemberRole.CLIENT
        assert response.account_ref == str(account.id)
        assert response.created is True
        assert (await users.find_by_id(invitee.id)).role == UserRole.CLIENT

    @pytest.mark.asyncio
    async def test_accept_agency_promotes_client(self, unit_env):
        coach = await make_user(unit_env, role=UserRole.COACH)
        account = await make_account(unit_env, coach)
        invitee = await make_user(unit_env, "agency@example.com", role=UserRole.CLIENT)
        issued = await _issue(
            unit_env, coach, account, "agency@example.com", MemberRole.AGENCY
        )
        use_case = await unit_env.get(AcceptInvitationUseCase)
        users = await unit_env.get(UserRepository)

        await use_case.execute(
            AcceptInvitationRequest(
                token=issued.token, email="agency@example.com", user_id=str(invitee.id)
            )
        )

        assert (await users.find_by_id(invitee.id)).role == UserRole.AGENCY

    @pytest.mark.asyncio
    async def test_accept_never_demotes(self, unit_env):
        """A coach joining another account as client stays a coach."""
        coach = await make_user(unit_env, role=UserRole.COACH)
        account = await make_account(unit_env, coach)
        other_coach = await make_user(unit_env, "coach2@example.com", role=UserRole.COACH)
        issued = await _issue(unit_env, coach, account, "coach2@example.com")
        use_case = await unit_env.get(AcceptInvitationUseCase)
        users = await unit_env.get(UserRepository)

        await use_case.execute(
            AcceptInvitationRequest(
                token=issued.token,
                email="coach2@example.com",
                user_id=str(other_coach.id),
            )
        )

        assert (await users.find_by_id(other_coach.id)).role == UserRole.COACH

    @pytest.mark.asyncio
    async def test_unknown_user(self, unit_env):
        coach = await make_user(unit_env, role=UserRole.COACH)
        account = await make_account(unit_env, coach)
        issued = await _issue(unit_env, coach, account, "client@example.com")
        use_case = await unit_env.get(AcceptInvitationUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                AcceptInvitationRequest(
                    token=issued.token,
                    email="client@example.com",
                    user_id="00000000-0000-0000-0000-000000000000",
                )
            )

    @pytest.mark.asyncio
    async def test_expired_invitation_leaves_role_untouched(self, unit_env):
        coach = await make_user(unit_env, role=UserRole.COACH)
        account = await make_account(unit_env, coach)
        invitee = await make_user(unit_env, "client@example.com")
        issued = await _issue(unit_env, coach, account, "client@example.com")
        clock = await unit_env.get(Clock)
        clock.advance(timedelta(days=8))
        use_case = await unit_env.get(AcceptInvitationUseCase)
        users = await unit_env.get(UserRepository)

        with pytest.raises(InvitationExpiredError):
            await use_case.execute(
                AcceptInvitationRequest(
                    token=issued.token,
                    email="client@example.com",
                    user_id=str(invitee.id),
                )
            )

        assert (await users.find_by_id(invitee.id)).role is None

    @pytest.mark.asyncio
    async def test_stranger_with_invited_email_is_rejected(self, unit_env):
        """Only the user registered under the invited address may accept."""
        coach = await make_user(unit_env, role=UserRole.COACH)
        account = await make_account(unit_env, coach)
        await make_user(unit_env, "client@example.com")
        stranger = await make_user(unit_env, "stranger@example.com")
        issued = await _issue(unit_env, coach, account, "client@example.com")
        use_case = await unit_env.get(AcceptInvitationUseCase)
        users = await unit_env.get(UserRepository)

        with pytest.raises(EmailMismatchError):
            await use_case.execute(
                AcceptInvitationRequest(
                    token=issued.token,
                    email="client@example.com",
                    user_id=str(stranger.id),
                )
            )

        assert (await users.find_by_id(stranger.id)).role is None


class TestMarkInvitationUsedUseCase:
    """Tests for MarkInvitationUsedUseCase."""

    @pytest.mark.asyncio
    async def test_always_succeeds(self, unit_env):
        coach = await make_user(unit_env, role=UserRole.COACH)
        account = await make_account(unit_env, coach)
        issued = await _issue(unit_env, coach, account, "client@example.com")
        use_case = await unit_env.get(MarkInvitationUsedUseCase)

        first = await use_case.execute(MarkInvitationUsedRequest(token=issued.token))
        second = await use_case.execute(MarkInvitationUsedRequest(token=issued.token))
        unknown = await use_case.execute(MarkInvitationUsedRequest(token="unknown"))

        assert (first.success, first.changed) == (True, True)
        assert (second.success, second.changed) == (True, False)
        assert (unknown.success, unknown.changed) == (True, False)


class TestListInvitationsUseCase:
    """Tests for ListInvitationsUseCase."""

    @pytest.mark.asyncio
    async def test_owner_lists_invitations(self, unit_env):
        coach = await make_user(unit_env, role=UserRole.COACH)
        account = await make_account(unit_env, coach)
        issued = await _issue(unit_env, coach, account, "client@example.com")
        use_case = await unit_env.get(ListInvitationsUseCase)

        response = await use_case.execute(
            ListInvitationsRequest(requester_id=str(coach.id), account_id=str(account.id))
        )

        assert response.total == 1
        item = response.invitations[0]
        assert item.invitation_id == issued.invitation_id
        assert item.invitee_name == "Jamie"
        assert item.invite_url == issued.invite_url

    @pytest.mark.asyncio
    async def test_agency_member_cannot_list(self, unit_env):
        coach = await make_user(unit_env, role=UserRole.COACH)
        account = await make_account(unit_env, coach)
        agency = await make_user(unit_env)
        await add_member(unit_env, account, agency, MemberRole.AGENCY)
        use_case = await unit_env.get(ListInvitationsUseCase)

        with pytest.raises(UnauthorizedError):
            await use_case.execute(
                ListInvitationsRequest(
                    requester_id=str(agency.id), account_id=str(account.id)
                )
            )
