"""Accept invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from ozza.application.usecase.base import BaseUseCase
from ozza.domain.error import NotFoundError
from ozza.domain.repository import UserRepository
from ozza.domain.service import MembershipResolver
from ozza.domain.value import InvitationToken, MemberRole, UserId, UserRole

# Global role a membership role implies for a user who has none or less
IMPLIED_USER_ROLE: dict[MemberRole, UserRole] = {
    MemberRole.AGENCY: UserRole.AGENCY,
    MemberRole.CLIENT: UserRole.CLIENT,
}

# Global roles an accepted invitation may replace
PROMOTABLE: dict[UserRole | None, set[UserRole]] = {
    None: {UserRole.AGENCY, UserRole.CLIENT},
    UserRole.CLIENT: {UserRole.AGENCY},
}


class AcceptInvitationRequest(BaseModel):
    """Acceptance request."""

    token: str
    email: str
    user_id: str


class AcceptInvitationResponse(BaseModel):
    """Acceptance outcome. Failures are raised, not returned."""

    valid: bool = True
    role: MemberRole
    account_ref: str
    created: bool


class AcceptInvitationUseCase(BaseUseCase):
    """Use case for turning an invitation into a membership."""

    def __init__(
        self,
        membership_resolver: MembershipResolver,
        user_repository: UserRepository,
    ) -> None:
        """Initialize accept invitation use case.

        Args:
            membership_resolver: Membership resolver
            user_repository: User directory (global role promotion)
        """
        self.membership_resolver = membership_resolver
        self.user_repository = user_repository

    async def execute(
        self, request: AcceptInvitationRequest
    ) -> AcceptInvitationResponse:
        """Accept the invitation for the user.

        Raises:
            NotFoundError: If the user does not exist
            InvitationError: Tagged invitation failure
        """
        user_id = UserId(UUID(request.user_id))

        with logfire.span("accept_invitation.execute", user_id=request.user_id):
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                raise NotFoundError("User", request.user_id)

            result = await self.membership_resolver.accept(
                InvitationToken(root=request.token), user_id, request.email
            )

            implied = IMPLIED_USER_ROLE[result.role]
            if implied in PROMOTABLE.get(user.role, set()):
                await self.user_repository.update_role(user_id, implied)
                logfire.info(
                    "User role promoted",
                    user_id=request.user_id,
                    previous_role=user.role.value if user.role else None,
                    role=implied.value,
                )

            return AcceptInvitationResponse(
                role=result.role,
                account_ref=str(result.account_id),
                created=result.created,
            )
