"""Get memberships use case."""

from uuid import UUID

from pydantic import BaseModel

from ozza.domain.service import AccountService, RoleGate
from ozza.domain.value import AccessRole, MemberRole, UserId


class MembershipItem(BaseModel):
    account_id: str
    account_name: str | None
    role: MemberRole


class GetMembershipsRequest(BaseModel):
    requester_id: str  # User ID from auth
    user_id: str


class GetMembershipsResponse(BaseModel):
    user_id: str
    memberships: list[MembershipItem]


class GetMembershipsUseCase:
    """Use case for listing the accounts a user belongs to.

    Users see their own memberships; anyone else needs to be a platform admin.
    """

    def __init__(self, account_service: AccountService, role_gate: RoleGate) -> None:
        self.account_service = account_service
        self.role_gate = role_gate

    async def execute(self, request: GetMembershipsRequest) -> GetMembershipsResponse:
        user_id = UserId(UUID(request.user_id))
        requester_id = UserId(UUID(request.requester_id))
        if requester_id != user_id:
            await self.role_gate.require(requester_id, None, AccessRole.ADMIN)

        memberships = await self.account_service.list_memberships(user_id)
        return GetMembershipsResponse(
            user_id=request.user_id,
            memberships=[
                MembershipItem(
                    account_id=str(m.account_id),
                    account_name=m.account_name,
                    role=m.role,
                )
                for m in memberships
            ],
        )
