"""List account members use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ozza.domain.service import AccountService, RoleGate
from ozza.domain.value import AccessRole, AccountId, MemberRole, UserId


class MemberItem(BaseModel):
    """Member item in response."""

    user_id: str
    role: MemberRole
    joined_at: datetime


class ListMembersRequest(BaseModel):
    """List members request."""

    requester_id: str  # User ID from auth
    account_id: str


class ListMembersResponse(BaseModel):
    """List members response."""

    account_id: str
    account_name: str
    members: list[MemberItem]


class ListMembersUseCase:
    """Use case for listing members of an account.

    Requires at least ``agency`` in the account; clients cannot enumerate
    other members.
    """

    def __init__(self, account_service: AccountService, role_gate: RoleGate) -> None:
        """Initialize list members use case.

        Args:
            account_service: Account domain service
            role_gate: Authorization gate
        """
        self.account_service = account_service
        self.role_gate = role_gate

    async def execute(self, request: ListMembersRequest) -> ListMembersResponse:
        """Execute list members flow.

        Raises:
            UnauthorizedError: If the requester is below agency in the account
            NotFoundError: If the account does not exist
        """
        account_id = AccountId(UUID(request.account_id))
        await self.role_gate.require(
            UserId(UUID(request.requester_id)), account_id, AccessRole.AGENCY
        )

        account = await self.account_service.get_account(account_id)
        members = await self.account_service.list_members(account_id)

        return ListMembersResponse(
            account_id=str(account.id),
            account_name=account.name,
            members=[
                MemberItem(
                    user_id=str(member.user_id),
                    role=member.role,
                    joined_at=member.created_at,
                )
                for member in members
            ],
        )
