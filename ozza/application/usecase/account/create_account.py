"""Create account use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ozza.application.usecase.base import BaseUseCase
from ozza.domain.service import AccountService
from ozza.domain.value import UserId


class CreateAccountRequest(BaseModel):
    """Create account request."""

    owner_id: str  # User ID from auth
    name: str = Field(min_length=1, max_length=255)


class CreateAccountResponse(BaseModel):
    """Create account response."""

    account_id: str
    name: str
    owner_id: str
    created_at: datetime


class CreateAccountUseCase(BaseUseCase):
    """Use case for a coach opening an agency account."""

    def __init__(self, account_service: AccountService) -> None:
        """Initialize create account use case.

        Args:
            account_service: Account domain service
        """
        self.account_service = account_service

    async def execute(self, request: CreateAccountRequest) -> CreateAccountResponse:
        """Create the account with the caller as owner.

        Raises:
            NotFoundError: If the caller does not exist
            UnauthorizedError: If the caller is not a coach
        """
        account = await self.account_service.create_account(
            UserId(UUID(request.owner_id)), request.name
        )
        return CreateAccountResponse(
            account_id=str(account.id),
            name=account.name,
            owner_id=str(account.owner_id),
            created_at=account.created_at,
        )
