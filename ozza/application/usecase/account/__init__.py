"""Account use cases."""

from ozza.application.usecase.account.create_account import (
    CreateAccountRequest,
    CreateAccountResponse,
    CreateAccountUseCase,
)
from ozza.application.usecase.account.get_memberships import (
    GetMembershipsRequest,
    GetMembershipsResponse,
    GetMembershipsUseCase,
)
from ozza.application.usecase.account.list_members import (
    ListMembersRequest,
    ListMembersResponse,
    ListMembersUseCase,
)

__all__ = [
    "CreateAccountRequest",
    "CreateAccountResponse",
    "CreateAccountUseCase",
    "GetMembershipsRequest",
    "GetMembershipsResponse",
    "GetMembershipsUseCase",
    "ListMembersRequest",
    "ListMembersResponse",
    "ListMembersUseCase",
]
