"""Invitation use cases."""

from ozza.application.usecase.invitation.accept_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from ozza.application.usecase.invitation.create_invitation import (
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
)
from ozza.application.usecase.invitation.list_invitations import (
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
)
from ozza.application.usecase.invitation.mark_invitation_used import (
    MarkInvitationUsedRequest,
    MarkInvitationUsedResponse,
    MarkInvitationUsedUseCase,
)
from ozza.application.usecase.invitation.verify_invitation import (
    VerifyInvitationRequest,
    VerifyInvitationResponse,
    VerifyInvitationUseCase,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "CreateInvitationRequest",
    "CreateInvitationResponse",
    "CreateInvitationUseCase",
    "ListInvitationsRequest",
    "ListInvitationsResponse",
    "ListInvitationsUseCase",
    "MarkInvitationUsedRequest",
    "MarkInvitationUsedResponse",
    "MarkInvitationUsedUseCase",
    "VerifyInvitationRequest",
    "VerifyInvitationResponse",
    "VerifyInvitationUseCase",
]
