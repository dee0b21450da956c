"""Domain services."""

from .account_service import AccountService
from .base import Service
from .invitation_service import InvitationService
from .invitation_validator import InvitationValidator, ValidationResult
from .invite_token_service import InviteTokenService, TokenCheck
from .jwt_service import JWTService
from .membership_resolver import AcceptanceResult, MembershipResolver
from .role_gate import AuthorizationDecision, RoleGate

__all__ = [
    "AcceptanceResult",
    "AccountService",
    "AuthorizationDecision",
    "InvitationService",
    "InvitationValidator",
    "InviteTokenService",
    "JWTService",
    "MembershipResolver",
    "RoleGate",
    "Service",
    "TokenCheck",
    "ValidationResult",
]
