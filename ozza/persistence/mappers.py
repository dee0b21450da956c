"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from ozza.domain.model import (
    Account,
    AccountMember,
    Invitation,
    InviteToken,
    MembershipView,
    User,
)
from ozza.domain.value import (
    AccountId,
    Email,
    InvitationId,
    InvitationKind,
    InvitationStatus,
    InvitationToken,
    MemberRole,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_user_id(value: Any) -> UserId | None:
    return UserId(_uuid(value)) if value else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=Email(row["email"]),
        name=row.get("name"),
        role=UserRole(row["role"]) if row.get("role") else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return {
        "id": user.id,
        "email": user.email.root,
        "name": user.name,
        "role": user.role.value if user.role else None,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model."""
    return Account(
        id=AccountId(_uuid(row["id"])),
        name=row["name"],
        owner_id=UserId(_uuid(row["owner_id"])),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict."""
    return {
        "id": account.id,
        "name": account.name,
        "owner_id": account.owner_id,
        "created_at": account.created_at,
        "updated_at": account.updated_at,
    }


def row_to_member(row: Dict[str, Any]) -> AccountMember:
    """Convert database row to AccountMember domain model."""
    return AccountMember(
        account_id=AccountId(_uuid(row["account_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        role=MemberRole(row["role"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def member_to_dict(member: AccountMember) -> Dict[str, Any]:
    """Convert AccountMember domain model to database dict."""
    return {
        "account_id": member.account_id,
        "user_id": member.user_id,
        "role": member.role.value,
        "created_at": member.created_at,
        "updated_at": member.updated_at,
    }


def row_to_membership_view(row: Dict[str, Any]) -> MembershipView:
    """Convert a membership/account join row to MembershipView."""
    return MembershipView(
        account_id=AccountId(_uuid(row["account_id"])),
        account_name=row.get("account_name"),
        role=MemberRole(row["role"]),
    )


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        kind=InvitationKind(row["kind"]),
        token=InvitationToken(root=row["token"]),
        email=Email(row["email"]),
        role=MemberRole(row["role"]),
        account_id=AccountId(_uuid(row["account_id"])),
        invited_by=_optional_user_id(row.get("invited_by")),
        invitee_name=row.get("invitee_name"),
        status=InvitationStatus(row["status"]),
        expires_at=row["expires_at"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        accepted_at=row.get("accepted_at"),
        accepted_by_user_id=_optional_user_id(row.get("accepted_by_user_id")),
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict."""
    return {
        "id": invitation.id,
        "kind": invitation.kind.value,
        "token": invitation.token.root,
        "email": invitation.email.root,
        "role": invitation.role.value,
        "account_id": invitation.account_id,
        "invited_by": invitation.invited_by,
        "invitee_name": invitation.invitee_name,
        "status": invitation.status.value,
        "expires_at": invitation.expires_at,
        "created_at": invitation.created_at,
        "updated_at": invitation.updated_at,
        "accepted_at": invitation.accepted_at,
        "accepted_by_user_id": invitation.accepted_by_user_id,
    }


def row_to_invite_token(row: Dict[str, Any]) -> InviteToken:
    """Convert database row to InviteToken domain model."""
    return InviteToken(
        token=InvitationToken(root=row["token"]),
        email=Email(row["email"]),
        role=UserRole(row["role"]),
        expires_at=row["expires_at"],
        created_at=row["created_at"],
    )


def invite_token_to_dict(record: InviteToken) -> Dict[str, Any]:
    """Convert InviteToken domain model to database dict."""
    return {
        "token": record.token.root,
        "email": record.email.root,
        "role": record.role.value,
        "expires_at": record.expires_at,
        "created_at": record.created_at,
    }
