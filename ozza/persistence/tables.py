"""SQLAlchemy table definitions for Ozza.

These table definitions back the SQLAlchemy Core queries in the Postgres
repositories. They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    func,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (directory owned by the auth provider; core writes `role` only)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(255), nullable=False),
    Column("name", String(255), nullable=True),
    Column(
        "role",
        Enum("admin", "coach", "agency", "client", name="user_role", create_type=False),
        nullable=True,  # Unset until signup assigns one
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_email_lower", func.lower(users_table.c.email), unique=True)

# ============================================================================
# ACCOUNTS TABLE (tenant boundary, owned by a coach)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(255), nullable=False),
    Column(
        "owner_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_accounts_owner_id", accounts_table.c.owner_id)

# ============================================================================
# ACCOUNT_MEMBERS TABLE (one role per user per account)
# ============================================================================
account_members_table = Table(
    "account_members",
    metadata,
    Column(
        "account_id",
        UUID,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "role",
        Enum("owner", "agency", "client", name="member_role", create_type=False),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("account_id", "user_id", name="uq_account_member"),
)

Index("idx_account_members_user_id", account_members_table.c.user_id)

# ============================================================================
# INVITATIONS TABLE (agency and client invitations, told apart by `kind`)
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "kind",
        Enum("agency", "client", name="invitation_kind", create_type=False),
        nullable=False,
    ),
    Column("token", String(255), nullable=False, unique=True),
    Column("email", String(255), nullable=False),
    Column(
        "role",
        Enum("owner", "agency", "client", name="member_role", create_type=False),
        nullable=False,
    ),
    Column(
        "account_id",
        UUID,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "invited_by", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("invitee_name", String(255), nullable=True),
    Column(
        "status",
        Enum(
            "pending",
            "accepted",
            "used",
            "expired",
            name="invitation_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "accepted_by_user_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
)

# Lookup and cleanup by invitee
Index(
    "idx_invitations_email_status",
    invitations_table.c.email,
    invitations_table.c.status,
)
Index("idx_invitations_account_id", invitations_table.c.account_id)

# ============================================================================
# INVITE_TOKENS TABLE (ephemeral, deleted on consumption)
# ============================================================================
invite_tokens_table = Table(
    "invite_tokens",
    metadata,
    Column("token", String(255), primary_key=True),
    Column("email", String(255), nullable=False),
    Column(
        "role",
        Enum("admin", "coach", "agency", "client", name="user_role", create_type=False),
        nullable=False,
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_invite_tokens_expires_at", invite_tokens_table.c.expires_at)
