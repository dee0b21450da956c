"""User as seen by the membership core.

The user directory is owned by the authentication provider; the core reads
identity and email and only ever writes the global ``role``.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ozza.domain.model.common import DomainModel
from ozza.domain.value import Email, UserId, UserRole
from ozza.util.clock import utcnow


class User(DomainModel):
    """User directory entry.

    ``role`` is None between registration and role assignment.
    """

    id: UserId
    email: Email
    name: Optional[str] = None
    role: Optional[UserRole] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
