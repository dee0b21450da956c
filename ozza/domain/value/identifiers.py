"""Strongly typed identifiers for Ozza domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
AccountId = NewType("AccountId", UUID)
InvitationId = NewType("InvitationId", UUID)
