"""Ephemeral invite token store interface."""

from abc import ABC, abstractmethod
from datetime import timedelta

from ozza.domain.model.invitation import InviteToken
from ozza.domain.value import Email, InvitationToken, UserRole
from ozza.util.clock import Clock


class InviteTokenStore(ABC):
    """Store for short-lived, single-use invite tokens.

    Instances are injected, never module-level singletons, so every test can
    work against an isolated store.
    """

    def __init__(self, clock: Clock, ttl: timedelta) -> None:
        self.clock = clock
        self.ttl = ttl

    @abstractmethod
    async def issue(self, email: Email, role: UserRole) -> InviteToken:
        """Generate, store and return a fresh token expiring after ``ttl``."""
        pass

    @abstractmethod
    async def lookup(self, token: InvitationToken) -> InviteToken | None:
        """Return the record iff present and unexpired.

        An expired record is deleted in the same atomic step.
        """
        pass

    @abstractmethod
    async def consume(self, token: InvitationToken) -> bool:
        """Atomically remove a record.

        Exactly one of several concurrent callers observes True. An expired
        record is removed but reported as False.
        """
        pass

    @abstractmethod
    async def sweep_expired(self) -> int:
        """Remove all expired records and return how many were removed."""
        pass
