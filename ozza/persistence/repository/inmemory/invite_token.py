"""Process-local invite token store.

Suitable for a single-process deployment and for tests. The map is guarded
by a lock so single use holds even when several threads share one store.
"""

import threading
from datetime import timedelta
from typing import Optional

from ozza.domain.model.invitation import InviteToken
from ozza.domain.repository.invite_token import InviteTokenStore
from ozza.domain.value import Email, InvitationToken, UserRole
from ozza.util.clock import Clock


class InMemoryInviteTokenStore(InviteTokenStore):
    """InviteTokenStore over a locked dict."""

    def __init__(self, clock: Clock, ttl: timedelta) -> None:
        super().__init__(clock, ttl)
        self._records: dict[str, InviteToken] = {}
        self._lock = threading.Lock()

    async def issue(self, email: Email, role: UserRole) -> InviteToken:
        now = self.clock.now()
        record = InviteToken(
            token=InvitationToken.generate(),
            email=email,
            role=role,
            expires_at=now + self.ttl,
            created_at=now,
        )
        with self._lock:
            self._records[record.token.root] = record
        return record

    async def lookup(self, token: InvitationToken) -> Optional[InviteToken]:
        now = self.clock.now()
        with self._lock:
            record = self._records.get(token.root)
            if record is None:
                return None
            if record.is_expired(now):
                del self._records[token.root]
                return None
            return record

    async def consume(self, token: InvitationToken) -> bool:
        now = self.clock.now()
        with self._lock:
            record = self._records.pop(token.root, None)
        return record is not None and not record.is_expired(now)

    async def sweep_expired(self) -> int:
        now = self.clock.now()
        with self._lock:
            expired = [k for k, r in self._records.items() if r.is_expired(now)]
            for key in expired:
                del self._records[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
