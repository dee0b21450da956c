"""Shared state for the in-memory repositories.

One ``InMemoryDatabase`` plays the role of the Postgres database: every
in-memory repository built over the same instance sees the same rows, and
``InMemoryUnitOfWork`` snapshots it to roll a failed block back.
"""

import asyncio
import copy
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import AsyncIterator

from ozza.domain.model import Account, AccountMember, Invitation, User
from ozza.domain.repository import UnitOfWork
from ozza.domain.value import AccountId, InvitationId, UserId


class InMemoryDatabase:
    """Tables as plain dicts."""

    def __init__(self) -> None:
        self.users: dict[UserId, User] = {}
        self.accounts: dict[AccountId, Account] = {}
        self.members: dict[tuple[AccountId, UserId], AccountMember] = {}
        self.invitations: dict[InvitationId, Invitation] = {}
        self.lock = asyncio.Lock()

    def snapshot(self) -> dict:
        return copy.deepcopy(
            {
                "users": self.users,
                "accounts": self.accounts,
                "members": self.members,
                "invitations": self.invitations,
            }
        )

    def restore(self, state: dict) -> None:
        self.users = state["users"]
        self.accounts = state["accounts"]
        self.members = state["members"]
        self.invitations = state["invitations"]


_in_transaction: ContextVar[bool] = ContextVar("_in_transaction", default=False)


class InMemoryUnitOfWork(UnitOfWork):
    """Serializes atomic blocks and restores the snapshot on failure.

    Blocks nested inside the same task reuse the outer lock.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        if _in_transaction.get():
            state = self.database.snapshot()
            try:
                yield
            except BaseException:
                self.database.restore(state)
                raise
            return

        async with self.database.lock:
            state = self.database.snapshot()
            reset = _in_transaction.set(True)
            try:
                yield
            except BaseException:
                self.database.restore(state)
                raise
            finally:
                _in_transaction.reset(reset)
