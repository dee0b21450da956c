"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Groups repository writes so they commit or roll back together.

    Usage:
        async with unit_of_work.transaction():
            await invitation_repository.mark_accepted(...)
            await membership_repository.add(...)
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic block; an exception rolls every write back."""
        pass
