"""Mock providers for testing."""

from .clock import FrozenClock, MockClockProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "FrozenClock",
    "MockClockProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
