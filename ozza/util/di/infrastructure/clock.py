"""Clock providers."""

from dishka import Scope, provide

from ozza.util.clock import Clock
from ozza.util.di.base import ProviderBase


class ClockProvider(ProviderBase):
    """Clock component base."""

    __mock_component__ = "clock"


class ProdClockProvider(ClockProvider):
    """Wall clock."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_clock(self) -> Clock:
        """Provide the wall clock."""
        return Clock()
