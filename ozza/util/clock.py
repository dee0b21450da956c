"""Clock source.

Services never call ``datetime.now`` directly for expiry decisions; they ask
an injected ``Clock`` so tests can move time forward.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Clock:
    """Wall clock."""

    def now(self) -> datetime:
        return utcnow()
