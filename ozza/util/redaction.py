"""Redaction helpers for log fields.

Tokens and email addresses are never logged in full; only a fixed-length
prefix survives.
"""

DEFAULT_PREFIX = 8


def redact(value: object | None, prefix: int = DEFAULT_PREFIX) -> str | None:
    """Keep the first ``prefix`` characters of ``value``.

    Args:
        value: Token, email or value object (``str()`` is applied)
        prefix: Number of characters kept

    Returns:
        Redacted string, or None when value is None
    """
    if value is None:
        return None
    text = str(value)
    return text[:prefix] + "..."
