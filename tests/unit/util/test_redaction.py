"""Tests for log redaction."""

from ozza.domain.value import Email, InvitationToken
from ozza.util.redaction import redact


class TestRedact:
    def test_keeps_prefix_only(self):
        token = InvitationToken.generate()

        redacted = redact(token)

        assert redacted == token.root[:8] + "..."
        assert token.root not in redacted

    def test_value_objects_and_strings(self):
        assert redact(Email("someone@example.com")) == "someone@..."
        assert redact("abc") == "abc..."

    def test_none_passes_through(self):
        assert redact(None) is None
