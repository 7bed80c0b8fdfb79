"""Tests for credential redaction."""

from gateway import redact_secret
from gateway.security import REDACTED


class TestRedactSecret:
    def test_replaces_every_occurrence(self):
        text = "bad key sk-abc (Bearer sk-abc)"
        assert redact_secret(text, "sk-abc") == f"bad key {REDACTED} (Bearer {REDACTED})"

    def test_no_secret_leaves_text(self):
        assert redact_secret("plain error", "") == "plain error"
        assert redact_secret("plain error", None) == "plain error"

    def test_empty_text(self):
        assert redact_secret(None, "sk-abc") == ""
        assert redact_secret("", "sk-abc") == ""
