"""
Credential Redaction

SECURITY BOUNDARY - the upstream credential must never reach a caller.
Every error body and every log line carrying upstream text goes through
redact_secret first.
"""

from typing import Optional

REDACTED = "[REDACTED]"


def redact_secret(text: Optional[str], secret: Optional[str]) -> str:
    """
    Replace every occurrence of `secret` in `text`.

    Args:
        text: Text that may echo the credential (upstream body, exception).
        secret: The credential; empty/None means nothing to redact.

    Returns:
        Text safe to return to callers or write to logs.
    """
    if not text:
        return ""
    if not secret:
        return text
    return text.replace(secret, REDACTED)
