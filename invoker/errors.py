"""
Invocation error taxonomy.

Shared by the gateway (which raises the upstream variants) and the
invoker (which classifies attempt failures by `kind`).

Only ValidationError is fatal. Everything deriving from InvocationError
is retryable up to the attempt cap.
"""

from typing import Optional

NO_IMAGE_URL_MESSAGE = "No image URL returned."


class ValidationError(Exception):
    """Prompt or model rejected before any network attempt."""

    kind = "validation"


class InvocationError(Exception):
    """
    A single attempt failed. Retryable; the invoker decides whether
    another attempt is left.
    """

    kind = "unexpected"


class UpstreamHttpError(InvocationError):
    """Non-2xx response, surfaced with the upstream status code."""

    kind = "upstream_http"

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        detail = f": {body}" if body else ""
        super().__init__(f"Request failed with status {status_code}{detail}")


class UpstreamShapeError(InvocationError):
    """2xx response without a usable image URL."""

    kind = "upstream_shape"

    def __init__(self, message: str = NO_IMAGE_URL_MESSAGE):
        super().__init__(message)


class GenerationTimeoutError(InvocationError):
    """Per-attempt deadline exceeded."""

    kind = "timeout"

    def __init__(self, timeout_s: Optional[float] = None):
        self.timeout_s = timeout_s
        if timeout_s is None:
            super().__init__("Request timed out")
        else:
            super().__init__(f"Request timed out after {timeout_s:g}s")


class NetworkError(InvocationError):
    """Transport-level failure (DNS, refused or reset connection)."""

    kind = "network"
