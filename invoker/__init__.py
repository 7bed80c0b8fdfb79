"""
Resilient invocation layer for image generation.

This package turns one "generate" action into one terminal result,
retrying transient gateway failures with exponential backoff.

Transports:
- StubGatewayTransport: Scripted fake gateway (tests/offline)
- HttpGatewayTransport: Real gateway over HTTP

Example usage:
    from invoker import ResilientInvoker, HttpGatewayTransport

    invoker = ResilientInvoker(HttpGatewayTransport("http://localhost:5000"))
    result = await invoker.generate("a red fox", "img3")
"""

from .errors import (
    NO_IMAGE_URL_MESSAGE,
    ValidationError,
    InvocationError,
    UpstreamHttpError,
    UpstreamShapeError,
    GenerationTimeoutError,
    NetworkError,
)
from .types import (
    GenerationRequest,
    GenerationResult,
    Success,
    Failure,
    Attempt,
    InvokerState,
    SUPPORTED_MODELS,
    DEFAULT_MODEL,
    MAX_PROMPT_LENGTH,
)
from .backoff import backoff_delay
from .base import GatewayTransport
from .stub import StubGatewayTransport
from .http import HttpGatewayTransport
from .invoker import ResilientInvoker
from .session import GenerationSession, GenerationState

__all__ = [
    "NO_IMAGE_URL_MESSAGE",
    "ValidationError",
    "InvocationError",
    "UpstreamHttpError",
    "UpstreamShapeError",
    "GenerationTimeoutError",
    "NetworkError",
    "GenerationRequest",
    "GenerationResult",
    "Success",
    "Failure",
    "Attempt",
    "InvokerState",
    "SUPPORTED_MODELS",
    "DEFAULT_MODEL",
    "MAX_PROMPT_LENGTH",
    "backoff_delay",
    "GatewayTransport",
    "StubGatewayTransport",
    "HttpGatewayTransport",
    "ResilientInvoker",
    "GenerationSession",
    "GenerationState",
]
