"""
Gateway Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Contract between callers, the gateway and the upstream image API.
"""

from typing import Any

from pydantic import BaseModel, Field


# ============================================================================
# CALLER-FACING (INPUT / OUTPUT)
# ============================================================================

class GenerateImageBody(BaseModel):
    """
    Body of POST /generate-image.

    Fields are optional and untyped: the gateway forwards whatever it gets
    and lets upstream reject it. Other fields are dropped.
    """

    prompt: Any = Field(None, description="Text prompt")
    model: Any = Field(None, description="Upstream model identifier")


class GenerateImageResponse(BaseModel):
    """Success reply."""

    url: str


class GatewayErrorBody(BaseModel):
    """Failure reply. Never carries the credential."""

    error: str


# ============================================================================
# UPSTREAM (OUTPUT)
# ============================================================================

class UpstreamImageRequest(BaseModel):
    """Body sent to the upstream image API."""

    model: Any = None
    prompt: Any = None
    n: int = Field(default=1, description="Always a single image")
    size: str = Field(default="1024x1024", description="Fixed output resolution")
