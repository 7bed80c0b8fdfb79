"""
Upstream Gateway (proxy).

Receives generation requests, attaches the secret credential, forwards to
the upstream image API and normalizes the outcome into {url} or {error}.
"""

from .router import router
from .schemas import GenerateImageBody, GenerateImageResponse, GatewayErrorBody
from .security import redact_secret
from .service import GatewayReply, ImageGateway, create_gateway
from .upstream import UpstreamImageClient, extract_image_url

__all__ = [
    "router",
    "GenerateImageBody",
    "GenerateImageResponse",
    "GatewayErrorBody",
    "redact_secret",
    "GatewayReply",
    "ImageGateway",
    "create_gateway",
    "UpstreamImageClient",
    "extract_image_url",
]
