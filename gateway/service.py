"""
Upstream Gateway

Translates one caller request into one upstream call and every outcome
into an HTTP status + JSON body. Never raises past its boundary.

  upstream 2xx + url      → 200 {"url": ...}
  upstream non-2xx        → same status, {"error": <upstream body, redacted>}
  upstream 2xx, no url    → 500 {"error": "No image URL returned."}
  transport/parse failure → 500 {"error": "Image generation failed."}
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict

from invoker.errors import UpstreamHttpError, UpstreamShapeError

from .schemas import GatewayErrorBody, GenerateImageBody, GenerateImageResponse
from .security import redact_secret
from .upstream import UpstreamImageClient

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Image generation failed."
INVALID_PAYLOAD_MESSAGE = "Invalid JSON payload"


@dataclass(frozen=True)
class GatewayReply:
    status_code: int
    payload: Dict[str, Any]


def _error(status_code: int, message: str) -> GatewayReply:
    return GatewayReply(status_code, GatewayErrorBody(error=message).model_dump())


class ImageGateway:
    """
    Stateless proxy between callers and the upstream image API.

    The credential is held by the upstream client and scrubbed from every
    error body and log line.
    """

    def __init__(self, client: UpstreamImageClient, api_key: str):
        self.client = client
        self._api_key = api_key

    async def handle(self, payload: Any) -> GatewayReply:
        """
        Process one decoded request body.

        Args:
            payload: Decoded JSON body (anything; non-objects are rejected).

        Returns:
            GatewayReply with the HTTP status and JSON payload to send.
        """
        if not isinstance(payload, dict):
            return _error(400, INVALID_PAYLOAD_MESSAGE)

        body = GenerateImageBody(prompt=payload.get("prompt"), model=payload.get("model"))

        if not self._api_key:
            logger.error("Upstream credential is not configured; refusing to forward")
            return _error(500, GENERIC_FAILURE_MESSAGE)

        try:
            image_url = await self.client.generate(body.prompt, body.model)
        except UpstreamHttpError as e:
            error_text = redact_secret(e.body, self._api_key)
            logger.warning(
                f"Upstream error: {e.status_code} - {error_text}",
                extra={"status_code": e.status_code},
            )
            return _error(e.status_code, error_text)
        except UpstreamShapeError as e:
            logger.error(f"Upstream response missing image URL: {e}")
            return _error(500, str(e))
        except Exception as e:
            logger.error(
                f"Backend error: {e.__class__.__name__}: {redact_secret(str(e), self._api_key)}"
            )
            return _error(500, GENERIC_FAILURE_MESSAGE)

        logger.info("Image generated", extra={"model": body.model})
        return GatewayReply(200, GenerateImageResponse(url=image_url).model_dump())


def create_gateway(
    api_key: str,
    upstream_url: str,
    upstream_timeout_s: float = 60.0,
    transport=None,
) -> ImageGateway:
    """Wire an ImageGateway with its upstream client."""
    client = UpstreamImageClient(
        api_key=api_key,
        url=upstream_url,
        timeout=upstream_timeout_s,
        transport=transport,
    )
    return ImageGateway(client, api_key=api_key)
