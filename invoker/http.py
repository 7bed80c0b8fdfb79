"""
HTTP transport to the gateway.

POSTs {prompt, model} to <gateway>/generate-image and maps every failure
onto the invocation error taxonomy. The per-attempt deadline is enforced
by the invoker; the httpx timeout here is only a backstop.
"""

import logging
from typing import Optional

import httpx

from .base import GatewayTransport
from .errors import (
    NO_IMAGE_URL_MESSAGE,
    GenerationTimeoutError,
    NetworkError,
    UpstreamHttpError,
    UpstreamShapeError,
)
from .types import GenerationRequest

logger = logging.getLogger(__name__)

GENERATE_PATH = "/generate-image"


def _error_text(response: httpx.Response) -> str:
    """Pull the gateway's {"error": ...} text, falling back to the raw body."""
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return data["error"]
    return response.text


class HttpGatewayTransport(GatewayTransport):
    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        timeout: Optional[float] = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Gateway root URL (no trailing path).
            timeout: httpx-level timeout in seconds.
            transport: Optional httpx transport (tests pass ASGITransport).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{GENERATE_PATH}"

    async def send(self, request: GenerationRequest) -> str:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.endpoint,
                    json=request.to_payload(),
                    timeout=self.timeout,
                )
        except httpx.TimeoutException as e:
            raise GenerationTimeoutError(self.timeout) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Gateway unreachable: {e.__class__.__name__}") from e

        if not 200 <= response.status_code < 300:
            error_text = _error_text(response)
            logger.debug(
                f"Gateway returned {response.status_code}",
                extra={"status_code": response.status_code},
            )
            if response.status_code == 500 and error_text == NO_IMAGE_URL_MESSAGE:
                raise UpstreamShapeError(error_text)
            raise UpstreamHttpError(response.status_code, error_text)

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamShapeError("Gateway returned a non-JSON body") from e

        url = data.get("url") if isinstance(data, dict) else None
        if not isinstance(url, str) or not url:
            raise UpstreamShapeError("Image URL not found in gateway response.")
        return url
