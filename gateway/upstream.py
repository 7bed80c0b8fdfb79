"""
Upstream Image API Client

Sends one generation request to the third-party image API.
No retries. No caller-facing formatting. Credential attached here only.
"""

import logging
from typing import Any, Optional

import httpx

from invoker.errors import UpstreamHttpError, UpstreamShapeError

from .schemas import UpstreamImageRequest

logger = logging.getLogger(__name__)


def extract_image_url(result: Any) -> Optional[str]:
    """Return data[0].url from an upstream success body, or None."""
    if not isinstance(result, dict):
        return None
    data = result.get("data")
    if not isinstance(data, list) or not data:
        return None
    first = data[0]
    if not isinstance(first, dict):
        return None
    url = first.get("url")
    return url if isinstance(url, str) and url else None


class UpstreamImageClient:
    """
    Thin async client for the upstream image API.

    Guarantees:
    - Exactly one outbound request per generate() call
    - Fixed output parameters: n=1, size=1024x1024
    - Credential only ever placed in the Authorization header
    """

    def __init__(
        self,
        api_key: str,
        url: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self.url = url
        self.timeout = timeout
        self._transport = transport  # test hook (httpx.MockTransport)

    def build_payload(self, prompt: Any, model: Any) -> dict:
        """Upstream body; absent caller fields are left out, not nulled."""
        return UpstreamImageRequest(model=model, prompt=prompt).model_dump(exclude_none=True)

    async def generate(self, prompt: Any, model: Any) -> str:
        """
        Request one image and return its URL.

        Raises:
            UpstreamHttpError: Upstream answered non-2xx (body attached raw).
            UpstreamShapeError: 2xx without data[0].url.
            httpx.RequestError / ValueError: transport or JSON parse failure.
        """
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(
                self.url,
                json=self.build_payload(prompt, model),
                headers=headers,
                timeout=self.timeout,
            )

        if not response.is_success:
            raise UpstreamHttpError(response.status_code, response.text)

        image_url = extract_image_url(response.json())
        if not image_url:
            raise UpstreamShapeError()

        return image_url
