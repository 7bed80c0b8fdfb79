"""
Gateway HTTP Router

FastAPI router exposing POST /generate-image.
No retries. No validation beyond JSON decoding. Pure transport.
"""

import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from .service import INVALID_PAYLOAD_MESSAGE, ImageGateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Image Generation"])


def get_gateway(request: Request) -> ImageGateway:
    """Gateway instance created at startup."""
    return request.app.state.gateway


@router.post("/generate-image")
async def generate_image(request: Request) -> JSONResponse:
    """
    Forward one image-generation request upstream.

    Body: {"prompt": str, "model": str}

    Returns:
        200 {"url": str} on success
        <upstream status | 500> {"error": str} on failure
        400 {"error": str} when the body is not JSON
    """
    try:
        body = await request.body()
        payload = json.loads(body) if body else {}
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Rejected non-JSON request body")
        return JSONResponse(status_code=400, content={"error": INVALID_PAYLOAD_MESSAGE})

    reply = await get_gateway(request).handle(payload)
    return JSONResponse(status_code=reply.status_code, content=reply.payload)
