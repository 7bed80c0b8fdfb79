"""
FastAPI Application Entry Point

Integrates:
  - Upstream gateway (POST /generate-image)
  - Health checks
  - Middleware for logging & error handling

Run: uvicorn main:app --host 0.0.0.0 --port 5000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from config import Config
from gateway import create_gateway, router as gateway_router
from infra import GatewayConfig

# Setup logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(config: Optional[GatewayConfig] = None, upstream_transport=None) -> FastAPI:
    """
    Build the gateway application.

    Args:
        config: Startup configuration (defaults to environment).
        upstream_transport: Optional httpx transport for the upstream client
            (tests inject httpx.MockTransport here).
    """
    gateway_config = config or GatewayConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan: startup and shutdown handlers.
        """
        # Startup
        logger.info("=" * 60)
        logger.info("Image Weaver gateway starting up...")
        logger.info(f"Port: {gateway_config.port}")
        logger.info(f"Upstream: {gateway_config.upstream_url}")
        logger.info(f"Credential: {'configured' if gateway_config.has_credential else 'MISSING'}")
        logger.info(f"Environment: {gateway_config.environment}")
        logger.info("=" * 60)

        yield

        # Shutdown
        logger.info("Image Weaver gateway shutting down...")

    app = FastAPI(
        title="Image Weaver Gateway",
        description="Credential-hiding proxy for the upstream image API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = gateway_config
    app.state.gateway = create_gateway(
        api_key=gateway_config.api_key,
        upstream_url=gateway_config.upstream_url,
        upstream_timeout_s=gateway_config.upstream_timeout_s,
        transport=upstream_transport,
    )

    # Browser UI calls the gateway cross-origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Middleware for logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests."""
        logger.debug(f"{request.method} {request.url.path}")
        try:
            response = await call_next(request)
            return response
        except Exception as e:
            logger.error(f"Request error: {e.__class__.__name__}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"error": "Internal server error"},
            )

    # Include routers
    app.include_router(gateway_router)

    # Health check endpoints
    @app.get("/health/live")
    async def health_live():
        """Live health check (Kubernetes liveness probe)."""
        return {"status": "alive"}

    @app.get("/health/ready")
    async def health_ready():
        """Readiness health check: ready once a credential is configured."""
        if gateway_config.has_credential:
            return {"status": "ready"}
        return {"status": "not_ready", "reason": "API_KEY is not configured"}

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Image Weaver Gateway",
            "version": "1.0.0",
            "status": "running",
            "endpoints": {
                "generate_image": "POST /generate-image",
                "health_live": "GET /health/live",
                "health_ready": "GET /health/ready",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=Config.GATEWAY_PORT)
