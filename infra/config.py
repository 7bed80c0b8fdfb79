"""
Startup configuration structs.

Resolved once at process start and passed into constructors; request
handlers never read the environment.
"""

from dataclasses import dataclass, field
from typing import Optional

from config import Config
from invoker import HttpGatewayTransport, ResilientInvoker


@dataclass(frozen=True)
class GatewayConfig:
    """Upstream gateway configuration."""

    api_key: str = field(repr=False)
    upstream_url: str = "https://api.infip.pro/v1/images/generations"
    upstream_timeout_s: float = 60.0
    port: int = 5000
    environment: str = "development"

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        """Load gateway configuration from environment variables."""
        return cls(
            api_key=Config.API_KEY,
            upstream_url=Config.UPSTREAM_URL,
            upstream_timeout_s=Config.UPSTREAM_TIMEOUT_S,
            port=Config.GATEWAY_PORT,
            environment=Config.ENVIRONMENT,
        )


@dataclass(frozen=True)
class InvokerConfig:
    """Client-side invoker configuration."""

    gateway_url: str = "http://localhost:5000"
    timeout_s: float = 30.0
    max_attempts: int = 3

    @classmethod
    def from_env(
        cls,
        gateway_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        max_attempts: Optional[int] = None,
    ) -> "InvokerConfig":
        """
        Load invoker configuration from environment variables.

        Explicit arguments (e.g. CLI flags) override the environment.
        """
        return cls(
            gateway_url=gateway_url or Config.GATEWAY_URL,
            timeout_s=timeout_s if timeout_s is not None else Config.INVOKER_TIMEOUT_S,
            max_attempts=max_attempts if max_attempts is not None else Config.INVOKER_MAX_ATTEMPTS,
        )

    def create_invoker(self) -> ResilientInvoker:
        """Create an invoker talking to the configured gateway over HTTP."""
        return ResilientInvoker(
            HttpGatewayTransport(base_url=self.gateway_url),
            timeout_s=self.timeout_s,
            max_attempts=self.max_attempts,
        )


def get_config() -> GatewayConfig:
    """Get gateway configuration."""
    return GatewayConfig.from_env()
