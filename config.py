"""
Configuration management for Image Weaver.

Loads environment variables from .env.local / .env files and provides typed
access to configuration.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables; .env.local wins over .env
_root = Path(__file__).parent
load_dotenv(_root / ".env.local")
load_dotenv(_root / ".env")


class Config:
    """Configuration class for Image Weaver."""

    # Upstream credential (never logged, never returned to callers)
    API_KEY = os.getenv("API_KEY", "")

    # Upstream image API
    UPSTREAM_URL = os.getenv("UPSTREAM_URL", "https://api.infip.pro/v1/images/generations")
    UPSTREAM_TIMEOUT_S = float(os.getenv("UPSTREAM_TIMEOUT_S", "60"))

    # Gateway
    GATEWAY_PORT = int(os.getenv("GATEWAY_PORT", "5000"))
    GATEWAY_URL = os.getenv("GATEWAY_URL", "http://localhost:5000")

    # Invoker
    INVOKER_TIMEOUT_S = float(os.getenv("INVOKER_TIMEOUT_S", "30"))
    INVOKER_MAX_ATTEMPTS = int(os.getenv("INVOKER_MAX_ATTEMPTS", "3"))

    # Environment
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is set."""
        required = ["API_KEY"]
        missing = [key for key in required if not getattr(cls, key)]

        if missing:
            print(f"⚠️  Missing required environment variables: {', '.join(missing)}")
            print(f"   Please set them in .env.local file")
            return False

        return True


if __name__ == "__main__":
    # Test configuration loading
    print("Configuration loaded:")
    print(f"  API Key: {'✓ Set' if Config.API_KEY else '✗ Missing'}")
    print(f"  Upstream URL: {Config.UPSTREAM_URL}")
    print(f"  Gateway Port: {Config.GATEWAY_PORT}")
    print(f"  Invoker: timeout={Config.INVOKER_TIMEOUT_S}s, attempts={Config.INVOKER_MAX_ATTEMPTS}")
    print(f"  Environment: {Config.ENVIRONMENT}")
    print(f"\n  Validation: {'✓ PASSED' if Config.validate() else '✗ FAILED'}")
