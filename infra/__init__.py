"""
Infrastructure module exports.

Startup configuration for the gateway and the invoker.
"""

from .config import GatewayConfig, InvokerConfig, get_config

__all__ = [
    "GatewayConfig",
    "InvokerConfig",
    "get_config",
]
