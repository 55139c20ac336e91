"""Core configuration helpers shared by lametric-local clients."""

from .config import (
    DEFAULT_API_VERSION,
    DEFAULT_HEADERS,
    USER_AGENT,
    ClientConfig,
    ConfigError,
    RequestOptions,
    build_config,
)

__all__ = [
    "DEFAULT_API_VERSION",
    "DEFAULT_HEADERS",
    "USER_AGENT",
    "ClientConfig",
    "ConfigError",
    "RequestOptions",
    "build_config",
]
