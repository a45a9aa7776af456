#!/usr/bin/env python3
# src/profile_mcp_server/config/settings.py
"""
Server settings loaded from environment variables.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from ..constants import (
    DEFAULT_CORS_ORIGINS,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_PROFILE_ID,
    DEFAULT_UPSTREAM_TIMEOUT,
    DEFAULT_VARIANT,
    ENV_AUTH0_AUDIENCE,
    ENV_AUTH0_ISSUER_BASE_URL,
    ENV_CORS_ALLOWED_ORIGINS,
    ENV_DEFAULT_PROFILE_ID,
    ENV_HOST,
    ENV_LOG_LEVEL,
    ENV_MCP_LOG_LEVEL,
    ENV_MCP_SERVER_NAME,
    ENV_MCP_SERVER_VERSION,
    ENV_MCP_VARIANT,
    ENV_PORT,
    ENV_PROFILE_API_TIMEOUT,
    ENV_PROFILE_API_URL,
    ENV_RENDER,
    ENV_RENDER_EXTERNAL_URL,
    LOG_LEVELS,
    SERVER_NAME,
    SERVER_VERSION,
    TRANSPORT_STDIO,
    VARIANTS,
)
from .environment import EnvironmentDetector, detect_transport

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "info"


@dataclass(frozen=True)
class ServerSettings:
    """Resolved configuration for one server process."""

    name: str = SERVER_NAME
    version: str = SERVER_VERSION
    variant: str = DEFAULT_VARIANT
    transport: str = TRANSPORT_STDIO
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    environment: str = "development"
    default_profile_id: str = DEFAULT_PROFILE_ID
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    profile_api_url: str | None = None
    profile_api_timeout: float = DEFAULT_UPSTREAM_TIMEOUT
    auth_issuer_url: str | None = None
    auth_audience: str | None = None
    on_render: bool = False
    public_url: str | None = None

    @property
    def oauth_configured(self) -> bool:
        return bool(self.auth_issuer_url and self.auth_audience)

    def with_overrides(self, **overrides: Any) -> "ServerSettings":
        """Copy with CLI overrides applied; ``None`` values are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _parse_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid {key}={raw!r}, using {default}")
        return default
    if not 0 < value < 65536:
        logger.warning(f"{key}={value} out of range, using {default}")
        return default
    return value


def _parse_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid {key}={raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"{key} must be positive, using {default}")
        return default
    return value


def _parse_origins(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return DEFAULT_CORS_ORIGINS
    origins = tuple(origin.strip() for origin in raw.split(",") if origin.strip())
    return origins or DEFAULT_CORS_ORIGINS


def _parse_log_level(env: Mapping[str, str]) -> str:
    raw = (env.get(ENV_MCP_LOG_LEVEL) or env.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().lower()
    if raw not in LOG_LEVELS:
        logger.warning(f"Unknown log level {raw!r}, using {DEFAULT_LOG_LEVEL}")
        return DEFAULT_LOG_LEVEL
    return raw


def _parse_variant(env: Mapping[str, str]) -> str:
    raw = env.get(ENV_MCP_VARIANT, DEFAULT_VARIANT).strip().lower()
    if raw not in VARIANTS:
        logger.warning(f"Unknown variant {raw!r}, using {DEFAULT_VARIANT}")
        return DEFAULT_VARIANT
    return raw


def load_settings(environ: Mapping[str, str] | None = None) -> ServerSettings:
    """Build settings from ``environ`` (defaults to ``os.environ``)."""
    env = os.environ if environ is None else environ

    settings = ServerSettings(
        name=env.get(ENV_MCP_SERVER_NAME) or SERVER_NAME,
        version=env.get(ENV_MCP_SERVER_VERSION) or SERVER_VERSION,
        variant=_parse_variant(env),
        transport=detect_transport(env),
        host=env.get(ENV_HOST) or DEFAULT_HOST,
        port=_parse_int(env, ENV_PORT, DEFAULT_PORT),
        log_level=_parse_log_level(env),
        environment=EnvironmentDetector(env).detect(),
        default_profile_id=env.get(ENV_DEFAULT_PROFILE_ID) or DEFAULT_PROFILE_ID,
        cors_origins=_parse_origins(env.get(ENV_CORS_ALLOWED_ORIGINS)),
        profile_api_url=env.get(ENV_PROFILE_API_URL) or None,
        profile_api_timeout=_parse_float(env, ENV_PROFILE_API_TIMEOUT, DEFAULT_UPSTREAM_TIMEOUT),
        auth_issuer_url=env.get(ENV_AUTH0_ISSUER_BASE_URL) or None,
        auth_audience=env.get(ENV_AUTH0_AUDIENCE) or None,
        on_render=bool(env.get(ENV_RENDER)),
        public_url=env.get(ENV_RENDER_EXTERNAL_URL) or None,
    )
    logger.debug(f"Loaded settings: {settings}")
    return settings
