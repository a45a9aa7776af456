#!/usr/bin/env python3
# src/profile_mcp_server/config/environment.py
"""
Environment and transport detection.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from ..constants import (
    ENV_MCP_STDIO,
    ENV_MCP_TRANSPORT,
    ENV_PORT,
    ENV_RENDER,
    ENV_USE_STDIO,
    TRANSPORT_HTTP,
    TRANSPORT_STDIO,
)
from .constants import (
    CI_INDICATORS,
    DOCKERENV_PATH,
    ENV_CONTAINER,
    ENV_KUBERNETES_HOST,
    ENVIRONMENT_ALIASES,
    ENVIRONMENT_DEVELOPMENT,
    ENVIRONMENT_PRODUCTION,
    ENVIRONMENT_TESTING,
    ENVIRONMENT_VARIABLES,
    TRUTHY_VALUES,
)

logger = logging.getLogger(__name__)


class EnvironmentDetector:
    """Detects the deployment environment from environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        self.environ = os.environ if environ is None else environ

    def get_env_var(self, key: str, default: str = "") -> str:
        return self.environ.get(key, default)

    def detect(self) -> str:
        """Return one of development, staging, testing or production."""
        explicit = self._get_explicit_environment()
        if explicit:
            logger.debug(f"Explicit environment detected: {explicit}")
            return explicit

        if self._is_ci_environment():
            logger.debug("CI/CD environment detected")
            return ENVIRONMENT_TESTING

        if self.get_env_var(ENV_RENDER) or self._is_containerized():
            logger.debug("Hosted or containerized environment detected")
            return ENVIRONMENT_PRODUCTION

        return ENVIRONMENT_DEVELOPMENT

    def _get_explicit_environment(self) -> str:
        for name in ENVIRONMENT_VARIABLES:
            value = self.get_env_var(name).strip().lower()
            if value:
                return ENVIRONMENT_ALIASES.get(value, "")
        return ""

    def _is_ci_environment(self) -> bool:
        return any(self.get_env_var(var) for var in CI_INDICATORS)

    def _is_containerized(self) -> bool:
        if self.get_env_var(ENV_KUBERNETES_HOST) or self.get_env_var(ENV_CONTAINER):
            return True
        try:
            return Path(DOCKERENV_PATH).exists()
        except OSError as e:
            logger.debug(f"Error checking Docker env: {e}")
            return False


def detect_transport(environ: Mapping[str, str] | None = None) -> str:
    """
    Pick the transport for ``auto`` mode.

    ``MCP_TRANSPORT`` wins; ``MCP_STDIO``/``USE_STDIO`` force stdio; a
    ``PORT`` or ``RENDER`` variable means we were started by a web host.
    Anything else is stdio.
    """
    env = os.environ if environ is None else environ

    explicit = env.get(ENV_MCP_TRANSPORT, "").strip().lower()
    if explicit in (TRANSPORT_STDIO, TRANSPORT_HTTP):
        return explicit

    if any(env.get(name, "").strip().lower() in TRUTHY_VALUES for name in (ENV_MCP_STDIO, ENV_USE_STDIO)):
        return TRANSPORT_STDIO

    if env.get(ENV_PORT) or env.get(ENV_RENDER):
        return TRANSPORT_HTTP

    return TRANSPORT_STDIO
