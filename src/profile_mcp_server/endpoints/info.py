#!/usr/bin/env python3
"""
endpoints/info.py - Server information and OAuth discovery

``GET /`` describes the server and its endpoints.
``GET /.well-known/oauth-protected-resource`` publishes where clients obtain
tokens for this server. The server itself never validates tokens.
"""

import logging

from starlette.requests import Request
from starlette.responses import Response

from ..config import ServerSettings
from ..profiles import StaticProfileStore
from ..registry import CapabilityRegistry
from .constants import (
    ERROR_OAUTH_NOT_CONFIGURED,
    ERROR_SERVER_MISCONFIG,
    METHOD_GET,
    METHOD_POST,
    OAUTH_BEARER_METHODS,
    OAUTH_SCOPES_SUPPORTED,
    PATH_HEALTH,
    PATH_MCP,
    PATH_OAUTH_METADATA,
    PATH_PROFILE_BY_ID,
    HttpStatus,
)
from .utils import error_response, json_response

logger = logging.getLogger(__name__)


class InfoEndpoint:
    """``GET /``"""

    def __init__(
        self,
        settings: ServerSettings,
        registry: CapabilityRegistry,
        protocol_version: str,
        store: StaticProfileStore | None = None,
    ):
        self.settings = settings
        self.registry = registry
        self.protocol_version = protocol_version
        self.store = store

    def _endpoints(self) -> dict[str, dict[str, str]]:
        endpoints = {
            "mcp": {
                "path": PATH_MCP,
                "method": METHOD_POST,
                "description": "MCP protocol endpoint for JSON-RPC requests",
            },
            "health": {"path": PATH_HEALTH, "method": METHOD_GET, "description": "Health check"},
            "oauth": {
                "path": PATH_OAUTH_METADATA,
                "method": METHOD_GET,
                "description": "OAuth protected resource metadata",
            },
        }
        if self.store is not None:
            endpoints["profile"] = {
                "path": PATH_PROFILE_BY_ID,
                "method": METHOD_GET,
                "description": "HTML profile card; the id is optional",
            }
        return endpoints

    async def handle_request(self, request: Request) -> Response:
        return json_response(
            {
                "server": self.settings.name,
                "version": self.settings.version,
                "variant": self.settings.variant,
                "protocol": f"MCP {self.protocol_version}",
                "environment": self.settings.environment,
                "endpoints": self._endpoints(),
                "tools": self.registry.tool_names,
                "resources": self.registry.resource_uris,
            }
        )


class OAuthMetadataEndpoint:
    """``GET /.well-known/oauth-protected-resource``"""

    def __init__(self, settings: ServerSettings):
        self.settings = settings

    async def handle_request(self, request: Request) -> Response:
        if not self.settings.oauth_configured:
            logger.warning("OAuth metadata requested but AUTH0_ISSUER_BASE_URL/AUTH0_AUDIENCE are not set")
            return error_response(HttpStatus.SERVICE_UNAVAILABLE, ERROR_SERVER_MISCONFIG, ERROR_OAUTH_NOT_CONFIGURED)

        logger.debug("OAuth metadata endpoint called")
        return json_response(
            {
                "resource": self.settings.auth_audience,
                "authorization_servers": [self.settings.auth_issuer_url],
                "scopes_supported": list(OAUTH_SCOPES_SUPPORTED),
                "bearer_methods_supported": list(OAUTH_BEARER_METHODS),
            }
        )
