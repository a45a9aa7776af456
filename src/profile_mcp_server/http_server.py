#!/usr/bin/env python3
# src/profile_mcp_server/http_server.py
"""
HTTP Server - Starlette application and uvicorn runner
"""

import logging

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.routing import Route

from .config import ServerSettings
from .endpoints import HealthEndpoint, InfoEndpoint, MCPEndpoint, OAuthMetadataEndpoint, ProfileEndpoint
from .endpoints.constants import (
    CORS_ALLOWED_HEADERS,
    CORS_ALLOWED_METHODS,
    HEADER_MCP_SESSION_ID,
    METHOD_GET,
    METHOD_POST,
    PATH_HEALTH,
    PATH_MCP,
    PATH_OAUTH_METADATA,
    PATH_PROFILE,
    PATH_PROFILE_BY_ID,
    PATH_ROOT,
)
from .profiles import StaticProfileStore
from .protocol import MCPProtocolHandler

logger = logging.getLogger(__name__)


def create_app(
    protocol_handler: MCPProtocolHandler,
    settings: ServerSettings,
    store: StaticProfileStore | None = None,
    debug: bool = False,
) -> Starlette:
    """
    Create the Starlette application serving ``protocol_handler``.

    The HTML profile page is mounted only when a profile ``store`` is given.
    """
    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_methods=list(CORS_ALLOWED_METHODS),
            allow_headers=list(CORS_ALLOWED_HEADERS),
            expose_headers=[HEADER_MCP_SESSION_ID],
            allow_credentials=True,
            max_age=3600,
        ),
    ]

    mcp_endpoint = MCPEndpoint(protocol_handler)
    health_endpoint = HealthEndpoint(settings, store)
    info_endpoint = InfoEndpoint(settings, protocol_handler.registry, protocol_handler.protocol_version, store)
    oauth_endpoint = OAuthMetadataEndpoint(settings)

    routes = [
        Route(PATH_MCP, mcp_endpoint.handle_request, methods=[METHOD_POST]),
        Route(PATH_HEALTH, health_endpoint.handle_request, methods=[METHOD_GET]),
        Route(PATH_ROOT, info_endpoint.handle_request, methods=[METHOD_GET]),
        Route(PATH_OAUTH_METADATA, oauth_endpoint.handle_request, methods=[METHOD_GET]),
    ]

    if store is not None:
        profile_endpoint = ProfileEndpoint(store)
        routes += [
            Route(PATH_PROFILE, profile_endpoint.handle_request, methods=[METHOD_GET]),
            Route(PATH_PROFILE_BY_ID, profile_endpoint.handle_request, methods=[METHOD_GET]),
        ]

    return Starlette(debug=debug, routes=routes, middleware=middleware)


def run_http_server(app: Starlette, host: str, port: int, log_level: str = "info") -> int:
    """
    Serve ``app`` with uvicorn until interrupted.

    Returns:
        Process exit code: 0 after a clean shutdown, 1 if the server could
        not start (for example the port is already in use).
    """
    logger.info(f"Starting HTTP server on {host}:{port}")
    try:
        uvicorn.run(app, host=host, port=port, log_level=log_level, access_log=log_level == "debug")
    except KeyboardInterrupt:
        logger.info("HTTP server interrupted")
    except OSError as e:
        logger.error(f"Failed to start HTTP server on {host}:{port}: {e}")
        return 1
    except SystemExit as e:
        # uvicorn exits with status 1 when it cannot bind
        if e.code not in (None, 0):
            logger.error(f"HTTP server exited during startup on {host}:{port}")
            return 1
    return 0
