#!/usr/bin/env python3
"""
profile_mcp_server - example MCP servers over stdio and HTTP

    from profile_mcp_server import ProfileMCPServer

    server = ProfileMCPServer(variant="enhanced")

    if __name__ == "__main__":
        server.run("http", port=3000)
"""

from .config import ServerSettings, load_settings
from .context import RequestContext
from .core import ProfileMCPServer
from .errors import (
    HandlerError,
    InvalidInputError,
    MissingArgumentError,
    NotAuthenticatedError,
    UpstreamError,
    UpstreamTimeoutError,
)
from .protocol import MCPProtocolHandler
from .registry import CapabilityRegistry
from .variants import build_registry

__version__ = "1.0.0"
__all__ = [
    "CapabilityRegistry",
    "HandlerError",
    "InvalidInputError",
    "MCPProtocolHandler",
    "MissingArgumentError",
    "NotAuthenticatedError",
    "ProfileMCPServer",
    "RequestContext",
    "ServerSettings",
    "UpstreamError",
    "UpstreamTimeoutError",
    "build_registry",
    "load_settings",
]
