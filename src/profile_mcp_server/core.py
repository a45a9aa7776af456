#!/usr/bin/env python3
# src/profile_mcp_server/core.py
"""
Core - ProfileMCPServer ties settings, registry, protocol handler and
transports together.
"""

import logging
from typing import Any

from starlette.applications import Starlette

from .config import ServerSettings, load_settings
from .constants import TRANSPORT_HTTP, TRANSPORT_STDIO
from .http_server import create_app, run_http_server
from .profiles import StaticProfileStore, UserProfileClient
from .protocol import MCPProtocolHandler
from .registry import CapabilityRegistry
from .transport import run_stdio_server
from .types import ServerInfo, create_server_capabilities
from .variants import PROFILE_VARIANTS, build_registry, profile_store

logger = logging.getLogger(__name__)


class ProfileMCPServer:
    """
    One configured MCP server.

    Usage:
        server = ProfileMCPServer(variant="basic")
        server.run("stdio")
    """

    def __init__(
        self,
        settings: ServerSettings | None = None,
        variant: str | None = None,
        profile_client: UserProfileClient | None = None,
        registry: CapabilityRegistry | None = None,
        store: StaticProfileStore | None = None,
    ):
        """
        Args:
            settings: Resolved settings (loaded from the environment if None)
            variant: Overrides ``settings.variant``
            profile_client: Upstream profile client for ``get_user_profile``
            registry: Prebuilt registry; skips variant composition
            store: Profile table shared by the tools and the HTML profile page
        """
        settings = settings or load_settings()
        self.settings = settings.with_overrides(variant=variant)

        self.server_info = ServerInfo(name=self.settings.name, version=self.settings.version)
        if store is None and self.settings.variant in PROFILE_VARIANTS:
            store = profile_store(self.settings)
        self.store = store
        self.registry = registry or build_registry(
            self.settings.variant, self.settings, profile_client=profile_client, store=store
        )
        self.protocol = MCPProtocolHandler(self.server_info, self.registry, create_server_capabilities())

        # Don't log at INFO here; stdio mode must stay quiet until run()
        logger.debug(f"Initialized {self.settings.name} v{self.settings.version} ({self.settings.variant})")

    def create_app(self, debug: bool = False) -> Starlette:
        return create_app(self.protocol, self.settings, store=self.store, debug=debug)

    def info(self) -> dict[str, Any]:
        return {
            "server": self.server_info.model_dump(),
            "variant": self.settings.variant,
            "environment": self.settings.environment,
            "tools": self.registry.tool_names,
            "resources": self.registry.resource_uris,
        }

    def run_stdio(self) -> int:
        logger.debug(f"Starting {self.settings.name} in stdio mode")
        return run_stdio_server(self.protocol)

    def run_http(self, host: str | None = None, port: int | None = None, debug: bool = False) -> int:
        final_host = host or self.settings.host
        final_port = port or self.settings.port
        log_level = "debug" if debug else self.settings.log_level
        logger.info(
            f"{self.settings.name} v{self.settings.version} ({self.settings.variant}) "
            f"tools: {', '.join(self.registry.tool_names)}"
        )
        return run_http_server(self.create_app(debug=debug), final_host, final_port, log_level)

    def run(
        self,
        transport: str | None = None,
        host: str | None = None,
        port: int | None = None,
        debug: bool = False,
    ) -> int:
        """Run on ``transport`` (defaults to the detected one) and return the exit code."""
        transport = transport or self.settings.transport
        if transport == TRANSPORT_STDIO:
            return self.run_stdio()
        if transport == TRANSPORT_HTTP:
            return self.run_http(host=host, port=port, debug=debug)
        raise ValueError(f"Unknown transport {transport!r}")
