#!/usr/bin/env python3
# src/profile_mcp_server/registry.py
"""
Capability registry: the declared tools and resources of one server.

The registry is built once at startup and never mutated afterwards, so the
protocol handler can read it from any request without locking.
"""

import logging
from collections.abc import Iterable
from typing import Any

from .constants import TOOL_NAME_PATTERN
from .types import ResourceHandler, ToolHandler

logger = logging.getLogger(__name__)


class CapabilityRegistry:
    """Immutable, ordered collection of tool and resource handlers."""

    def __init__(self, tools: Iterable[ToolHandler] = (), resources: Iterable[ResourceHandler] = ()) -> None:
        self._tools: tuple[ToolHandler, ...] = tuple(tools)
        self._resources: tuple[ResourceHandler, ...] = tuple(resources)

        self._tools_by_name: dict[str, ToolHandler] = {}
        for tool in self._tools:
            if not TOOL_NAME_PATTERN.match(tool.name):
                raise ValueError(f"Invalid tool name: {tool.name!r}")
            if tool.name in self._tools_by_name:
                raise ValueError(f"Duplicate tool name: {tool.name!r}")
            self._tools_by_name[tool.name] = tool

        self._resources_by_uri: dict[str, ResourceHandler] = {}
        for resource in self._resources:
            if resource.uri in self._resources_by_uri:
                raise ValueError(f"Duplicate resource URI: {resource.uri!r}")
            self._resources_by_uri[resource.uri] = resource

        logger.debug(f"Registry built with {len(self._tools)} tools and {len(self._resources)} resources")

    @property
    def tool_names(self) -> list[str]:
        return [tool.name for tool in self._tools]

    @property
    def resource_uris(self) -> list[str]:
        return [resource.uri for resource in self._resources]

    def list_tools(self) -> list[dict[str, Any]]:
        """Get list of tools in MCP format, in registration order."""
        return [tool.to_mcp_format() for tool in self._tools]

    def list_resources(self) -> list[dict[str, Any]]:
        """Get list of resources in MCP format, in registration order."""
        return [resource.to_mcp_format() for resource in self._resources]

    def get_tool(self, name: str) -> ToolHandler | None:
        return self._tools_by_name.get(name)

    def get_resource(self, uri: str) -> ResourceHandler | None:
        return self._resources_by_uri.get(uri)

    def __repr__(self) -> str:
        return f"CapabilityRegistry(tools={self.tool_names!r}, resources={self.resource_uris!r})"
