#!/usr/bin/env python3
# src/profile_mcp_server/types/capabilities.py
"""
Capabilities - Server identity and capability advertisement

These models produce the ``serverInfo`` and ``capabilities`` blocks of the
``initialize`` result.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ServerInfo(BaseModel):
    """Name and version reported to clients."""

    name: str
    version: str


class ToolsCapability(BaseModel):
    model_config = ConfigDict(extra="allow")


class ResourcesCapability(BaseModel):
    model_config = ConfigDict(extra="allow")


class ServerCapabilities(BaseModel):
    """Capability flags; an empty object means "supported, no options"."""

    tools: ToolsCapability | None = None
    resources: ResourcesCapability | None = None

    def to_mcp_format(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


def create_server_capabilities(tools: bool = True, resources: bool = True) -> ServerCapabilities:
    """Create server capabilities for the enabled component kinds."""
    capabilities: dict[str, Any] = {}

    if tools:
        capabilities["tools"] = ToolsCapability()
    if resources:
        capabilities["resources"] = ResourcesCapability()

    return ServerCapabilities(**capabilities)


__all__ = [
    "ResourcesCapability",
    "ServerCapabilities",
    "ServerInfo",
    "ToolsCapability",
    "create_server_capabilities",
]
