#!/usr/bin/env python3
# src/profile_mcp_server/types/__init__.py
"""
Types package - content blocks, server identity and handler wrappers.
"""

from .capabilities import ServerCapabilities, ServerInfo, create_server_capabilities
from .content import (
    ContentBlock,
    EmbeddedResource,
    ResourceContents,
    TextContent,
    ToolResult,
    content_to_dict,
    create_embedded_resource,
    create_text_content,
    format_content,
)
from .handlers import ResourceDescriptor, ResourceHandler, ToolDescriptor, ToolHandler

__all__ = [
    "ContentBlock",
    "EmbeddedResource",
    "ResourceContents",
    "ResourceDescriptor",
    "ResourceHandler",
    "ServerCapabilities",
    "ServerInfo",
    "TextContent",
    "ToolDescriptor",
    "ToolHandler",
    "ToolResult",
    "content_to_dict",
    "create_embedded_resource",
    "create_server_capabilities",
    "create_text_content",
    "format_content",
]
