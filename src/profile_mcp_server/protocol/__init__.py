#!/usr/bin/env python3
# src/profile_mcp_server/protocol/__init__.py
"""
MCP protocol package.

Re-exports MCPProtocolHandler so transports import from one place.
"""

from .handler import MCPProtocolHandler, create_error_response

__all__ = [
    "MCPProtocolHandler",
    "create_error_response",
]
