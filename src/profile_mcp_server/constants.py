#!/usr/bin/env python3
"""
Top-level constants shared across the profile_mcp_server package.
"""

import re
from enum import IntEnum

# ---------------------------------------------------------------------------
# JSON-RPC
# ---------------------------------------------------------------------------
JSONRPC_VERSION = "2.0"
JSONRPC_KEY = "jsonrpc"

# JSON-RPC message keys
KEY_METHOD = "method"
KEY_PARAMS = "params"
KEY_ID = "id"
KEY_RESULT = "result"
KEY_ERROR = "error"


class JsonRpcError(IntEnum):
    """Standard JSON-RPC 2.0 error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


# ---------------------------------------------------------------------------
# MCP protocol
# ---------------------------------------------------------------------------
MCP_PROTOCOL_VERSION = "2024-11-05"


# MCP method names
class McpMethod:
    INITIALIZE = "initialize"
    INITIALIZED = "notifications/initialized"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"
    RESOURCES_LIST = "resources/list"
    RESOURCES_READ = "resources/read"


# MCP initialize / result keys
KEY_PROTOCOL_VERSION = "protocolVersion"
KEY_SERVER_INFO = "serverInfo"
KEY_CAPABILITIES = "capabilities"
KEY_CONTENT = "content"
KEY_CONTENTS = "contents"
KEY_STRUCTURED_CONTENT = "structuredContent"


# ---------------------------------------------------------------------------
# Content types
# ---------------------------------------------------------------------------
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_HTML = "text/html"
CONTENT_TYPE_PLAIN = "text/plain"


# ---------------------------------------------------------------------------
# Common HTTP headers
# ---------------------------------------------------------------------------
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_MCP_SESSION_ID = "Mcp-Session-Id"


# ---------------------------------------------------------------------------
# Environment variables
# ---------------------------------------------------------------------------
ENV_MCP_LOG_LEVEL = "MCP_LOG_LEVEL"
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_MCP_TRANSPORT = "MCP_TRANSPORT"
ENV_MCP_STDIO = "MCP_STDIO"
ENV_USE_STDIO = "USE_STDIO"
ENV_MCP_VARIANT = "MCP_VARIANT"
ENV_MCP_SERVER_NAME = "MCP_SERVER_NAME"
ENV_MCP_SERVER_VERSION = "MCP_SERVER_VERSION"
ENV_DEFAULT_PROFILE_ID = "DEFAULT_PROFILE_ID"
ENV_HOST = "HOST"
ENV_PORT = "PORT"
ENV_CORS_ALLOWED_ORIGINS = "CORS_ALLOWED_ORIGINS"
ENV_PROFILE_API_URL = "PROFILE_API_URL"
ENV_PROFILE_API_TIMEOUT = "PROFILE_API_TIMEOUT"
ENV_AUTH0_ISSUER_BASE_URL = "AUTH0_ISSUER_BASE_URL"
ENV_AUTH0_AUDIENCE = "AUTH0_AUDIENCE"
ENV_RENDER = "RENDER"
ENV_RENDER_EXTERNAL_URL = "RENDER_EXTERNAL_URL"


# ---------------------------------------------------------------------------
# Logging level strings
# ---------------------------------------------------------------------------
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


# ---------------------------------------------------------------------------
# Network defaults
# ---------------------------------------------------------------------------
DEFAULT_HOST = "0.0.0.0"
DEFAULT_ENCODING = "utf-8"
DEFAULT_PORT = 3000
DEFAULT_CORS_ORIGINS = ("https://chatgpt.com", "https://chat.openai.com")
STDIO_READ_CHUNK = 4096


# ---------------------------------------------------------------------------
# Server identity
# ---------------------------------------------------------------------------
SERVER_NAME = "profile-mcp-server"
SERVER_VERSION = "1.0.0"
DEFAULT_PROFILE_ID = "default"
PACKAGE_LOGGER = "profile_mcp_server"


# ---------------------------------------------------------------------------
# Transports and variants
# ---------------------------------------------------------------------------
TRANSPORT_STDIO = "stdio"
TRANSPORT_HTTP = "http"

VARIANT_BASIC = "basic"
VARIANT_PROFILE = "profile"
VARIANT_ENHANCED = "enhanced"
VARIANTS = (VARIANT_BASIC, VARIANT_PROFILE, VARIANT_ENHANCED)
DEFAULT_VARIANT = VARIANT_ENHANCED


# ---------------------------------------------------------------------------
# Upstream profile API
# ---------------------------------------------------------------------------
DEFAULT_UPSTREAM_TIMEOUT = 10.0


# ---------------------------------------------------------------------------
# Tool name validation
# ---------------------------------------------------------------------------
TOOL_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_\-\.]{1,128}$")


# ---------------------------------------------------------------------------
# Calculator limits
# ---------------------------------------------------------------------------
MAX_EXPRESSION_LENGTH = 1000
MAX_EXPRESSION_DEPTH = 100
