#!/usr/bin/env python3
"""
Endpoint constants - HTTP status codes, paths, header names and error
strings used by the HTTP transport.
"""

from enum import IntEnum

from ..constants import (  # noqa: F401
    CONTENT_TYPE_JSON,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_MCP_SESSION_ID,
    JsonRpcError,
)


# ---------------------------------------------------------------------------
# HTTP status codes
# ---------------------------------------------------------------------------
class HttpStatus(IntEnum):
    OK = 200
    ACCEPTED = 202
    BAD_REQUEST = 400
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
PATH_ROOT = "/"
PATH_MCP = "/mcp"
PATH_HEALTH = "/health"
PATH_OAUTH_METADATA = "/.well-known/oauth-protected-resource"
PATH_PROFILE = "/profile"
PATH_PROFILE_BY_ID = "/profile/{profile_id}"


# ---------------------------------------------------------------------------
# HTTP methods
# ---------------------------------------------------------------------------
METHOD_GET = "GET"
METHOD_POST = "POST"
METHOD_OPTIONS = "OPTIONS"
METHOD_DELETE = "DELETE"

CORS_ALLOWED_METHODS = (METHOD_GET, METHOD_POST, METHOD_OPTIONS, METHOD_DELETE)
CORS_ALLOWED_HEADERS = (HEADER_CONTENT_TYPE, HEADER_AUTHORIZATION, HEADER_MCP_SESSION_ID)


# ---------------------------------------------------------------------------
# Header values
# ---------------------------------------------------------------------------
HEADER_CACHE_CONTROL = "Cache-Control"
CACHE_NO_CACHE = "no-cache"
HEADERS_NOCACHE: dict[str, str] = {HEADER_CACHE_CONTROL: CACHE_NO_CACHE}


# ---------------------------------------------------------------------------
# Error strings
# ---------------------------------------------------------------------------
ERROR_PARSE = "Parse error"
ERROR_SERVER_MISCONFIG = "server_misconfig"
ERROR_OAUTH_NOT_CONFIGURED = "Set AUTH0_ISSUER_BASE_URL and AUTH0_AUDIENCE env vars"


# ---------------------------------------------------------------------------
# OAuth protected resource metadata
# ---------------------------------------------------------------------------
OAUTH_SCOPES_SUPPORTED = ("openid", "profile", "email")
OAUTH_BEARER_METHODS = ("header",)
