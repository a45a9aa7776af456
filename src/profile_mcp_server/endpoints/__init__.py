"""HTTP endpoints."""

from .health import HealthEndpoint
from .info import InfoEndpoint, OAuthMetadataEndpoint
from .mcp import MCPEndpoint
from .profile import ProfileEndpoint

__all__ = ["HealthEndpoint", "InfoEndpoint", "MCPEndpoint", "OAuthMetadataEndpoint", "ProfileEndpoint"]
