#!/usr/bin/env python3
# src/profile_mcp_server/variants.py
"""
Variant composition.

A variant names which handler sets one server exposes:

- ``basic``: echo, get_current_time, calculate + server resources
- ``profile``: profile tools + profile resources
- ``enhanced``: everything
"""

import logging
from typing import Any

from .config import ServerSettings
from .constants import VARIANT_BASIC, VARIANT_ENHANCED, VARIANT_PROFILE, VARIANTS
from .handlers import ProfileHandlers, basic_tools, server_resources
from .profiles import StaticProfileStore, UserProfileClient
from .registry import CapabilityRegistry
from .types import ResourceHandler, ServerInfo, ToolHandler

logger = logging.getLogger(__name__)

PROFILE_VARIANTS = (VARIANT_PROFILE, VARIANT_ENHANCED)


_DESCRIPTIONS = {
    VARIANT_BASIC: "A simple MCP server with basic tools",
    VARIANT_PROFILE: "An MCP server exposing employee profiles",
    VARIANT_ENHANCED: "An MCP server with basic tools, employee profiles and statistics",
}


def profile_store(settings: ServerSettings) -> StaticProfileStore:
    return StaticProfileStore(default_id=settings.default_profile_id)


def build_registry(
    variant: str,
    settings: ServerSettings | None = None,
    profile_client: UserProfileClient | None = None,
    store: StaticProfileStore | None = None,
) -> CapabilityRegistry:
    """
    Build the registry for ``variant``.

    ``get_user_profile`` is included only when ``profile_client`` is given
    or ``settings.profile_api_url`` is set.

    Raises:
        ValueError: If the variant is unknown.
    """
    if variant not in VARIANTS:
        raise ValueError(f"Unknown variant {variant!r}. Expected one of: {', '.join(VARIANTS)}")
    settings = settings or ServerSettings(variant=variant)

    tools: list[ToolHandler] = []
    resources: list[ResourceHandler] = []

    if variant in (VARIANT_BASIC, VARIANT_ENHANCED):
        server_info = ServerInfo(name=settings.name, version=settings.version)
        tools.extend(basic_tools())
        resources.extend(server_resources(server_info, lambda: describe_registry(registry), _DESCRIPTIONS[variant]))

    if variant in PROFILE_VARIANTS:
        if profile_client is None and settings.profile_api_url:
            profile_client = UserProfileClient(settings.profile_api_url, timeout=settings.profile_api_timeout)
        profile_handlers = ProfileHandlers(
            store or profile_store(settings),
            user_client=profile_client,
        )
        tools.extend(profile_handlers.tools())
        resources.extend(profile_handlers.resources())

    registry = CapabilityRegistry(tools, resources)
    logger.debug(f"Built {variant} registry: {registry!r}")
    return registry


def describe_registry(registry: CapabilityRegistry) -> dict[str, Any]:
    """Short summary of a registry for ``server://capabilities``."""
    return {
        "tools": [{"name": t["name"], "description": t["description"]} for t in registry.list_tools()],
        "resources": [{"uri": r["uri"], "name": r["name"]} for r in registry.list_resources()],
    }
