#!/usr/bin/env python3
# src/profile_mcp_server/handlers/basic.py
"""
Basic tools and server resources: echo, clock, calculator, server info.
"""

import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import orjson

from ..calculator import evaluate, format_number
from ..constants import CONTENT_TYPE_JSON
from ..context import RequestContext
from ..errors import InvalidInputError, MissingArgumentError
from ..types import ResourceHandler, ServerInfo, ToolHandler

logger = logging.getLogger(__name__)


def require_string(arguments: dict[str, Any], name: str, tool_name: str) -> str:
    """Fetch a required, non-empty string argument."""
    value = arguments.get(name)
    if value is None or value == "":
        raise MissingArgumentError(name, tool_name)
    if not isinstance(value, str):
        raise InvalidInputError(f"'{name}' must be a string, got {type(value).__name__}")
    return value


def require_text(arguments: dict[str, Any], name: str, tool_name: str) -> str:
    """Fetch a required, non-empty argument as text; non-strings are rendered as JSON."""
    value = arguments.get(name)
    if value is None or value == "":
        raise MissingArgumentError(name, tool_name)
    if isinstance(value, str):
        return value
    return orjson.dumps(value).decode()


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ============================================================================
# Tools
# ============================================================================


def echo(arguments: dict[str, Any], context: RequestContext) -> str:
    """Echo back the provided text"""
    return f"Echo: {require_text(arguments, 'text', 'echo')}"


def get_current_time(arguments: dict[str, Any], context: RequestContext) -> str:
    """Get the current date and time"""
    return f"Current time: {utc_timestamp()}"


def calculate(arguments: dict[str, Any], context: RequestContext) -> str:
    """Perform basic arithmetic calculations"""
    expression = require_string(arguments, "expression", "calculate")
    value = evaluate(expression)
    return f"{expression} = {format_number(value)}"


def basic_tools() -> list[ToolHandler]:
    return [
        ToolHandler.from_function(
            echo,
            name="echo",
            input_schema={
                "type": "object",
                "properties": {"text": {"type": "string", "description": "Text to echo back"}},
                "required": ["text"],
            },
        ),
        ToolHandler.from_function(
            get_current_time,
            name="get_current_time",
            input_schema={"type": "object", "properties": {}},
        ),
        ToolHandler.from_function(
            calculate,
            name="calculate",
            input_schema={
                "type": "object",
                "properties": {
                    "expression": {
                        "type": "string",
                        "description": "Mathematical expression to evaluate (e.g., '2 + 2')",
                    }
                },
                "required": ["expression"],
            },
        ),
    ]


# ============================================================================
# Resources
# ============================================================================


def server_resources(
    server_info: ServerInfo,
    describe: Callable[[], dict[str, Any]],
    description: str = "An example MCP server",
) -> list[ResourceHandler]:
    """
    ``server://info`` and ``server://capabilities``.

    ``describe`` is called at read time and returns the tool and resource
    summary, so the capabilities resource can describe the registry that
    contains it.
    """
    started = time.monotonic()

    def info(context: RequestContext) -> dict[str, Any]:
        return {
            "name": server_info.name,
            "version": server_info.version,
            "description": description,
            "uptime": round(time.monotonic() - started, 3),
        }

    def capabilities(context: RequestContext) -> dict[str, Any]:
        return describe()

    return [
        ResourceHandler.from_function(
            "server://info",
            info,
            name="Server Information",
            description="Information about this MCP server",
            mime_type=CONTENT_TYPE_JSON,
        ),
        ResourceHandler.from_function(
            "server://capabilities",
            capabilities,
            name="Server Capabilities",
            description="Capabilities supported by this MCP server",
            mime_type=CONTENT_TYPE_JSON,
        ),
    ]
