#!/usr/bin/env python3
# src/profile_mcp_server/types/handlers.py
"""
Handlers - Tool and resource handlers with cached MCP descriptors

A handler pairs a descriptor (what ``tools/list`` / ``resources/list``
report) with the callable that backs it. Callables receive the request's
``RequestContext`` explicitly and may be sync or async.
"""

import inspect
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, Field

from ..constants import CONTENT_TYPE_HTML, CONTENT_TYPE_JSON, CONTENT_TYPE_PLAIN
from ..context import RequestContext
from .content import ToolResult, to_tool_result

EMPTY_INPUT_SCHEMA: dict[str, Any] = {"type": "object", "properties": {}}


class ToolDescriptor(BaseModel):
    """Tool entry as reported by ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(alias="inputSchema", default_factory=lambda: dict(EMPTY_INPUT_SCHEMA))


class ResourceDescriptor(BaseModel):
    """Resource entry as reported by ``resources/list``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    uri: str
    mime_type: str = Field(alias="mimeType")
    name: str
    description: str


async def _call(func: Callable[..., Any], *args: Any) -> Any:
    if inspect.iscoroutinefunction(func):
        return await func(*args)
    result = func(*args)
    if inspect.isawaitable(result):
        return await result
    return result


@dataclass
class ToolHandler:
    """Tool handler with a pre-computed MCP format."""

    descriptor: ToolDescriptor
    handler: Callable[[dict[str, Any], RequestContext], Any]
    _cached_mcp_format: dict[str, Any] | None = field(default=None, repr=False)

    @classmethod
    def from_function(
        cls,
        func: Callable[[dict[str, Any], RequestContext], Any],
        name: str | None = None,
        description: str | None = None,
        input_schema: dict[str, Any] | None = None,
    ) -> "ToolHandler":
        """Create a ToolHandler from a ``(arguments, context)`` callable."""
        tool_name = name or func.__name__
        tool_description = description or inspect.getdoc(func) or f"Execute {tool_name}"
        descriptor = ToolDescriptor(
            name=tool_name,
            description=tool_description,
            inputSchema=input_schema if input_schema is not None else dict(EMPTY_INPUT_SCHEMA),
        )
        return cls(descriptor=descriptor, handler=func)

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def description(self) -> str:
        return self.descriptor.description

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.descriptor.input_schema

    def to_mcp_format(self) -> dict[str, Any]:
        """Convert to MCP tool format (a copy, safe to mutate)."""
        if self._cached_mcp_format is None:
            self._cached_mcp_format = self.descriptor.model_dump(by_alias=True)
        return orjson.loads(orjson.dumps(self._cached_mcp_format))  # type: ignore[no-any-return]

    async def execute(self, arguments: dict[str, Any], context: RequestContext) -> ToolResult:
        """Run the tool. Failures propagate to the caller unchanged."""
        result = await _call(self.handler, arguments, context)
        return to_tool_result(result)


@dataclass
class ResourceHandler:
    """Resource handler; content is formatted according to its MIME type."""

    descriptor: ResourceDescriptor
    handler: Callable[[RequestContext], Any]
    _cached_mcp_format: dict[str, Any] | None = field(default=None, repr=False)

    @classmethod
    def from_function(
        cls,
        uri: str,
        func: Callable[[RequestContext], Any],
        name: str | None = None,
        description: str | None = None,
        mime_type: str = CONTENT_TYPE_PLAIN,
    ) -> "ResourceHandler":
        """Create a ResourceHandler from a ``(context)`` callable."""
        resource_name = name or func.__name__.replace("_", " ").title()
        resource_description = description or inspect.getdoc(func) or f"Resource: {uri}"
        descriptor = ResourceDescriptor(uri=uri, mimeType=mime_type, name=resource_name, description=resource_description)
        return cls(descriptor=descriptor, handler=func)

    @property
    def uri(self) -> str:
        return self.descriptor.uri

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def description(self) -> str:
        return self.descriptor.description

    @property
    def mime_type(self) -> str:
        return self.descriptor.mime_type

    def to_mcp_format(self) -> dict[str, Any]:
        """Convert to MCP resource format (a copy, safe to mutate)."""
        if self._cached_mcp_format is None:
            self._cached_mcp_format = self.descriptor.model_dump(by_alias=True)
        return dict(self._cached_mcp_format)

    async def read(self, context: RequestContext) -> dict[str, Any]:
        """Read the resource and return one ``contents`` entry."""
        result = await _call(self.handler, context)
        return {"uri": self.uri, "mimeType": self.mime_type, "text": self._format_content(result)}

    def _format_content(self, result: Any) -> str:
        """Format content based on MIME type."""
        if self.mime_type == CONTENT_TYPE_JSON:
            if isinstance(result, str):
                return result
            return orjson.dumps(result, option=orjson.OPT_INDENT_2).decode()  # type: ignore[no-any-return]
        if self.mime_type.startswith(CONTENT_TYPE_HTML) or self.mime_type == CONTENT_TYPE_PLAIN:
            return str(result)
        if isinstance(result, dict | list):
            return orjson.dumps(result, option=orjson.OPT_INDENT_2).decode()  # type: ignore[no-any-return]
        return str(result)


__all__ = [
    "EMPTY_INPUT_SCHEMA",
    "ResourceDescriptor",
    "ResourceHandler",
    "ToolDescriptor",
    "ToolHandler",
]
