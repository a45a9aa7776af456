#!/usr/bin/env python3
# src/profile_mcp_server/types/content.py
"""
Content - Tagged content blocks returned by tool handlers

A tool result is a list of content blocks. Each block is one variant of a
discriminated union keyed on ``type`` so serializers can handle every kind
exhaustively.
"""

from typing import Annotated, Any, Literal

import orjson
from pydantic import BaseModel, ConfigDict, Field

from ..constants import KEY_CONTENT, KEY_STRUCTURED_CONTENT


class TextContent(BaseModel):
    """Plain text block."""

    type: Literal["text"] = "text"
    text: str


class ResourceContents(BaseModel):
    """Text payload of an embedded resource."""

    model_config = ConfigDict(populate_by_name=True)

    uri: str
    mime_type: str = Field(alias="mimeType")
    text: str


class EmbeddedResource(BaseModel):
    """Resource block carrying inline content (e.g. generated HTML)."""

    type: Literal["resource"] = "resource"
    resource: ResourceContents


ContentBlock = Annotated[TextContent | EmbeddedResource, Field(discriminator="type")]


class ToolResult(BaseModel):
    """Complete result of one tool invocation."""

    content: list[ContentBlock]
    structured_content: dict[str, Any] | None = None

    def to_mcp_format(self) -> dict[str, Any]:
        result: dict[str, Any] = {KEY_CONTENT: [content_to_dict(block) for block in self.content]}
        if self.structured_content is not None:
            result[KEY_STRUCTURED_CONTENT] = self.structured_content
        return result


def create_text_content(text: str) -> TextContent:
    return TextContent(text=text)


def create_embedded_resource(uri: str, mime_type: str, text: str) -> EmbeddedResource:
    return EmbeddedResource(resource=ResourceContents(uri=uri, mimeType=mime_type, text=text))


def content_to_dict(block: TextContent | EmbeddedResource) -> dict[str, Any]:
    """Serialize a block to its MCP wire shape."""
    return block.model_dump(by_alias=True, exclude_none=True)


def format_content(content: Any) -> list[TextContent | EmbeddedResource]:
    """Normalize whatever a handler returned into a list of content blocks.

    Strings become text blocks, dicts are rendered as indented JSON text,
    lists are flattened.
    """
    if isinstance(content, TextContent | EmbeddedResource):
        return [content]
    if isinstance(content, str):
        return [create_text_content(content)]
    if isinstance(content, dict):
        return [create_text_content(orjson.dumps(content, option=orjson.OPT_INDENT_2).decode())]
    if isinstance(content, list):
        blocks: list[TextContent | EmbeddedResource] = []
        for item in content:
            blocks.extend(format_content(item))
        return blocks
    return [create_text_content(str(content))]


def to_tool_result(value: Any) -> ToolResult:
    """Coerce a handler return value into a ``ToolResult``."""
    if isinstance(value, ToolResult):
        return value
    return ToolResult(content=format_content(value))


__all__ = [
    "ContentBlock",
    "EmbeddedResource",
    "ResourceContents",
    "TextContent",
    "ToolResult",
    "content_to_dict",
    "create_embedded_resource",
    "create_text_content",
    "format_content",
    "to_tool_result",
]
