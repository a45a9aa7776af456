#!/usr/bin/env python3
# src/profile_mcp_server/protocol/handler.py
"""
Protocol Handler - JSON-RPC method routing for the MCP servers

Every request yields exactly one envelope carrying either ``result`` or
``error``. Notifications (messages without an ``id``) are dispatched but
produce no envelope. Handler failures never escape this module.
"""

import asyncio
import logging
from typing import Any

from ..constants import (
    JSONRPC_KEY,
    JSONRPC_VERSION,
    KEY_CAPABILITIES,
    KEY_CONTENTS,
    KEY_ERROR,
    KEY_ID,
    KEY_METHOD,
    KEY_PARAMS,
    KEY_PROTOCOL_VERSION,
    KEY_RESULT,
    KEY_SERVER_INFO,
    MCP_PROTOCOL_VERSION,
    JsonRpcError,
    McpMethod,
)
from ..context import RequestContext, anonymous_context
from ..errors import HandlerError, describe_failure, format_unknown_tool_error
from ..registry import CapabilityRegistry
from ..types import ServerCapabilities, ServerInfo, create_server_capabilities

logger = logging.getLogger(__name__)

Response = dict[str, Any]


class MCPProtocolHandler:
    """Routes MCP requests to the capability registry and its handlers."""

    def __init__(
        self,
        server_info: ServerInfo,
        registry: CapabilityRegistry,
        capabilities: ServerCapabilities | None = None,
        protocol_version: str = MCP_PROTOCOL_VERSION,
    ):
        self.server_info = server_info
        self.registry = registry
        self.capabilities = capabilities or create_server_capabilities()
        self.protocol_version = protocol_version

        # Don't log during init to keep stdio mode clean
        logger.debug("MCP protocol handler initialized")

    async def handle_request(self, message: Any, context: RequestContext | None = None) -> Response | None:
        """Handle one parsed JSON-RPC message.

        Args:
            message: The decoded JSON value received from the transport.
            context: Per-request context (bearer token etc.). Defaults to an
                anonymous context.

        Returns:
            The response envelope, or None for notifications.
        """
        if not isinstance(message, dict):
            return self._create_error_response(None, JsonRpcError.INVALID_REQUEST, "Invalid Request")

        msg_id = message.get(KEY_ID)
        is_notification = KEY_ID not in message
        method = message.get(KEY_METHOD)

        if not isinstance(method, str):
            if is_notification:
                logger.debug("Ignoring notification without a method")
                return None
            return self._create_error_response(msg_id, JsonRpcError.INVALID_REQUEST, "Invalid Request: missing method")

        context = context or anonymous_context()
        logger.debug(f"Handling {method} (ID: {msg_id!r}, transport: {context.transport})")

        try:
            response = await self._route(method, message, msg_id, context)
        except asyncio.CancelledError:
            raise  # Never swallow cancellation
        except Exception as e:
            logger.error(f"Error handling {method}: {e}", exc_info=True)
            response = self._create_error_response(
                msg_id, JsonRpcError.INTERNAL_ERROR, "Internal error", f"{type(e).__name__}: {e}"
            )

        if is_notification:
            return None
        return response

    async def _route(self, method: str, message: dict[str, Any], msg_id: Any, context: RequestContext) -> Response:
        params = message.get(KEY_PARAMS)
        if params is None:
            params = {}

        if method == McpMethod.INITIALIZE:
            return self._handle_initialize(msg_id)
        elif method == McpMethod.INITIALIZED:
            logger.debug("Initialized notification received")
            return self._create_success_response(msg_id, {})
        elif method == McpMethod.TOOLS_LIST:
            return self._create_success_response(msg_id, {"tools": self.registry.list_tools()})
        elif method == McpMethod.RESOURCES_LIST:
            return self._create_success_response(msg_id, {"resources": self.registry.list_resources()})
        elif method == McpMethod.TOOLS_CALL:
            if not isinstance(params, dict):
                return self._invalid_params(msg_id, params)
            return await self._handle_tools_call(params, msg_id, context)
        elif method == McpMethod.RESOURCES_READ:
            if not isinstance(params, dict):
                return self._invalid_params(msg_id, params)
            return await self._handle_resources_read(params, msg_id, context)
        else:
            return self._create_error_response(msg_id, JsonRpcError.METHOD_NOT_FOUND, f"Method not found: {method}")

    def _handle_initialize(self, msg_id: Any) -> Response:
        result = {
            KEY_PROTOCOL_VERSION: self.protocol_version,
            KEY_CAPABILITIES: self.capabilities.to_mcp_format(),
            KEY_SERVER_INFO: self.server_info.model_dump(exclude_none=True),
        }
        logger.debug(f"Initialized {self.server_info.name} v{self.server_info.version}")
        return self._create_success_response(msg_id, result)

    async def _handle_tools_call(self, params: dict[str, Any], msg_id: Any, context: RequestContext) -> Response:
        """Handle tools/call request."""
        tool_name = params.get("name")
        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}

        tool_handler = self.registry.get_tool(tool_name) if isinstance(tool_name, str) else None
        if tool_handler is None:
            error_msg = format_unknown_tool_error(str(tool_name), self.registry.tool_names)
            return self._create_error_response(msg_id, JsonRpcError.METHOD_NOT_FOUND, error_msg)

        if not isinstance(arguments, dict):
            return self._create_error_response(
                msg_id, JsonRpcError.INVALID_PARAMS, f"arguments must be an object, got {type(arguments).__name__}"
            )

        try:
            result = await tool_handler.execute(arguments, context)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            return self._handler_failure(msg_id, f"Tool '{tool_name}'", e)

        logger.debug(f"Executed tool {tool_name}")
        return self._create_success_response(msg_id, result.to_mcp_format())

    async def _handle_resources_read(self, params: dict[str, Any], msg_id: Any, context: RequestContext) -> Response:
        """Handle resources/read request."""
        uri = params.get("uri")

        resource_handler = self.registry.get_resource(uri) if isinstance(uri, str) else None
        if resource_handler is None:
            return self._create_error_response(msg_id, JsonRpcError.INVALID_PARAMS, f"Unknown resource: {uri}")

        try:
            contents = await resource_handler.read(context)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            return self._handler_failure(msg_id, f"Resource '{uri}'", e)

        logger.debug(f"Read resource {uri}")
        return self._create_success_response(msg_id, {KEY_CONTENTS: [contents]})

    def _handler_failure(self, msg_id: Any, subject: str, exc: Exception) -> Response:
        kind, detail = describe_failure(exc)
        if isinstance(exc, HandlerError):
            logger.warning(f"{subject} failed ({kind}): {exc}")
        else:
            logger.error(f"{subject} raised unexpectedly: {exc}", exc_info=True)
        return self._create_error_response(msg_id, JsonRpcError.INTERNAL_ERROR, f"{subject} failed ({kind})", detail)

    def _invalid_params(self, msg_id: Any, params: Any) -> Response:
        return self._create_error_response(
            msg_id, JsonRpcError.INVALID_PARAMS, f"params must be an object, got {type(params).__name__}"
        )

    @staticmethod
    def _create_success_response(msg_id: Any, result: dict[str, Any]) -> Response:
        return {JSONRPC_KEY: JSONRPC_VERSION, KEY_ID: msg_id, KEY_RESULT: result}

    @staticmethod
    def _create_error_response(msg_id: Any, code: int, message: str, data: Any = None) -> Response:
        """Create error response."""
        error: dict[str, Any] = {"code": int(code), "message": message}
        if data is not None:
            error["data"] = data
        return {JSONRPC_KEY: JSONRPC_VERSION, KEY_ID: msg_id, KEY_ERROR: error}


def create_error_response(msg_id: Any, code: int, message: str, data: Any = None) -> Response:
    """Build an error envelope outside of a handler instance (transport-level errors)."""
    return MCPProtocolHandler._create_error_response(msg_id, code, message, data)
