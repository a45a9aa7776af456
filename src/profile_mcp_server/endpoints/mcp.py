#!/usr/bin/env python3
"""
endpoints/mcp.py - JSON-RPC over HTTP POST

One request body in, one envelope out. The bearer token of each request is
put into that request's own ``RequestContext``; nothing is kept between
requests.
"""

import logging

import orjson
from starlette.requests import Request
from starlette.responses import Response

from ..constants import HEADER_AUTHORIZATION, TRANSPORT_HTTP
from ..context import RequestContext, parse_bearer_token
from ..protocol import MCPProtocolHandler, create_error_response
from .constants import ERROR_PARSE, HttpStatus, JsonRpcError
from .utils import json_response

logger = logging.getLogger(__name__)


class MCPEndpoint:
    """Starlette endpoint for ``POST /mcp``."""

    def __init__(self, protocol_handler: MCPProtocolHandler):
        self.protocol = protocol_handler

    async def handle_request(self, request: Request) -> Response:
        body = await request.body()
        if not body.strip():
            return self._parse_error("Empty body")

        try:
            message = orjson.loads(body)
        except orjson.JSONDecodeError as e:
            logger.debug(f"Invalid JSON body: {e}")
            return self._parse_error(str(e))

        context = self._build_context(request)
        response = await self.protocol.handle_request(message, context)

        if response is None:
            return Response(status_code=HttpStatus.ACCEPTED)
        return json_response(response)

    def _build_context(self, request: Request) -> RequestContext:
        token = parse_bearer_token(request.headers.get(HEADER_AUTHORIZATION))
        client = request.client
        return RequestContext(
            access_token=token,
            transport=TRANSPORT_HTTP,
            metadata={"client": client.host if client else None},
        )

    @staticmethod
    def _parse_error(detail: str) -> Response:
        envelope = create_error_response(None, JsonRpcError.PARSE_ERROR, ERROR_PARSE, detail)
        return json_response(envelope, status_code=HttpStatus.BAD_REQUEST)
