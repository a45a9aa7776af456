#!/usr/bin/env python3
"""
Endpoint utilities - orjson responses.
"""

from typing import Any

import orjson
from starlette.responses import Response

from .constants import CONTENT_TYPE_JSON, HEADERS_NOCACHE, HttpStatus


def json_response(data: Any, status_code: int = HttpStatus.OK, headers: dict[str, str] | None = None) -> Response:
    """JSON response serialized with orjson; never cached."""
    merged = dict(HEADERS_NOCACHE)
    if headers:
        merged.update(headers)
    return Response(orjson.dumps(data), status_code=status_code, media_type=CONTENT_TYPE_JSON, headers=merged)


def error_response(status_code: int, error: str, message: str | None = None) -> Response:
    """Plain (non JSON-RPC) error body: ``{"error": ..., "message": ...}``."""
    body: dict[str, Any] = {"error": error}
    if message:
        body["message"] = message
    return json_response(body, status_code=status_code)
