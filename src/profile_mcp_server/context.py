"""
Request context for MCP servers.

A ``RequestContext`` is created by the transport for every inbound request
and handed explicitly to the protocol handler, which passes it on to the tool
or resource handler. Nothing about the caller is kept in module or process
state, so overlapping HTTP requests can never observe each other's token.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from .constants import TRANSPORT_STDIO
from .errors import NotAuthenticatedError

_BEARER_RE = re.compile(r"^\s*bearer\s+", re.IGNORECASE)


@dataclass(frozen=True)
class RequestContext:
    """
    Immutable per-request data available to handlers.

    Attributes:
        access_token: Bearer token from the ``Authorization`` header, if any
        transport: Name of the transport that received the request
        metadata: Additional request metadata (client address, headers of interest)
    """

    access_token: str | None = None
    transport: str = TRANSPORT_STDIO
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    def require_access_token(self) -> str:
        """
        Require a bearer token to be present.

        Returns:
            The token string

        Raises:
            NotAuthenticatedError: If the request carried no token
        """
        if not self.access_token:
            raise NotAuthenticatedError()
        return self.access_token


def parse_bearer_token(header_value: str | None) -> str | None:
    """
    Extract the token from an ``Authorization`` header value.

    The ``Bearer`` prefix is matched case-insensitively. A header without the
    prefix, or with nothing after it, yields no token.
    """
    if not header_value:
        return None
    match = _BEARER_RE.match(header_value)
    if not match:
        return None
    token = header_value[match.end() :].strip()
    return token or None


def anonymous_context(transport: str = TRANSPORT_STDIO) -> RequestContext:
    """Context for requests that carry no credentials."""
    return RequestContext(access_token=None, transport=transport)
