"""
Structured error types for profile_mcp_server.

Handlers signal failure only by raising one of the ``HandlerError``
subclasses below. The protocol handler converts every one of them into a
JSON-RPC ``-32603`` error object whose ``data`` carries the cause.
"""

from difflib import get_close_matches

from .constants import JsonRpcError


class MCPError(Exception):
    """Structured MCP error with an optional fix suggestion."""

    def __init__(
        self,
        message: str,
        code: int = JsonRpcError.INTERNAL_ERROR,
        suggestion: str | None = None,
    ):
        self.code = code
        self.suggestion = suggestion
        super().__init__(message)

    def to_message(self) -> str:
        """Format the error with suggestion."""
        parts = [str(self)]
        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")
        return " | ".join(parts)


class HandlerError(MCPError):
    """Failure raised by a tool or resource handler."""

    kind = "HandlerError"
    retryable = False

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(message, code=JsonRpcError.INTERNAL_ERROR, suggestion=suggestion)


class MissingArgumentError(HandlerError):
    """A required argument was absent or empty."""

    kind = "MissingArgument"

    def __init__(self, argument: str, tool_name: str | None = None):
        self.argument = argument
        self.tool_name = tool_name
        if tool_name:
            message = f"Tool '{tool_name}': missing required argument '{argument}'"
        else:
            message = f"Missing required argument '{argument}'"
        super().__init__(message)


class InvalidInputError(HandlerError):
    """An argument was present but its content is unacceptable."""

    kind = "InvalidInput"


class NotAuthenticatedError(HandlerError):
    """The handler needs a bearer token and the request carried none."""

    kind = "NotAuthenticated"

    def __init__(self, message: str = "Authentication required. Please log in via OAuth."):
        super().__init__(message, suggestion="Send an 'Authorization: Bearer <token>' header")


class UpstreamError(HandlerError):
    """The backing service failed or answered with an error."""

    kind = "UpstreamFailure"

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class UpstreamTimeoutError(UpstreamError):
    """The backing service did not answer within the configured timeout."""

    kind = "UpstreamTimeout"
    retryable = True

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Upstream request timed out after {timeout:g}s")


def suggest_tool_name(tool_name: str, available_tools: list[str]) -> str | None:
    """Find the closest matching tool name using fuzzy matching.

    Args:
        tool_name: The unknown tool name.
        available_tools: List of registered tool names.

    Returns:
        The closest match, or None if no good match found.
    """
    matches = get_close_matches(tool_name, available_tools, n=1, cutoff=0.6)
    return matches[0] if matches else None


def format_unknown_tool_error(tool_name: str, available_tools: list[str]) -> str:
    """Create an error message for an unknown tool with suggestions.

    Args:
        tool_name: The requested tool name.
        available_tools: List of registered tool names.

    Returns:
        Error message string, potentially with a suggestion.
    """
    suggestion = suggest_tool_name(tool_name, available_tools)
    if suggestion:
        return f"Unknown tool: '{tool_name}'. Did you mean '{suggestion}'?"
    if available_tools:
        names = ", ".join(sorted(available_tools)[:10])
        suffix = "..." if len(available_tools) > 10 else ""
        return f"Unknown tool: '{tool_name}'. Available tools: {names}{suffix}"
    return f"Unknown tool: '{tool_name}'. No tools are registered."


def describe_failure(exc: BaseException) -> tuple[str, str]:
    """Return ``(kind, detail)`` for an exception raised by a handler."""
    if isinstance(exc, HandlerError):
        return exc.kind, exc.to_message()
    return "InternalError", f"{type(exc).__name__}: {exc}"
