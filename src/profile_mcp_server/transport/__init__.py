"""Transports that feed raw messages into the protocol handler."""

from .stdio import StdioTransport, run_stdio_server

__all__ = ["StdioTransport", "run_stdio_server"]
