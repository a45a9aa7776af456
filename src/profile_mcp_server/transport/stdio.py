#!/usr/bin/env python3
# src/profile_mcp_server/transport/stdio.py
"""
STDIO Transport - MCP over newline-delimited JSON on stdin/stdout.

One JSON-RPC message per line. Lines are dispatched strictly in arrival
order: each dispatch is awaited before the next line is looked at. Nothing
but protocol responses is ever written to stdout.
"""

import asyncio
import logging
import sys
from typing import Any, TextIO

import orjson

from ..constants import DEFAULT_ENCODING, STDIO_READ_CHUNK, TRANSPORT_STDIO, JsonRpcError
from ..context import anonymous_context
from ..protocol import MCPProtocolHandler, create_error_response

logger = logging.getLogger(__name__)


class StdioTransport:
    """
    Handle MCP protocol communication over stdio (stdin/stdout).

    ``reader`` and ``writer`` default to the process streams; tests inject an
    ``asyncio.StreamReader`` and a ``StringIO``.
    """

    def __init__(
        self,
        protocol_handler: MCPProtocolHandler,
        reader: asyncio.StreamReader | None = None,
        writer: TextIO | None = None,
    ) -> None:
        self.protocol = protocol_handler
        self.reader = reader
        self.writer = writer
        self.running = False
        self.context = anonymous_context(TRANSPORT_STDIO)

    async def start(self) -> None:
        """Start the stdio transport and serve until EOF or stop()."""
        # Don't log at INFO here; stderr may be shared with the client
        self.running = True

        if self.reader is None:
            loop = asyncio.get_running_loop()
            self.reader = asyncio.StreamReader()
            protocol = asyncio.StreamReaderProtocol(self.reader)
            await loop.connect_read_pipe(lambda: protocol, sys.stdin)

        if self.writer is None:
            self.writer = sys.stdout

        await self._listen()

    async def _listen(self) -> None:
        """Read chunks, split on newlines and handle complete lines in order."""
        buffer = b""

        while self.running and self.reader is not None:
            try:
                chunk = await self.reader.read(STDIO_READ_CHUNK)
            except asyncio.CancelledError:
                break
            if not chunk:
                break

            buffer += chunk
            while b"\n" in buffer:
                line, buffer = buffer.split(b"\n", 1)
                await self._handle_line(line)

        # A final line without a trailing newline is still a message
        if buffer.strip():
            await self._handle_line(buffer)
        logger.debug("stdin closed, stdio transport stopping")

    async def _handle_line(self, raw: bytes) -> None:
        if not raw.strip():
            return

        try:
            message = orjson.loads(raw.decode(DEFAULT_ENCODING))
        except (orjson.JSONDecodeError, UnicodeDecodeError) as e:
            logger.debug(f"Invalid JSON in stdio message: {e}")
            await self._send_response(create_error_response(None, JsonRpcError.PARSE_ERROR, "Parse error", str(e)))
            return

        response = await self.protocol.handle_request(message, self.context)
        if response is not None:
            await self._send_response(response)

    async def _send_response(self, response: dict[str, Any]) -> None:
        """Write one compact JSON line and flush."""
        if self.writer is None:
            return
        self.writer.write(orjson.dumps(response).decode(DEFAULT_ENCODING) + "\n")
        self.writer.flush()

    async def stop(self) -> None:
        """Stop the stdio transport."""
        self.running = False
        if self.reader is not None:
            self.reader.feed_eof()


def run_stdio_server(protocol_handler: MCPProtocolHandler) -> int:
    """
    Run the MCP server in stdio mode.

    Returns:
        Process exit code: 0 on EOF or Ctrl-C.
    """

    async def _run() -> None:
        transport = StdioTransport(protocol_handler)
        try:
            await transport.start()
        finally:
            await transport.stop()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        logger.debug("Stdio server interrupted")
    return 0
