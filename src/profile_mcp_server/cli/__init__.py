#!/usr/bin/env python3
# src/profile_mcp_server/cli/__init__.py
"""
CLI entry point for profile-mcp-server.

Provides command-line interface for running the server in different modes.
"""

import argparse
import logging
import sys

from ..config import load_settings
from ..constants import LOG_LEVELS, PACKAGE_LOGGER, TRANSPORT_HTTP, TRANSPORT_STDIO, VARIANTS
from ..core import ProfileMCPServer

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "info", debug: bool = False) -> None:
    """Set up logging configuration. Logs always go to stderr."""
    numeric_level = logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, stream=sys.stderr, force=True)
    logging.getLogger(PACKAGE_LOGGER).setLevel(numeric_level)


def _add_common_arguments(parser: argparse.ArgumentParser, with_network: bool) -> None:
    parser.add_argument(
        "--variant", choices=VARIANTS, default=None, help="Handler set to expose (default: MCP_VARIANT or enhanced)"
    )
    if with_network:
        parser.add_argument("--host", default=None, help="Host to bind to (default: HOST or 0.0.0.0)")
        parser.add_argument("--port", type=int, default=None, help="Port to bind to (default: PORT or 3000)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=LOG_LEVELS,
        help="Logging level (default: MCP_LOG_LEVEL or info)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="profile-mcp-server",
        description="Example MCP servers (echo, clock, calculator, employee profiles) over stdio or HTTP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run in stdio mode (for MCP clients)
  profile-mcp-server stdio

  # Only the basic tools
  profile-mcp-server stdio --variant basic

  # Run in HTTP mode on a custom port
  profile-mcp-server http --port 9000

  # Let the environment decide (PORT or RENDER set -> HTTP)
  profile-mcp-server auto

Environment Variables:
  MCP_SERVER_NAME       Server name (default: profile-mcp-server)
  MCP_SERVER_VERSION    Server version (default: 1.0.0)
  MCP_VARIANT           basic | profile | enhanced (default: enhanced)
  MCP_TRANSPORT         Force transport mode for auto (stdio|http)
  MCP_LOG_LEVEL         Logging level (debug|info|warning|error|critical)
  DEFAULT_PROFILE_ID    Profile served when none or an unknown one is requested
  PROFILE_API_URL       Upstream profile API; enables get_user_profile
  CORS_ALLOWED_ORIGINS  Comma-separated origin allow-list
        """,
    )

    subparsers = parser.add_subparsers(dest="mode", help="Transport mode", required=True)

    stdio_parser = subparsers.add_parser("stdio", help="Run in stdio mode for MCP clients")
    _add_common_arguments(stdio_parser, with_network=False)

    http_parser = subparsers.add_parser("http", help="Run in HTTP mode (POST /mcp)")
    _add_common_arguments(http_parser, with_network=True)

    auto_parser = subparsers.add_parser("auto", help="Auto-detect transport mode from environment")
    _add_common_arguments(auto_parser, with_network=True)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    settings = load_settings()
    setup_logging(level=args.log_level or settings.log_level, debug=args.debug)

    if args.mode == "auto":
        transport = settings.transport
    elif args.mode == "http":
        transport = TRANSPORT_HTTP
    else:
        transport = TRANSPORT_STDIO

    try:
        server = ProfileMCPServer(settings, variant=args.variant)
    except ValueError as e:
        logger.error(f"Failed to configure server: {e}")
        return 1

    logger.debug(f"Starting {settings.name} in {transport.upper()} mode")
    return server.run(
        transport,
        host=getattr(args, "host", None),
        port=getattr(args, "port", None),
        debug=args.debug,
    )


if __name__ == "__main__":
    sys.exit(main())
