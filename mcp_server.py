#!/usr/bin/env python3
"""
Apollo Tools MCP Server

Exposes the Apollo contact search and organization enrichment tools via
Model Context Protocol using FastMCP.

Usage:
    # Run with HTTP transport (default)
    python mcp_server.py

    # Run with custom port
    python mcp_server.py --port 8001

    # Run with STDIO transport (for local testing)
    python mcp_server.py --stdio

Environment Variables:
    MCP_PORT        - Server port (default: 4001)
    APOLLO_API_KEY  - Required by both tools (checked when a tool is called)
    LOG_LEVEL       - Log level (default: INFO)
    LOG_FORMAT      - "json" for JSON logs (also implied by ENV=production)
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from apollo_tools.credentials import CredentialStoreAdapter
from apollo_tools.observability import configure_logging
from apollo_tools.tools import register_all_tools

logger = logging.getLogger(__name__)


def create_server(credentials: CredentialStoreAdapter | None = None) -> FastMCP:
    """Build the FastMCP server with every tool and the plain HTTP routes."""
    if credentials is None:
        credentials = CredentialStoreAdapter.default()

    mcp = FastMCP("apollo-tools")

    tools = register_all_tools(mcp, credentials=credentials)
    logger.info("Registered %d tools: %s", len(tools), tools)

    # Non-fatal - tools check their own credential when called
    for _cred_name, spec in credentials.get_missing_for_tools(tools):
        logger.warning(
            "%s is not set; calls to %s will fail. Get an API key at: %s",
            spec.env_var,
            ", ".join(spec.tools),
            spec.help_url,
        )

    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint for container orchestration."""
        return PlainTextResponse("OK")

    @mcp.custom_route("/", methods=["GET"])
    async def index(request: Request) -> PlainTextResponse:
        """Landing page for browser visits."""
        return PlainTextResponse("Welcome to the Apollo Tools MCP Server")

    return mcp


def main() -> None:
    """Entry point for the MCP server."""
    parser = argparse.ArgumentParser(description="Apollo Tools MCP Server")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("MCP_PORT", "4001")),
        help="HTTP server port (default: 4001)",
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="HTTP server host (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--stdio",
        action="store_true",
        help="Use STDIO transport instead of HTTP",
    )
    args = parser.parse_args()

    # For STDIO mode, log to stderr; for HTTP mode, log to stdout
    configure_logging(
        level=os.getenv("LOG_LEVEL", "INFO"),
        stream=sys.stderr if args.stdio else sys.stdout,
    )

    mcp = create_server()

    if args.stdio:
        # STDIO mode: only JSON-RPC messages go to stdout
        mcp.run(transport="stdio", show_banner=False)
    else:
        logger.info("Starting HTTP server on %s:%s", args.host, args.port)
        mcp.run(transport="http", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
