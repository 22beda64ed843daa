"""
Tool registration for the Apollo MCP server.

Each tool package exposes ``register_tools(mcp, credentials=None)``;
``register_all_tools`` wires every package into one FastMCP instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastmcp import FastMCP

from .apollo_tool import register_tools as register_apollo

if TYPE_CHECKING:
    from apollo_tools.credentials import CredentialSource


def register_all_tools(
    mcp: FastMCP,
    credentials: CredentialSource | None = None,
) -> list[str]:
    """
    Register all tools with a FastMCP server.

    Args:
        mcp: FastMCP server instance
        credentials: Optional credential store; tools fall back to the
            environment when omitted

    Returns:
        List of registered tool names
    """
    register_apollo(mcp, credentials=credentials)

    return [
        "searchPeopleContacts",
        "enrichOrganization",
    ]


__all__ = ["register_all_tools"]
