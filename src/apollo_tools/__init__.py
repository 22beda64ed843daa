"""
Apollo Tools - MCP tools for Apollo.io contact search and company enrichment.

Usage:
    from fastmcp import FastMCP
    from apollo_tools.tools import register_all_tools
    from apollo_tools.credentials import CredentialStoreAdapter

    mcp = FastMCP("apollo")
    credentials = CredentialStoreAdapter.default()
    register_all_tools(mcp, credentials=credentials)
"""

__version__ = "0.1.0"

# Credential management (no fastmcp dependency)
from .credentials import (
    CREDENTIAL_SPECS,
    CredentialSpec,
    CredentialStoreAdapter,
)


def __getattr__(name: str):
    """Lazy import for tools that require fastmcp."""
    if name == "register_all_tools":
        from .tools import register_all_tools

        return register_all_tools
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",
    # Credentials
    "CredentialStoreAdapter",
    "CredentialSpec",
    "CREDENTIAL_SPECS",
    # MCP registration (lazy loaded)
    "register_all_tools",
]
