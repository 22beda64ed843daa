"""Fixtures for tests that go through a real FastMCP server."""

from __future__ import annotations

import pytest
from fastmcp import FastMCP

from apollo_tools.credentials import CredentialStoreAdapter
from apollo_tools.tools import register_all_tools


@pytest.fixture
def credentials() -> CredentialStoreAdapter:
    return CredentialStoreAdapter.for_testing({"apollo": "test-api-key"})


@pytest.fixture
def mcp(credentials: CredentialStoreAdapter) -> FastMCP:
    server = FastMCP("test-apollo")
    register_all_tools(server, credentials=credentials)
    return server


def result_text(result) -> str:
    """Text of the single content block of a CallToolResult."""
    assert len(result.content) == 1
    return result.content[0].text
