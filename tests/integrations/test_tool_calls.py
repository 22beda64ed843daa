"""End-to-end tool calls through the FastMCP in-memory client.

These go through FastMCP's argument validation, so they cover trimming,
bounds and defaults as well as how errors reach the MCP caller.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastmcp import Client, FastMCP

from apollo_tools.credentials import CredentialStoreAdapter
from apollo_tools.tools import register_all_tools

from .conftest import result_text

POST_TARGET = "apollo_tools.tools.apollo_tool.apollo_tool.httpx.AsyncClient.post"


@pytest.fixture
def mock_post():
    with patch(POST_TARGET, new_callable=AsyncMock) as mocked:
        mocked.return_value = httpx.Response(200, json={"people": []})
        yield mocked


class TestSearchPeopleContacts:
    @pytest.mark.asyncio
    async def test_success(self, mcp, mock_post):
        async with Client(mcp) as client:
            result = await client.call_tool_mcp("searchPeopleContacts", {"domain": "acme.com"})

        assert not result.isError
        assert result_text(result) == '{\n  "people": []\n}'
        assert mock_post.call_args.kwargs["json"] == {
            "page": 1,
            "per_page": 100,
            "q_organization_domains": "acme.com",
        }

    @pytest.mark.asyncio
    async def test_strings_are_trimmed(self, mcp, mock_post):
        async with Client(mcp) as client:
            await client.call_tool_mcp(
                "searchPeopleContacts",
                {"domain": "  acme.com ", "organizationId": "\tabc123\n"},
            )

        call_json = mock_post.call_args.kwargs["json"]
        assert call_json["q_organization_domains"] == "acme.com"
        assert call_json["organization_ids"] == ["abc123"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "arguments",
        [
            {"domain": "   "},
            {"domain": ""},
            {"domain": "acme.com", "page": 0},
            {"domain": "acme.com", "limit": 0},
            {"domain": "acme.com", "limit": 101},
            {"domain": "acme.com", "page": "first"},
            {"domain": "acme.com", "page": "2"},
            {"domain": "acme.com", "page": True},
            {"domain": "acme.com", "page": 1.5},
            {"domain": "acme.com", "limit": 5.0},
            {"domain": "acme.com", "limit": "10"},
            {"domain": None, "organizationId": "abc123"},
            {"domain": "acme.com", "organizationId": None},
            {"domain": 42},
            {"organizationId": ["abc123"]},
        ],
    )
    async def test_schema_violations_rejected(self, mcp, mock_post, arguments):
        async with Client(mcp) as client:
            result = await client.call_tool_mcp("searchPeopleContacts", arguments)

        assert result.isError
        mock_post.assert_not_called()

    @pytest.mark.asyncio
    async def test_integer_arguments_pass_unchanged(self, mcp, mock_post):
        async with Client(mcp) as client:
            result = await client.call_tool_mcp(
                "searchPeopleContacts", {"organizationId": "abc123", "page": 2, "limit": 5}
            )

        assert not result.isError
        assert mock_post.call_args.kwargs["json"] == {
            "page": 2,
            "per_page": 5,
            "organization_ids": ["abc123"],
        }

    @pytest.mark.asyncio
    async def test_missing_identifiers(self, mcp, mock_post):
        async with Client(mcp) as client:
            result = await client.call_tool_mcp("searchPeopleContacts", {"page": 2})

        assert result.isError
        assert "Provide either domain or organizationId." in result_text(result)
        mock_post.assert_not_called()

    @pytest.mark.asyncio
    async def test_upstream_error_reaches_caller(self, mcp, mock_post):
        mock_post.return_value = httpx.Response(401, text='{"error":"Invalid access credentials."}')

        async with Client(mcp) as client:
            result = await client.call_tool_mcp("searchPeopleContacts", {"domain": "acme.com"})

        assert result.isError
        text = result_text(result)
        assert "status 401" in text
        assert '{"error":"Invalid access credentials."}' in text


class TestEnrichOrganization:
    @pytest.mark.asyncio
    async def test_success(self, mcp, mock_post):
        mock_post.return_value = httpx.Response(200, json={"organization": {"id": "abc123"}})

        async with Client(mcp) as client:
            result = await client.call_tool_mcp("enrichOrganization", {"organizationId": "abc123"})

        assert not result.isError
        assert mock_post.call_args.kwargs["json"] == {"organization_id": "abc123"}
        assert '"id": "abc123"' in result_text(result)

    @pytest.mark.asyncio
    async def test_missing_api_key(self, mock_post, monkeypatch):
        monkeypatch.delenv("APOLLO_API_KEY", raising=False)
        mcp = FastMCP("test-no-key")
        register_all_tools(mcp, credentials=CredentialStoreAdapter.default())

        async with Client(mcp) as client:
            result = await client.call_tool_mcp("enrichOrganization", {"domain": "acme.com"})

        assert result.isError
        assert "APOLLO_API_KEY environment variable is required." in result_text(result)
        mock_post.assert_not_called()

    @pytest.mark.asyncio
    async def test_upstream_error_names_enrichment(self, mcp, mock_post):
        mock_post.return_value = httpx.Response(500, text="Internal Server Error")

        async with Client(mcp) as client:
            result = await client.call_tool_mcp("enrichOrganization", {"domain": "acme.com"})

        assert result.isError
        assert "Apollo organization enrichment failed with status 500: Internal Server Error" in (
            result_text(result)
        )


class TestEnrichOrganizationStrictness:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "arguments",
        [
            {"domain": None, "organizationId": "abc123"},
            {"domain": "acme.com", "organizationId": None},
            {"organizationId": 123},
            {"domain": "   "},
        ],
    )
    async def test_wrong_types_rejected(self, mcp, mock_post, arguments):
        async with Client(mcp) as client:
            result = await client.call_tool_mcp("enrichOrganization", arguments)

        assert result.isError
        mock_post.assert_not_called()
