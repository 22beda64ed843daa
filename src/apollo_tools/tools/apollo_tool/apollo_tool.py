"""
Apollo.io Tool - Contact search and organization enrichment via Apollo API.

Supports:
- API key authentication (APOLLO_API_KEY)

Tools:
- searchPeopleContacts: people at a company, by domain or Apollo organization id
- enrichOrganization: firmographics for a company, by domain or organization id

Both tools relay Apollo's JSON response as-is, pretty-printed into a single
text content block.

API Reference: https://docs.apollo.io/reference
"""

from __future__ import annotations

import json
import logging
import os
from typing import TYPE_CHECKING, Annotated, Any

import httpx
from fastmcp import FastMCP
from mcp.types import TextContent
from pydantic import Field, StringConstraints

from apollo_tools.errors import (
    ConfigurationError,
    TransportError,
    UpstreamError,
    ValidationError,
)
from apollo_tools.observability import set_log_context

if TYPE_CHECKING:
    from apollo_tools.credentials import CredentialSource

logger = logging.getLogger(__name__)

APOLLO_API_BASE = "https://api.apollo.io/api/v1"
APOLLO_API_KEY_ENV = "APOLLO_API_KEY"
MAX_PER_PAGE = 100

# Strict: no coercion from other JSON types. Tool parameters default to None
# but are typed without None, so an explicit null is rejected.
NonEmptyStr = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]

DomainArg = Annotated[
    NonEmptyStr,
    Field(description='Company domain, e.g. "apollo.io"'),
]
OrganizationIdArg = Annotated[
    NonEmptyStr,
    Field(description="Apollo organization id"),
]

MISSING_IDENTIFIER_MESSAGE = "Provide either domain or organizationId."


def build_payload(required: dict[str, Any], **optional: Any) -> dict[str, Any]:
    """Build an Apollo request body, leaving out optional fields that are absent.

    ``required`` items are always copied. An optional item is kept only when
    its value is neither ``None`` nor an empty string, so Apollo never sees a
    null placeholder for something the caller did not supply.
    """
    payload = dict(required)
    for key, value in optional.items():
        if value is None or value == "":
            continue
        payload[key] = value
    return payload


def format_result(data: Any) -> TextContent:
    """Wrap a parsed JSON response into a text block (2-space indent)."""
    return TextContent(type="text", text=json.dumps(data, indent=2, ensure_ascii=False))


class _ApolloClient:
    """Internal client wrapping Apollo.io API calls."""

    def __init__(self, api_key: str):
        self._api_key = api_key

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-Api-Key": self._api_key,
        }

    async def _post(self, path: str, payload: dict[str, Any], action: str) -> Any:
        """POST ``payload`` to ``path`` once and return the parsed JSON body.

        Raises:
            UpstreamError: Apollo answered with a non-2xx status
            TransportError: the request never got a response
        """
        url = f"{APOLLO_API_BASE}{path}"
        logger.info(
            "POST %s",
            url,
            extra={"endpoint": path, "payload_keys": sorted(payload)},
        )
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(url, headers=self._headers, json=payload)
        except httpx.RequestError as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise TransportError(f"Apollo API request failed: {e}") from e

        if not response.is_success:
            logger.warning(
                "%s failed with status %s",
                action,
                response.status_code,
                extra={"endpoint": path, "status_code": response.status_code},
            )
            raise UpstreamError(action, response.status_code, response.text)

        return response.json()

    async def search_people(
        self,
        domain: str | None = None,
        organization_id: str | None = None,
        page: int = 1,
        limit: int = MAX_PER_PAGE,
    ) -> Any:
        """Search people at an organization."""
        payload = build_payload(
            {"page": page, "per_page": min(limit, MAX_PER_PAGE)},
            q_organization_domains=domain,
            organization_ids=[organization_id] if organization_id else None,
        )
        return await self._post("/mixed_people/search", payload, "Apollo API request")

    async def enrich_organization(
        self,
        domain: str | None = None,
        organization_id: str | None = None,
    ) -> Any:
        """Enrich an organization by domain or id."""
        payload = build_payload({}, domain=domain, organization_id=organization_id)
        return await self._post(
            "/organizations/enrich", payload, "Apollo organization enrichment"
        )


def register_tools(
    mcp: FastMCP,
    credentials: CredentialSource | None = None,
) -> None:
    """Register Apollo.io contact search and enrichment tools with the MCP server."""

    def _get_api_key() -> str | None:
        """Get Apollo API key from the credential store or environment."""
        if credentials is not None:
            api_key = credentials.get("apollo")
            if api_key is not None and not isinstance(api_key, str):
                raise TypeError(
                    f"Expected string from credentials.get('apollo'), got {type(api_key).__name__}"
                )
            return api_key
        return os.getenv(APOLLO_API_KEY_ENV)

    def _get_client(domain: str | None, organization_id: str | None) -> _ApolloClient:
        """Check the identifier precondition and the API key, in that order."""
        if not domain and not organization_id:
            raise ValidationError(MISSING_IDENTIFIER_MESSAGE)
        api_key = _get_api_key()
        if not api_key:
            raise ConfigurationError(APOLLO_API_KEY_ENV)
        return _ApolloClient(api_key)

    # --- People Search ---

    @mcp.tool(name="searchPeopleContacts")
    async def search_people_contacts(
        domain: DomainArg = None,
        organizationId: OrganizationIdArg = None,  # noqa: N803
        page: Annotated[
            int, Field(strict=True, ge=1, description="Result page, starting at 1")
        ] = 1,
        limit: Annotated[
            int, Field(strict=True, ge=1, le=MAX_PER_PAGE, description="Results per page")
        ] = MAX_PER_PAGE,
    ) -> TextContent:
        """
        Searches Apollo contacts by company domain or organization id.

        Args:
            domain: Company domain (e.g., "acme.com")
            organizationId: Apollo organization id
            page: Page of results to return (default: 1)
            limit: Results per page, 1-100 (default: 100)

        Returns:
            Apollo's search response as pretty-printed JSON text

        Example:
            searchPeopleContacts(domain="acme.com", page=2, limit=25)
        """
        set_log_context(tool="searchPeopleContacts")
        client = _get_client(domain, organizationId)
        data = await client.search_people(
            domain=domain,
            organization_id=organizationId,
            page=page,
            limit=limit,
        )
        return format_result(data)

    # --- Organization Enrichment ---

    @mcp.tool(name="enrichOrganization")
    async def enrich_organization(
        domain: DomainArg = None,
        organizationId: OrganizationIdArg = None,  # noqa: N803
    ) -> TextContent:
        """
        Enriches company details by domain or organization id.

        Args:
            domain: Company domain (e.g., "openai.com")
            organizationId: Apollo organization id

        Returns:
            Apollo's enrichment response as pretty-printed JSON text

        Example:
            enrichOrganization(domain="openai.com")
        """
        set_log_context(tool="enrichOrganization")
        client = _get_client(domain, organizationId)
        data = await client.enrich_organization(domain=domain, organization_id=organizationId)
        return format_result(data)
