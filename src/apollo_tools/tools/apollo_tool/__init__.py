"""
Apollo.io Tool - Contact search and organization enrichment via Apollo API.

Supports API key authentication for:
- People search by company domain or organization id
- Organization enrichment by domain or organization id
"""

from .apollo_tool import register_tools

__all__ = ["register_tools"]
