"""
Credential specs and lookup for Apollo tools.

Tools never read secrets directly; they receive a CredentialStoreAdapter (or
fall back to the environment) and ask for a credential by logical name.

Usage:
    from apollo_tools.credentials import CredentialStoreAdapter

    creds = CredentialStoreAdapter.default()
    api_key = creds.get("apollo")
"""

from .apollo import APOLLO_CREDENTIALS
from .base import CredentialSource, CredentialSpec, CredentialStoreAdapter

CREDENTIAL_SPECS: dict[str, CredentialSpec] = {
    **APOLLO_CREDENTIALS,
}

__all__ = [
    "CREDENTIAL_SPECS",
    "CredentialSource",
    "CredentialSpec",
    "CredentialStoreAdapter",
]
