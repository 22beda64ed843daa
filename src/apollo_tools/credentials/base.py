"""
Base classes for credential management.

Contains CredentialSpec and CredentialStoreAdapter. Credential specs are
defined in separate provider files (apollo.py, ...).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from dotenv import dotenv_values


@dataclass
class CredentialSpec:
    """Specification for a single credential."""

    env_var: str
    """Environment variable name (e.g., 'APOLLO_API_KEY')"""

    tools: list[str] = field(default_factory=list)
    """Tool names that require this credential (e.g., ['enrichOrganization'])"""

    required: bool = True
    """Whether this credential is required (vs optional)"""

    help_url: str = ""
    """URL where user can obtain this credential"""


class CredentialSource(Protocol):
    """Anything tools can ask for a credential value by logical name."""

    def get(self, name: str) -> str | None: ...


class CredentialStoreAdapter:
    """
    Resolves credentials by logical name.

    Usage:
        # Production
        creds = CredentialStoreAdapter.default()
        api_key = creds.get("apollo")

        # Testing
        creds = CredentialStoreAdapter.for_testing({"apollo": "test-key"})
        api_key = creds.get("apollo")  # Returns "test-key"
    """

    def __init__(
        self,
        specs: dict[str, CredentialSpec] | None = None,
        _overrides: dict[str, str] | None = None,
        dotenv_path: Path | None = None,
    ):
        """
        Initialize the adapter.

        Args:
            specs: Credential specifications (defaults to CREDENTIAL_SPECS)
            _overrides: Internal - used by for_testing() to inject test values
            dotenv_path: Optional path to .env file (defaults to cwd/.env)
        """
        if specs is None:
            # Lazy import to avoid circular dependency
            from . import CREDENTIAL_SPECS

            specs = CREDENTIAL_SPECS
        self._specs = specs
        self._overrides = _overrides or {}
        self._dotenv_path = dotenv_path
        self._tool_to_cred: dict[str, str] = {}
        for cred_name, spec in self._specs.items():
            for tool_name in spec.tools:
                self._tool_to_cred[tool_name] = cred_name

    @classmethod
    def default(cls) -> CredentialStoreAdapter:
        """Adapter over all known specs, reading os.environ and ./.env."""
        return cls()

    @classmethod
    def for_testing(
        cls,
        overrides: dict[str, str],
        specs: dict[str, CredentialSpec] | None = None,
        dotenv_path: Path | None = None,
    ) -> CredentialStoreAdapter:
        """
        Create an adapter with test values.

        Args:
            overrides: Dict mapping credential names to test values
            specs: Optional custom specs (defaults to CREDENTIAL_SPECS)
            dotenv_path: Optional path to .env file
                (use non-existent path to isolate from real .env)
        """
        return cls(specs=specs, _overrides=overrides, dotenv_path=dotenv_path)

    def _get_raw(self, name: str) -> str | None:
        """Get credential from overrides, os.environ, or .env file.

        Priority order:
        1. Test overrides
        2. os.environ
        3. .env file (read fresh each time)
        """
        if name in self._overrides:
            return self._overrides[name]

        spec = self._specs.get(name)
        if spec is None:
            return None

        env_value = os.environ.get(spec.env_var)
        if env_value:
            return env_value

        return self._read_from_dotenv(spec.env_var)

    def _read_from_dotenv(self, env_var: str) -> str | None:
        """Read a single env var from .env without modifying os.environ."""
        dotenv_path = self._dotenv_path or Path.cwd() / ".env"
        if not dotenv_path.exists():
            return None

        values = dotenv_values(dotenv_path)
        return values.get(env_var)

    def get(self, name: str) -> str | None:
        """
        Get a credential value by logical name.

        No caching: a key added to .env takes effect on the next call without
        restarting the server.

        Raises:
            KeyError: If the credential name is not in specs
        """
        if name not in self._specs:
            raise KeyError(f"Unknown credential '{name}'. Available: {list(self._specs.keys())}")

        return self._get_raw(name)

    def is_available(self, name: str) -> bool:
        """Check if a credential is available (set and non-empty)."""
        value = self.get(name)
        return value is not None and value != ""

    def get_missing_for_tools(self, tool_names: list[str]) -> list[tuple[str, CredentialSpec]]:
        """
        Get list of missing credentials for the given tools.

        Returns:
            List of (credential_name, spec) tuples, one per missing credential
        """
        missing: list[tuple[str, CredentialSpec]] = []
        checked: set[str] = set()

        for tool_name in tool_names:
            cred_name = self._tool_to_cred.get(tool_name)
            if cred_name is None or cred_name in checked:
                continue
            checked.add(cred_name)

            spec = self._specs[cred_name]
            if spec.required and not self.is_available(cred_name):
                missing.append((cred_name, spec))

        return missing
