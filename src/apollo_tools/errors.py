"""
Error types raised by Apollo tools.

Every error carries an ``ErrorKind`` tag so callers can branch on the failure
class without string matching. All of them subclass FastMCP's ``ToolError``,
which FastMCP relays to the MCP client with the message intact.
"""

from __future__ import annotations

from enum import StrEnum

from fastmcp.exceptions import ToolError


class ErrorKind(StrEnum):
    """Failure classes surfaced by a tool invocation."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    UPSTREAM = "upstream"
    TRANSPORT = "transport"


class ApolloToolError(ToolError):
    """Base class for errors raised by Apollo tool handlers."""

    kind: ErrorKind


class ValidationError(ApolloToolError):
    """Raised when the caller's arguments fail a cross-field precondition."""

    kind = ErrorKind.VALIDATION


class ConfigurationError(ApolloToolError):
    """Raised when a required credential is not configured."""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, env_var: str):
        self.env_var = env_var
        super().__init__(f"{env_var} environment variable is required.")


class UpstreamError(ApolloToolError):
    """Raised when the Apollo API answers with a non-2xx status.

    The raw response body is kept as text, unparsed, so whatever diagnostic
    the API sent reaches the caller unchanged.
    """

    kind = ErrorKind.UPSTREAM

    def __init__(self, action: str, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"{action} failed with status {status_code}: {body}")


class TransportError(ApolloToolError):
    """Raised when the HTTP request itself fails (DNS, connection, timeout)."""

    kind = ErrorKind.TRANSPORT


__all__ = [
    "ErrorKind",
    "ApolloToolError",
    "ValidationError",
    "ConfigurationError",
    "UpstreamError",
    "TransportError",
]
