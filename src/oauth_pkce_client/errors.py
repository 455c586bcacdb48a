# oauth_pkce_client/errors.py
"""Exceptions raised by OAuth client operations."""

from typing import Optional


class OAuthError(Exception):
    """Base exception for all OAuth client errors."""


class NetworkError(OAuthError):
    """Raised when a request never reaches the authorization server."""


class HTTPError(OAuthError):
    """Raised when the authorization server answers with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TokenRequestError(HTTPError):
    """Raised when the token endpoint rejects an exchange or refresh."""


class RegistrationError(HTTPError):
    """Raised when the registration endpoint rejects a client."""


class SchemaValidationError(OAuthError):
    """Raised when a server response is missing or mistypes required fields."""


class CapabilityMismatchError(OAuthError):
    """Raised when server metadata lacks a capability this flow requires."""
