"""OAuth PKCE Client - OAuth 2.0 Authorization Code + PKCE for client applications.

This library implements the client side of:
- OAuth Authorization Server Metadata discovery (RFC 8414)
- Authorization Code Flow with PKCE (RFC 7636)
- Token exchange and refresh (RFC 6749)
- Dynamic Client Registration (RFC 7591)

Token and credential storage is left to the application.
"""

from .authorization import start_authorization
from .client import OAuthClient
from .config import OAuthClientConfig
from .discovery import discover_oauth_metadata
from .errors import (
    CapabilityMismatchError,
    HTTPError,
    NetworkError,
    OAuthError,
    RegistrationError,
    SchemaValidationError,
    TokenRequestError,
)
from .models import (
    AuthorizationRequest,
    AuthorizationRequestOptions,
    AuthorizationServerMetadata,
    ClientInformation,
    ClientMetadata,
    OAuthTokens,
    PKCEPair,
)
from .pkce import compute_challenge, generate_pkce_pair, verify_pkce
from .registration import register_client
from .tokens import exchange_authorization, refresh_authorization
from .transport import HttpxTransport, Transport, TransportResponse

__version__ = "0.1.0"

__all__ = [
    "OAuthClient",
    "OAuthClientConfig",
    "discover_oauth_metadata",
    "start_authorization",
    "exchange_authorization",
    "refresh_authorization",
    "register_client",
    "generate_pkce_pair",
    "compute_challenge",
    "verify_pkce",
    "AuthorizationServerMetadata",
    "AuthorizationRequestOptions",
    "AuthorizationRequest",
    "PKCEPair",
    "OAuthTokens",
    "ClientMetadata",
    "ClientInformation",
    "Transport",
    "TransportResponse",
    "HttpxTransport",
    "OAuthError",
    "NetworkError",
    "HTTPError",
    "TokenRequestError",
    "RegistrationError",
    "SchemaValidationError",
    "CapabilityMismatchError",
]
