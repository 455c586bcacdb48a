# oauth_pkce_client/tokens.py
"""Token endpoint requests: authorization code exchange and refresh."""

import logging
from typing import Dict, Optional
from urllib.parse import urlencode

from .endpoints import TOKEN_PATH, resolve
from .errors import TokenRequestError
from .models import AuthorizationServerMetadata, OAuthTokens, parse_model
from .transport import Transport, default_transport

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def token_endpoint(
    issuer: str, metadata: Optional[AuthorizationServerMetadata] = None
) -> str:
    """Token endpoint from metadata, falling back to ``{issuer}/token``."""
    if metadata is not None:
        return metadata.token_endpoint
    return resolve(issuer, TOKEN_PATH)


async def _request_tokens(
    url: str, form: Dict[str, str], transport: Optional[Transport]
) -> OAuthTokens:
    response = await default_transport(transport).send(
        "POST",
        url,
        headers={"Content-Type": FORM_CONTENT_TYPE, "Accept": "application/json"},
        content=urlencode(form).encode("ascii"),
    )

    if not response.is_success:
        logger.warning(
            f"{form['grant_type']} grant rejected by {url}: {response.status_code}"
        )
        raise TokenRequestError(
            f"Token exchange failed: HTTP {response.status_code}",
            status_code=response.status_code,
        )

    return parse_model(OAuthTokens, response.content, "token response")


async def exchange_authorization(
    issuer: str,
    *,
    authorization_code: str,
    code_verifier: str,
    redirect_url: str,
    client_id: str,
    client_secret: Optional[str] = None,
    metadata: Optional[AuthorizationServerMetadata] = None,
    transport: Optional[Transport] = None,
) -> OAuthTokens:
    """
    Exchange an authorization code for tokens.

    Args:
        issuer: Base URL of the authorization server
        authorization_code: Code received on the redirect URL
        code_verifier: Verifier returned by start_authorization
        redirect_url: Redirect URL used in the authorization request
        client_id: OAuth client id
        client_secret: OAuth client secret for confidential clients
        metadata: Discovered server metadata, if any
        transport: HTTP transport (default: HttpxTransport)

    Returns:
        Validated OAuth tokens

    Raises:
        TokenRequestError: If the token endpoint returns a non-success status
        SchemaValidationError: If the response fails validation
        NetworkError: If the request cannot be sent
    """
    form = {
        "grant_type": "authorization_code",
        "code": authorization_code,
        "code_verifier": code_verifier,
        "redirect_uri": redirect_url,
        "client_id": client_id,
    }
    if client_secret:
        form["client_secret"] = client_secret

    tokens = await _request_tokens(token_endpoint(issuer, metadata), form, transport)
    logger.info(f"Exchanged authorization code for client {client_id}")
    return tokens


async def refresh_authorization(
    issuer: str,
    *,
    refresh_token: str,
    client_id: str,
    client_secret: Optional[str] = None,
    metadata: Optional[AuthorizationServerMetadata] = None,
    transport: Optional[Transport] = None,
) -> OAuthTokens:
    """
    Trade a refresh token for a new set of tokens.

    Same endpoint and failure contract as exchange_authorization.
    """
    form = {
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
        "client_id": client_id,
    }
    if client_secret:
        form["client_secret"] = client_secret

    tokens = await _request_tokens(token_endpoint(issuer, metadata), form, transport)
    logger.info(f"Refreshed tokens for client {client_id}")
    return tokens
