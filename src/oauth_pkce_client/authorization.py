# oauth_pkce_client/authorization.py
"""Authorization request construction for the Authorization Code + PKCE flow."""

import logging
from typing import Optional
from urllib.parse import urlencode

from .endpoints import AUTHORIZE_PATH, resolve
from .errors import CapabilityMismatchError
from .models import (
    AuthorizationRequest,
    AuthorizationRequestOptions,
    AuthorizationServerMetadata,
)
from .pkce import PKCEGenerator, generate_pkce_pair

logger = logging.getLogger(__name__)

RESPONSE_TYPE = "code"
CODE_CHALLENGE_METHOD = "S256"


def start_authorization(
    issuer: str,
    options: AuthorizationRequestOptions,
    *,
    metadata: Optional[AuthorizationServerMetadata] = None,
    pkce_generator: PKCEGenerator = generate_pkce_pair,
) -> AuthorizationRequest:
    """
    Build the URL the user's browser should be sent to.

    No request is made. The returned code_verifier must be kept by the
    caller until the authorization code is exchanged.

    Args:
        issuer: Base URL of the authorization server
        options: Client id, redirect URL and optional scope/state/resource
        metadata: Discovered server metadata, if any
        pkce_generator: Callable producing a fresh PKCEPair

    Returns:
        AuthorizationRequest with the authorization URL and code verifier

    Raises:
        CapabilityMismatchError: If the metadata rules out code + S256
    """
    if metadata is not None:
        if not metadata.supports_response_type(RESPONSE_TYPE):
            raise CapabilityMismatchError(
                f"Incompatible auth server: does not support response type {RESPONSE_TYPE}"
            )
        if not metadata.supports_code_challenge_method(CODE_CHALLENGE_METHOD):
            raise CapabilityMismatchError(
                "Incompatible auth server: does not support code challenge method "
                f"{CODE_CHALLENGE_METHOD}"
            )
        endpoint = metadata.authorization_endpoint
    else:
        endpoint = resolve(issuer, AUTHORIZE_PATH)

    pkce = pkce_generator()

    params = {
        "response_type": RESPONSE_TYPE,
        "client_id": options.client_id,
        "code_challenge": pkce.code_challenge,
        "code_challenge_method": CODE_CHALLENGE_METHOD,
        "redirect_uri": options.redirect_url,
    }
    if options.state:
        params["state"] = options.state
    if options.scope:
        params["scope"] = options.scope
    if options.resource:
        params["resource"] = options.resource

    separator = "&" if "?" in endpoint else "?"
    authorization_url = f"{endpoint}{separator}{urlencode(params)}"
    logger.debug(f"Built authorization request for client {options.client_id}")

    return AuthorizationRequest(
        authorization_url=authorization_url, code_verifier=pkce.code_verifier
    )
