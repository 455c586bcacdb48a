# oauth_pkce_client/registration.py
"""OAuth 2.0 Dynamic Client Registration (RFC 7591)."""

import json
import logging
from typing import Optional

from .endpoints import REGISTER_PATH, resolve
from .errors import CapabilityMismatchError, RegistrationError
from .models import (
    AuthorizationServerMetadata,
    ClientInformation,
    ClientMetadata,
    parse_model,
)
from .transport import Transport, default_transport

logger = logging.getLogger(__name__)


async def register_client(
    issuer: str,
    client_metadata: ClientMetadata,
    *,
    metadata: Optional[AuthorizationServerMetadata] = None,
    transport: Optional[Transport] = None,
) -> ClientInformation:
    """
    Register a new OAuth client with the authorization server.

    Args:
        issuer: Base URL of the authorization server
        client_metadata: Registration request sent as the JSON body
        metadata: Discovered server metadata, if any
        transport: HTTP transport (default: HttpxTransport)

    Returns:
        Client information issued by the server. Store it; it is a credential.

    Raises:
        CapabilityMismatchError: If metadata advertises no registration endpoint
        RegistrationError: If the server returns a non-success status
        SchemaValidationError: If the response fails validation
        NetworkError: If the request cannot be sent
    """
    if metadata is not None:
        if not metadata.registration_endpoint:
            raise CapabilityMismatchError(
                "Incompatible auth server: does not support dynamic client registration"
            )
        url = metadata.registration_endpoint
    else:
        url = resolve(issuer, REGISTER_PATH)

    body = json.dumps(client_metadata.model_dump(exclude_none=True))
    response = await default_transport(transport).send(
        "POST",
        url,
        headers={"Content-Type": "application/json", "Accept": "application/json"},
        content=body.encode("utf-8"),
    )

    if not response.is_success:
        logger.warning(f"Client registration at {url} returned {response.status_code}")
        raise RegistrationError(
            f"Dynamic client registration failed: HTTP {response.status_code}",
            status_code=response.status_code,
        )

    client_info = parse_model(ClientInformation, response.content, "client information")
    logger.info(f"Registered OAuth client {client_info.client_id}")
    return client_info
