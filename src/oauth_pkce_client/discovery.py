# oauth_pkce_client/discovery.py
"""OAuth Authorization Server Metadata discovery (RFC 8414)."""

import logging
from typing import Optional

from .endpoints import WELL_KNOWN_METADATA_PATH, resolve
from .errors import HTTPError
from .models import AuthorizationServerMetadata, parse_model
from .transport import Transport, default_transport

logger = logging.getLogger(__name__)


async def discover_oauth_metadata(
    issuer: str, *, transport: Optional[Transport] = None
) -> Optional[AuthorizationServerMetadata]:
    """
    Fetch the authorization server's well-known metadata document.

    Args:
        issuer: Base URL of the authorization server
        transport: HTTP transport (default: HttpxTransport)

    Returns:
        Parsed metadata, or None if the server does not publish any (HTTP 404)

    Raises:
        HTTPError: If the server answers with any other non-success status
        SchemaValidationError: If the document fails validation
        NetworkError: If the request cannot be sent
    """
    url = resolve(issuer, WELL_KNOWN_METADATA_PATH)
    response = await default_transport(transport).send(
        "GET", url, headers={"Accept": "application/json"}
    )

    if response.status_code == 404:
        logger.info(f"No OAuth metadata published at {url}")
        return None

    if not response.is_success:
        logger.warning(f"Metadata discovery at {url} returned {response.status_code}")
        raise HTTPError(
            f"HTTP {response.status_code} trying to load well-known OAuth metadata",
            status_code=response.status_code,
        )

    metadata = parse_model(
        AuthorizationServerMetadata, response.content, "authorization server metadata"
    )
    logger.info(f"Discovered OAuth metadata for {metadata.issuer}")
    return metadata
