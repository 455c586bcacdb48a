# oauth_pkce_client/client.py
"""OAuth client bound to one authorization server and client identity."""

import logging
from typing import Optional

from .authorization import start_authorization
from .config import OAuthClientConfig
from .discovery import discover_oauth_metadata
from .models import (
    AuthorizationRequest,
    AuthorizationRequestOptions,
    AuthorizationServerMetadata,
    ClientInformation,
    ClientMetadata,
    OAuthTokens,
)
from .pkce import PKCEGenerator, generate_pkce_pair
from .registration import register_client
from .tokens import exchange_authorization, refresh_authorization
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)


class OAuthClient:
    """
    Runs the Authorization Code + PKCE flow against one authorization server.

    The client only holds configuration. Server metadata is passed into each
    call, so one instance can serve many concurrent flows.
    """

    def __init__(
        self,
        config: OAuthClientConfig,
        transport: Optional[Transport] = None,
        pkce_generator: PKCEGenerator = generate_pkce_pair,
    ):
        """
        Initialize the client.

        Args:
            config: Issuer and client settings
            transport: HTTP transport (default: HttpxTransport with config.timeout)
            pkce_generator: Source of PKCE pairs for authorization requests
        """
        self.config = config
        self.transport = transport or HttpxTransport(timeout=config.timeout)
        self.pkce_generator = pkce_generator

    def _require(self, field: str) -> str:
        value = getattr(self.config, field)
        if not value:
            raise ValueError(f"OAuth client config is missing {field}")
        return value

    async def discover(self) -> Optional[AuthorizationServerMetadata]:
        """Fetch server metadata, or None if discovery is disabled or absent."""
        if not self.config.use_discovery:
            return None
        return await discover_oauth_metadata(
            self.config.issuer, transport=self.transport
        )

    def start_authorization(
        self,
        metadata: Optional[AuthorizationServerMetadata] = None,
        state: Optional[str] = None,
    ) -> AuthorizationRequest:
        """
        Build an authorization request from the configured client settings.

        Args:
            metadata: Discovered server metadata, if any
            state: Opaque value echoed back on the redirect

        Returns:
            AuthorizationRequest with the URL and the verifier to keep
        """
        options = AuthorizationRequestOptions(
            redirect_url=self._require("redirect_url"),
            client_id=self._require("client_id"),
            scope=self.config.scope,
            state=state,
            resource=self.config.resource,
        )
        return start_authorization(
            self.config.issuer,
            options,
            metadata=metadata,
            pkce_generator=self.pkce_generator,
        )

    async def exchange_code(
        self,
        code: str,
        code_verifier: str,
        metadata: Optional[AuthorizationServerMetadata] = None,
    ) -> OAuthTokens:
        """Exchange an authorization code for tokens."""
        return await exchange_authorization(
            self.config.issuer,
            authorization_code=code,
            code_verifier=code_verifier,
            redirect_url=self._require("redirect_url"),
            client_id=self._require("client_id"),
            client_secret=self.config.client_secret,
            metadata=metadata,
            transport=self.transport,
        )

    async def refresh(
        self,
        refresh_token: str,
        metadata: Optional[AuthorizationServerMetadata] = None,
    ) -> OAuthTokens:
        """Trade a refresh token for new tokens."""
        return await refresh_authorization(
            self.config.issuer,
            refresh_token=refresh_token,
            client_id=self._require("client_id"),
            client_secret=self.config.client_secret,
            metadata=metadata,
            transport=self.transport,
        )

    async def register(
        self,
        client_metadata: ClientMetadata,
        metadata: Optional[AuthorizationServerMetadata] = None,
    ) -> ClientInformation:
        """
        Register a client and return the issued credentials.

        Use ``config.with_client_information`` to build a client for the new
        identity.
        """
        info = await register_client(
            self.config.issuer,
            client_metadata,
            metadata=metadata,
            transport=self.transport,
        )
        logger.info(f"Client registered with {self.config.issuer}")
        return info
