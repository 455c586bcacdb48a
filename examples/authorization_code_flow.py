#!/usr/bin/env python3
"""
End-to-end Authorization Code + PKCE flow against a real authorization server.

Steps:
1. Discover the server metadata (RFC 8414), if published
2. Register a client dynamically (RFC 7591)
3. Print the authorization URL; you approve access in a browser
4. Paste the code from the redirect URL; it is exchanged for tokens
5. Refresh the tokens, if a refresh token was issued

The server must implement the Authorization Code grant with PKCE (S256) and
dynamic client registration. Nothing is stored; copy the credentials printed
by this script if you want to reuse them.

Usage:
    python examples/authorization_code_flow.py https://auth.example.com
"""

import asyncio
import secrets
import sys

from oauth_pkce_client import ClientMetadata, OAuthClient, OAuthClientConfig, OAuthError
from oauth_pkce_client.cli import safe_display_token

REDIRECT_URL = "http://localhost:8080/callback"


async def main():
    if len(sys.argv) < 2:
        print("Usage: python authorization_code_flow.py <issuer_url>")
        sys.exit(1)

    config = OAuthClientConfig(issuer=sys.argv[1], redirect_url=REDIRECT_URL)
    client = OAuthClient(config)

    print(f"Starting OAuth flow with {config.issuer}...")
    print("=" * 60)

    try:
        metadata = await client.discover()
        if metadata is None:
            print("No metadata published, using default endpoints")

        info = await client.register(
            ClientMetadata(
                redirect_uris=[REDIRECT_URL],
                client_name="oauth-pkce-client example",
                grant_types=["authorization_code", "refresh_token"],
                response_types=["code"],
            ),
            metadata=metadata,
        )
        print(f"Registered client: {info.client_id}")

        client = OAuthClient(config.with_client_information(info))
        state = secrets.token_urlsafe(16)
        request = client.start_authorization(metadata=metadata, state=state)

        print("\nOpen this URL and approve access:\n")
        print(f"  {request.authorization_url}\n")
        code = input("Paste the 'code' parameter from the redirect URL: ").strip()

        tokens = await client.exchange_code(code, request.code_verifier, metadata)
        print("\n✅ Authentication successful!")
        print(f"Access Token: {safe_display_token(tokens.access_token)}")
        print(f"Token Type: {tokens.token_type}")
        if tokens.expires_in:
            print(f"Expires In: {tokens.expires_in} seconds")

        if tokens.refresh_token:
            print("\n🔄 Refreshing token...")
            new_tokens = await client.refresh(tokens.refresh_token, metadata)
            print(f"New Access Token: {safe_display_token(new_tokens.access_token)}")

    except OAuthError as e:
        print(f"\n❌ Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
