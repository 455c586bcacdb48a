#!/usr/bin/env python3
"""
Command line tool for running OAuth 2.0 Authorization Code + PKCE steps.

This tool makes it easy to:
- Inspect an authorization server's metadata
- Register a client dynamically
- Build an authorization URL (and get the PKCE verifier to keep)
- Exchange an authorization code for tokens
- Refresh tokens

Client settings come from flags or OAUTH_* environment variables.

Usage:
    oauth-pkce discover <issuer>
    oauth-pkce register <issuer> --redirect-url <url> [--client-name NAME]
    oauth-pkce authorize <issuer> --client-id ID --redirect-url <url>
    oauth-pkce exchange <issuer> --code CODE --verifier VERIFIER
    oauth-pkce refresh <issuer> --refresh-token TOKEN
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from .client import OAuthClient
from .config import OAuthClientConfig
from .errors import OAuthError
from .models import ClientMetadata, OAuthTokens


def safe_display_token(token: str, prefix_len: int = 20, suffix_len: int = 6) -> str:
    """Safely display a token with most characters redacted."""
    if len(token) <= prefix_len + suffix_len:
        # Short values show at most 4 leading characters and never the whole value
        return f"{token[:min(4, len(token) // 4)]}..."

    prefix = token[:prefix_len]
    suffix = token[-suffix_len:]
    redacted_len = len(token) - prefix_len - suffix_len

    return f"{prefix}...{'*' * min(redacted_len, 20)}...{suffix}"


def print_header(text: str):
    """Print a formatted header."""
    print("\n" + "=" * 60)
    print(text)
    print("=" * 60)


def print_tokens(tokens: OAuthTokens):
    print(f"Access Token: {safe_display_token(tokens.access_token)}")
    print(f"Token Type: {tokens.token_type}")
    if tokens.expires_in is not None:
        print(f"Expires In: {tokens.expires_in} seconds")
    if tokens.refresh_token:
        print(f"Refresh Token: {safe_display_token(tokens.refresh_token)}")
    if tokens.scope:
        print(f"Scopes: {tokens.scope}")


async def cmd_discover(config: OAuthClientConfig):
    """Show the authorization server's metadata."""
    print_header(f"OAuth Metadata for {config.issuer}")

    if not config.use_discovery:
        print("⚠️  Discovery skipped (--no-discovery)")
        print("   Default endpoints (/authorize, /token, /register) will be used.")
        return 0

    client = OAuthClient(config)

    try:
        metadata = await client.discover()
    except OAuthError as e:
        print(f"❌ Discovery failed: {e}")
        return 1

    if metadata is None:
        print("⚠️  Server publishes no OAuth metadata")
        print("   Default endpoints (/authorize, /token, /register) will be used.")
        return 0

    print(f"Issuer: {metadata.issuer}")
    print(f"Authorization Endpoint: {metadata.authorization_endpoint}")
    print(f"Token Endpoint: {metadata.token_endpoint}")
    print(f"Registration Endpoint: {metadata.registration_endpoint or '(none)'}")
    print(f"Response Types: {', '.join(metadata.response_types_supported)}")
    print(
        f"Code Challenge Methods: {', '.join(metadata.code_challenge_methods_supported)}"
    )
    return 0


async def cmd_register(
    config: OAuthClientConfig,
    redirect_uris: list[str],
    client_name: Optional[str] = None,
):
    """Register a new client with the server."""
    print_header(f"Registering Client with {config.issuer}")

    client = OAuthClient(config)
    client_metadata = ClientMetadata(
        redirect_uris=redirect_uris, client_name=client_name, scope=config.scope
    )

    try:
        metadata = await client.discover()
        info = await client.register(client_metadata, metadata=metadata)
    except OAuthError as e:
        print(f"❌ Registration failed: {e}")
        return 1

    print("✅ Client registered")
    print(f"Client ID: {info.client_id}")
    if info.client_secret:
        print(f"Client Secret: {safe_display_token(info.client_secret)}")
    if info.client_secret_expires_at:
        print(f"Secret Expires At: {info.client_secret_expires_at}")
    print("\n⚠️  Store these credentials; they are not saved by this tool.")
    return 0


async def cmd_authorize(config: OAuthClientConfig, state: Optional[str] = None):
    """Print an authorization URL and the PKCE verifier to keep."""
    print_header(f"Authorization Request for {config.issuer}")

    client = OAuthClient(config)

    try:
        metadata = await client.discover()
        request = client.start_authorization(metadata=metadata, state=state)
    except (OAuthError, ValueError) as e:
        print(f"❌ Could not build authorization request: {e}")
        return 1

    print("Open this URL in your browser:\n")
    print(f"  {request.authorization_url}\n")
    print("Code Verifier (pass to 'exchange --verifier'):\n")
    print(f"  {request.code_verifier}")
    return 0


async def cmd_exchange(config: OAuthClientConfig, code: str, code_verifier: str):
    """Exchange an authorization code for tokens."""
    print_header(f"Exchanging Authorization Code with {config.issuer}")

    client = OAuthClient(config)

    try:
        metadata = await client.discover()
        tokens = await client.exchange_code(code, code_verifier, metadata=metadata)
    except (OAuthError, ValueError) as e:
        print(f"❌ Token exchange failed: {e}")
        return 1

    print("✅ Tokens issued\n")
    print_tokens(tokens)
    return 0


async def cmd_refresh(config: OAuthClientConfig, refresh_token: str):
    """Refresh tokens."""
    print_header(f"Refreshing Tokens with {config.issuer}")

    client = OAuthClient(config)

    try:
        metadata = await client.discover()
        tokens = await client.refresh(refresh_token, metadata=metadata)
    except (OAuthError, ValueError) as e:
        print(f"❌ Token refresh failed: {e}")
        return 1

    print("✅ Tokens refreshed\n")
    print_tokens(tokens)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="OAuth 2.0 Authorization Code + PKCE client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  oauth-pkce discover https://auth.example.com
  oauth-pkce register https://auth.example.com --redirect-url http://localhost:3000/callback
  oauth-pkce authorize https://auth.example.com --client-id abc --redirect-url http://localhost:3000/callback
  oauth-pkce exchange https://auth.example.com --code CODE --verifier VERIFIER
  oauth-pkce refresh https://auth.example.com --refresh-token TOKEN
        """,
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("issuer", help="Authorization server base URL")
    common.add_argument("--client-id", help="OAuth client id (env: OAUTH_CLIENT_ID)")
    common.add_argument(
        "--client-secret", help="OAuth client secret (env: OAUTH_CLIENT_SECRET)"
    )
    common.add_argument("--scope", help="Requested scope (env: OAUTH_SCOPE)")
    common.add_argument(
        "--no-discovery",
        action="store_true",
        help="Skip metadata discovery and use default endpoints",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser(
        "discover", parents=[common], help="Show authorization server metadata"
    )

    register_parser = subparsers.add_parser(
        "register", parents=[common], help="Register a client dynamically"
    )
    register_parser.add_argument(
        "--redirect-url",
        dest="redirect_urls",
        action="append",
        required=True,
        help="Redirect URL (repeatable)",
    )
    register_parser.add_argument("--client-name", help="Human readable client name")

    authorize_parser = subparsers.add_parser(
        "authorize", parents=[common], help="Build an authorization URL"
    )
    authorize_parser.add_argument(
        "--redirect-url", help="Redirect URL (env: OAUTH_REDIRECT_URL)"
    )
    authorize_parser.add_argument("--state", help="Opaque state value")
    authorize_parser.add_argument(
        "--resource", help="Target resource (RFC 8707) (env: OAUTH_RESOURCE)"
    )

    exchange_parser = subparsers.add_parser(
        "exchange", parents=[common], help="Exchange an authorization code"
    )
    exchange_parser.add_argument("--code", required=True, help="Authorization code")
    exchange_parser.add_argument(
        "--verifier", required=True, help="PKCE code verifier from 'authorize'"
    )
    exchange_parser.add_argument(
        "--redirect-url", help="Redirect URL (env: OAUTH_REDIRECT_URL)"
    )

    refresh_parser = subparsers.add_parser(
        "refresh", parents=[common], help="Refresh tokens"
    )
    refresh_parser.add_argument(
        "--refresh-token", required=True, help="Refresh token"
    )

    return parser


def config_from_args(args: argparse.Namespace) -> OAuthClientConfig:
    """Merge command line flags over OAUTH_* environment variables."""
    return OAuthClientConfig.from_env(
        issuer=args.issuer,
        client_id=args.client_id,
        client_secret=args.client_secret,
        scope=args.scope,
        redirect_url=getattr(args, "redirect_url", None),
        resource=getattr(args, "resource", None),
        use_discovery=False if args.no_discovery else None,
    )


def main(argv: Optional[list[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        config = config_from_args(args)

        if args.command == "discover":
            return asyncio.run(cmd_discover(config))
        elif args.command == "register":
            return asyncio.run(
                cmd_register(config, args.redirect_urls, args.client_name)
            )
        elif args.command == "authorize":
            return asyncio.run(cmd_authorize(config, args.state))
        elif args.command == "exchange":
            return asyncio.run(cmd_exchange(config, args.code, args.verifier))
        elif args.command == "refresh":
            return asyncio.run(cmd_refresh(config, args.refresh_token))
        else:  # pragma: no cover
            # This should never be reached due to argparse validation
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\n\n❌ Interrupted by user")
        return 130
    except Exception as e:
        print(f"\n❌ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
