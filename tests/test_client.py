"""Tests for OAuthClient."""

import asyncio
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from oauth_pkce_client.client import OAuthClient
from oauth_pkce_client.config import OAuthClientConfig
from oauth_pkce_client.models import ClientMetadata
from oauth_pkce_client.transport import HttpxTransport


class TestOAuthClient:
    """Test OAuthClient functionality."""

    @pytest.fixture
    def config(self):
        """Provide client configuration."""
        return OAuthClientConfig(
            issuer="https://auth.example.com",
            client_id="client123",
            client_secret="secret123",
            redirect_url="http://localhost:3000/callback",
            scope="read",
        )

    @pytest.fixture
    def client(self, config, auth_server, fixed_pkce):
        """Provide an OAuthClient wired to the mock server."""
        return OAuthClient(
            config, transport=auth_server.transport, pkce_generator=fixed_pkce
        )

    @pytest.fixture
    def token_body(self):
        """Provide a token response body."""
        return {"access_token": "access123", "token_type": "Bearer", "expires_in": 60}

    def test_default_transport_uses_config_timeout(self):
        """Test the default transport honours the configured timeout."""
        client = OAuthClient(
            OAuthClientConfig(issuer="https://auth.example.com", timeout=5)
        )
        assert isinstance(client.transport, HttpxTransport)
        assert client.transport.timeout == 5

    async def test_discover(self, client, auth_server, metadata_body):
        """Test discovery goes through the bound transport."""
        auth_server.respond(200, json=metadata_body)

        metadata = await client.discover()

        assert metadata.token_endpoint == "https://auth.example.com/token"

    async def test_discover_disabled(self, config, auth_server):
        """Test discovery can be turned off."""
        client = OAuthClient(
            config.model_copy(update={"use_discovery": False}),
            transport=auth_server.transport,
        )

        assert await client.discover() is None
        assert auth_server.requests == []

    def test_start_authorization(self, client):
        """Test config values flow into the authorization URL."""
        request = client.start_authorization(state="abc")

        params = parse_qs(urlparse(request.authorization_url).query)
        assert params["client_id"] == ["client123"]
        assert params["scope"] == ["read"]
        assert params["state"] == ["abc"]
        assert request.code_verifier == "test_verifier"

    def test_start_authorization_requires_client_id(self, auth_server):
        """Test a missing client id is reported."""
        client = OAuthClient(
            OAuthClientConfig(
                issuer="https://auth.example.com",
                redirect_url="http://localhost:3000/callback",
            ),
            transport=auth_server.transport,
        )

        with pytest.raises(ValueError, match="client_id"):
            client.start_authorization()

    async def test_full_flow(self, client, auth_server, metadata_body, token_body):
        """Test discover, authorize, exchange and refresh in sequence."""
        auth_server.respond(200, json=metadata_body)
        auth_server.respond(200, json={**token_body, "refresh_token": "refresh123"})
        auth_server.respond(200, json=token_body)

        metadata = await client.discover()
        request = client.start_authorization(metadata=metadata)
        tokens = await client.exchange_code("code123", request.code_verifier, metadata)
        refreshed = await client.refresh(tokens.refresh_token, metadata)

        exchange_form = parse_qs(auth_server.requests[1].content.decode())
        assert exchange_form["code_verifier"] == ["test_verifier"]
        assert exchange_form["client_secret"] == ["secret123"]
        refresh_form = parse_qs(auth_server.requests[2].content.decode())
        assert refresh_form["refresh_token"] == ["refresh123"]
        assert refreshed.access_token == "access123"

    async def test_register(self, client, auth_server):
        """Test registration returns client information."""
        auth_server.respond(
            201,
            json={
                "client_id": "new-client",
                "redirect_uris": ["http://localhost:3000/callback"],
            },
        )

        info = await client.register(
            ClientMetadata(redirect_uris=["http://localhost:3000/callback"])
        )

        assert info.client_id == "new-client"
        assert client.config.with_client_information(info).client_id == "new-client"

    async def test_concurrent_flows_do_not_interfere(self, config):
        """Test two flows sharing one client keep their own verifiers and tokens."""
        seen = []

        async def handler(request):
            form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
            seen.append(form)
            # Yield so the concurrent request is handled in between
            await asyncio.sleep(0.01)
            if form["grant_type"] == "authorization_code":
                key = form["code_verifier"]
            else:
                key = form["refresh_token"]
            return httpx.Response(
                200,
                json={
                    "access_token": f"access-for-{key}",
                    "token_type": "Bearer",
                    "refresh_token": f"refresh-for-{key}",
                },
            )

        client = OAuthClient(
            config, transport=HttpxTransport(transport=httpx.MockTransport(handler))
        )
        first = client.start_authorization(state="user-a")
        second = client.start_authorization(state="user-b")
        assert first.code_verifier != second.code_verifier

        tokens_a, tokens_b = await asyncio.gather(
            client.exchange_code("code-a", first.code_verifier),
            client.exchange_code("code-b", second.code_verifier),
        )

        assert tokens_a.access_token == f"access-for-{first.code_verifier}"
        assert tokens_b.access_token == f"access-for-{second.code_verifier}"
        codes = {form["code"]: form["code_verifier"] for form in seen}
        assert codes == {
            "code-a": first.code_verifier,
            "code-b": second.code_verifier,
        }

        refreshed_a, refreshed_b = await asyncio.gather(
            client.refresh(tokens_a.refresh_token),
            client.refresh(tokens_b.refresh_token),
        )

        assert refreshed_a.access_token == f"access-for-{tokens_a.refresh_token}"
        assert refreshed_b.access_token == f"access-for-{tokens_b.refresh_token}"
        refresh_forms = [form for form in seen if form["grant_type"] == "refresh_token"]
        assert sorted(form["refresh_token"] for form in refresh_forms) == sorted(
            [tokens_a.refresh_token, tokens_b.refresh_token]
        )
