"""Shared fixtures."""

from typing import Any, List, Optional

import httpx
import pytest

from oauth_pkce_client.models import AuthorizationServerMetadata, PKCEPair
from oauth_pkce_client.transport import HttpxTransport


class MockAuthServer:
    """Records requests and replays queued responses through httpx.MockTransport."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._responses: List[httpx.Response] = []

    def respond(self, status_code: int, json: Optional[Any] = None) -> None:
        if json is None:
            self._responses.append(httpx.Response(status_code))
        else:
            self._responses.append(httpx.Response(status_code, json=json))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responses.pop(0)

    @property
    def transport(self) -> HttpxTransport:
        return HttpxTransport(transport=httpx.MockTransport(self._handle))

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def auth_server():
    """Provide a mock authorization server."""
    return MockAuthServer()


@pytest.fixture
def metadata_body():
    """Provide a valid metadata document."""
    return {
        "issuer": "https://auth.example.com",
        "authorization_endpoint": "https://auth.example.com/authorize",
        "token_endpoint": "https://auth.example.com/token",
        "registration_endpoint": "https://auth.example.com/register",
        "response_types_supported": ["code"],
        "code_challenge_methods_supported": ["S256"],
    }


@pytest.fixture
def server_metadata(metadata_body):
    """Provide parsed metadata."""
    return AuthorizationServerMetadata.model_validate(metadata_body)


@pytest.fixture
def fixed_pkce():
    """Provide a PKCE generator returning a fixed pair."""
    pair = PKCEPair(code_verifier="test_verifier", code_challenge="test_challenge")
    return lambda: pair
