# oauth_pkce_client/models.py
"""Schemas for authorization server metadata, tokens and client registration.

Every response from the authorization server is parsed through ``parse_model``
before it is handed back to the caller. Unknown fields are kept, so
``model_dump(exclude_unset=True)`` on a parsed object returns exactly the body
the server sent, explicit nulls included.
"""

import json
from typing import Any, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import SchemaValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class AuthorizationServerMetadata(BaseModel):
    """OAuth 2.0 Authorization Server Metadata (RFC 8414)."""

    model_config = ConfigDict(strict=True, extra="allow", frozen=True)

    issuer: str
    authorization_endpoint: str
    token_endpoint: str
    registration_endpoint: Optional[str] = None
    response_types_supported: List[str]
    code_challenge_methods_supported: List[str]

    # Recognized but not required by this flow
    scopes_supported: Optional[List[str]] = None
    grant_types_supported: Optional[List[str]] = None
    revocation_endpoint: Optional[str] = None

    def supports_response_type(self, response_type: str) -> bool:
        return response_type in self.response_types_supported

    def supports_code_challenge_method(self, method: str) -> bool:
        return method in self.code_challenge_methods_supported


class PKCEPair(BaseModel):
    """PKCE verifier and its S256 challenge."""

    model_config = ConfigDict(frozen=True)

    code_verifier: str = Field(..., min_length=1)
    code_challenge: str = Field(..., min_length=1)


class AuthorizationRequestOptions(BaseModel):
    """Parameters for the browser-facing authorization request."""

    redirect_url: str
    client_id: str
    scope: Optional[str] = None
    state: Optional[str] = None
    resource: Optional[str] = None


class AuthorizationRequest(BaseModel):
    """Authorization URL to send the user to, plus the verifier to keep."""

    model_config = ConfigDict(frozen=True)

    authorization_url: str
    code_verifier: str


class OAuthTokens(BaseModel):
    """Token endpoint response (RFC 6749 section 5.1)."""

    model_config = ConfigDict(strict=True, extra="allow", frozen=True)

    access_token: str
    token_type: str
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    scope: Optional[str] = None

    def get_authorization_header(self) -> str:
        """Value for the ``Authorization`` header."""
        token_type = "Bearer" if self.token_type.lower() == "bearer" else self.token_type
        return f"{token_type} {self.access_token}"


class ClientMetadata(BaseModel):
    """RFC 7591 client registration request.

    Only fields the caller sets are sent; nothing here carries a non-null
    default.
    """

    model_config = ConfigDict(strict=True, extra="allow")

    redirect_uris: List[str] = Field(..., min_length=1)
    client_name: Optional[str] = None
    client_uri: Optional[str] = None
    logo_uri: Optional[str] = None
    scope: Optional[str] = None
    contacts: Optional[List[str]] = None
    grant_types: Optional[List[str]] = None
    response_types: Optional[List[str]] = None
    token_endpoint_auth_method: Optional[str] = None
    software_id: Optional[str] = None
    software_version: Optional[str] = None


class ClientInformation(ClientMetadata):
    """RFC 7591 registration response: issued credentials plus echoed metadata."""

    client_id: str
    client_secret: Optional[str] = None
    client_id_issued_at: Optional[int] = None
    client_secret_expires_at: Optional[int] = None


def parse_model(
    model: Type[ModelT], data: Union[bytes, str, Any], what: str
) -> ModelT:
    """
    Validate server data against a schema.

    Args:
        model: Schema to validate against
        data: Raw JSON (bytes or str) or an already-decoded object
        what: Human readable name used in the error message

    Returns:
        A fully validated model instance

    Raises:
        SchemaValidationError: If the data is not JSON or fails validation
    """
    if isinstance(data, (bytes, str)):
        try:
            data = json.loads(data)
        except ValueError as e:
            raise SchemaValidationError(f"Invalid {what}: body is not JSON ({e})") from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationError(f"Invalid {what}: {e}") from e
