# oauth_pkce_client/endpoints.py
"""Default endpoint locations used when no server metadata is available."""

from urllib.parse import urljoin

WELL_KNOWN_METADATA_PATH = "/.well-known/oauth-authorization-server"
AUTHORIZE_PATH = "/authorize"
TOKEN_PATH = "/token"
REGISTER_PATH = "/register"


def resolve(issuer: str, path: str) -> str:
    """Resolve an absolute path against the issuer's origin."""
    return urljoin(issuer, path)
