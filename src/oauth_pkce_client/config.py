# oauth_pkce_client/config.py
"""Client configuration."""

import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import ClientInformation
from .transport import DEFAULT_TIMEOUT

# Environment variable suffix -> config field
_ENV_FIELDS = {
    "ISSUER": "issuer",
    "CLIENT_ID": "client_id",
    "CLIENT_SECRET": "client_secret",
    "REDIRECT_URL": "redirect_url",
    "SCOPE": "scope",
    "RESOURCE": "resource",
    "TIMEOUT": "timeout",
}


class OAuthClientConfig(BaseModel):
    """Settings for talking to one authorization server as one client."""

    model_config = ConfigDict(frozen=True)

    issuer: str
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_url: Optional[str] = None
    scope: Optional[str] = None
    resource: Optional[str] = None
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    use_discovery: bool = True

    @classmethod
    def from_env(
        cls,
        prefix: str = "OAUTH_",
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "OAuthClientConfig":
        """
        Build a config from environment variables.

        Reads ``{prefix}ISSUER``, ``{prefix}CLIENT_ID``, ``{prefix}CLIENT_SECRET``,
        ``{prefix}REDIRECT_URL``, ``{prefix}SCOPE``, ``{prefix}RESOURCE`` and
        ``{prefix}TIMEOUT``. Keyword overrides that are not None win.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for suffix, field in _ENV_FIELDS.items():
            value = env.get(f"{prefix}{suffix}")
            if value:
                values[field] = value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)

    def with_client_information(self, info: ClientInformation) -> "OAuthClientConfig":
        """Copy of this config using credentials issued at registration."""
        return self.model_copy(
            update={"client_id": info.client_id, "client_secret": info.client_secret}
        )
