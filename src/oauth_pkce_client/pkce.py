# oauth_pkce_client/pkce.py
"""PKCE (Proof Key for Code Exchange) utilities.

Implements RFC 7636 with the S256 challenge method. The entropy source is a
parameter so callers can make verifier generation deterministic.
"""

import base64
import hashlib
import secrets
from typing import Callable

from .models import PKCEPair

EntropySource = Callable[[int], bytes]
PKCEGenerator = Callable[[], PKCEPair]

# 32 random bytes encode to a 43 character verifier, the RFC 7636 minimum
VERIFIER_ENTROPY_BYTES = 32


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def compute_challenge(code_verifier: str) -> str:
    """
    Compute the S256 code_challenge for a code_verifier.

    Args:
        code_verifier: The code verifier string

    Returns:
        BASE64URL(SHA256(code_verifier)) without padding

    Raises:
        ValueError: If the verifier contains non-ASCII characters
    """
    if not code_verifier.isascii():
        raise ValueError("PKCE code_verifier must contain only ASCII characters")
    return _b64url(hashlib.sha256(code_verifier.encode("ascii")).digest())


def generate_pkce_pair(token_bytes: EntropySource = secrets.token_bytes) -> PKCEPair:
    """
    Generate a new PKCE verifier/challenge pair.

    Args:
        token_bytes: Source of random bytes (default: secrets.token_bytes)

    Returns:
        PKCEPair holding the verifier and its S256 challenge
    """
    code_verifier = _b64url(token_bytes(VERIFIER_ENTROPY_BYTES))
    return PKCEPair(
        code_verifier=code_verifier, code_challenge=compute_challenge(code_verifier)
    )


def verify_pkce(code_verifier: str, code_challenge: str) -> bool:
    """Check a verifier against a challenge in constant time."""
    if not (code_verifier.isascii() and code_challenge.isascii()):
        return False
    return secrets.compare_digest(compute_challenge(code_verifier), code_challenge)
