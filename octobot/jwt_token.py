"""JSON web tokens for authenticating as a GitHub app."""

from __future__ import annotations

import time

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

_TOKEN_LIFETIME_SECS = 9 * 60


def new_token(app_id: int, app_key_der: bytes) -> str:
    """Create an RS256 token for the app, valid for nine minutes.

    ``app_key_der`` is the app's RSA private key in DER form.
    """
    try:
        key = serialization.load_der_private_key(app_key_der, password=None)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid RSA private key: {e}") from e
    if not isinstance(key, rsa.RSAPrivateKey):
        raise ValueError("App key is not an RSA private key")

    now = int(time.time())
    claims = {
        "iat": now,
        "exp": now + _TOKEN_LIFETIME_SECS,
        "iss": str(app_id),
    }
    return jwt.encode(claims, key, algorithm="RS256")