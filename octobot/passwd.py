"""Salted PBKDF2 password hashing."""

from __future__ import annotations

import hashlib
import hmac
import logging

log = logging.getLogger(__name__)

_DIGEST = "sha256"
_ITERATIONS = 100_000
_CREDENTIAL_LEN = hashlib.sha256().digest_size


def _derive(password: str, salt: str) -> bytes:
    return hashlib.pbkdf2_hmac(
        _DIGEST, password.encode(), salt.encode(), _ITERATIONS, _CREDENTIAL_LEN
    )


def store_password(password: str, salt: str) -> str:
    """Return the hex-encoded PBKDF2-HMAC-SHA256 hash of a password."""
    return _derive(password, salt).hex()


def verify_password(password: str, salt: str, pass_hash: str) -> bool:
    """Check a password against a hash made by store_password."""
    try:
        expected = bytes.fromhex(pass_hash)
    except ValueError as e:
        log.error("Invalid password hash stored: %s -- %s", pass_hash, e)
        return False
    return hmac.compare_digest(_derive(password, salt), expected)