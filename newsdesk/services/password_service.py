"""Password hashing for user credentials."""

from __future__ import annotations

import base64
import hashlib
import hmac
import os

PBKDF2_SHA256_PREFIX = "pbkdf2_sha256"
PBKDF2_ITERATIONS = 210_000
# Upper bound accepted from a stored hash
MAX_ITERATIONS = 10_000_000


def _b64decode(raw: str) -> bytes:
    padding = "=" * (-len(raw) % 4)
    return base64.urlsafe_b64decode(raw + padding)


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def hash_password(password: str, *, iterations: int = PBKDF2_ITERATIONS) -> str:
    """Return a salted PBKDF2-SHA256 hash string.

    Format: "pbkdf2_sha256$<iterations>$<salt_b64>$<digest_b64>"
    """
    salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8", "surrogatepass"),
        salt,
        iterations,
    )
    return f"{PBKDF2_SHA256_PREFIX}${iterations}${_b64encode(salt)}${_b64encode(digest)}"


def verify_password(encoded_hash: str, password: str) -> bool:
    """Check `password` against `encoded_hash`. Never raises."""
    if not isinstance(encoded_hash, str) or not isinstance(password, str):
        return False

    try:
        algorithm, iterations_raw, salt_b64, digest_b64 = encoded_hash.split("$", 3)
    except ValueError:
        return False

    if algorithm != PBKDF2_SHA256_PREFIX:
        return False

    try:
        iterations = int(iterations_raw)
    except ValueError:
        return False
    if not 1 <= iterations <= MAX_ITERATIONS:
        return False

    try:
        salt = _b64decode(salt_b64)
        expected = _b64decode(digest_b64)
    except (ValueError, TypeError):
        return False
    if not expected:
        return False

    actual = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8", "surrogatepass"),
        salt,
        iterations,
    )
    return hmac.compare_digest(actual, expected)
