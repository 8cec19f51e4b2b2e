"""Signed, stateless session tokens (compact HS256 JWS).

Tokens carry the subject id, the admin flag at issuance time and an absolute
expiry. Nothing is stored server-side: a token stays valid until it expires
or the signing secret changes.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from newsdesk.config import settings
from newsdesk.errors import ExpiredTokenError, InvalidTokenError

ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(hours=24)

_HEADER = {"alg": ALGORITHM, "typ": "JWT"}


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _b64decode(raw: str) -> bytes:
    padding = "=" * (-len(raw) % 4)
    return base64.urlsafe_b64decode(raw + padding)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class TokenClaims:
    """Identity extracted from a validated token."""

    subject_id: int
    is_admin: bool


class TokenManager:
    """Issues and validates session tokens with one symmetric secret."""

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TTL,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret.encode("utf-8")
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def _sign(self, signing_input: bytes) -> bytes:
        return hmac.new(self._secret, signing_input, hashlib.sha256).digest()

    def issue(self, subject_id: int, is_admin: bool) -> str:
        """Return a token for `subject_id` that expires after the TTL."""
        # Whole seconds, rounded up so the token never lives less than the TTL
        issued_at = math.ceil(self._clock().timestamp())
        claims = {
            "sub": subject_id,
            "adm": bool(is_admin),
            "iat": issued_at,
            "exp": issued_at + math.ceil(self._ttl.total_seconds()),
        }
        header_b64 = _b64encode(json.dumps(_HEADER, separators=(",", ":")).encode())
        payload_b64 = _b64encode(json.dumps(claims, separators=(",", ":")).encode())
        signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
        return f"{header_b64}.{payload_b64}.{_b64encode(self._sign(signing_input))}"

    def validate(self, token: str) -> TokenClaims:
        """Verify `token` and return its claims.

        Raises:
            InvalidTokenError: malformed token, foreign algorithm, bad signature
                or unusable claims.
            ExpiredTokenError: the expiry instant has been reached.
        """
        parts = token.split(".") if isinstance(token, str) else []
        if len(parts) != 3 or not all(parts):
            raise InvalidTokenError()
        header_b64, payload_b64, signature_b64 = parts

        header = self._decode_segment(header_b64)
        # Only HS256 is accepted; "none" and other algorithms are refused
        # before the signature is looked at.
        if header.get("alg") != ALGORITHM:
            raise InvalidTokenError()

        try:
            signature = _b64decode(signature_b64)
        except (binascii.Error, ValueError) as exc:
            raise InvalidTokenError() from exc
        expected = self._sign(f"{header_b64}.{payload_b64}".encode("utf-8"))
        if not hmac.compare_digest(signature, expected):
            raise InvalidTokenError()

        payload = self._decode_segment(payload_b64)
        subject_id = payload.get("sub")
        is_admin = payload.get("adm")
        expires_at = payload.get("exp")
        if not _is_int(subject_id) or subject_id <= 0:
            raise InvalidTokenError()
        if not isinstance(is_admin, bool):
            raise InvalidTokenError()
        if not _is_int(expires_at):
            raise InvalidTokenError()

        if self._clock().timestamp() >= expires_at:
            raise ExpiredTokenError()

        return TokenClaims(subject_id=subject_id, is_admin=is_admin)

    @staticmethod
    def _decode_segment(segment: str) -> dict[str, Any]:
        try:
            decoded = json.loads(_b64decode(segment))
        except (binascii.Error, ValueError, UnicodeDecodeError) as exc:
            raise InvalidTokenError() from exc
        if not isinstance(decoded, dict):
            raise InvalidTokenError()
        return decoded


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_token_manager: TokenManager | None = None


def get_token_manager() -> TokenManager:
    """Process-wide manager built from settings on first use.

    Also used as a FastAPI dependency so tests can override it.
    """
    global _token_manager
    if _token_manager is None:
        _token_manager = TokenManager(
            settings.jwt_secret,
            timedelta(hours=settings.token_ttl_hours),
        )
    return _token_manager
