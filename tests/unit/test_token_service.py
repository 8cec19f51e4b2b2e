"""Unit tests for session token issuance and validation."""

import base64
import hashlib
import hmac
import json
from datetime import UTC, datetime, timedelta

import pytest

from newsdesk.errors import AuthError, ExpiredTokenError, InvalidTokenError
from newsdesk.services.token_service import TokenClaims, TokenManager

SECRET = "unit-test-secret"
ISSUED_AT = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _b64(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _forge(header: dict, payload: dict, secret: str, digest=hashlib.sha256) -> str:
    header_b64 = _b64(json.dumps(header).encode())
    payload_b64 = _b64(json.dumps(payload).encode())
    signing_input = f"{header_b64}.{payload_b64}".encode()
    signature = hmac.new(secret.encode(), signing_input, digest).digest()
    return f"{header_b64}.{payload_b64}.{_b64(signature)}"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(ISSUED_AT)


@pytest.fixture
def manager(clock: FakeClock) -> TokenManager:
    return TokenManager(SECRET, timedelta(hours=24), clock=clock)


class TestIssueAndValidate:
    """Round trips through issue() and validate()."""

    def test_round_trip_admin(self, manager: TokenManager) -> None:
        token = manager.issue(42, True)
        assert manager.validate(token) == TokenClaims(subject_id=42, is_admin=True)

    def test_round_trip_non_admin(self, manager: TokenManager) -> None:
        token = manager.issue(7, False)
        assert manager.validate(token) == TokenClaims(subject_id=7, is_admin=False)

    def test_compact_hs256_structure(self, manager: TokenManager) -> None:
        """Tokens are three base64url segments with an HS256 header."""
        token = manager.issue(1, False)
        header_b64, payload_b64, _ = token.split(".")
        header = json.loads(base64.urlsafe_b64decode(header_b64 + "=="))
        payload = json.loads(base64.urlsafe_b64decode(payload_b64 + "=="))
        assert header == {"alg": "HS256", "typ": "JWT"}
        assert payload["sub"] == 1
        assert payload["adm"] is False
        assert payload["exp"] == int((ISSUED_AT + timedelta(hours=24)).timestamp())

    def test_empty_secret_rejected(self) -> None:
        with pytest.raises(ValueError):
            TokenManager("")


class TestExpiry:
    """Expiry is checked against the injected clock."""

    def test_valid_one_second_before_expiry(
        self, manager: TokenManager, clock: FakeClock
    ) -> None:
        token = manager.issue(5, False)
        clock.now = ISSUED_AT + timedelta(hours=24) - timedelta(seconds=1)
        assert manager.validate(token).subject_id == 5

    def test_expired_at_expiry_instant(
        self, manager: TokenManager, clock: FakeClock
    ) -> None:
        token = manager.issue(5, False)
        clock.now = ISSUED_AT + timedelta(hours=24)
        with pytest.raises(ExpiredTokenError):
            manager.validate(token)

    def test_expired_is_an_auth_error(
        self, manager: TokenManager, clock: FakeClock
    ) -> None:
        token = manager.issue(5, False)
        clock.now = ISSUED_AT + timedelta(days=3)
        with pytest.raises(InvalidTokenError) as exc_info:
            manager.validate(token)
        assert isinstance(exc_info.value, AuthError)
        assert exc_info.value.status_code == 401

    def test_fractional_issue_time_keeps_full_ttl(
        self, manager: TokenManager, clock: FakeClock
    ) -> None:
        """A token issued mid-second is still valid just under one TTL later."""
        issued = ISSUED_AT + timedelta(milliseconds=400)
        clock.now = issued
        token = manager.issue(5, False)

        clock.now = issued + timedelta(hours=24) - timedelta(milliseconds=10)
        assert manager.validate(token).subject_id == 5

        clock.now = issued + timedelta(hours=24, seconds=1)
        with pytest.raises(ExpiredTokenError):
            manager.validate(token)


class TestRejection:
    """Tokens that must never validate."""

    def test_different_secret(self, manager: TokenManager, clock: FakeClock) -> None:
        other = TokenManager("another-secret", clock=clock)
        with pytest.raises(InvalidTokenError):
            manager.validate(other.issue(1, True))

    def test_tampered_payload(self, manager: TokenManager) -> None:
        """Flipping the admin claim breaks the signature."""
        header_b64, _, signature_b64 = manager.issue(3, False).split(".")
        forged_payload = _b64(
            json.dumps(
                {"sub": 3, "adm": True, "exp": int(ISSUED_AT.timestamp()) + 3600}
            ).encode()
        )
        with pytest.raises(InvalidTokenError):
            manager.validate(f"{header_b64}.{forged_payload}.{signature_b64}")

    def test_alg_none_rejected(self, manager: TokenManager) -> None:
        header_b64 = _b64(json.dumps({"alg": "none", "typ": "JWT"}).encode())
        payload_b64 = _b64(
            json.dumps({"sub": 1, "adm": True, "exp": 4_102_444_800}).encode()
        )
        with pytest.raises(InvalidTokenError):
            manager.validate(f"{header_b64}.{payload_b64}.")
        with pytest.raises(InvalidTokenError):
            manager.validate(f"{header_b64}.{payload_b64}.c2ln")

    def test_other_hmac_algorithm_rejected(self, manager: TokenManager) -> None:
        """A correctly signed HS512 token is still refused."""
        token = _forge(
            {"alg": "HS512", "typ": "JWT"},
            {"sub": 1, "adm": True, "exp": 4_102_444_800},
            SECRET,
            digest=hashlib.sha512,
        )
        with pytest.raises(InvalidTokenError):
            manager.validate(token)

    @pytest.mark.parametrize(
        "payload",
        [
            {"adm": True, "exp": 4_102_444_800},
            {"sub": "1", "adm": True, "exp": 4_102_444_800},
            {"sub": 0, "adm": True, "exp": 4_102_444_800},
            {"sub": True, "adm": True, "exp": 4_102_444_800},
            {"sub": 1, "adm": "yes", "exp": 4_102_444_800},
            {"sub": 1, "adm": True},
            {"sub": 1, "adm": True, "exp": "never"},
        ],
    )
    def test_bad_claims_rejected(self, manager: TokenManager, payload: dict) -> None:
        """Correctly signed tokens with unusable claims are refused."""
        token = _forge({"alg": "HS256", "typ": "JWT"}, payload, SECRET)
        with pytest.raises(InvalidTokenError):
            manager.validate(token)

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "abc",
            "a.b",
            "a.b.c.d",
            "..",
            "!!!.###.$$$",
            "eyJhbGciOiJIUzI1NiJ9.bm90LWpzb24.c2ln",
            "WyJhbGciXQ.e30.c2ln",
            "é.é.é",
        ],
    )
    def test_malformed_rejected(self, manager: TokenManager, token: str) -> None:
        with pytest.raises(InvalidTokenError):
            manager.validate(token)
