"""Unit tests for password hashing."""

import pytest

from newsdesk.services.password_service import (
    PBKDF2_SHA256_PREFIX,
    hash_password,
    verify_password,
)

FAST = 1_000


class TestHashPassword:
    """Tests for hash_password()."""

    def test_default_hash_verifies(self) -> None:
        """A hash made with the default cost verifies against its plaintext."""
        encoded = hash_password("correct horse battery staple")
        assert verify_password(encoded, "correct horse battery staple") is True

    def test_encoded_format(self) -> None:
        """Hashes carry the algorithm tag and iteration count."""
        encoded = hash_password("secret", iterations=FAST)
        algorithm, iterations, salt, digest = encoded.split("$")
        assert algorithm == PBKDF2_SHA256_PREFIX
        assert iterations == str(FAST)
        assert salt and digest

    def test_plaintext_not_in_hash(self) -> None:
        encoded = hash_password("hunter2-plaintext", iterations=FAST)
        assert "hunter2-plaintext" not in encoded

    def test_salted(self) -> None:
        """The same password hashes differently each time."""
        assert hash_password("same", iterations=FAST) != hash_password(
            "same", iterations=FAST
        )

    def test_accepts_empty_and_unicode(self) -> None:
        for password in ("", "pässwörd ✓", "\ud800"):
            encoded = hash_password(password, iterations=FAST)
            assert verify_password(encoded, password) is True


class TestVerifyPassword:
    """Tests for verify_password()."""

    def test_wrong_password(self) -> None:
        encoded = hash_password("right", iterations=FAST)
        assert verify_password(encoded, "wrong") is False

    def test_case_sensitive(self) -> None:
        encoded = hash_password("Secret", iterations=FAST)
        assert verify_password(encoded, "secret") is False

    @pytest.mark.parametrize(
        "encoded",
        [
            "",
            "not-a-hash",
            "pbkdf2_sha256$abc$salt$digest",
            "pbkdf2_sha256$0$c2FsdA$ZGlnZXN0",
            "pbkdf2_sha256$1000$!!!$???",
            "pbkdf2_sha256$1000$c2FsdA$",
            "bcrypt$1000$c2FsdA$ZGlnZXN0",
            "pbkdf2_sha256$99999999999$c2FsdA$ZGlnZXN0",
        ],
    )
    def test_malformed_hash_returns_false(self, encoded: str) -> None:
        """Malformed digests are a mismatch, never an exception."""
        assert verify_password(encoded, "anything") is False

    def test_non_string_inputs(self) -> None:
        assert verify_password(None, "x") is False  # type: ignore[arg-type]
        encoded = hash_password("x", iterations=FAST)
        assert verify_password(encoded, None) is False  # type: ignore[arg-type]
