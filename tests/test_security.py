"""Unit tests for app.core.security: bcrypt hashing and JWT issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.config import settings
from app.core.security import (
    InvalidTokenError,
    create_access_token,
    hash_password,
    verify_access_token,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    """hash_password salts every digest; verify_password never raises."""

    def test_hash_verifies_and_differs_from_plaintext(self) -> None:
        digest = hash_password("Passw0rd!")
        self.assertNotEqual(digest, "Passw0rd!")
        self.assertTrue(verify_password("Passw0rd!", digest))

    def test_wrong_password_does_not_verify(self) -> None:
        digest = hash_password("Passw0rd!")
        self.assertFalse(verify_password("Passw0rd?", digest))

    def test_same_plaintext_hashes_differently(self) -> None:
        self.assertNotEqual(hash_password("Passw0rd!"), hash_password("Passw0rd!"))

    def test_malformed_digest_returns_false(self) -> None:
        self.assertFalse(verify_password("Passw0rd!", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("Passw0rd!", ""))


class TestAccessTokens(unittest.TestCase):
    """create_access_token / verify_access_token round-trip identity and reject bad tokens."""

    def test_verify_returns_identity_and_role(self) -> None:
        token = create_access_token(sub="acc-1", role="ADMIN")
        caller = verify_access_token(token)
        self.assertEqual(caller.id, "acc-1")
        self.assertEqual(caller.role, "ADMIN")
        self.assertTrue(caller.is_admin)

    def test_token_expires_after_configured_ttl(self) -> None:
        token = create_access_token(sub="acc-1", role="USER")
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
        )
        self.assertEqual(payload["exp"] - payload["iat"], settings.JWT_EXPIRE_MINUTES * 60)

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(days=2)
        token = jwt.encode(
            {"sub": "acc-1", "role": "USER", "iat": past, "exp": past + timedelta(days=1)},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(InvalidTokenError):
            verify_access_token(token)

    def test_wrong_signature_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "acc-1", "role": "ADMIN", "exp": datetime.now(UTC) + timedelta(hours=1)},
            "some-other-secret-that-is-long-enough!!",
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            verify_access_token(token)

    def test_garbage_rejected(self) -> None:
        with self.assertRaises(InvalidTokenError):
            verify_access_token("not.a.jwt")

    def test_unknown_role_rejected(self) -> None:
        token = create_access_token(sub="acc-1", role="SUPERUSER")
        with self.assertRaises(InvalidTokenError):
            verify_access_token(token)


if __name__ == "__main__":
    unittest.main()
