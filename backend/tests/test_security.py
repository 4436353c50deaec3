"""
SocialNet Backend — Password Hashing & Token Tests
====================================================

What:  Tests for bcrypt helpers and TokenIssuer.

Test Strategy:
    ✅ Hash differs from plaintext; two hashes of one password differ
    ✅ Both hashes verify; wrong password and malformed hash do not
    ✅ Token decodes with the secret to {"id": ...}
    ✅ Bad signature, garbage, expired and id-less tokens are rejected
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from socialnet.config import Settings
from socialnet.exceptions import InvalidTokenError
from socialnet.security import (
    TokenIssuer,
    hash_password,
    hash_password_async,
    verify_password,
    verify_password_async,
)

SECRET = "unit-test-secret"


class TestPasswordHashing:

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("secret", rounds=4)
        assert hashed != "secret"
        assert hashed.startswith("$2")

    def test_hashes_are_salted(self):
        first = hash_password("secret", rounds=4)
        second = hash_password("secret", rounds=4)
        assert first != second
        assert verify_password("secret", first)
        assert verify_password("secret", second)

    def test_cost_factor_is_embedded(self):
        assert hash_password("secret", rounds=5).split("$")[2] == "05"

    def test_wrong_password(self):
        assert not verify_password("Secret", hash_password("secret", rounds=4))

    def test_malformed_hash_is_a_mismatch(self):
        assert verify_password("secret", "not-a-bcrypt-hash") is False

    def test_long_passwords_are_accepted(self):
        """bcrypt reads 72 bytes; longer input must not raise."""
        long_password = "p" * 200
        assert verify_password(long_password, hash_password(long_password, rounds=4))

    @pytest.mark.asyncio
    async def test_async_wrappers(self):
        hashed = await hash_password_async("secret", rounds=4)
        assert await verify_password_async("secret", hashed)
        assert not await verify_password_async("nope", hashed)


class TestTokenIssuer:

    def setup_method(self):
        self.issuer = TokenIssuer(secret=SECRET)

    def test_token_carries_user_id(self):
        token = self.issuer.issue("42")
        assert jwt.decode(token, SECRET, algorithms=["HS256"]) == {"id": "42"}

    def test_round_trip(self):
        assert self.issuer.verify(self.issuer.issue("user-1")) == "user-1"

    def test_no_expiry_by_default(self):
        payload = jwt.decode(self.issuer.issue("1"), SECRET, algorithms=["HS256"])
        assert "exp" not in payload

    def test_expiry_claims_when_configured(self):
        issuer = TokenIssuer(secret=SECRET, expiry_seconds=3600)
        payload = jwt.decode(issuer.issue("1"), SECRET, algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 3600

    def test_wrong_secret_rejected(self):
        token = TokenIssuer(secret="someone-else").issue("1")
        with pytest.raises(InvalidTokenError):
            self.issuer.verify(token)

    def test_garbage_rejected(self):
        with pytest.raises(InvalidTokenError):
            self.issuer.verify("not.a.token")

    def test_expired_token_rejected(self):
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = jwt.encode({"id": "1", "exp": past}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError, match="expired"):
            self.issuer.verify(token)

    def test_token_without_id_rejected(self):
        token = jwt.encode({"sub": "1"}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            self.issuer.verify(token)

    def test_from_settings(self):
        config = Settings(jwt_secret="from-settings", jwt_expiry_seconds=120)
        issuer = TokenIssuer.from_settings(config)
        assert issuer.secret == "from-settings"
        assert issuer.algorithm == "HS256"
        assert issuer.expiry_seconds == 120
