"""
SocialNet Backend — Password Hashing & Bearer Tokens
======================================================

What:  bcrypt password hashing/verification and JWT issuance/verification.
How:   bcrypt generates a fresh salt per hash and embeds it (with the cost
       factor) in the `$2b$...` output. Tokens are HS256 JWTs carrying only
       the user id, signed with the configured secret.
Who:   AuthService (hash on register, verify + issue on login) and the
       `get_current_user_id` dependency (verify on protected routes).

bcrypt is deliberately slow. The async wrappers run it in the worker thread
pool so a hash in progress never stalls the event loop.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from starlette.concurrency import run_in_threadpool

from socialnet.config import Settings
from socialnet.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

# bcrypt only consumes the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with bcrypt using a fresh random salt."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode())
    except (ValueError, TypeError):
        # Malformed hash in the store is treated as a mismatch
        return False


async def hash_password_async(password: str, rounds: int = 10) -> str:
    return await run_in_threadpool(hash_password, password, rounds)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await run_in_threadpool(verify_password, password, password_hash)


class TokenIssuer:
    """
    Signs and verifies bearer tokens.

    Payload: {"id": "<user uuid>"} plus, when an expiry is configured,
    the standard `iat` and `exp` claims. Without an expiry the token is
    valid for as long as the secret is unchanged.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiry_seconds: Optional[int] = None,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expiry_seconds = expiry_seconds

    @classmethod
    def from_settings(cls, config: Settings) -> "TokenIssuer":
        return cls(
            secret=config.jwt_secret,
            algorithm=config.jwt_algorithm,
            expiry_seconds=config.jwt_expiry_seconds,
        )

    def issue(self, user_id: str) -> str:
        """Create a signed token whose payload identifies `user_id`."""
        payload = {"id": str(user_id)}
        if self.expiry_seconds:
            now = datetime.now(timezone.utc)
            payload["iat"] = now
            payload["exp"] = now + timedelta(seconds=self.expiry_seconds)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Verify a token and return the user id it carries.

        Raises:
            InvalidTokenError: bad signature, malformed token, expired token,
                or a payload without an `id` claim.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError(message="Token has expired")
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected token: %s", exc)
            raise InvalidTokenError(context={"reason": type(exc).__name__})

        user_id = payload.get("id")
        if not user_id:
            raise InvalidTokenError(context={"reason": "missing id claim"})
        return str(user_id)
