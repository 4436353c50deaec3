"""
SocialNet Backend — Authentication Service
============================================

What:  Registration and login.
How:   register: hash the password (fresh salt), seed the profile counters from
       the injected random source, persist through the User Store.
       login: look the user up by email, verify the password, issue a token.
Who:   Called by the /auth route handlers.

Flow:
    Register ──▶ bcrypt(password) ──▶ UserStore.create ──▶ User
    Login    ──▶ UserStore.find_by_email ──▶ bcrypt verify ──▶ TokenIssuer.issue

Responses are built from allow-listed schemas (schemas/user.py). The login
payload is a UserResponse, which has no credential field, so the hash can
never leak through it.
"""

import logging
import random
from typing import Any, Dict, Optional, Tuple

from socialnet.config import Settings
from socialnet.exceptions import InvalidPasswordError, UserNotFoundError
from socialnet.models.user import User
from socialnet.schemas.auth import LoginResponse, RegisterRequest
from socialnet.schemas.user import RegisteredUserResponse, UserResponse
from socialnet.security import TokenIssuer, hash_password_async, verify_password_async
from socialnet.services.user_store import UserStore

logger = logging.getLogger(__name__)

# Profile counters are drawn from [0, COUNTER_CEILING)
COUNTER_CEILING = 1000


class AuthService:
    """
    Turns untrusted registration/login input into a persisted account or a
    signed token.

    Args:
        store: User Store bound to the current request's session.
        config: Application settings (bcrypt cost, token settings).
        rng: Random source for the profile counters.
        token_issuer: Signs tokens; built from `config` when omitted.
    """

    def __init__(
        self,
        store: UserStore,
        config: Settings,
        rng: Optional[random.Random] = None,
        token_issuer: Optional[TokenIssuer] = None,
    ):
        self.store = store
        self.config = config
        self.rng = rng or random.Random()
        self.token_issuer = token_issuer or TokenIssuer.from_settings(config)

    async def register(self, fields: RegisterRequest) -> User:
        """
        Create an account.

        The plaintext password is replaced by its bcrypt hash before the
        record is built; it is never handed to the store.

        Raises:
            DuplicateEmailError: the email is already registered
            PersistenceError: the store rejected the write or timed out
        """
        password_hash = await hash_password_async(
            fields.password, rounds=self.config.bcrypt_rounds
        )

        record: Dict[str, Any] = {
            "first_name": fields.first_name,
            "last_name": fields.last_name,
            "email": fields.email,
            "password_hash": password_hash,
            "picture_path": fields.picture_path,
            "friends": list(fields.friends),
            "location": fields.location,
            "occupation": fields.occupation,
            "viewed_profile": self.rng.randrange(COUNTER_CEILING),
            "impressions": self.rng.randrange(COUNTER_CEILING),
        }

        user = await self.store.create(record)
        logger.info("Registered user %s", user.id)
        return user

    async def login(self, email: str, password: str) -> Tuple[str, User]:
        """
        Authenticate by email and password.

        Returns:
            (token, user) on success.

        Raises:
            UserNotFoundError: no account uses this email
            InvalidPasswordError: the password does not match
            PersistenceError: the lookup failed
        """
        user = await self.store.find_by_email(email)
        if user is None:
            raise UserNotFoundError(email=email)

        if not await verify_password_async(password, user.password_hash):
            logger.info("Login rejected for user %s: wrong password", user.id)
            raise InvalidPasswordError(user_id=str(user.id))

        token = self.token_issuer.issue(str(user.id))
        logger.info("Login: %s", user.id)
        return token, user

    # ── Response builders ─────────────────────────────────────────────────

    def registration_payload(self, user: User) -> Dict[str, Any]:
        """JSON body for a successful registration."""
        schema = (
            RegisteredUserResponse
            if self.config.expose_password_hash_on_register
            else UserResponse
        )
        data = schema.model_validate(user).model_dump(mode="json", by_alias=True)
        return {"status": "success", "data": data}

    @staticmethod
    def login_payload(token: str, user: User) -> Dict[str, Any]:
        """JSON body for a successful login; the user view has no credential field."""
        return LoginResponse(token=token, user=UserResponse.model_validate(user)).model_dump(
            mode="json", by_alias=True
        )
