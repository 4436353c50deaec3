"""
SocialNet Backend — FastAPI Dependencies
==========================================

What:  Builds request-scoped services from the settings object and the
       request's database session, and verifies bearer tokens.
Who:   Injected into route handlers via Depends().

Provider graph:
    get_settings ──┬──▶ get_user_store ──┬──▶ get_auth_service
    get_db_session ┘                     ├──▶ get_user_service
                                         └──▶ get_post_service
    get_token_issuer ──▶ get_current_user_id (protected routes)

Tests override get_settings and get_db_session to run against an in-memory
database with a known secret.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from socialnet.config import Settings, settings
from socialnet.database import get_db_session
from socialnet.exceptions import AccessDeniedError
from socialnet.security import TokenIssuer
from socialnet.services.auth_service import AuthService
from socialnet.services.post_service import PostService
from socialnet.services.user_service import UserService
from socialnet.services.user_store import UserStore

# auto_error=False: a missing header is reported as 403 "Access Denied"
_bearer_scheme = HTTPBearer(auto_error=False)


def get_settings() -> Settings:
    return settings


def get_token_issuer(config: Settings = Depends(get_settings)) -> TokenIssuer:
    return TokenIssuer.from_settings(config)


def get_user_store(
    db: AsyncSession = Depends(get_db_session),
    config: Settings = Depends(get_settings),
) -> UserStore:
    return UserStore.from_settings(db, config)


def get_auth_service(
    store: UserStore = Depends(get_user_store),
    config: Settings = Depends(get_settings),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(store=store, config=config, token_issuer=token_issuer)


def get_user_service(store: UserStore = Depends(get_user_store)) -> UserService:
    return UserService(store)


def get_post_service(
    db: AsyncSession = Depends(get_db_session),
    store: UserStore = Depends(get_user_store),
) -> PostService:
    return PostService(db, store)


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> str:
    """
    Extract and verify the Bearer token, returning the authenticated user id.

    Raises:
        AccessDeniedError: no bearer token was sent (403)
        InvalidTokenError: the token failed verification (401)
    """
    if credentials is None or not credentials.credentials:
        raise AccessDeniedError()
    return token_issuer.verify(credentials.credentials)
