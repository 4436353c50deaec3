"""
SocialNet Backend — User Store
================================

What:  Persistence boundary for User records.
How:   Thin async wrapper over an AsyncSession. Every round-trip is bounded by
       the configured store timeout and every driver error is translated into
       a PersistenceError subclass.
Who:   AuthService (find_by_email, create), UserService and PostService
       (get, get_many, save).

Uniqueness of `email` is enforced by the unique index on users.email, not by
a read-before-write. Two concurrent registrations with the same address race
at the database; the loser's flush or commit raises IntegrityError, which becomes
DuplicateEmailError.
"""

import asyncio
import logging
import uuid
from typing import Any, Awaitable, Dict, List, Optional, Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from socialnet.config import Settings
from socialnet.exceptions import DuplicateEmailError, PersistenceError, StoreTimeoutError
from socialnet.models.user import User

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_uuid(value: Any) -> Optional[uuid.UUID]:
    """Coerce a path/body id to a UUID; None when it is not one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


class UserStore:
    """
    Lookup and write operations on the `users` table.

    Args:
        session: The request's database session.
        timeout: Seconds allowed for a single round-trip.
    """

    def __init__(self, session: AsyncSession, timeout: float = 10.0):
        self.session = session
        self.timeout = timeout

    @classmethod
    def from_settings(cls, session: AsyncSession, config: Settings) -> "UserStore":
        return cls(session, timeout=config.store_timeout_seconds)

    async def _bounded(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error("Store operation '%s' timed out after %.1fs", operation, self.timeout)
            raise StoreTimeoutError(operation=operation, timeout=self.timeout)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Exact-match lookup by email. Returns None when absent."""
        try:
            result = await self._bounded(
                "find_by_email",
                self.session.execute(select(User).where(User.email == email)),
            )
        except SQLAlchemyError as e:
            logger.error("Lookup by email failed: %s", str(e))
            raise PersistenceError(context={"operation": "find_by_email"})
        return result.scalar_one_or_none()

    async def get(self, user_id: Any) -> Optional[User]:
        """Primary-key lookup. Malformed ids are treated as absent."""
        key = parse_uuid(user_id)
        if key is None:
            return None
        try:
            return await self._bounded("get", self.session.get(User, key))
        except SQLAlchemyError as e:
            logger.error("Lookup of user %s failed: %s", user_id, str(e))
            raise PersistenceError(context={"operation": "get", "user_id": str(user_id)})

    async def get_many(self, user_ids: Sequence[Any]) -> List[User]:
        """
        Fetch several users, preserving the order of `user_ids`.

        Unknown or malformed ids are skipped.
        """
        keys = [k for k in (parse_uuid(u) for u in user_ids) if k is not None]
        if not keys:
            return []
        try:
            result = await self._bounded(
                "get_many",
                self.session.execute(select(User).where(User.id.in_(keys))),
            )
        except SQLAlchemyError as e:
            logger.error("Batch lookup of %d users failed: %s", len(keys), str(e))
            raise PersistenceError(context={"operation": "get_many"})
        by_id = {user.id: user for user in result.scalars().all()}
        return [by_id[k] for k in keys if k in by_id]

    async def _commit(self, operation: str) -> None:
        """Flush and commit the session's pending writes within one time bound."""

        async def write() -> None:
            await self.session.flush()
            await self.session.commit()

        await self._bounded(operation, write())

    async def create(self, record: Dict[str, Any]) -> User:
        """
        Insert and commit a new user built from `record` (User column names as keys).

        The commit happens here, so a constraint or connection failure at
        commit time surfaces as one of the errors below.

        Raises:
            DuplicateEmailError: the email is already registered
            StoreTimeoutError: the insert did not complete in time
            PersistenceError: any other database failure
        """
        user = User(**record)
        self.session.add(user)
        try:
            await self._commit("create")
        except IntegrityError as e:
            await self.session.rollback()
            if "email" in str(e.orig).lower():
                logger.info("Rejected duplicate registration for %s", record.get("email"))
                raise DuplicateEmailError(email=record.get("email"))
            logger.error("Integrity error creating user: %s", str(e.orig))
            raise PersistenceError(
                message="Could not save the user. Please check the submitted fields.",
                context={"operation": "create"},
            )
        except StoreTimeoutError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Creating user failed: %s", str(e))
            raise PersistenceError(context={"operation": "create"})

        logger.info("User created: %s", user.id)
        return user

    async def save(self) -> None:
        """Commit pending changes on users already loaded in this session."""
        try:
            await self._commit("save")
        except StoreTimeoutError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Saving users failed: %s", str(e))
            raise PersistenceError(context={"operation": "save"})
