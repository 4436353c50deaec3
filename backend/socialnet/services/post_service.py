"""
SocialNet Backend — Post Service
==================================

What:  Creates posts, lists the feed and per-user posts, toggles likes.
How:   Queries the `posts` table through the request's AsyncSession; author
       details are read through the User Store.
Who:   Called by the /posts route handlers (all token-protected).

Feed ordering is newest first everywhere.
"""

import logging
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from socialnet.exceptions import NotFoundError, PersistenceError
from socialnet.models.post import Post
from socialnet.schemas.post import PostResponse
from socialnet.services.user_store import UserStore, parse_uuid

logger = logging.getLogger(__name__)


class PostService:
    """
    Business logic for the /posts routes.

    Args:
        db: The request's database session.
        store: User Store bound to the same session.
    """

    def __init__(self, db: AsyncSession, store: UserStore):
        self.db = db
        self.store = store

    async def _query(self, user_id: Optional[str] = None) -> List[PostResponse]:
        query = select(Post)
        if user_id is not None:
            query = query.where(Post.user_id == user_id)
        query = query.order_by(desc(Post.created_at))
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise PersistenceError(
                message="Could not retrieve posts. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [PostResponse.model_validate(post) for post in result.scalars().all()]

    async def create_post(
        self,
        user_id: str,
        description: Optional[str] = None,
        picture_path: Optional[str] = None,
    ) -> List[PostResponse]:
        """
        Publish a post for `user_id` and return the refreshed feed.

        Raises:
            NotFoundError: the author does not exist
            PersistenceError: the insert failed
        """
        author = await self.store.get(user_id)
        if author is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))

        post = Post(
            user_id=str(author.id),
            first_name=author.first_name,
            last_name=author.last_name,
            location=author.location,
            description=description,
            picture_path=picture_path or None,
            user_picture_path=author.picture_path,
            likes={},
            comments=[],
        )
        self.db.add(post)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Creating post failed: %s", str(e))
            raise PersistenceError(
                message="Could not publish the post. Please try again.",
                context={"user_id": str(user_id)},
            )
        logger.info("Post %s created by %s", post.id, author.id)

        return await self._query()

    async def list_feed(self) -> List[PostResponse]:
        return await self._query()

    async def list_user_posts(self, user_id: str) -> List[PostResponse]:
        return await self._query(user_id=str(user_id))

    async def toggle_like(self, post_id: str, user_id: str) -> PostResponse:
        """
        Like the post for `user_id`, or remove the like if already present.

        Raises:
            NotFoundError: the post does not exist
        """
        key = parse_uuid(post_id)
        post = await self.db.get(Post, key) if key is not None else None
        if post is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))

        likes = dict(post.likes or {})
        if likes.get(user_id):
            likes.pop(user_id)
        else:
            likes[user_id] = True
        post.likes = likes

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Updating likes of post %s failed: %s", post_id, str(e))
            raise PersistenceError(context={"post_id": str(post_id)})

        return PostResponse.model_validate(post)
