"""
SocialNet Backend — User Service
==================================

What:  Profile lookup and friend-list management.
Who:   Called by the /users route handlers (all token-protected).

Friendship is symmetric: toggling adds or removes each user from the other's
`friends` list in one flush.
"""

import logging
from typing import List

from socialnet.exceptions import NotFoundError, ValidationError
from socialnet.schemas.user import FriendResponse, UserResponse
from socialnet.services.user_store import UserStore

logger = logging.getLogger(__name__)


class UserService:
    """Business logic for GET/PATCH /users routes."""

    def __init__(self, store: UserStore):
        self.store = store

    async def _require(self, user_id: str):
        user = await self.store.get(user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return user

    async def get_user(self, user_id: str) -> UserResponse:
        user = await self._require(user_id)
        return UserResponse.model_validate(user)

    async def get_friends(self, user_id: str) -> List[FriendResponse]:
        """Friend cards for `user_id`, in the order they were added."""
        user = await self._require(user_id)
        friends = await self.store.get_many(user.friends)
        return [FriendResponse.model_validate(friend) for friend in friends]

    async def toggle_friend(self, user_id: str, friend_id: str) -> List[FriendResponse]:
        """
        Add `friend_id` as a friend of `user_id`, or remove it if already present.

        Returns:
            The updated friend list of `user_id`.

        Raises:
            ValidationError: user_id == friend_id
            NotFoundError: either user does not exist
        """
        if str(user_id) == str(friend_id):
            raise ValidationError(message="Users cannot befriend themselves", field="friendId")

        user = await self._require(user_id)
        friend = await self._require(friend_id)
        uid, fid = str(user.id), str(friend.id)

        # JSON columns are reassigned, not mutated, so the change is tracked
        if fid in user.friends:
            user.friends = [f for f in user.friends if f != fid]
            friend.friends = [f for f in friend.friends if f != uid]
            logger.info("Friendship removed: %s <-> %s", uid, fid)
        else:
            user.friends = [*user.friends, fid]
            if uid not in friend.friends:
                friend.friends = [*friend.friends, uid]
            logger.info("Friendship added: %s <-> %s", uid, fid)

        await self.store.save()

        friends = await self.store.get_many(user.friends)
        return [FriendResponse.model_validate(f) for f in friends]
