"""
SocialNet Backend — User Route Handlers
=========================================

What:  GET /users/{id}, GET /users/{id}/friends, PATCH /users/{id}/{friendId}.
Who:   Called by the frontend profile page and friend list widget.

Every route requires a valid bearer token. Errors propagate to the global
exception handlers in main.py.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from socialnet.dependencies import get_current_user_id, get_user_service
from socialnet.schemas.common import ErrorResponse
from socialnet.schemas.user import FriendResponse, UserResponse
from socialnet.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(get_current_user_id)],
    responses={
        401: {"description": "Invalid token", "model": ErrorResponse},
        403: {"description": "Missing token", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
)


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user's profile")
async def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.get_user(user_id)


@router.get(
    "/{user_id}/friends",
    response_model=List[FriendResponse],
    summary="List a user's friends",
)
async def get_user_friends(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> List[FriendResponse]:
    return await service.get_friends(user_id)


@router.patch(
    "/{user_id}/{friend_id}",
    response_model=List[FriendResponse],
    summary="Add or remove a friend",
)
async def add_remove_friend(
    user_id: str,
    friend_id: str,
    service: UserService = Depends(get_user_service),
) -> List[FriendResponse]:
    """Toggle the friendship in both directions; returns the updated friend list."""
    return await service.toggle_friend(user_id, friend_id)
