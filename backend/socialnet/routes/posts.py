"""
SocialNet Backend — Post Route Handlers
=========================================

What:  Feed, per-user posts, post creation with an optional picture, likes.
Who:   Called by the frontend feed, profile page and post composer.

Request Flow (POST /posts):
    1. Client sends multipart/form-data: userId, description, optional picture
    2. FileService validates and stores the picture
    3. PostService persists the post and returns the refreshed feed (201)
    4. If the post cannot be persisted, the stored picture is removed

Every route requires a valid bearer token.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from socialnet.dependencies import get_current_user_id, get_post_service
from socialnet.schemas.common import ErrorResponse
from socialnet.schemas.post import LikeRequest, PostResponse
from socialnet.services.file_service import FileService, get_file_service
from socialnet.services.post_service import PostService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
    dependencies=[Depends(get_current_user_id)],
    responses={
        401: {"description": "Invalid token", "model": ErrorResponse},
        403: {"description": "Missing token", "model": ErrorResponse},
    },
)


@router.post(
    "",
    status_code=201,
    response_model=List[PostResponse],
    responses={
        400: {"description": "Invalid picture", "model": ErrorResponse},
        404: {"description": "Author not found", "model": ErrorResponse},
    },
    summary="Publish a post",
)
async def create_post(
    user_id: str = Form(..., alias="userId"),
    description: Optional[str] = Form(default=None),
    picture_path: Optional[str] = Form(default=None, alias="picturePath"),
    picture: Optional[UploadFile] = File(default=None),
    service: PostService = Depends(get_post_service),
    files: FileService = Depends(get_file_service),
) -> List[PostResponse]:
    stored_path: Optional[str] = None
    if picture is not None and picture.filename:
        try:
            content = await picture.read()
            stored_path, picture_path = await files.validate_and_store(
                filename=picture.filename,
                content=content,
                content_length=picture.size,
            )
        finally:
            await picture.close()

    try:
        return await service.create_post(
            user_id=user_id,
            description=description,
            picture_path=picture_path,
        )
    except Exception:
        if stored_path:
            await files.cleanup_file(stored_path)
        raise


@router.get("", response_model=List[PostResponse], summary="List the feed")
async def get_feed_posts(
    service: PostService = Depends(get_post_service),
) -> List[PostResponse]:
    return await service.list_feed()


@router.get(
    "/{user_id}/posts",
    response_model=List[PostResponse],
    summary="List a user's posts",
)
async def get_user_posts(
    user_id: str,
    service: PostService = Depends(get_post_service),
) -> List[PostResponse]:
    return await service.list_user_posts(user_id)


@router.patch(
    "/{post_id}/like",
    response_model=PostResponse,
    responses={404: {"description": "Post not found", "model": ErrorResponse}},
    summary="Like or unlike a post",
)
async def like_post(
    post_id: str,
    body: LikeRequest,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    return await service.toggle_like(post_id, body.user_id)
