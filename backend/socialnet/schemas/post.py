"""
SocialNet Backend — Post Schemas
==================================

What:  Feed item representation and the like-toggle request body.
"""

import uuid
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from socialnet.schemas.common import CamelModel


class PostResponse(CamelModel):
    """
    A post as shown in the feed.

    likes maps user id → true; the like count is len(likes).
    """
    id: uuid.UUID
    user_id: str
    first_name: str
    last_name: str
    location: Optional[str] = None
    description: Optional[str] = None
    picture_path: Optional[str] = None
    user_picture_path: Optional[str] = None
    likes: Dict[str, bool] = Field(default_factory=dict)
    comments: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class LikeRequest(CamelModel):
    """Body of PATCH /posts/{id}/like."""
    user_id: str = Field(description="Id of the user toggling the like")
