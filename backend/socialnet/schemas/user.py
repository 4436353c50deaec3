"""
SocialNet Backend — User Response Schemas
===========================================

What:  Allow-listed representations of a User for API responses.
Who:   Built by AuthService (register/login) and UserService (profile, friends).

The password hash only appears on RegisteredUserResponse; every other view
of a user is built from UserResponse, which has no credential field at all.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from socialnet.schemas.common import CamelModel


class UserResponse(CamelModel):
    """Public profile of a user, as returned by login and GET /users/{id}."""
    id: uuid.UUID = Field(description="Unique user identifier")
    first_name: str
    last_name: str
    email: str
    picture_path: str = ""
    friends: List[str] = Field(default_factory=list, description="Ids of befriended users")
    location: Optional[str] = None
    occupation: Optional[str] = None
    viewed_profile: int = 0
    impressions: int = 0
    created_at: datetime
    updated_at: datetime


class RegisteredUserResponse(UserResponse):
    """The freshly persisted record returned by POST /auth/register."""
    password_hash: str = Field(description="bcrypt hash of the password")


class FriendResponse(CamelModel):
    """Compact user card shown in friend lists."""
    id: uuid.UUID
    first_name: str
    last_name: str
    occupation: Optional[str] = None
    location: Optional[str] = None
    picture_path: str = ""
