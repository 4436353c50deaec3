"""
SocialNet Backend — Authentication Request/Response Schemas
=============================================================

What:  Payloads of POST /auth/register and POST /auth/login.

Response shapes are fixed by existing clients:
    register 201 → {"status": "success", "data": <user>}
    register 500 → {"message": ...}
    login    200 → {"token": ..., "user": <user>}
    login    400 → {"msg": "User does not exist" | "Password is wrong"}
    login    500 → {"error": ...}
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from socialnet.schemas.common import CamelModel
from socialnet.schemas.user import RegisteredUserResponse, UserResponse


class RegisterRequest(CamelModel):
    """Registration fields, accepted as JSON or multipart form data."""
    first_name: str
    last_name: str
    email: str
    password: str
    picture_path: Optional[str] = ""
    friends: Optional[List[str]] = Field(default_factory=list)
    location: Optional[str] = None
    occupation: Optional[str] = None

    @field_validator("picture_path", mode="before")
    @classmethod
    def null_picture_is_empty(cls, value):
        return "" if value is None else value

    @field_validator("friends", mode="before")
    @classmethod
    def null_friends_is_empty(cls, value):
        return [] if value is None else value


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterResponse(BaseModel):
    status: str = "success"
    data: Union[RegisteredUserResponse, UserResponse]


class LoginResponse(BaseModel):
    token: str = Field(description="Signed bearer token encoding the user id")
    user: UserResponse


class LoginRejectedResponse(BaseModel):
    msg: str


class RegisterFailedResponse(BaseModel):
    message: str


class LoginFailedResponse(BaseModel):
    error: str
