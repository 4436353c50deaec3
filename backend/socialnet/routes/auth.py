"""
SocialNet Backend — Authentication Route Handlers
===================================================

What:  POST /auth/register and POST /auth/login.
How:   Parse the request, delegate to AuthService, and convert every failure
       into the endpoint's own response shape at this boundary.
Who:   Called by the frontend sign-up and sign-in forms.

Response contract:
    register  201 {"status": "success", "data": <user>}
              500 {"message": <text>}
    login     200 {"token": <jwt>, "user": <user without passwordHash>}
              400 {"msg": "User does not exist" | "Password is wrong"}
              500 {"error": <text>}

Register accepts JSON or multipart/form-data. A multipart `picture` file is
stored by the FileService and its relative path becomes picturePath.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SchemaValidationError
from starlette.datastructures import UploadFile

from socialnet.dependencies import get_auth_service
from socialnet.exceptions import AuthenticationError, SocialNetError
from socialnet.schemas.auth import (
    LoginFailedResponse,
    LoginRejectedResponse,
    LoginRequest,
    LoginResponse,
    RegisterFailedResponse,
    RegisterRequest,
    RegisterResponse,
)
from socialnet.services.auth_service import AuthService
from socialnet.services.file_service import FileService, get_file_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def public_message(exc: Exception, subject: str = "registration") -> str:
    """
    Text reported to the client for a failed auth request.

    `subject` names the request in schema error messages ("registration", "login").

    Application errors and schema errors carry messages written for clients;
    anything else is replaced by a generic sentence and logged in full.
    """
    if isinstance(exc, SocialNetError):
        return exc.message
    if isinstance(exc, SchemaValidationError):
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        return f"Invalid {subject} data: {problems}"
    logger.error("Unexpected error in auth route: %s", str(exc), exc_info=True)
    return "An unexpected error occurred. Please try again."


async def read_body(request: Request) -> Dict[str, Any]:
    """Return a JSON or form body as a plain dict."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if not isinstance(value, UploadFile)}
    body = await request.json()
    if not isinstance(body, dict):
        raise SocialNetError(message="Request body must be a JSON object.")
    return body


async def read_registration(
    request: Request, files: FileService
) -> Tuple[RegisterRequest, Optional[str]]:
    """
    Build a RegisterRequest from a JSON or form body.

    Returns:
        (fields, absolute path of a stored picture or None)
    """
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith(FORM_CONTENT_TYPES):
        return RegisterRequest.model_validate(await read_body(request)), None

    form = await request.form()
    data: Dict[str, Any] = {
        key: value for key, value in form.items() if not isinstance(value, UploadFile)
    }

    # friends may arrive as repeated fields or as one comma-separated value
    friends = []
    for entry in form.getlist("friends"):
        if isinstance(entry, str):
            friends.extend(part.strip() for part in entry.split(",") if part.strip())
    data["friends"] = friends

    stored_path = None
    picture = form.get("picture")
    if isinstance(picture, UploadFile) and picture.filename:
        try:
            content = await picture.read()
            stored_path, relative_path = await files.validate_and_store(
                filename=picture.filename,
                content=content,
                content_length=picture.size,
            )
        finally:
            await picture.close()
        data["picturePath"] = relative_path

    try:
        return RegisterRequest.model_validate(data), stored_path
    except SchemaValidationError:
        if stored_path:
            await files.cleanup_file(stored_path)
        raise


@router.post(
    "/register",
    status_code=201,
    responses={
        201: {"description": "Account created", "model": RegisterResponse},
        500: {"description": "Registration failed", "model": RegisterFailedResponse},
    },
    summary="Register a new account",
)
async def register(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
    files: FileService = Depends(get_file_service),
) -> JSONResponse:
    """
    Create an account from firstName, lastName, email, password and the
    optional profile fields. Duplicate emails and store failures are both
    reported as 500 with a message.
    """
    stored_path: Optional[str] = None
    try:
        fields, stored_path = await read_registration(request, files)
        user = await auth_service.register(fields)
    except Exception as exc:
        if stored_path:
            await files.cleanup_file(stored_path)
        logger.warning("Registration failed: %s", type(exc).__name__)
        return JSONResponse(status_code=500, content={"message": public_message(exc)})

    return JSONResponse(status_code=201, content=auth_service.registration_payload(user))


@router.post(
    "/login",
    responses={
        200: {"description": "Authenticated", "model": LoginResponse},
        400: {"description": "Unknown user or wrong password", "model": LoginRejectedResponse},
        500: {"description": "Login failed", "model": LoginFailedResponse},
    },
    summary="Log in and receive a bearer token",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": LoginRequest.model_json_schema()}},
        }
    },
)
async def login(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Exchange email and password for a bearer token. Unknown users and wrong
    passwords are 400 with `msg`; malformed bodies and store failures are 500
    with `error`.
    """
    try:
        body = LoginRequest.model_validate(await read_body(request))
        token, user = await auth_service.login(body.email, body.password)
    except AuthenticationError as exc:
        return JSONResponse(status_code=400, content={"msg": exc.message})
    except Exception as exc:
        logger.warning("Login failed: %s", type(exc).__name__)
        return JSONResponse(status_code=500, content={"error": public_message(exc, "login")})

    return JSONResponse(status_code=200, content=auth_service.login_payload(token, user))
