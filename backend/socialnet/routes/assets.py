"""
SocialNet Backend — Asset Route
=================================

What:  GET /assets/{path} serves stored profile and post pictures.
How:   FileService.resolve() maps the relative path (the value stored in
       picturePath) to a file inside the storage root.

Public route: the frontend renders pictures with plain <img> tags.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from socialnet.schemas.common import ErrorResponse
from socialnet.services.file_service import FileService, get_file_service

router = APIRouter(tags=["Assets"])


@router.get(
    "/assets/{file_path:path}",
    summary="Serve an uploaded picture",
    responses={
        200: {"description": "Image file"},
        400: {"description": "Path outside the storage root", "model": ErrorResponse},
        404: {"description": "File not found", "model": ErrorResponse},
    },
)
async def serve_asset(
    file_path: str,
    files: FileService = Depends(get_file_service),
) -> FileResponse:
    full_path = files.resolve(file_path)
    # media type is inferred from the file extension
    return FileResponse(
        path=str(full_path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
