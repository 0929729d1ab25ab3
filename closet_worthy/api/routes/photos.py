"""
Photo upload routes
Handles item photo uploads to S3 storage
"""
import logging
from pathlib import Path

from botocore.exceptions import ClientError
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from closet_worthy.api.schemas.storage import PhotoUploadResponse
from closet_worthy.core.config import settings
from closet_worthy.services.storage import CONTENT_TYPES, StorageService, get_storage_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/photos",
    tags=["photos"],
)


@router.post(
    "",
    response_model=PhotoUploadResponse,
    summary="Upload photos",
    description="Upload one or more item photos. Returns their public URLs in upload order.",
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Photos uploaded successfully"},
        400: {"description": "Invalid file format or size"},
        500: {"description": "Internal server error"},
    },
)
async def upload_photos(
    files: list[UploadFile] = File(..., description="Image files to upload"),
    storage_service: StorageService = Depends(get_storage_service),
) -> PhotoUploadResponse:
    """
    Upload item photos.

    **File Requirements:**
    - Format: JPG, JPEG, PNG, WEBP or HEIC
    - Size: Max MAX_PHOTO_SIZE_MB per file

    Every file is checked before anything is uploaded. Uploads then run one
    at a time; if one fails, photos already uploaded stay in the bucket.

    Raises:
        HTTPException:
            - 400 if a file has the wrong format, is empty or too large
            - 500 for upload failures
    """
    max_file_size = settings.MAX_PHOTO_SIZE_MB * 1024 * 1024
    validated: list[tuple[bytes, str]] = []

    for file in files:
        if not file.filename:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")

        file_extension = Path(file.filename).suffix.lower().lstrip(".")
        if file_extension not in CONTENT_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unsupported file type for {file.filename}; allowed: {', '.join(sorted(CONTENT_TYPES))}",
            )

        file_content = await file.read()
        if not file_content:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=f"File is empty: {file.filename}"
            )
        if len(file_content) > max_file_size:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{file.filename} exceeds maximum allowed size of {settings.MAX_PHOTO_SIZE_MB}MB",
            )
        validated.append((file_content, file_extension))

    urls: list[str] = []
    try:
        for file_content, file_extension in validated:
            urls.append(
                await storage_service.upload_photo(file_content, file_extension=file_extension)
            )
    except ValueError as e:
        logger.warning(f"Photo upload validation failed: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except ClientError as e:
        logger.error(
            f"S3 error uploading photo {len(urls) + 1} of {len(validated)} "
            f"({len(urls)} already uploaded): {e}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload photo due to a server error",
        ) from e
    except Exception as e:
        logger.error(f"Unexpected error uploading photos: {type(e).__name__}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while uploading photos",
        ) from e

    logger.info(f"Uploaded {len(urls)} photo(s)")
    return PhotoUploadResponse(urls=urls)


@router.delete(
    "",
    summary="Delete photo",
    description="Delete an uploaded photo by its public URL.",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        204: {"description": "Photo deleted"},
        404: {"description": "URL is not a photo in this bucket"},
    },
)
async def delete_photo(
    url: str = Query(..., description="Public URL returned by the upload endpoint"),
    storage_service: StorageService = Depends(get_storage_service),
) -> None:
    deleted = await storage_service.delete_photo(url)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found")
    return None
