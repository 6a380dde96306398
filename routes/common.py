"""
Shared helpers for route modules: service exception mapping and photo uploads.
"""

import logging

from fastapi import HTTPException, UploadFile, status

from core.exceptions import AppException
from core.storage import PhotoUpload

logger = logging.getLogger(__name__)


def handle_service_exception(e: Exception) -> HTTPException:
    """Convert service layer exceptions to HTTP exceptions."""
    if isinstance(e, AppException):
        if e.status_code >= 500:
            logger.error(f"Service error: {e.message} ({e.details})")
        return HTTPException(
            status_code=e.status_code,
            detail=e.message
        )
    logger.error(f"Unexpected error: {e}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Error interno del servidor"
    )


async def read_photo(upload: UploadFile) -> PhotoUpload:
    """Read an uploaded file into a PhotoUpload for the storage layer."""
    content = await upload.read()
    return PhotoUpload(
        content=content,
        content_type=upload.content_type or "",
        filename=upload.filename,
    )
