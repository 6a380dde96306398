"""
Self-service profile of the authenticated account.
"""

from fastapi import APIRouter, HTTPException, Depends, File, UploadFile, status
import logging

from models.owners import Owner, OwnerWithPets, ProfileUpdate
from models.common import MessageResponse, create_message_response
from core.exceptions import AppException
from services.owner_service import OwnerService
from dependencies import get_owner_service
from auth import get_current_user_dep
from routes.common import handle_service_exception, read_photo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=OwnerWithPets)
async def get_profile(
    current_user=Depends(get_current_user_dep),
    service: OwnerService = Depends(get_owner_service),
):
    """Current account with its enabled pets."""
    try:
        return service.get_profile(current_user)
    except AppException as e:
        raise handle_service_exception(e)


@router.put("", response_model=Owner)
async def update_profile(
    data: ProfileUpdate,
    current_user=Depends(get_current_user_dep),
    service: OwnerService = Depends(get_owner_service),
):
    try:
        return service.update_profile(current_user, data)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error updating profile {current_user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al actualizar el perfil"
        )


@router.post("/photo", response_model=Owner)
async def upload_profile_photo(
    photo: UploadFile = File(...),
    current_user=Depends(get_current_user_dep),
    service: OwnerService = Depends(get_owner_service),
):
    """Replace the profile photo (multipart field `photo`)."""
    try:
        return service.update_profile_photo(current_user, await read_photo(photo))
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error uploading profile photo {current_user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al guardar la foto"
        )


@router.post("/disable", response_model=MessageResponse)
async def disable_profile(
    current_user=Depends(get_current_user_dep),
    service: OwnerService = Depends(get_owner_service),
):
    """
    Disable the current account. Its pets are disabled and every token
    (including the one used here) is revoked.
    """
    try:
        service.disable_self(current_user)
        return create_message_response("Cuenta deshabilitada correctamente")
    except AppException as e:
        raise handle_service_exception(e)
