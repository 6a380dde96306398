"""
Account management (superadmin only).
"""

from fastapi import APIRouter, HTTPException, Depends, status
from typing import List
import logging

from models.owners import Owner, UserCreate, UserUpdate
from core.enums import Role
from core.exceptions import AppException
from services.owner_service import OwnerService
from dependencies import get_owner_service
from auth import require_roles
from routes.common import handle_service_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[Owner])
async def list_users(
    current_user=Depends(require_roles(Role.superadmin)),
    service: OwnerService = Depends(get_owner_service),
):
    """All accounts ordered by name."""
    try:
        return service.list_users(current_user)
    except AppException as e:
        raise handle_service_exception(e)


@router.post("", response_model=Owner, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    current_user=Depends(require_roles(Role.superadmin)),
    service: OwnerService = Depends(get_owner_service),
):
    """Create an account of any role."""
    try:
        return service.create_user(current_user, data)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error creating user: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al crear usuario"
        )


@router.get("/{user_id}", response_model=Owner)
async def get_user(
    user_id: str,
    current_user=Depends(require_roles(Role.superadmin)),
    service: OwnerService = Depends(get_owner_service),
):
    try:
        return service.get_user(current_user, user_id)
    except AppException as e:
        raise handle_service_exception(e)


@router.put("/{user_id}", response_model=Owner)
async def update_user(
    user_id: str,
    data: UserUpdate,
    current_user=Depends(require_roles(Role.superadmin)),
    service: OwnerService = Depends(get_owner_service),
):
    try:
        return service.update_user(current_user, user_id, data)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error updating user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al actualizar usuario"
        )


@router.delete("/{user_id}", response_model=Owner)
async def disable_user(
    user_id: str,
    current_user=Depends(require_roles(Role.superadmin)),
    service: OwnerService = Depends(get_owner_service),
):
    """
    Disable an account: its pets are disabled and its tokens revoked.
    A superadmin cannot disable their own account here.
    """
    try:
        return service.disable_user(current_user, user_id)
    except AppException as e:
        raise handle_service_exception(e)
