"""
Current account, account directory and veterinarian list.
"""

from fastapi import APIRouter, HTTPException, Depends, status
from typing import List
import logging

from models.owners import Owner, OwnerSummary
from core.exceptions import AppException
from services.owner_service import OwnerService
from dependencies import get_owner_service
from auth import get_current_user_dep
from routes.common import handle_service_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["owners"])


@router.get("/owner", response_model=Owner)
async def get_current_owner(
    current_user=Depends(get_current_user_dep),
    service: OwnerService = Depends(get_owner_service),
):
    """Account of the authenticated user."""
    return service.current(current_user)


@router.get("/owners", response_model=List[OwnerSummary])
async def list_owners(
    current_user=Depends(get_current_user_dep),
    service: OwnerService = Depends(get_owner_service),
):
    """Enabled accounts `{id, name, email}` (superadmin only)."""
    try:
        return service.list_owners(current_user)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error listing owners: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al listar dueños"
        )


@router.get("/veterinarians", response_model=List[OwnerSummary])
async def list_veterinarians(
    current_user=Depends(get_current_user_dep),
    service: OwnerService = Depends(get_owner_service),
):
    """Enabled veterinarians ordered by name (any authenticated user)."""
    try:
        return service.list_veterinarians()
    except AppException as e:
        raise handle_service_exception(e)
