"""
Dependency injection for services and repositories.

This module provides FastAPI dependencies for injecting services
and repositories into route handlers. All of them share the request's
database session.
"""

from sqlalchemy.orm import Session
from fastapi import Depends

from database.db import get_db
from core.storage import PhotoStorage, get_photo_storage
from repositories.owner_repository import OwnerRepository
from repositories.pet_repository import PetRepository
from repositories.consultation_repository import ConsultationRepository
from repositories.access_token_repository import AccessTokenRepository
from services.pet_service import PetService
from services.consultation_service import ConsultationService
from services.owner_service import OwnerService


# ==================== Service Dependencies ====================

def get_pet_service(
    db: Session = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
) -> PetService:
    """
    Get PetService instance.

    Example:
        ```python
        @router.get("/pets")
        async def list_pets(service: PetService = Depends(get_pet_service)):
            ...
        ```
    """
    return PetService(
        PetRepository(db),
        OwnerRepository(db),
        ConsultationRepository(db),
        storage,
    )


def get_consultation_service(db: Session = Depends(get_db)) -> ConsultationService:
    """Get ConsultationService instance with its repositories."""
    return ConsultationService(
        ConsultationRepository(db),
        PetRepository(db),
        OwnerRepository(db),
    )


def get_owner_service(
    db: Session = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
) -> OwnerService:
    """Get OwnerService instance (identity, profile and account management)."""
    return OwnerService(
        OwnerRepository(db),
        PetRepository(db),
        AccessTokenRepository(db),
        storage,
    )
