"""
Pet routes (Controllers) - Layered Architecture.

This module handles HTTP requests/responses for pet endpoints.
All business logic is delegated to the PetService layer.
"""

from fastapi import APIRouter, HTTPException, Query, Depends, File, Form, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from typing import List, Optional
from datetime import date
import logging

from models.pets import Pet, PetCreate, PetUpdate, VaccinationReportEntry
from core.enums import Species, PetSize
from core.exceptions import AppException
from services.pet_service import PetService
from dependencies import get_pet_service
from auth import get_current_user_dep
from routes.common import handle_service_exception, read_photo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pets", tags=["pets"])


@router.get("", response_model=List[Pet])
async def list_pets(
    include_disabled: bool = Query(False, description="Incluir mascotas deshabilitadas (solo superadmin)"),
    current_user=Depends(get_current_user_dep),
    service: PetService = Depends(get_pet_service),
):
    """
    List pets visible to the current user.

    - client: own pets
    - veterinarian: pets linked through an assigned consultation
    - superadmin: all pets
    """
    try:
        return service.list_pets(current_user, include_disabled=include_disabled)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error listing pets: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al listar mascotas"
        )


def pet_create_form(
    name: str = Form(...),
    species: Species = Form(...),
    breed: str = Form(...),
    size: PetSize = Form(...),
    age: int = Form(...),
    vaccinated: bool = Form(...),
    food_type: str = Form(...),
    last_vaccination: Optional[date] = Form(None),
    owner_id: Optional[str] = Form(None),
) -> PetCreate:
    """Campos multipart del alta, validados con las mismas reglas que PetCreate."""
    try:
        return PetCreate(
            name=name,
            species=species,
            breed=breed,
            size=size,
            age=age,
            vaccinated=vaccinated,
            food_type=food_type,
            last_vaccination=last_vaccination,
            owner_id=owner_id,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


@router.post("", response_model=Pet, status_code=status.HTTP_201_CREATED)
async def create_pet(
    pet: PetCreate = Depends(pet_create_form),
    photo: Optional[UploadFile] = File(None),
    current_user=Depends(get_current_user_dep),
    service: PetService = Depends(get_pet_service),
):
    """
    Create a pet from a multipart form, optionally with its photo (field
    `photo`). Clients always own what they create; a superadmin may pass
    `owner_id`.
    """
    try:
        upload = await read_photo(photo) if photo is not None else None
        return service.create_pet(current_user, pet, photo=upload)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error creating pet: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al crear mascota"
        )


# declarada antes de /{pet_id} para que no se interprete como un ID
@router.get("/vaccination-report", response_model=List[VaccinationReportEntry])
async def vaccination_report(
    start_date: Optional[date] = Query(None, description="Fecha inicial (por defecto, un año atrás)"),
    end_date: Optional[date] = Query(None, description="Fecha final (por defecto, hoy)"),
    current_user=Depends(get_current_user_dep),
    service: PetService = Depends(get_pet_service),
):
    """Monthly vaccinated / not vaccinated counts of registered pets."""
    try:
        return service.vaccination_report(current_user, start_date, end_date)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error building vaccination report: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al generar el reporte de vacunación"
        )


@router.get("/{pet_id}", response_model=Pet)
async def get_pet(
    pet_id: str,
    current_user=Depends(get_current_user_dep),
    service: PetService = Depends(get_pet_service),
):
    try:
        return service.get_pet(current_user, pet_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error getting pet {pet_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al obtener mascota"
        )


@router.put("/{pet_id}", response_model=Pet)
async def update_pet(
    pet_id: str,
    pet: PetUpdate,
    current_user=Depends(get_current_user_dep),
    service: PetService = Depends(get_pet_service),
):
    """Full update of a pet (owner or superadmin)."""
    try:
        return service.update_pet(current_user, pet_id, pet)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error updating pet {pet_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al actualizar mascota"
        )


@router.post("/{pet_id}/photo", response_model=Pet)
async def upload_pet_photo(
    pet_id: str,
    photo: UploadFile = File(...),
    current_user=Depends(get_current_user_dep),
    service: PetService = Depends(get_pet_service),
):
    """Replace the photo of a pet (multipart field `photo`)."""
    try:
        return service.update_pet_photo(current_user, pet_id, await read_photo(photo))
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error uploading photo for pet {pet_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al guardar la foto"
        )


@router.delete("/{pet_id}", response_model=Pet)
async def disable_pet(
    pet_id: str,
    current_user=Depends(get_current_user_dep),
    service: PetService = Depends(get_pet_service),
):
    """
    Disable a pet (status = disabled). The record is kept; repeating the
    call is a successful no-op.
    """
    try:
        return service.disable_pet(current_user, pet_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error disabling pet {pet_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al deshabilitar mascota"
        )
