"""
Medical consultation routes.

Scheduling and status transitions are delegated to ConsultationService.
"""

from fastapi import APIRouter, HTTPException, Depends, status
from typing import List
import logging

from models.consultations import Consultation, ConsultationCreate, ConsultationStatusUpdate, ConsultationMessage
from core.exceptions import AppException
from services.consultation_service import ConsultationService
from dependencies import get_consultation_service
from auth import get_current_user_dep
from routes.common import handle_service_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/medical-consultations", tags=["medical-consultations"])


@router.get("", response_model=List[Consultation])
async def list_consultations(
    current_user=Depends(get_current_user_dep),
    service: ConsultationService = Depends(get_consultation_service),
):
    """
    Consultations visible to the current user, newest first.
    """
    try:
        return service.list_consultations(current_user)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error listing consultations: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al listar consultas médicas"
        )


@router.post("", response_model=ConsultationMessage, status_code=status.HTTP_201_CREATED)
async def create_consultation(
    data: ConsultationCreate,
    current_user=Depends(get_current_user_dep),
    service: ConsultationService = Depends(get_consultation_service),
):
    """
    Schedule a consultation (PENDING). The client is the pet's owner.
    """
    try:
        consultation = service.create_consultation(current_user, data)
        return {"message": "Consulta agendada correctamente", "consultation": consultation}
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error creating consultation: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al agendar consulta médica"
        )


@router.get("/{consultation_id}", response_model=Consultation)
async def get_consultation(
    consultation_id: str,
    current_user=Depends(get_current_user_dep),
    service: ConsultationService = Depends(get_consultation_service),
):
    try:
        return service.get_consultation(current_user, consultation_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error getting consultation {consultation_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al obtener consulta médica"
        )


@router.patch("/{consultation_id}/status", response_model=ConsultationMessage)
async def update_consultation_status(
    consultation_id: str,
    data: ConsultationStatusUpdate,
    current_user=Depends(get_current_user_dep),
    service: ConsultationService = Depends(get_consultation_service),
):
    """
    Move a consultation to CONFIRMED or CANCELLED (assigned veterinarian or superadmin).
    """
    try:
        consultation = service.update_status(current_user, consultation_id, data.status)
        return {"message": "Estado actualizado correctamente", "consultation": consultation}
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error updating status of consultation {consultation_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al actualizar el estado de la consulta"
        )
