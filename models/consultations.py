from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from core.enums import ConsultationStatus, Species


class ConsultationCreate(BaseModel):
    """Agendar una consulta médica. El cliente se toma del dueño de la mascota."""
    pet_id: str = Field(..., min_length=1)
    veterinarian_id: str = Field(..., min_length=1)
    scheduled_at: datetime
    notes: Optional[str] = None


class ConsultationStatusUpdate(BaseModel):
    """Nuevo estado; el servicio acepta únicamente CONFIRMED o CANCELLED."""
    status: str = Field(..., min_length=1)


class PetSummary(BaseModel):
    id: str
    name: str
    species: Species
    breed: str
    owner_id: str


class PersonSummary(BaseModel):
    id: str
    name: str
    email: str


class Consultation(BaseModel):
    """
    Modelo de respuesta de una consulta médica con proyecciones mínimas
    de mascota, cliente y veterinario.
    """
    id: str
    pet_id: str
    client_id: str
    veterinarian_id: str
    scheduled_at: datetime
    status: ConsultationStatus
    notes: Optional[str] = None
    pet: Optional[PetSummary] = None
    client: Optional[PersonSummary] = None
    veterinarian: Optional[PersonSummary] = None
    created_at: Optional[datetime] = None


class ConsultationMessage(BaseModel):
    message: str
    consultation: Consultation
