from pydantic import BaseModel, Field, StrictInt
from typing import Optional
from datetime import date, datetime

from core.enums import Species, PetSize, RecordStatus


class PetBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    species: Species
    breed: str = Field(..., min_length=1, max_length=255)
    size: PetSize
    age: StrictInt = Field(..., ge=0)
    vaccinated: bool
    food_type: str = Field(..., min_length=1, max_length=255)
    last_vaccination: Optional[date] = None


class PetCreate(PetBase):
    """Modelo de entrada para crear mascota.

    `owner_id` solo lo tiene en cuenta un superadmin; para un cliente el
    propietario siempre es el usuario autenticado.
    """
    owner_id: Optional[str] = None


class PetUpdate(PetBase):
    """Actualización completa: se re-valida el mismo conjunto de campos.
    No existe `owner_id`, el propietario nunca cambia por esta vía."""
    pass


class OwnerSummary(BaseModel):
    id: str
    name: str
    email: str


class Pet(PetBase):
    id: str
    owner_id: str
    status: RecordStatus
    photo_path: Optional[str] = None
    photo_url: Optional[str] = None
    owner: Optional[OwnerSummary] = None
    created_at: Optional[datetime] = None


class VaccinationReportEntry(BaseModel):
    month: str
    vaccinated_count: int
    not_vaccinated_count: int
