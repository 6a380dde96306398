"""
Repositorio para la entidad Pet.
Gestiona todas las operaciones de base de datos relacionadas con mascotas.
"""

from typing import List
from sqlalchemy.orm import Session
import logging

from repositories.base_repository import BaseRepository
from database.models import PetORM, MedicalConsultationORM
from database.db import disable_record
from core.exceptions import DatabaseException

logger = logging.getLogger(__name__)


class PetRepository(BaseRepository[PetORM]):
    """Repositorio para la entidad Pet."""

    resource_name = "Mascota"

    def __init__(self, db: Session):
        """
        Inicializa el repositorio de mascotas.

        Args:
            db: SQLAlchemy session
        """
        super().__init__(db, PetORM)

    def get_all(self, include_disabled: bool = False, **kwargs) -> List[PetORM]:
        """
        Obtiene todas las mascotas ordenadas alfabéticamente por nombre.
        """
        try:
            query = self.db.query(PetORM)
            if not include_disabled:
                query = query.filter(PetORM.status == "enabled")
            return query.order_by(PetORM.name.asc()).all()
        except Exception as e:
            logger.error(f"Error getting all pets: {e}")
            raise DatabaseException("Error al listar mascotas")

    def find_by_owner(self, owner_id: str, include_disabled: bool = False) -> List[PetORM]:
        """
        Busca todas las mascotas pertenecientes a un dueño.

        Args:
            owner_id: ID del dueño
            include_disabled: Si se incluyen mascotas deshabilitadas

        Returns:
            Lista de mascotas ordenadas por nombre
        """
        try:
            query = self.db.query(PetORM).filter(PetORM.owner_id == owner_id)
            if not include_disabled:
                query = query.filter(PetORM.status == "enabled")
            return query.order_by(PetORM.name.asc()).all()
        except Exception as e:
            logger.error(f"Error finding pets by owner {owner_id}: {e}")
            raise DatabaseException("Error al buscar mascotas por dueño")

    def find_linked_to_veterinarian(self, veterinarian_id: str) -> List[PetORM]:
        """
        Mascotas habilitadas con al menos una consulta asignada al veterinario.
        """
        try:
            linked_ids = (
                self.db.query(MedicalConsultationORM.pet_id)
                .filter(MedicalConsultationORM.veterinarian_id == veterinarian_id)
            )
            return (
                self.db.query(PetORM)
                .filter(PetORM.id.in_(linked_ids), PetORM.status == "enabled")
                .order_by(PetORM.name.asc())
                .all()
            )
        except Exception as e:
            logger.error(f"Error finding pets linked to veterinarian {veterinarian_id}: {e}")
            raise DatabaseException("Error al buscar mascotas del veterinario")

    def disable_by_owner(self, owner_id: str, user_id: str) -> int:
        """
        Deshabilita todas las mascotas habilitadas de un dueño (flush, sin commit).

        Returns:
            Número de mascotas deshabilitadas
        """
        try:
            changed = 0
            for pet in self.db.query(PetORM).filter(
                PetORM.owner_id == owner_id, PetORM.status == "enabled"
            ):
                if disable_record(pet, user_id):
                    changed += 1
            self.db.flush()
            return changed
        except Exception as e:
            logger.error(f"Error disabling pets of owner {owner_id}: {e}")
            self.db.rollback()
            raise DatabaseException("Error al deshabilitar mascotas del dueño")

