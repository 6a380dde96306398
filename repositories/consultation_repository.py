"""
Repositorio para la entidad MedicalConsultation.
"""

from typing import List
from sqlalchemy.orm import Session
import logging

from repositories.base_repository import BaseRepository
from database.models import MedicalConsultationORM
from core.exceptions import DatabaseException

logger = logging.getLogger(__name__)


class ConsultationRepository(BaseRepository[MedicalConsultationORM]):
    """Repositorio para la entidad MedicalConsultation."""

    resource_name = "Consulta médica"

    def __init__(self, db: Session):
        super().__init__(db, MedicalConsultationORM)

    def get_all(self, **kwargs) -> List[MedicalConsultationORM]:
        """Todas las consultas, más recientes primero (scheduled_at descendente)."""
        try:
            return (
                self.db.query(MedicalConsultationORM)
                .order_by(MedicalConsultationORM.scheduled_at.desc())
                .all()
            )
        except Exception as e:
            logger.error(f"Error getting all consultations: {e}")
            raise DatabaseException("Error al listar consultas médicas")

    def find_by_client(self, client_id: str) -> List[MedicalConsultationORM]:
        """
        Consultas donde la cuenta figura como cliente.

        Args:
            client_id: ID del cliente
        """
        try:
            return (
                self.db.query(MedicalConsultationORM)
                .filter(MedicalConsultationORM.client_id == client_id)
                .order_by(MedicalConsultationORM.scheduled_at.desc())
                .all()
            )
        except Exception as e:
            logger.error(f"Error finding consultations by client {client_id}: {e}")
            raise DatabaseException("Error al buscar consultas del cliente")

    def find_by_veterinarian(self, veterinarian_id: str) -> List[MedicalConsultationORM]:
        """
        Consultas asignadas a un veterinario.

        Args:
            veterinarian_id: ID del veterinario
        """
        try:
            return (
                self.db.query(MedicalConsultationORM)
                .filter(MedicalConsultationORM.veterinarian_id == veterinarian_id)
                .order_by(MedicalConsultationORM.scheduled_at.desc())
                .all()
            )
        except Exception as e:
            logger.error(f"Error finding consultations by veterinarian {veterinarian_id}: {e}")
            raise DatabaseException("Error al buscar consultas del veterinario")

    def exists_link(self, veterinarian_id: str, pet_id: str) -> bool:
        """Indica si existe alguna consulta que vincule al veterinario con la mascota."""
        try:
            return (
                self.db.query(MedicalConsultationORM.id)
                .filter(
                    MedicalConsultationORM.veterinarian_id == veterinarian_id,
                    MedicalConsultationORM.pet_id == pet_id,
                )
                .first()
                is not None
            )
        except Exception as e:
            logger.error(f"Error checking link vet={veterinarian_id} pet={pet_id}: {e}")
            raise DatabaseException("Error al verificar consultas")
