"""
Repositorio para la entidad Owner (cuentas de cualquier rol).
"""

from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from repositories.base_repository import BaseRepository
from database.models import OwnerORM
from core.exceptions import DatabaseException

logger = logging.getLogger(__name__)


class OwnerRepository(BaseRepository[OwnerORM]):
    """Repositorio para la entidad Owner."""

    resource_name = "Usuario"

    def __init__(self, db: Session):
        super().__init__(db, OwnerORM)

    def find_by_email(self, email: str) -> Optional[OwnerORM]:
        """
        Busca una cuenta por email (comparación exacta, emails normalizados en minúsculas).

        Args:
            email: Email a buscar

        Returns:
            La cuenta o None
        """
        try:
            return self.db.query(OwnerORM).filter(OwnerORM.email == email).first()
        except Exception as e:
            logger.error(f"Error finding owner by email {email}: {e}")
            raise DatabaseException("Error al buscar usuario por email")

    def exists_email(self, email: str, exclude_id: Optional[str] = None) -> bool:
        """
        Indica si el email ya está en uso, opcionalmente excluyendo una cuenta.
        """
        try:
            query = self.db.query(OwnerORM.id).filter(OwnerORM.email == email)
            if exclude_id:
                query = query.filter(OwnerORM.id != exclude_id)
            return query.first() is not None
        except Exception as e:
            logger.error(f"Error checking email {email}: {e}")
            raise DatabaseException("Error al verificar email")

    def find_by_role(self, role: str, include_disabled: bool = False) -> List[OwnerORM]:
        """
        Cuentas de un rol ordenadas por nombre.

        Args:
            role: Rol a filtrar
            include_disabled: Si se incluyen cuentas deshabilitadas
        """
        try:
            query = self.db.query(OwnerORM).filter(OwnerORM.role == role)
            if not include_disabled:
                query = query.filter(OwnerORM.status == "enabled")
            return query.order_by(OwnerORM.name.asc()).all()
        except Exception as e:
            logger.error(f"Error finding owners by role {role}: {e}")
            raise DatabaseException("Error al buscar usuarios por rol")

    def get_all_ordered(self, include_disabled: bool = True) -> List[OwnerORM]:
        """Todas las cuentas ordenadas por nombre."""
        return self.get_all(include_disabled=include_disabled, order_by="name")
