"""
Repositorio base con operaciones CRUD comunes:
Este repositorio genérico proporciona operaciones de base de datos estándar
que se pueden reutilizar en todos los repositorios de entidades.

Los registros nunca se borran físicamente; se deshabilitan con ``status``.
"""

from typing import TypeVar, Generic, List, Optional, Type
from sqlalchemy.orm import Session
from sqlalchemy import desc, asc
import logging

from core.exceptions import NotFoundException, DatabaseException
from database.db import disable_record, set_audit_fields

logger = logging.getLogger(__name__)

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """
    Repositorio genérico proporciona operaciones CRUD estándar

    Esta clase debe ser heredada por repositorios de entidades específicos.
    """

    #nombre legible del recurso para mensajes de error
    resource_name: str = "Registro"

    def __init__(self, db: Session, model_class: Type[T]):
        """
        Inicializa el repositorio.

        Args:
            db: Sesión SQLAlchemy
            model_class: Clase del modelo ORM para este repositorio
        """
        self.db = db
        self.model_class = model_class

    def get_by_id(self, id: str) -> Optional[T]:
        """
        Obtiene una entidad por su ID.

        Args:
            id: ID de la entidad

        Returns:
            La entidad o None si no existe
        """
        try:
            return self.db.get(self.model_class, str(id))
        except Exception as e:
            logger.error(f"Error getting {self.model_class.__name__} by id {id}: {e}")
            raise DatabaseException(f"Error al obtener {self.resource_name}")

    def get_by_id_or_fail(self, id: str) -> T:
        """
        Obtiene una entidad por su ID o lanza una excepción si no se encuentra.

        Raises:
            NotFoundException: Si la entidad no existe
        """
        entity = self.get_by_id(id)
        if not entity:
            raise NotFoundException(resource=self.resource_name, identifier=str(id))
        return entity

    def get_all(
        self,
        include_disabled: bool = False,
        order_by: Optional[str] = None,
        order_desc: bool = False
    ) -> List[T]:
        """
        Obtiene todas las entidades.

        Args:
            include_disabled: Si se incluyen los registros deshabilitados
            order_by: Campo por el que ordenar
            order_desc: Si se ordena de forma descendente

        Returns:
            Lista de entidades
        """
        try:
            query = self.db.query(self.model_class)

            if not include_disabled and hasattr(self.model_class, 'status'):
                query = query.filter(self.model_class.status == "enabled")

            if order_by and hasattr(self.model_class, order_by):
                order_field = getattr(self.model_class, order_by)
                query = query.order_by(desc(order_field) if order_desc else asc(order_field))

            return query.all()
        except Exception as e:
            logger.error(f"Error getting all {self.model_class.__name__}: {e}")
            raise DatabaseException(f"Error al listar {self.resource_name}")

    def count(self, **filters) -> int:
        """
        Cuenta las entidades que coinciden con los filtros (igualdad por campo).
        """
        try:
            query = self.db.query(self.model_class)
            for field, value in filters.items():
                if hasattr(self.model_class, field) and value is not None:
                    query = query.filter(getattr(self.model_class, field) == value)
            return query.count()
        except Exception as e:
            logger.error(f"Error counting {self.model_class.__name__}: {e}")
            raise DatabaseException(f"Error al contar {self.resource_name}")

    def create(self, entity: T, user_id: Optional[str] = None) -> T:
        """
        Crea una nueva entidad (flush, sin commit).

        Args:
            entity: La entidad a crear
            user_id: ID del usuario que crea la entidad (para auditoría)
        """
        try:
            set_audit_fields(entity, user_id, creating=True)
            self.db.add(entity)
            self.db.flush()
            self.db.refresh(entity)
            return entity
        except Exception as e:
            logger.error(f"Error creating {self.model_class.__name__}: {e}")
            self.db.rollback()
            raise DatabaseException(f"Error al crear {self.resource_name}")

    def update(self, entity: T, user_id: Optional[str] = None) -> T:
        """
        Actualiza una entidad existente (flush, sin commit).

        Args:
            entity: La entidad a actualizar
            user_id: ID del usuario que actualiza la entidad (para auditoría)
        """
        try:
            set_audit_fields(entity, user_id, creating=False)
            self.db.add(entity)
            self.db.flush()
            self.db.refresh(entity)
            return entity
        except Exception as e:
            logger.error(f"Error updating {self.model_class.__name__}: {e}")
            self.db.rollback()
            raise DatabaseException(f"Error al actualizar {self.resource_name}")

    def disable(self, entity: T, user_id: Optional[str] = None) -> bool:
        """
        Deshabilita una entidad (status = disabled).

        Returns:
            True si cambió de estado, False si ya estaba deshabilitada
        """
        try:
            changed = disable_record(entity, user_id)
            if changed:
                self.db.add(entity)
                self.db.flush()
            return changed
        except Exception as e:
            logger.error(f"Error disabling {self.model_class.__name__}: {e}")
            self.db.rollback()
            raise DatabaseException(f"Error al deshabilitar {self.resource_name}")

    def exists(self, id: str) -> bool:
        """Verifica si una entidad existe por su ID."""
        return self.get_by_id(id) is not None

    def commit(self) -> None:
        """Realiza el commit de la transacción actual."""
        try:
            self.db.commit()
        except Exception as e:
            logger.error(f"Error committing transaction: {e}")
            self.db.rollback()
            raise DatabaseException("Error al guardar cambios en la base de datos")

    def rollback(self) -> None:
        """Realiza el rollback de la transacción actual."""
        self.db.rollback()

    def refresh(self, entity: T) -> T:
        """Refresca una entidad desde la base de datos."""
        self.db.refresh(entity)
        return entity
