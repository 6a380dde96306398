"""
Servicio base con operaciones de lógica de negocio comunes.
Esta clase proporciona una base para las clases de servicio que implementan
la lógica de negocio y coordinan las operaciones del repositorio.
"""

from typing import TypeVar, Generic, List, Optional
import logging

from core.enums import Role
from core.exceptions import ForbiddenException, NotFoundException
from core.security import is_valid_uuid

logger = logging.getLogger(__name__)

# Type variables
T = TypeVar('T')  # ORM Model
R = TypeVar('R')  # Repository


class BaseService(Generic[T, R]):
    """
    Servicio base que proporciona operaciones lógicas de negocio comunes.
    Esta clase debe ser heredada por servicios de entidades específicas.
    """

    def __init__(self, repository: R):
        """
        Inicializa el servicio.

        Args:
            repository: The repository instance for data access
        """
        self.repository = repository

    def get_by_id(self, id: str) -> Optional[T]:
        """
        Obtiene una entidad por su ID; los IDs mal formados se tratan como inexistentes.
        """
        if not is_valid_uuid(id):
            return None
        return self.repository.get_by_id(id)

    def get_by_id_or_fail(self, id: str) -> T:
        """
        Obtiene una entidad por su ID o lanza una excepción si no se encuentra.

        Raises:
            NotFoundException: If entity is not found
        """
        entity = self.get_by_id(id)
        if entity is None:
            raise NotFoundException(resource=self.repository.resource_name, identifier=str(id))
        return entity

    def get_for_actor(self, id: str, actor) -> T:
        """
        Obtiene una entidad aplicando "autorización antes que existencia":
        un actor que no es superadmin recibe 403 tanto si el ID no existe
        como si no tiene permiso; el superadmin recibe 404.

        Raises:
            NotFoundException: Solo para superadmin
            ForbiddenException: Para el resto de roles si la entidad no existe
        """
        entity = self.get_by_id(id)
        if entity is None:
            if Role(actor.role) is Role.superadmin:
                raise NotFoundException(resource=self.repository.resource_name, identifier=str(id))
            raise ForbiddenException()
        return entity

    def get_all(self, include_disabled: bool = False) -> List[T]:
        """Obtiene todas las entidades."""
        return self.repository.get_all(include_disabled=include_disabled)

    def exists(self, id: str) -> bool:
        """Verifica si una entidad existe por su ID."""
        return self.get_by_id(id) is not None
