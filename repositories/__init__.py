"""
Capa de repositorio para el acceso a datos.
Este paquete contiene clases de repositorio que gestionan todas las operaciones de la base de datos.
Los repositorios proporcionan una abstracción sobre el ORM y no deben contener
lógica de negocio.

"""

from .base_repository import BaseRepository
from .owner_repository import OwnerRepository
from .pet_repository import PetRepository
from .consultation_repository import ConsultationRepository
from .access_token_repository import AccessTokenRepository

__all__ = [
    "BaseRepository",
    "OwnerRepository",
    "PetRepository",
    "ConsultationRepository",
    "AccessTokenRepository",
]
