""" Utilidades principales y componentes compartidos para la aplicación.

Este paquete contiene:

- Enumeraciones de dominio
- Excepciones personalizadas
- Políticas de autorización por rol
- Almacenamiento de fotos
"""

from .enums import (
    Role,
    RecordStatus,
    Species,
    PetSize,
    ConsultationStatus,
    CONSULTATION_TRANSITIONS,
)
from .exceptions import (
    AppException,
    NotFoundException,
    ValidationException,
    DuplicateException,
    ForbiddenException,
    DatabaseException,
    StorageException,
)
from .security import is_valid_uuid
from .storage import (
    PhotoUpload,
    PhotoStorage,
    get_photo_storage,
)
from .utils import (
    enum_to_value,
    month_key,
    iter_months,
)

__all__ = [
    # enums
    "Role",
    "RecordStatus",
    "Species",
    "PetSize",
    "ConsultationStatus",
    "CONSULTATION_TRANSITIONS",
    # Excepciones
    "AppException",
    "NotFoundException",
    "ValidationException",
    "DuplicateException",
    "ForbiddenException",
    "DatabaseException",
    "StorageException",
    # seguridad
    "is_valid_uuid",
    # almacenamiento
    "PhotoUpload",
    "PhotoStorage",
    "get_photo_storage",
    # utils
    "enum_to_value",
    "month_key",
    "iter_months",
]
