"""
Almacenamiento local de fotos (mascotas y perfiles).

Las fotos se guardan bajo ``settings.media_root/<carpeta>/`` con un nombre
único; la referencia que se persiste en la base de datos es la ruta relativa
(``pets/3f2a...png``).
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from uuid import uuid4

from config import settings
from core.exceptions import StorageException, ValidationException

logger = logging.getLogger(__name__)

EXTENSIONS_BY_TYPE = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


@dataclass
class PhotoUpload:
    """Foto recibida en una petición, ya leída en memoria."""
    content: bytes
    content_type: str
    filename: Optional[str] = None


class PhotoStorage:
    """Backend de almacenamiento en disco local."""

    def __init__(self, root: Optional[str] = None):
        self.root = Path(root or settings.media_root)

    def validate(self, photo: PhotoUpload) -> None:
        """
        Valida tipo y tamaño de la foto.

        Raises:
            ValidationException: Si el tipo no está permitido o excede el tamaño máximo
        """
        content_type = (photo.content_type or "").lower()
        if content_type not in settings.allowed_photo_types_list:
            raise ValidationException(
                message="La foto debe ser una imagen (jpeg, png, gif o webp)",
                field="photo",
                details={"content_type": content_type}
            )
        if not photo.content:
            raise ValidationException(message="La foto está vacía", field="photo")
        if len(photo.content) > settings.max_photo_bytes:
            raise ValidationException(
                message=f"La foto no puede superar {settings.max_photo_bytes} bytes",
                field="photo"
            )

    def save(self, photo: PhotoUpload, folder: str) -> str:
        """
        Guarda la foto y devuelve su referencia relativa.

        Raises:
            ValidationException: Si la foto no es válida
            StorageException: Si no se puede escribir el archivo
        """
        self.validate(photo)
        extension = EXTENSIONS_BY_TYPE.get(photo.content_type.lower(), "")
        reference = f"{folder}/{uuid4().hex}{extension}"
        target = self.root / reference
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "wb") as fh:
                fh.write(photo.content)
        except OSError as e:
            logger.error(f"Error writing photo {reference}: {e}")
            raise StorageException(details={"reference": reference})
        logger.info(f"Photo stored at {reference}")
        return reference

    def delete(self, reference: Optional[str]) -> None:
        """Borra una foto; si no existe no hace nada. Los errores solo se registran."""
        if not reference:
            return
        target = self.root / reference
        try:
            if target.exists():
                os.remove(target)
                logger.info(f"Photo {reference} deleted")
        except OSError as e:
            logger.warning(f"Could not delete photo {reference}: {e}")

    def exists(self, reference: Optional[str]) -> bool:
        return bool(reference) and (self.root / reference).is_file()

    def url_for(self, reference: Optional[str]) -> Optional[str]:
        """URL pública de una foto almacenada."""
        if not reference:
            return None
        return f"{settings.media_url.rstrip('/')}/{reference}"


def get_photo_storage() -> PhotoStorage:
    """Dependencia de FastAPI para el backend de fotos."""
    return PhotoStorage()
